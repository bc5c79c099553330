"""
Settings loaded from environment (.env).
MySQL connection (MYSQL_*), table names, email uniqueness and logging.
"""
from pathlib import Path
from typing import Any, Dict

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from authstore.sql.templates import EMAIL_UNIQUE, SESSION_TABLE_NAME, TABLE_NAME


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Validated configuration from env and .env file."""

    model_config = SettingsConfigDict(
        env_file=_project_root() / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # MySQL
    mysql_host: str = "localhost"
    mysql_port: int = 3306
    mysql_user: str = "mysql"
    mysql_password: str = Field(default="password", validation_alias="MYSQL_PASS")
    mysql_database: str = Field(default="mysql", validation_alias="MYSQL_DBNAME")

    # Tables ($TABLE_NAME$, $SESSION_TABLE_NAME$) and the UNIQUE toggle for email ($EMAIL_UNIQUE$)
    users_table: str = Field(default="auth_user", validation_alias="AUTH_USERS_TABLE")
    sessions_table: str = Field(default="auth_session", validation_alias="AUTH_SESSIONS_TABLE")
    email_unique: bool = Field(default=True, validation_alias="AUTH_EMAIL_UNIQUE")

    # Logging (empty log_file = stderr)
    log_level: str = "INFO"
    log_file: str = ""

    @field_validator("users_table", "sessions_table")
    @classmethod
    def check_identifier(cls, v: str) -> str:
        v = v.strip()
        if not v or not all(c.isalnum() or c == "_" for c in v):
            raise ValueError("table name must be non-empty and contain only letters, digits and _")
        return v

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.strip().upper() or "INFO"

    @computed_field
    @property
    def connection_string(self) -> str:
        return (
            f"mysql://{self.mysql_user}:{self.mysql_password}"
            f"@{self.mysql_host}:{self.mysql_port}/{self.mysql_database}"
        )

    def connect_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for pymysql.connect."""
        return {
            "host": self.mysql_host,
            "port": self.mysql_port,
            "user": self.mysql_user,
            "password": self.mysql_password,
            "database": self.mysql_database,
        }

    def replace_mapping(self) -> Dict[str, str]:
        """Template placeholder overrides for the storage facades."""
        return {
            TABLE_NAME: self.users_table,
            SESSION_TABLE_NAME: self.sessions_table,
            EMAIL_UNIQUE: "UNIQUE" if self.email_unique else "",
        }


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
