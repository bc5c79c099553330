"""
Pydantic models for stored users and sessions.

Every UserModel field carries its logical name as alias ("IsActive", "EMail", ...).
Logical names are what partial updates accept; the row-name mapping translates
them to columns.
"""
import secrets
from datetime import datetime, timezone
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from authstore.errors import InvalidFieldName

# Bytes of randomness in a session key; 39 bytes encode to 52 URL-safe characters
SESSION_KEY_BYTES = 39


def utc_now() -> datetime:
    """Naive UTC now truncated to seconds (DATETIME has no fractional part)."""
    return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)


def new_session_key(nbytes: int = SESSION_KEY_BYTES) -> str:
    return secrets.token_urlsafe(nbytes)


class UserModel(BaseModel):
    """A user row. ``id`` is 0 until the user has been inserted."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(0, alias="ID")
    username: str = Field(..., min_length=1, max_length=150, alias="Username")
    password: str = Field("", max_length=270, alias="Password")
    email: str = Field("", max_length=254, alias="EMail")
    first_name: str = Field("", max_length=50, alias="FirstName")
    last_name: str = Field("", max_length=150, alias="LastName")
    is_superuser: bool = Field(False, alias="IsSuperUser")
    is_staff: bool = Field(False, alias="IsStaff")
    is_active: bool = Field(True, alias="IsActive")
    date_joined: datetime = Field(default_factory=utc_now, alias="DateJoined")
    last_login: datetime = Field(default_factory=utc_now, alias="LastLogin")

    @classmethod
    def logical_names(cls) -> Dict[str, str]:
        """Logical field name -> attribute name."""
        return {info.alias or name: name for name, info in cls.model_fields.items()}

    def field_value(self, field_name: str):
        attr = self.logical_names().get(field_name)
        if attr is None:
            raise InvalidFieldName(field_name)
        return getattr(self, attr)


class SessionEntry(BaseModel):
    """A login session: random key, owning user id and expiry (naive UTC)."""

    key: str = Field(..., min_length=1, max_length=150)
    user: int
    expire_date: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self.expire_date < (now or utc_now())
