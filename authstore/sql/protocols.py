"""Protocols between the generic SQL storage engine and a dialect binding."""
from datetime import datetime
from typing import Any, List, Mapping, Optional, Protocol, Sequence

from authstore.models import SessionEntry, UserModel


class UserSQL(Protocol):
    """Finished user statements for one dialect."""

    # logical field name -> column of the rows the lookup statements return
    columns: Mapping[str, str]
    # logical field name -> column accepted by partial updates
    row_names: Mapping[str, str]

    def init_users(self) -> List[str]:
        """Statements creating the user table, run in order."""
        ...

    def get_user(self) -> str:
        ...

    def get_user_by_name(self) -> str:
        ...

    def get_user_by_email(self) -> str:
        ...

    def insert_user(self) -> str:
        ...

    def update_user(self, fields: Optional[Sequence[str]] = None) -> str:
        """Full update, or partial update of the given logical field names."""
        ...

    def delete_user(self) -> str:
        ...

    def supports_user_fields(self) -> bool:
        ...


class SessionSQL(Protocol):
    """Finished session statements for one dialect."""

    # "Key", "User", "ExpireDate" -> column names
    row_names: Mapping[str, str]

    def init_sessions(self) -> List[str]:
        ...

    def insert_session(self) -> str:
        ...

    def get_session(self) -> str:
        ...

    def delete_session(self) -> str:
        ...

    def clean_up_session(self) -> str:
        """Delete every session expiring before a reference time."""
        ...

    def delete_for_user_session(self) -> str:
        ...


class SQLBridge(Protocol):
    """Dialect-specific value conversion and error classification."""

    def time_scan_type(self, raw: Any = None) -> Any:
        """Wrap a raw DATETIME column value as the dialect's scan target."""
        ...

    def convert_time_scan_type(self, val: Any) -> datetime:
        """Scan target -> datetime. Raises NullTimeError on NULL."""
        ...

    def convert_time(self, t: datetime) -> Any:
        """datetime -> value bound as statement parameter."""
        ...

    def is_duplicate_insert(self, err: BaseException) -> bool:
        ...

    def is_duplicate_update(self, err: BaseException) -> bool:
        ...


class UserStorage(Protocol):
    """User persistence: init, lookup by id/name/email, insert, update, delete."""

    def init_users(self) -> None:
        ...

    def get_user(self, user_id: int) -> UserModel:
        """Raises NoSuchUser."""
        ...

    def get_user_by_name(self, username: str) -> UserModel:
        ...

    def get_user_by_email(self, email: str) -> UserModel:
        ...

    def insert_user(self, user: UserModel) -> int:
        """Insert user; return new id. Raises AmbiguousCredentials on duplicates."""
        ...

    def update_user(self, user_id: int, user: UserModel, fields: Optional[Sequence[str]] = None) -> None:
        ...

    def delete_user(self, user_id: int) -> None:
        ...


class SessionStorage(Protocol):
    """Session persistence: insert, get, delete, clean up, delete for user."""

    def init_sessions(self) -> None:
        ...

    def insert_session(self, entry: SessionEntry) -> None:
        ...

    def get_session(self, key: str) -> SessionEntry:
        """Raises NoSuchSession."""
        ...

    def delete_session(self, key: str) -> None:
        ...

    def clean_up_sessions(self, reference_date: Optional[datetime] = None) -> int:
        ...

    def delete_sessions_for_user(self, user_id: int) -> int:
        ...
