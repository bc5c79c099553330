"""MySQL binding for a generic user/session SQL storage."""

from authstore.errors import (
    AmbiguousCredentials,
    InvalidFieldName,
    NoSuchSession,
    NoSuchUser,
    NullTimeError,
    SessionKeyExists,
    StorageError,
)
from authstore.models import SessionEntry, UserModel, new_session_key
from authstore.mysql.storage import MySQLSessionStorage, MySQLStorage, MySQLUserStorage

__version__ = "1.0.0"

__all__ = [
    "StorageError",
    "NoSuchUser",
    "NoSuchSession",
    "AmbiguousCredentials",
    "SessionKeyExists",
    "InvalidFieldName",
    "NullTimeError",
    "UserModel",
    "SessionEntry",
    "new_session_key",
    "MySQLUserStorage",
    "MySQLSessionStorage",
    "MySQLStorage",
]
