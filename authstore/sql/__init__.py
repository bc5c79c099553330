"""Generic SQL storage engine and the protocols a dialect binding implements."""

from authstore.sql.protocols import SessionSQL, SessionStorage, SQLBridge, UserSQL, UserStorage
from authstore.sql.storage import SQLSessionStorage, SQLStorage, SQLUserStorage
from authstore.sql.templates import SQLTemplateReplacer, default_replacer

__all__ = [
    "UserSQL",
    "SessionSQL",
    "SQLBridge",
    "UserStorage",
    "SessionStorage",
    "SQLUserStorage",
    "SQLSessionStorage",
    "SQLStorage",
    "SQLTemplateReplacer",
    "default_replacer",
]
