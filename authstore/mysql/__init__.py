"""MySQL binding: templates, query bundles, dialect bridge and storage facades."""

from authstore.mysql.bridge import MYSQL_KEY_EXISTS, ErrorKind, MySQLBridge, NullTime, classify_error
from authstore.mysql.queries import DEFAULT_USER_ROW_NAMES, MySQLQueries, MySQLSessionQueries
from authstore.mysql.storage import MySQLSessionStorage, MySQLStorage, MySQLUserStorage

__all__ = [
    "MYSQL_KEY_EXISTS",
    "ErrorKind",
    "NullTime",
    "classify_error",
    "MySQLBridge",
    "DEFAULT_USER_ROW_NAMES",
    "MySQLQueries",
    "MySQLSessionQueries",
    "MySQLUserStorage",
    "MySQLSessionStorage",
    "MySQLStorage",
]
