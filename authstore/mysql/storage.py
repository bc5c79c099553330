"""MySQL storage facades: MySQL queries and bridge bound to a caller-owned pymysql connection."""
from typing import Mapping, Optional

from authstore.mysql.bridge import MySQLBridge
from authstore.mysql.queries import MySQLQueries, MySQLSessionQueries
from authstore.sql.storage import SQLSessionStorage, SQLStorage, SQLUserStorage


class MySQLUserStorage(SQLUserStorage):
    """User storage in MySQL. The connection stays owned (and closed) by the caller."""

    def __init__(
        self,
        conn,
        replace_mapping: Optional[Mapping[str, str]] = None,
        row_names: Optional[Mapping[str, str]] = None,
    ) -> None:
        super().__init__(conn, MySQLQueries(replace_mapping, row_names), MySQLBridge())


class MySQLSessionStorage(SQLSessionStorage):
    def __init__(self, conn, replace_mapping: Optional[Mapping[str, str]] = None) -> None:
        super().__init__(conn, MySQLSessionQueries(replace_mapping), MySQLBridge())


class MySQLStorage(SQLStorage):
    """User and session storage in MySQL on one connection."""

    def __init__(
        self,
        conn,
        replace_mapping: Optional[Mapping[str, str]] = None,
        row_names: Optional[Mapping[str, str]] = None,
    ) -> None:
        super().__init__(
            conn,
            MySQLQueries(replace_mapping, row_names),
            MySQLSessionQueries(replace_mapping),
            MySQLBridge(),
        )
