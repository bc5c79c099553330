"""
Generic SQL user/session storage on a caller-owned DB-API connection.

A dialect plugs in through UserSQL/SessionSQL (finished statements) and SQLBridge
(time conversion, duplicate-key detection). Each operation is one statement,
committed on success and rolled back on failure. Nothing is retried.
"""
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, List, Optional, Sequence

from authstore.errors import (
    AmbiguousCredentials,
    NoSuchSession,
    NoSuchUser,
    SessionKeyExists,
    StorageError,
)
from authstore.models import SessionEntry, UserModel, utc_now
from authstore.sql.protocols import SessionSQL, SQLBridge, UserSQL

logger = logging.getLogger(__name__)

# Logical fields written by insert and full update, in placeholder order
USER_WRITE_FIELDS = (
    "Username",
    "Password",
    "EMail",
    "FirstName",
    "LastName",
    "IsSuperUser",
    "IsStaff",
    "IsActive",
    "DateJoined",
    "LastLogin",
)
USER_TIME_FIELDS = frozenset({"DateJoined", "LastLogin"})


class _SQLExecutor:
    """Cursor handling shared by user and session storage."""

    def __init__(self, conn, bridge: SQLBridge) -> None:
        self.conn = conn
        self.bridge = bridge

    @contextmanager
    def _cursor(self):
        cur = self.conn.cursor()
        try:
            yield cur
            self.conn.commit()
        except Exception:
            try:
                self.conn.rollback()
            except Exception:
                logger.warning("Rollback failed", exc_info=True)
            raise
        finally:
            cur.close()

    def _execute(self, stmt: str, args: Sequence[Any] = ()):
        """Run one statement; returns the cursor's (rowcount, lastrowid)."""
        logger.debug("execute: %s", stmt)
        with self._cursor() as cur:
            cur.execute(stmt, tuple(args))
            return cur.rowcount, cur.lastrowid

    def _fetch_one(self, stmt: str, args: Sequence[Any]) -> Optional[dict]:
        logger.debug("query: %s", stmt)
        with self._cursor() as cur:
            cur.execute(stmt, tuple(args))
            row = cur.fetchone()
            if row is None or isinstance(row, dict):
                return row
            columns = [d[0] for d in cur.description]
            return dict(zip(columns, row))

    def _run_all(self, statements: List[str]) -> None:
        for stmt in statements:
            self._execute(stmt)

    def _scan_time(self, raw: Any) -> datetime:
        return self.bridge.convert_time_scan_type(self.bridge.time_scan_type(raw))

    @staticmethod
    def _column(row: dict, column: str) -> Any:
        try:
            return row[column]
        except KeyError:
            raise StorageError(f'column "{column}" missing from result row') from None


class SQLUserStorage(_SQLExecutor):
    """UserStorage over any UserSQL/SQLBridge pair."""

    def __init__(self, conn, queries: UserSQL, bridge: SQLBridge) -> None:
        _SQLExecutor.__init__(self, conn, bridge)
        self.queries = queries

    def init_users(self) -> None:
        logger.info("Creating user table if not exists")
        self._run_all(self.queries.init_users())

    def _scan_user(self, row: dict) -> UserModel:
        data = {}
        for field_name, column in self.queries.columns.items():
            value = self._column(row, column)
            if field_name in USER_TIME_FIELDS:
                value = self._scan_time(value)
            data[field_name] = value
        return UserModel.model_validate(data)

    def _get_one(self, stmt: str, arg: Any) -> UserModel:
        row = self._fetch_one(stmt, (arg,))
        if row is None:
            raise NoSuchUser()
        return self._scan_user(row)

    def get_user(self, user_id: int) -> UserModel:
        return self._get_one(self.queries.get_user(), user_id)

    def get_user_by_name(self, username: str) -> UserModel:
        return self._get_one(self.queries.get_user_by_name(), username)

    def get_user_by_email(self, email: str) -> UserModel:
        return self._get_one(self.queries.get_user_by_email(), email)

    def _arg(self, user: UserModel, field_name: str) -> Any:
        value = user.field_value(field_name)
        if isinstance(value, datetime):
            return self.bridge.convert_time(value)
        return value

    def insert_user(self, user: UserModel) -> int:
        """Insert ``user``, set its id and return it."""
        args = [self._arg(user, f) for f in USER_WRITE_FIELDS]
        try:
            _, user_id = self._execute(self.queries.insert_user(), args)
        except Exception as err:
            if self.bridge.is_duplicate_insert(err):
                logger.info("Insert of user %r rejected: duplicate key", user.username)
                raise AmbiguousCredentials() from err
            raise
        user.id = user_id
        return user_id

    def update_user(self, user_id: int, user: UserModel, fields: Optional[Sequence[str]] = None) -> None:
        """Write ``user`` to row ``user_id``.

        With ``fields`` (logical names such as "IsActive") only those columns are
        written, provided the dialect supports partial updates; otherwise all
        columns are. Unknown names raise InvalidFieldName before anything runs.
        """
        if fields and self.queries.supports_user_fields():
            names = list(fields)
            stmt = self.queries.update_user(names)
        else:
            names = list(USER_WRITE_FIELDS)
            stmt = self.queries.update_user()
        args = [self._arg(user, f) for f in names]
        args.append(user_id)
        try:
            self._execute(stmt, args)
        except Exception as err:
            if self.bridge.is_duplicate_update(err):
                logger.info("Update of user id=%s rejected: duplicate key", user_id)
                raise AmbiguousCredentials() from err
            raise

    def delete_user(self, user_id: int) -> None:
        self._execute(self.queries.delete_user(), (user_id,))


class SQLSessionStorage(_SQLExecutor):
    """SessionStorage over any SessionSQL/SQLBridge pair."""

    def __init__(self, conn, session_queries: SessionSQL, bridge: SQLBridge) -> None:
        _SQLExecutor.__init__(self, conn, bridge)
        self.session_queries = session_queries

    def init_sessions(self) -> None:
        logger.info("Creating session table if not exists")
        self._run_all(self.session_queries.init_sessions())

    def insert_session(self, entry: SessionEntry) -> None:
        args = (entry.key, entry.user, self.bridge.convert_time(entry.expire_date))
        try:
            self._execute(self.session_queries.insert_session(), args)
        except Exception as err:
            if self.bridge.is_duplicate_insert(err):
                raise SessionKeyExists() from err
            raise

    def get_session(self, key: str) -> SessionEntry:
        row = self._fetch_one(self.session_queries.get_session(), (key,))
        if row is None:
            raise NoSuchSession()
        names = self.session_queries.row_names
        return SessionEntry(
            key=self._column(row, names["Key"]),
            user=self._column(row, names["User"]),
            expire_date=self._scan_time(self._column(row, names["ExpireDate"])),
        )

    def delete_session(self, key: str) -> None:
        self._execute(self.session_queries.delete_session(), (key,))

    def clean_up_sessions(self, reference_date: Optional[datetime] = None) -> int:
        """Delete sessions that expired before ``reference_date`` (default: now, UTC). Returns rows removed."""
        reference_date = reference_date or utc_now()
        removed, _ = self._execute(
            self.session_queries.clean_up_session(), (self.bridge.convert_time(reference_date),)
        )
        logger.info("Removed %d expired sessions", removed)
        return removed

    def delete_sessions_for_user(self, user_id: int) -> int:
        removed, _ = self._execute(self.session_queries.delete_for_user_session(), (user_id,))
        return removed


class SQLStorage(SQLUserStorage, SQLSessionStorage):
    """User and session storage on one connection handle."""

    def __init__(self, conn, queries: UserSQL, session_queries: SessionSQL, bridge: SQLBridge) -> None:
        SQLUserStorage.__init__(self, conn, queries, bridge)
        SQLSessionStorage.__init__(self, conn, session_queries, bridge)

    def init(self) -> None:
        self.init_users()
        self.init_sessions()
