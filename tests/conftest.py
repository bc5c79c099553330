"""
Pytest fixtures: in-memory fake DB-API connection for unit tests, real MySQL for integration tests.
"""
from datetime import datetime
from typing import List, Optional

import pymysql
import pytest

from authstore.core.settings import Settings
from authstore.models import UserModel

USER_COLUMNS = (
    "id",
    "username",
    "password",
    "email",
    "first_name",
    "last_name",
    "is_superuser",
    "is_staff",
    "is_active",
    "date_joined",
    "last_login",
)


class FakeCursor:
    """Records statements on its connection and replays queued results."""

    def __init__(self, conn: "FakeConnection") -> None:
        self.conn = conn
        self.rowcount = -1
        self.lastrowid = None
        self.description = None
        self._row = None
        self.closed = False

    def execute(self, stmt: str, args=None) -> int:
        self.conn.executed.append((stmt, args))
        if self.conn.errors:
            raise self.conn.errors.pop(0)
        result = self.conn.results.pop(0) if self.conn.results else {}
        self.rowcount = result.get("rowcount", 0)
        self.lastrowid = result.get("lastrowid")
        self._row = result.get("row")
        self.description = result.get("description")
        return self.rowcount

    def fetchone(self):
        return self._row

    def close(self) -> None:
        self.closed = True


class FakeConnection:
    """Stand-in for a pymysql connection (default tuple cursor)."""

    def __init__(self) -> None:
        self.executed: List[tuple] = []
        self.results: List[dict] = []
        self.errors: List[Exception] = []
        self.commits = 0
        self.rollbacks = 0

    def cursor(self) -> FakeCursor:
        return FakeCursor(self)

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1

    def queue(self, **result) -> None:
        self.results.append(result)

    def queue_row(self, columns, values) -> None:
        """Queue one tuple row with a cursor description, as the default pymysql cursor returns it."""
        self.results.append({"row": tuple(values), "description": [(c,) for c in columns], "rowcount": 1})

    @property
    def statements(self) -> List[str]:
        return [stmt for stmt, _ in self.executed]


def user_row(
    user_id: int = 1,
    username: str = "alice",
    email: str = "alice@example.com",
    date_joined: Optional[datetime] = datetime(2024, 1, 2, 3, 4, 5),
    last_login: Optional[datetime] = datetime(2024, 2, 3, 4, 5, 6),
) -> tuple:
    return (user_id, username, "hash", email, "Alice", "Liddell", 0, 0, 1, date_joined, last_login)


@pytest.fixture
def fake_conn() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def alice() -> UserModel:
    return UserModel(
        username="alice",
        password="hash",
        email="alice@example.com",
        first_name="Alice",
        last_name="Liddell",
        date_joined=datetime(2024, 1, 2, 3, 4, 5),
        last_login=datetime(2024, 2, 3, 4, 5, 6),
    )


# ----- Integration (real MySQL) -----

TEST_USERS_TABLE = "auth_user_test"
TEST_SESSIONS_TABLE = "auth_session_test"


def _drop_tables(conn) -> None:
    with conn.cursor() as cur:
        cur.execute(f"DROP TABLE IF EXISTS {TEST_USERS_TABLE};")
        cur.execute(f"DROP TABLE IF EXISTS {TEST_SESSIONS_TABLE};")
    conn.commit()


@pytest.fixture
def mysql_settings() -> Settings:
    """MYSQL_HOST/PORT/USER/PASS/DBNAME with defaults, test table names."""
    return Settings(
        _env_file=None,
        AUTH_USERS_TABLE=TEST_USERS_TABLE,
        AUTH_SESSIONS_TABLE=TEST_SESSIONS_TABLE,
    )


@pytest.fixture
def mysql_conn(mysql_settings: Settings):
    """Open connection with empty test tables; skips when MySQL is not reachable."""
    try:
        conn = pymysql.connect(connect_timeout=3, **mysql_settings.connect_kwargs())
    except (pymysql.MySQLError, OSError) as e:
        pytest.skip(f"MySQL not reachable at {mysql_settings.mysql_host}:{mysql_settings.mysql_port}: {e}")
    _drop_tables(conn)
    try:
        yield conn
    finally:
        _drop_tables(conn)
        conn.close()
