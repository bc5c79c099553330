"""
MySQL dialect bridge: nullable DATETIME scanning and duplicate-key detection.

Error classification is a single pattern match on pymysql's error args
(``err.args[0]`` is the server error number), exposed as ``mysql_error_code``.
"""
import enum
from datetime import datetime
from typing import Any, NamedTuple, Optional

from pymysql.constants import ER
from pymysql.err import MySQLError

from authstore.errors import NullTimeError, StorageError

# Server error number for "Duplicate entry ... for key ..."
MYSQL_KEY_EXISTS = ER.DUP_ENTRY


class NullTime(NamedTuple):
    """Scan target for a nullable DATETIME column."""

    time: Optional[datetime]
    valid: bool

    @classmethod
    def from_value(cls, raw: Any) -> "NullTime":
        if raw is None:
            return cls(None, False)
        return cls(raw, True)


class ErrorKind(enum.Enum):
    DUPLICATE_KEY = "duplicate_key"
    OTHER = "other"


def mysql_error_code(err: BaseException) -> Optional[int]:
    """Server error number of a pymysql error, None for anything else."""
    if isinstance(err, MySQLError) and err.args and isinstance(err.args[0], int):
        return err.args[0]
    return None


def classify_error(err: BaseException) -> ErrorKind:
    if mysql_error_code(err) == MYSQL_KEY_EXISTS:
        return ErrorKind.DUPLICATE_KEY
    return ErrorKind.OTHER


class MySQLBridge:
    """SQLBridge for MySQL through pymysql."""

    def time_scan_type(self, raw: Any = None) -> NullTime:
        return NullTime.from_value(raw)

    def convert_time_scan_type(self, val: Any) -> datetime:
        if isinstance(val, NullTime):
            nt = val
        elif val is None or isinstance(val, datetime):
            nt = NullTime.from_value(val)
        else:
            raise StorageError(
                f"MySQLBridge.convert_time_scan_type: expected NullTime, got {type(val).__name__}"
            )
        if not nt.valid:
            raise NullTimeError("MySQLBridge.convert_time_scan_type: got NULL datetime, expected to be not NULL")
        if not isinstance(nt.time, datetime):
            # pymysql hands back invalid dates such as 0000-00-00 as str
            raise StorageError(
                f"MySQLBridge.convert_time_scan_type: expected datetime value, got {nt.time!r}"
            )
        return nt.time

    def convert_time(self, t: datetime) -> datetime:
        return t

    def is_duplicate_insert(self, err: BaseException) -> bool:
        return classify_error(err) is ErrorKind.DUPLICATE_KEY

    def is_duplicate_update(self, err: BaseException) -> bool:
        return classify_error(err) is ErrorKind.DUPLICATE_KEY
