"""Extract driver error codes from SQLAlchemy errors so services can translate them."""

from enum import Enum
from typing import Optional

from sqlalchemy.exc import DBAPIError

# SQLite extended result names that mean a uniqueness conflict.
_SQLITE_DUPLICATE_NAMES = frozenset({"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"})


class PostgresError(str, Enum):
    DUPLICATE_ERROR = "23505"
    FOREIGN_KEY_ERROR = "23503"
    NULL_VIOLATION = "23502"
    SERIALIZATION_FAILURE = "40001"


def _driver_errors(err: BaseException):
    orig = getattr(err, "orig", None)
    if orig is not None:
        yield orig
        if orig.__cause__ is not None:
            yield orig.__cause__


def error_code(err: BaseException) -> Optional[str]:
    """
    SQLSTATE-style code for a database error, or None if err is not one.
    asyncpg exposes sqlstate/pgcode; SQLite unique failures map to DUPLICATE_ERROR.
    """
    if not isinstance(err, DBAPIError):
        return None
    for driver_err in _driver_errors(err):
        code = getattr(driver_err, "pgcode", None) or getattr(driver_err, "sqlstate", None)
        if code:
            return str(code)
        if getattr(driver_err, "sqlite_errorname", None) in _SQLITE_DUPLICATE_NAMES:
            return PostgresError.DUPLICATE_ERROR.value
        if "UNIQUE constraint failed" in str(driver_err):
            return PostgresError.DUPLICATE_ERROR.value
    return None


def is_duplicate_error(err: BaseException) -> bool:
    return error_code(err) == PostgresError.DUPLICATE_ERROR.value
