"""Classification of errors raised by the MongoDB driver."""

from enum import Enum
from typing import Any

from pymongo.errors import BulkWriteError, PyMongoError

# Server error codes
DUPLICATE_KEY_CODE = 11000
PATH_COLLISION_CODE = 31249


class DBErrorKind(str, Enum):
    """Kinds of store failure the data-access layer reacts to."""
    DUPLICATE_KEY = "duplicate_key"
    PATH_COLLISION = "path_collision"
    UNKNOWN = "unknown"


def _first_write_error(exc: BulkWriteError) -> dict[str, Any]:
    write_errors = (exc.details or {}).get("writeErrors") or []
    return write_errors[0] if write_errors else {}


def error_code(exc: BaseException) -> int | None:
    """
    Get the server error code behind a driver exception.

    Bulk writes report a generic code, so the first write error's code is used.
    """
    if isinstance(exc, BulkWriteError):
        return _first_write_error(exc).get("code")
    if isinstance(exc, PyMongoError):
        return getattr(exc, "code", None)
    return None


def classify_error(exc: BaseException) -> DBErrorKind:
    """Map a raised exception onto a DBErrorKind."""
    code = error_code(exc)
    if code == DUPLICATE_KEY_CODE:
        return DBErrorKind.DUPLICATE_KEY
    if code == PATH_COLLISION_CODE:
        return DBErrorKind.PATH_COLLISION
    return DBErrorKind.UNKNOWN


def duplicate_key_value(exc: BaseException) -> dict[str, Any]:
    """
    Extract the violating key/value pair of a duplicate-key error.

    Returns:
        e.g. ``{"email": "x@example.com"}``, or an empty dict if the server
        sent no detail
    """
    if isinstance(exc, BulkWriteError):
        details = _first_write_error(exc)
    else:
        details = getattr(exc, "details", None) or {}
    return dict(details.get("keyValue") or {})
