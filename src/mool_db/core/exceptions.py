"""Structured exceptions for the data-access layer."""

from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from mool_db.response import Envelope


class DataAccessError(Exception):
    """
    Base exception carrying a structured error type.

    Anything raised inside a transaction callback that is an instance of this
    class is turned into a failure envelope instead of being re-raised.
    """

    def __init__(
        self,
        message: str,
        code: int = 500,
        data: Any = None,
        type: str = "DB-ERROR",
    ):
        self.message = message
        self.code = code
        self.data = data
        self.type = type
        super().__init__(message)

    def to_envelope(self) -> "Envelope":
        """Build the failure envelope describing this error."""
        from mool_db import response

        return response.error(self.message, self.data, self.code, self.type)


class TransactionError(DataAccessError):
    """Raised by transaction callbacks to abort with a structured failure."""

    def __init__(self, message: str, data: Any = None, code: int = 500, type: str = "TR-ERROR"):
        super().__init__(message=message, code=code, data=data, type=type)
