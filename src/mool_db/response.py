"""Uniform response envelope returned by every data-access operation."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mool_db.core.exceptions import DataAccessError


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


class Envelope(BaseModel):
    """
    Result wrapper shared by CRUD operations and transactions.

    A successful envelope never carries a ``type``; a failed one always does.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool
    code: int
    message: str
    data: Any = None
    type: str | None = None
    timestamp: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def _check_type(self) -> "Envelope":
        if self.success and self.type is not None:
            raise ValueError("a successful envelope cannot carry an error type")
        if not self.success and not self.type:
            raise ValueError("a failed envelope needs an error type")
        return self

    def to_dict(self) -> dict[str, Any]:
        """Wire form of the envelope (``type`` only present on failure)."""
        exclude = None if not self.success else {"type"}
        return self.model_dump(exclude=exclude)

    def raise_for_failure(self) -> "Envelope":
        """
        Raise a DataAccessError mirroring this envelope if it is a failure.

        Handy inside transaction callbacks, where the raised error aborts the
        transaction and comes back out of the runner as this same failure.

        Returns:
            The envelope itself when successful
        """
        if not self.success:
            raise DataAccessError(
                message=self.message,
                code=self.code,
                data=self.data,
                type=self.type,
            )
        return self


def success(message: str, data: Any = None, code: int = 200) -> Envelope:
    """Build a success envelope."""
    return Envelope(success=True, code=code, message=message, data=data)


def error(message: str, data: Any = None, code: int = 500, type: str = "UNKNOWN") -> Envelope:
    """Build a failure envelope tagged with an error type."""
    return Envelope(success=False, code=code, message=message, data=data, type=type)
