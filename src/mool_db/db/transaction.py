"""Multi-document transaction runner."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorClientSession
from pymongo import ReadPreference
from pymongo.errors import PyMongoError
from pymongo.read_concern import ReadConcern
from pymongo.write_concern import WriteConcern

from mool_db import response
from mool_db.core.exceptions import DataAccessError

logger = logging.getLogger(__name__)

UNKNOWN_COMMIT_RESULT = "UnknownTransactionCommitResult"
TRANSIENT_TRANSACTION_ERROR = "TransientTransactionError"
RETRYABLE_LABELS = (UNKNOWN_COMMIT_RESULT, TRANSIENT_TRANSACTION_ERROR)

TransactionCallback = Callable[[AsyncIOMotorClientSession, Any], Awaitable[Any]]
RetryHook = Callable[[PyMongoError, str], Awaitable[None]]


def transaction_options() -> dict[str, Any]:
    """Options every transaction is started with."""
    return {
        "read_concern": ReadConcern("snapshot"),
        "write_concern": WriteConcern(w="majority"),
        "read_preference": ReadPreference.PRIMARY,
    }


def retryable_label(exc: BaseException) -> str | None:
    """Return the first retryable error label carried by a driver error."""
    if not isinstance(exc, PyMongoError):
        return None
    for label in RETRYABLE_LABELS:
        if exc.has_error_label(label):
            return label
    return None


async def db_transaction(
    client: AsyncIOMotorClient,
    callback: TransactionCallback,
    callback_options: Any = None,
    on_retryable_error: RetryHook | None = None,
) -> Any:
    """
    Run a unit of work inside a session and transaction.

    The transaction is never committed here: the callback commits explicitly
    via ``await session.commit_transaction()``. A transaction still open when
    the callback returns is aborted, including on the success path.

    Args:
        client: Motor client able to start sessions
        callback: ``async (session, callback_options) -> result``
        callback_options: Passed through to the callback
        on_retryable_error: Awaited with ``(error, label)`` when the error
            carries UnknownTransactionCommitResult or TransientTransactionError;
            no retry happens without it

    Returns:
        The callback's result when truthy, a ``TR-DBT-1`` failure envelope when
        falsy, or the envelope of a DataAccessError raised by the callback

    Raises:
        Any other exception raised by the callback, after abort and session end
    """
    session = await client.start_session()
    try:
        session.start_transaction(**transaction_options())
        result = await callback(session, callback_options)
        if session.in_transaction:
            await session.abort_transaction()
        if result:
            return result
        return response.error(
            "No response was sent from the transaction callback function",
            None,
            500,
            "TR-DBT-1",
        )
    except Exception as exc:
        label = retryable_label(exc)
        if label and on_retryable_error is not None:
            await on_retryable_error(exc, label)
        elif label:
            logger.warning(f"Transaction failed with retryable label {label}: {exc}")
        else:
            logger.error(f"An error occurred in the transaction, performing a data rollback: {exc!r}")

        if session.in_transaction:
            await session.abort_transaction()

        if isinstance(exc, DataAccessError):
            return exc.to_envelope()
        raise
    finally:
        await session.end_session()
