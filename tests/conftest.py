"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from mool_db.db.adapter import MongoDbAdapter


@pytest.fixture
def collection() -> MagicMock:
    """
    Motor collection double.

    Coroutine methods are AsyncMocks; ``find`` stays synchronous and returns a
    cursor whose ``to_list`` is awaitable, as in Motor.
    """
    collection = MagicMock()
    collection.name = "users"
    for method in (
        "find_one",
        "insert_one",
        "insert_many",
        "update_one",
        "update_many",
        "delete_one",
        "delete_many",
        "find_one_and_update",
        "find_one_and_replace",
        "find_one_and_delete",
        "create_index",
    ):
        setattr(collection, method, AsyncMock())
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    return collection


@pytest.fixture
def adapter(collection: MagicMock) -> MongoDbAdapter:
    """Adapter bound to the collection double."""
    return MongoDbAdapter(collection)


@pytest.fixture
def session() -> MagicMock:
    """Client session double that starts out inside a transaction."""
    session = MagicMock()
    session.in_transaction = True
    session.start_transaction = MagicMock()

    async def abort_transaction():
        session.in_transaction = False

    async def commit_transaction():
        session.in_transaction = False

    session.abort_transaction = AsyncMock(side_effect=abort_transaction)
    session.commit_transaction = AsyncMock(side_effect=commit_transaction)
    session.end_session = AsyncMock()
    return session


@pytest.fixture
def client(session: MagicMock) -> MagicMock:
    """Motor client double handing out the session double."""
    client = MagicMock()
    client.start_session = AsyncMock(return_value=session)
    return client


@pytest.fixture
def allowed_attributes() -> dict[str, str]:
    """Allow-list of external field names to storage paths."""
    return {
        "name": "profile.name",
        "email": "contact.email",
        "age": "profile.age",
    }
