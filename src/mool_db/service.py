"""Data service lifecycle: connect, index, expose the adapter, disconnect."""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable, Mapping
from contextlib import asynccontextmanager
from typing import Any

from pymongo.errors import PyMongoError

from mool_db.core.config import Settings, get_settings
from mool_db.db.adapter import MongoDbAdapter
from mool_db.db.indexes import IndexSpec, create_indexes
from mool_db.db.mongo import MongoConnection
from mool_db.db.transaction import TransactionCallback, db_transaction
from mool_db.utils.projection import QueryShape
from mool_db.validator.query import QueryParams

logger = logging.getLogger(__name__)

AfterConnectedHook = Callable[["DataService"], Awaitable[None]]


class DataService:
    """
    Data access for one collection, bound to the host's startup/shutdown.

    Usage:
        users = DataService(
            "users",
            indexes=[IndexSpec([("email", 1)], {"unique": True})],
        )

        app = FastAPI(lifespan=users.lifespan)   # or await users.start()

        result = await users.adapter.find_one({"email": email})
    """

    def __init__(
        self,
        collection: str,
        *,
        settings: Settings | None = None,
        indexes: Iterable[IndexSpec] | None = None,
        after_connected: AfterConnectedHook | None = None,
        connection: MongoConnection | None = None,
    ):
        """
        Initialize data service.

        Args:
            collection: Collection name the service owns
            settings: Settings (uses default if not provided)
            indexes: Indexes ensured on every connect
            after_connected: Awaited with the service once connected
            connection: Connection manager (built from settings if not provided)

        Raises:
            ValueError: If no collection name is given
        """
        if not collection:
            raise ValueError("Missing `collection` definition for the data service!")

        self.collection_name = collection
        self._settings = settings or get_settings()
        self._indexes = list(indexes or [])
        self._after_connected = after_connected
        self.connection = connection or MongoConnection(
            self._settings.mongo_uri,
            self._settings.db_name,
            serverSelectionTimeoutMS=self._settings.server_selection_timeout_ms,
        )
        self._adapter: MongoDbAdapter | None = None

    @property
    def adapter(self) -> MongoDbAdapter:
        """
        Get the CRUD adapter.

        Raises:
            RuntimeError: If the service is not connected yet
        """
        if self._adapter is None:
            raise RuntimeError(f"Data service '{self.collection_name}' is not connected.")
        return self._adapter

    async def connect(self) -> MongoDbAdapter:
        """Connect, ensure indexes and build the adapter."""
        await self.connection.connect()
        collection = self.connection.get_database()[self.collection_name]
        await create_indexes(collection, self._indexes)
        self._adapter = MongoDbAdapter(collection)

        if self._after_connected is not None:
            try:
                await self._after_connected(self)
            except Exception as exc:
                logger.error(f"afterConnected error! {exc!r}", exc_info=exc)

        return self._adapter

    async def start(self) -> MongoDbAdapter:
        """
        Connect, retrying on driver errors.

        Waits ``connect_retry_delay`` seconds between attempts and gives up
        after ``connect_max_attempts`` (0 = never).

        Raises:
            pymongo.errors.PyMongoError: The last connection error once attempts run out
        """
        max_attempts = self._settings.connect_max_attempts
        attempt = 0
        while True:
            attempt += 1
            try:
                return await self.connect()
            except PyMongoError as exc:
                logger.error(f"Connection error! {exc}")
                self.connection.close()
                self._adapter = None
                if max_attempts and attempt >= max_attempts:
                    raise
                logger.warning(f"Reconnecting... (attempt {attempt + 1})")
                await asyncio.sleep(self._settings.connect_retry_delay)

    async def stop(self) -> None:
        """Disconnect from the database."""
        self.connection.close()
        self._adapter = None

    @asynccontextmanager
    async def lifespan(self, app: Any = None) -> AsyncIterator["DataService"]:
        """
        Startup/shutdown hook for host frameworks.

        Accepts (and ignores) the application object so it can be passed
        straight as an ASGI lifespan.
        """
        await self.start()
        try:
            yield self
        finally:
            await self.stop()

    async def transaction(
        self,
        callback: TransactionCallback,
        options: Any = None,
        **kwargs: Any,
    ) -> Any:
        """Run ``callback`` inside a transaction on this service's client."""
        return await db_transaction(self.connection.get_client(), callback, options, **kwargs)

    @staticmethod
    def query_shape(
        params: QueryParams | Mapping[str, Any],
        allowed_attributes: Mapping[str, str] | None = None,
    ) -> QueryShape:
        """
        Validate raw read parameters and build their QueryShape.

        Raises:
            pydantic.ValidationError: If the parameters are malformed
        """
        if not isinstance(params, QueryParams):
            params = QueryParams.model_validate(params)
        return params.to_shape(allowed_attributes)
