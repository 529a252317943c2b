"""MongoDB connection management using Motor async driver."""

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import monitoring

logger = logging.getLogger(__name__)


class ConnectionEventLogger(monitoring.ConnectionPoolListener, monitoring.ServerHeartbeatListener):
    """Log connection pool and heartbeat events of a client."""

    def pool_created(self, event):
        logger.info(f"MongoDB connection pool created for {event.address}")

    def pool_ready(self, event):
        logger.info(f"MongoDB connection pool ready for {event.address}")

    def pool_cleared(self, event):
        logger.warning(f"MongoDB connection pool cleared for {event.address}")

    def pool_closed(self, event):
        logger.warning(f"MongoDB connection pool closed for {event.address}")

    def connection_created(self, event):
        logger.info(f"MongoDB's connection created ({event.address}, id={event.connection_id})")

    def connection_ready(self, event):
        logger.info(f"MongoDB's connectionReady ({event.address}, id={event.connection_id})")

    def connection_closed(self, event):
        logger.warning(
            f"MongoDB adapter's connectionClosed ({event.address}, id={event.connection_id}, reason={event.reason})"
        )

    def connection_check_out_started(self, event):
        pass

    def connection_check_out_failed(self, event):
        logger.warning(f"MongoDB connection check out failed ({event.address}, reason={event.reason})")

    def connection_checked_out(self, event):
        pass

    def connection_checked_in(self, event):
        pass

    def started(self, event):
        pass

    def succeeded(self, event):
        pass

    def failed(self, event):
        logger.error(f"MongoDB heartbeat to {event.connection_id} failed: {event.reply}")


class MongoConnection:
    """
    MongoDB connection manager.

    Owns one Motor client (and its connection pool). Create one per
    application and hand it to whatever needs database access.

    Usage:
        connection = MongoConnection("mongodb://localhost:27017", "mool_db")
        await connection.connect()
        db = connection.get_database()
        ...
        connection.close()
    """

    def __init__(self, uri: str, db_name: str = "mool_db", **client_options: Any):
        """
        Args:
            uri: MongoDB connection URI
            db_name: Default database name
            **client_options: Extra keyword arguments for AsyncIOMotorClient
        """
        self.uri = uri
        self.db_name = db_name
        self.client_options = client_options
        self.client: AsyncIOMotorClient | None = None

    async def connect(self) -> AsyncIOMotorClient:
        """
        Create the client and verify the server answers a ping.

        Raises:
        Any client left from an earlier call is closed first.

            pymongo.errors.PyMongoError: If the server cannot be reached
        """
        self.close()
        options = dict(self.client_options)
        options.setdefault("event_listeners", [ConnectionEventLogger()])
        client = AsyncIOMotorClient(self.uri, **options)
        try:
            await client.admin.command("ping")
        except Exception:
            client.close()
            raise
        self.client = client
        logger.info("MongoDB adapter has connected successfully.")
        return client

    def close(self) -> None:
        """Close MongoDB connection."""
        if self.client is not None:
            self.client.close()
            self.client = None
            logger.warning("MongoDB adapter has disconnected.")

    def get_client(self) -> AsyncIOMotorClient:
        """
        Get the MongoDB client.

        Raises:
            RuntimeError: If MongoDB is not connected
        """
        if self.client is None:
            raise RuntimeError("MongoDB not connected. Call connect() first.")
        return self.client

    def get_database(self, name: str | None = None) -> AsyncIOMotorDatabase:
        """Get a database instance (the default database if no name given)."""
        client = self.get_client()
        return client[name or self.db_name]

    def is_connected(self) -> bool:
        """Check if MongoDB is connected."""
        return self.client is not None
