"""MongoDB data-access facade returning uniform envelopes."""

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorCollection

from mool_db import response
from mool_db.db.errors import DBErrorKind, classify_error, duplicate_key_value
from mool_db.response import Envelope
from mool_db.utils.projection import QueryShape, resolve_query_shape

logger = logging.getLogger(__name__)

PATH_COLLISION_MESSAGE = (
    "{operation} failed because a parent field and its child field were "
    "requested together in the field('f') query."
)


def _modified(document: Any, options: dict[str, Any]) -> bool:
    """Whether a find-and-modify call matched a document or upserted one."""
    return document is not None or bool(options.get("upsert"))


class MongoDbAdapter:
    """
    CRUD facade over a single Motor collection.

    Every operation calls the driver exactly once and returns an Envelope;
    nothing is raised to the caller. Error types are derived from a short
    per-operation tag:

        DB-<TAG>-1                 driver answered but the write did not apply
        DB-<TAG>-DUPLICATE-FIELD   unique index violation (code 400)
        DB-<TAG>-PATH-COLLISION    parent/child projection clash on reads (code 400)
        UNCAUGHT-DB-<TAG>          anything else (code 500)

    Usage:
        adapter = MongoDbAdapter(db["users"])
        result = await adapter.find(
            {"active": True},
            QueryShape(allowed_attributes={"name": "profile.name"}, fields=["name"]),
        )
        if result.success:
            users = result.data
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        """
        Initialize adapter with a MongoDB collection.

        Args:
            collection: Motor collection instance
        """
        self.collection = collection

    def _handle_error(self, operation: str, tag: str, exc: Exception, read: bool = False) -> Envelope:
        kind = classify_error(exc)

        if kind is DBErrorKind.DUPLICATE_KEY:
            key_value = duplicate_key_value(exc)
            field = next(iter(key_value), "unknown")
            logger.warning(f"{operation} rejected duplicate value for field '{field}'")
            return response.error(
                f"{operation} failed because the field {field} must be unique",
                key_value,
                400,
                f"DB-{tag}-DUPLICATE-FIELD",
            )

        if kind is DBErrorKind.PATH_COLLISION and read:
            logger.warning(f"{operation} rejected a colliding projection")
            return response.error(
                PATH_COLLISION_MESSAGE.format(operation=operation),
                None,
                400,
                f"DB-{tag}-PATH-COLLISION",
            )

        logger.error(f"{operation} failed: {exc!r}", exc_info=exc)
        return response.error(f"{operation} failed", exc, 500, f"UNCAUGHT-DB-{tag}")

    def _write_result(self, operation: str, tag: str, result: Any, applied: bool) -> Envelope:
        if applied:
            return response.success(f"{operation} successful", result, 200)
        logger.info(f"{operation} did not apply: {result!r}")
        return response.error(f"{operation} failed", result, 500, f"DB-{tag}-1")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def find_one(
        self,
        query: dict[str, Any] | None = None,
        shape: QueryShape | None = None,
        **options: Any,
    ) -> Envelope:
        """
        Find a single document.

        A query that matches nothing is still a success with ``data=None``.

        Args:
            query: MongoDB query filter
            shape: Projection inputs (pagination is ignored for single reads)
            **options: Extra driver options (sort, session, ...)
        """
        try:
            resolved = resolve_query_shape(shape)
            document = await self.collection.find_one(
                query or {},
                **{"projection": resolved.projection, **options},
            )
            return response.success("findOne successful", document, 200)
        except Exception as exc:
            return self._handle_error("findOne", "FO", exc, read=True)

    async def find(
        self,
        query: dict[str, Any] | None = None,
        shape: QueryShape | None = None,
        **options: Any,
    ) -> Envelope:
        """
        Find documents with projection and pagination applied.

        Args:
            query: MongoDB query filter
            shape: Projection and pagination inputs
            **options: Extra driver options; these override resolved values

        Returns:
            Envelope whose data is the list of documents
        """
        try:
            resolved = resolve_query_shape(shape)
            cursor = self.collection.find(
                query or {},
                **{
                    "projection": resolved.projection,
                    "skip": resolved.skip,
                    "limit": resolved.limit,
                    **options,
                },
            )
            documents = await cursor.to_list(length=None)
            return response.success("find successful", documents, 200)
        except Exception as exc:
            return self._handle_error("find", "FI", exc, read=True)

    # ------------------------------------------------------------------
    # Inserts
    # ------------------------------------------------------------------

    async def insert_one(self, document: dict[str, Any], **options: Any) -> Envelope:
        """Insert a single document."""
        try:
            result = await self.collection.insert_one(document, **options)
            return self._write_result("insertOne", "IO", result, result.acknowledged)
        except Exception as exc:
            return self._handle_error("insertOne", "IO", exc)

    async def insert_many(self, documents: list[dict[str, Any]], **options: Any) -> Envelope:
        """Insert documents; only acknowledgment is checked."""
        try:
            result = await self.collection.insert_many(documents, **options)
            return self._write_result("insertMany", "IM", result, result.acknowledged)
        except Exception as exc:
            return self._handle_error("insertMany", "IM", exc)

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    async def update_one(
        self,
        filter: dict[str, Any],
        update: dict[str, Any] | list[dict[str, Any]],
        **options: Any,
    ) -> Envelope:
        """
        Update a single document.

        Succeeds only when exactly one document was matched and modified, or
        when the update upserted a new one.
        """
        try:
            result = await self.collection.update_one(filter, update, **options)
            applied = result.acknowledged and (
                (result.matched_count == 1 and result.modified_count == 1)
                or result.upserted_id is not None
            )
            return self._write_result("updateOne", "UO", result, applied)
        except Exception as exc:
            return self._handle_error("updateOne", "UO", exc)

    async def update_many(
        self,
        filter: dict[str, Any],
        update: dict[str, Any] | list[dict[str, Any]],
        **options: Any,
    ) -> Envelope:
        """Update documents; counts are not checked."""
        try:
            result = await self.collection.update_many(filter, update, **options)
            return self._write_result("updateMany", "UM", result, result.acknowledged)
        except Exception as exc:
            return self._handle_error("updateMany", "UM", exc)

    async def find_one_and_update(
        self,
        filter: dict[str, Any],
        update: dict[str, Any] | list[dict[str, Any]],
        **options: Any,
    ) -> Envelope:
        """
        Update one document and return it.

        The driver returns ``None`` when nothing matched, which is reported as
        ``DB-FOAU-1``. With ``upsert=True`` the write always applies (match or
        insert), so ``None`` there means a document was upserted.
        """
        try:
            document = await self.collection.find_one_and_update(filter, update, **options)
            return self._write_result("findOneAndUpdate", "FOAU", document, _modified(document, options))
        except Exception as exc:
            return self._handle_error("findOneAndUpdate", "FOAU", exc)

    async def find_one_and_replace(
        self,
        filter: dict[str, Any],
        replacement: dict[str, Any],
        **options: Any,
    ) -> Envelope:
        """Replace one document and return it (``DB-FOAR-1`` when nothing matched or upserted)."""
        try:
            document = await self.collection.find_one_and_replace(filter, replacement, **options)
            return self._write_result("findOneAndReplace", "FOAR", document, _modified(document, options))
        except Exception as exc:
            return self._handle_error("findOneAndReplace", "FOAR", exc)

    # ------------------------------------------------------------------
    # Deletes
    # ------------------------------------------------------------------

    async def find_one_and_delete(self, filter: dict[str, Any], **options: Any) -> Envelope:
        """Delete one document and return it (``DB-FOAD-1`` when nothing matched)."""
        try:
            document = await self.collection.find_one_and_delete(filter, **options)
            return self._write_result("findOneAndDelete", "FOAD", document, document is not None)
        except Exception as exc:
            return self._handle_error("findOneAndDelete", "FOAD", exc)

    async def delete_one(self, filter: dict[str, Any], **options: Any) -> Envelope:
        """Delete exactly one document."""
        try:
            result = await self.collection.delete_one(filter, **options)
            applied = result.acknowledged and result.deleted_count == 1
            return self._write_result("deleteOne", "DO", result, applied)
        except Exception as exc:
            return self._handle_error("deleteOne", "DO", exc)

    async def delete_many(self, filter: dict[str, Any], **options: Any) -> Envelope:
        """Delete documents; only acknowledgment is checked."""
        try:
            result = await self.collection.delete_many(filter, **options)
            return self._write_result("deleteMany", "DM", result, result.acknowledged)
        except Exception as exc:
            return self._handle_error("deleteMany", "DM", exc)
