"""Index creation run at service startup.

A unique index that cannot be built because the collection already holds
duplicate values leaves the service unable to enforce its invariants, so the
process terminates itself with SIGTERM.
"""

import asyncio
import logging
import os
import signal
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from motor.motor_asyncio import AsyncIOMotorCollection

from mool_db.db.errors import DBErrorKind, classify_error

logger = logging.getLogger(__name__)


@dataclass
class IndexSpec:
    """An index definition: key specification plus create_index options."""

    fields: list[tuple[str, int]] | str
    options: dict[str, Any] = field(default_factory=dict)


async def create_indexes(
    collection: AsyncIOMotorCollection,
    indexes: Iterable[IndexSpec] | None,
) -> list[str]:
    """
    Create (or confirm) all indexes concurrently.

    Args:
        collection: Motor collection instance
        indexes: Index definitions; ``None`` creates nothing

    Returns:
        Names of the created indexes
    """
    indexes = list(indexes or [])
    if not indexes:
        return []

    # Every build runs to completion so no failure goes unobserved
    results = await asyncio.gather(
        *(collection.create_index(index.fields, **index.options) for index in indexes),
        return_exceptions=True,
    )
    errors = [result for result in results if isinstance(result, BaseException)]

    for exc in errors:
        if classify_error(exc) is DBErrorKind.DUPLICATE_KEY:
            logger.critical(
                f"Unique index creation on '{collection.name}' failed on duplicate data, terminating: {exc}"
            )
            os.kill(os.getpid(), signal.SIGTERM)
            return []

    if errors:
        for exc in errors[1:]:
            logger.error(f"Index creation on '{collection.name}' also failed: {exc!r}")
        raise errors[0]

    logger.info(f"Ensured {len(results)} index(es) on '{collection.name}'")
    return list(results)
