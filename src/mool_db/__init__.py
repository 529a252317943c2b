"""MongoDB data-access helpers: CRUD adapter, projection and pagination,
transactions, response envelope and validation fragments."""

from mool_db import response
from mool_db.core.exceptions import DataAccessError, TransactionError
from mool_db.db import IndexSpec, MongoConnection, MongoDbAdapter, create_indexes, db_transaction
from mool_db.response import Envelope
from mool_db.service import DataService
from mool_db.utils.projection import QueryShape
from mool_db.validator import QueryParams, validation_rules

__all__ = [
    "response",
    "DataAccessError",
    "TransactionError",
    "IndexSpec",
    "MongoConnection",
    "MongoDbAdapter",
    "create_indexes",
    "db_transaction",
    "Envelope",
    "DataService",
    "QueryShape",
    "QueryParams",
    "validation_rules",
]
