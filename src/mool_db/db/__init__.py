"""Database module - MongoDB connection, CRUD adapter, transactions and indexes."""

from .adapter import MongoDbAdapter
from .errors import DBErrorKind, classify_error
from .indexes import IndexSpec, create_indexes
from .mongo import MongoConnection
from .transaction import db_transaction

__all__ = [
    "MongoDbAdapter",
    "DBErrorKind",
    "classify_error",
    "IndexSpec",
    "create_indexes",
    "MongoConnection",
    "db_transaction",
]
