"""
Database module - MongoDB connection and document store.
"""
from account_store.database.connections import (
    close_document_store,
    configure_logging,
    create_mongo_client,
    open_document_store,
)
from account_store.database.indexes import create_account_indexes
from account_store.database.store import DocumentStore, MongoDocumentStore

__all__ = [
    "close_document_store",
    "configure_logging",
    "create_mongo_client",
    "open_document_store",
    "create_account_indexes",
    "DocumentStore",
    "MongoDocumentStore",
]
