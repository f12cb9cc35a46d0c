"""
Document store interface and its MongoDB implementation.
"""
from typing import Any, Optional, Protocol

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, PyMongoError

from account_store.core.errors import StoreConnectionError, StoreOperationError


class DocumentStore(Protocol):
    """Minimal collection-level operations the account store relies on."""

    async def insert_one(self, collection: str, document: dict[str, Any]) -> Any:
        """Insert a document and return its store-assigned id."""
        ...

    async def find_one(self, collection: str, filter: dict[str, Any]) -> Optional[dict[str, Any]]:
        """Return the first document matching filter, or None."""
        ...

    async def update_one(self, collection: str, document_id: Any, fields: dict[str, Any]) -> int:
        """Set fields on the document with the given id; return the matched count."""
        ...

    async def delete_one(self, collection: str, filter: dict[str, Any]) -> int:
        """Delete the first document matching filter; return the deleted count."""
        ...


def _translate(exc: PyMongoError, action: str) -> Exception:
    # ServerSelectionTimeoutError and NetworkTimeout derive from ConnectionFailure.
    if isinstance(exc, ConnectionFailure):
        return StoreConnectionError(f"MongoDB unreachable during {action}: {exc}")
    return StoreOperationError(f"MongoDB {action} failed: {exc}")


def coerce_id(document_id: Any) -> Any:
    """Turn a 24-hex string back into an ObjectId; leave anything else alone."""
    if isinstance(document_id, str) and ObjectId.is_valid(document_id):
        return ObjectId(document_id)
    return document_id


class MongoDocumentStore:
    """DocumentStore backed by a Motor database handle."""

    def __init__(self, db: AsyncIOMotorDatabase, client=None):
        """
        Initialize with a database handle.

        Args:
            db: Motor database the collections live in
            client: Owning Motor client, closed by close() when given
        """
        self.db = db
        self.client = client

    async def insert_one(self, collection: str, document: dict[str, Any]) -> Any:
        try:
            result = await self.db[collection].insert_one(document)
        except PyMongoError as exc:
            raise _translate(exc, "insert") from exc
        return result.inserted_id

    async def find_one(self, collection: str, filter: dict[str, Any]) -> Optional[dict[str, Any]]:
        try:
            return await self.db[collection].find_one(filter)
        except PyMongoError as exc:
            raise _translate(exc, "find") from exc

    async def update_one(self, collection: str, document_id: Any, fields: dict[str, Any]) -> int:
        try:
            result = await self.db[collection].update_one(
                {"_id": coerce_id(document_id)},
                {"$set": fields},
            )
        except PyMongoError as exc:
            raise _translate(exc, "update") from exc
        return result.matched_count

    async def delete_one(self, collection: str, filter: dict[str, Any]) -> int:
        try:
            result = await self.db[collection].delete_one(filter)
        except PyMongoError as exc:
            raise _translate(exc, "delete") from exc
        return result.deleted_count

    def close(self) -> None:
        """Close the owning client, if any."""
        if self.client is not None:
            self.client.close()
            self.client = None
