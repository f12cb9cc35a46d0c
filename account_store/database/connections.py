"""
MongoDB connection management.

The composing application opens one store per adapter and owns its lifetime.
"""
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import ConfigurationError as MongoConfigurationError
from pymongo.errors import PyMongoError

from account_store.config import Settings, get_settings
from account_store.core.errors import ConfigurationError, StoreConnectionError
from account_store.database.store import MongoDocumentStore

logger = logging.getLogger(__name__)


def create_mongo_client(settings: Settings) -> AsyncIOMotorClient:
    """
    Create a MongoDB client from the connection descriptor.

    Raises:
        ConfigurationError: If the URL or its parameters are malformed
    """
    try:
        return AsyncIOMotorClient(settings.connection_url, tz_aware=True)
    except (MongoConfigurationError, ValueError, TypeError) as exc:
        raise ConfigurationError(f"Invalid MongoDB connection descriptor: {exc}") from exc


async def open_document_store(settings: Optional[Settings] = None) -> MongoDocumentStore:
    """
    Connect to MongoDB and return a store bound to the configured database.

    The server is pinged before returning, so a returned store is usable.

    Args:
        settings: Adapter settings; defaults to the cached environment settings

    Returns:
        MongoDocumentStore owning the new client

    Raises:
        ConfigurationError: If the connection descriptor is malformed
        StoreConnectionError: If the server cannot be reached
    """
    settings = settings or get_settings()
    client = create_mongo_client(settings)

    try:
        await client.admin.command("ping")
    except PyMongoError as exc:
        client.close()
        logger.error(f"Could not connect to MongoDB: {exc}")
        raise StoreConnectionError(f"Could not connect to MongoDB: {exc}") from exc

    logger.info(f"Connected to MongoDB database '{settings.database_name}'")
    return MongoDocumentStore(client[settings.database_name], client=client)


async def close_document_store(store: MongoDocumentStore) -> None:
    """Close the store's client connection."""
    store.close()
    logger.info("Disconnected from MongoDB")


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for applications embedding the adapter."""
    level = level or get_settings().log_level
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
