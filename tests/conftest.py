"""
Global test fixtures for the account store.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Document store and adapter instances bound to the mock database
- Test account data
"""

from datetime import timedelta

import pytest
import pytest_asyncio
from mongomock_motor import AsyncMongoMockClient

from account_store.config import Settings
from account_store.core.security import CredentialHasher
from account_store.database.store import MongoDocumentStore
from account_store.services.account_store import AccountStore

TEST_DB_NAME = "accounts_test"
TEST_COLLECTION = "users"
SIGNUP_TOKEN_LIFETIME = timedelta(hours=24)


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.

    This provides an in-memory MongoDB that behaves like the real thing
    for testing purposes.
    """
    client = AsyncMongoMockClient()
    yield client
    client.close()


@pytest_asyncio.fixture
async def mock_accounts_db(mock_async_mongo_client):
    """Provide mock accounts database."""
    yield mock_async_mongo_client[TEST_DB_NAME]


@pytest_asyncio.fixture
async def mock_indexed_accounts_db(mock_async_mongo_client):
    """Provide mock accounts database with unique indexes like production."""
    db = mock_async_mongo_client["accounts_indexed"]
    await db[TEST_COLLECTION].create_index("name", unique=True)
    await db[TEST_COLLECTION].create_index("email", unique=True)
    yield db


# =============================================================================
# Adapter Fixtures
# =============================================================================

@pytest.fixture
def fast_hasher() -> CredentialHasher:
    """Hasher with few rounds so tests stay quick."""
    return CredentialHasher(rounds=1000)


@pytest.fixture
def document_store(mock_accounts_db) -> MongoDocumentStore:
    """Document store bound to the mock accounts database."""
    return MongoDocumentStore(mock_accounts_db)


@pytest.fixture
def account_store(document_store, fast_hasher) -> AccountStore:
    """Account store with a 24 hour signup token lifetime."""
    return AccountStore(
        document_store,
        TEST_COLLECTION,
        SIGNUP_TOKEN_LIFETIME,
        hasher=fast_hasher,
    )


@pytest.fixture
def indexed_account_store(mock_indexed_accounts_db, fast_hasher) -> AccountStore:
    """Account store whose collection rejects duplicate names and emails."""
    return AccountStore(
        MongoDocumentStore(mock_indexed_accounts_db),
        TEST_COLLECTION,
        SIGNUP_TOKEN_LIFETIME,
        hasher=fast_hasher,
    )


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        mongo_uri="mongodb://localhost:27017/",
        mongo_db_name="accounts_test",
        mongo_collection=TEST_COLLECTION,
        signup_token_expiration="1 day",
        hash_rounds=1000,
    )


# =============================================================================
# Account Fixtures
# =============================================================================

@pytest.fixture
def test_account_data() -> dict:
    """Basic account data for creation."""
    return {
        "name": "john",
        "email": "john@x.com",
        "secret": "secret1",
    }
