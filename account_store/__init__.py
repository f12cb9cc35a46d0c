"""
Account store - MongoDB persistence adapter for authentication libraries.
"""
from account_store.config import Settings, get_settings
from account_store.core.errors import (
    AccountNotFoundError,
    AccountStoreError,
    ConfigurationError,
    HashingError,
    InvalidQueryError,
    StoreConnectionError,
    StoreOperationError,
)
from account_store.models.account import Account, LookupField
from account_store.services.account_store import AccountStore

__all__ = [
    "Settings",
    "get_settings",
    "Account",
    "LookupField",
    "AccountStore",
    "AccountStoreError",
    "AccountNotFoundError",
    "ConfigurationError",
    "HashingError",
    "InvalidQueryError",
    "StoreConnectionError",
    "StoreOperationError",
]
