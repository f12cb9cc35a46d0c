"""
Service layer for account lifecycle operations.
"""
from account_store.services.account_store import AccountStore

__all__ = ["AccountStore"]
