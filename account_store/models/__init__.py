"""
Data models for stored documents.
"""
from account_store.models.account import Account, LookupField

__all__ = ["Account", "LookupField"]
