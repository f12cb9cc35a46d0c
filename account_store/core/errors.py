"""
Error taxonomy raised by the account store.

The adapter never logs; callers catch these and decide what to report.
"""


class AccountStoreError(Exception):
    """Base class for all account store errors."""


class ConfigurationError(AccountStoreError):
    """Invalid token lifetime, hasher parameters or connection descriptor."""


class StoreConnectionError(AccountStoreError):
    """The document store could not be reached."""


class StoreOperationError(AccountStoreError):
    """An insert, find, update or delete failed at the store layer."""


class HashingError(AccountStoreError):
    """The credential hashing primitive failed."""


class AccountNotFoundError(AccountStoreError):
    """No account matched the operation's filter."""

    def __init__(self, message: str, **criteria):
        super().__init__(message)
        self.criteria = criteria


class InvalidQueryError(AccountStoreError, ValueError):
    """A lookup or update was built from disallowed input."""
