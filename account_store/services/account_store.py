"""
Account store adapter: account lifecycle over a document store.
"""
import asyncio
from datetime import timedelta
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from account_store.config import Settings, get_settings
from account_store.core.errors import (
    AccountNotFoundError,
    ConfigurationError,
    InvalidQueryError,
)
from account_store.core.security import CredentialHasher
from account_store.core.tokens import TokenIssuer
from account_store.database.connections import open_document_store
from account_store.database.store import DocumentStore
from account_store.models.account import (
    Account,
    LookupField,
    check_field_name,
    is_operator_document,
)


def _equality_filter(
    field: LookupField,
    value: str,
    extra_criteria: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Build a find filter of plain equality matches."""
    try:
        field = LookupField(field)
    except ValueError as exc:
        raise InvalidQueryError(f"Unsupported lookup field: {field!r}") from exc

    # Names, emails and tokens are all stored as strings.
    if not isinstance(value, str):
        raise InvalidQueryError(
            f"Lookup value for {field.value!r} must be a string, got {type(value).__name__}"
        )

    query: dict[str, Any] = {}
    for key, criterion in (extra_criteria or {}).items():
        check_field_name(key)
        if is_operator_document(criterion):
            raise InvalidQueryError(f"Only equality criteria are allowed for {key!r}")
        query[key] = criterion

    query[field.value] = value
    return query


class AccountStore:
    """
    Create, find, update and remove accounts.

    Every operation goes straight to the document store: there is no caching,
    locking or retrying here, and store errors propagate unchanged.
    """

    def __init__(
        self,
        store: DocumentStore,
        collection: str,
        signup_token_lifetime: timedelta,
        hasher: Optional[CredentialHasher] = None,
    ):
        """
        Initialize the adapter.

        Args:
            store: Connected document store
            collection: Name of the accounts collection
            signup_token_lifetime: How long signup tokens stay valid

        Raises:
            ConfigurationError: If the token lifetime is not positive
        """
        self.store = store
        self.collection = collection
        self.token_issuer = TokenIssuer(signup_token_lifetime)
        self.hasher = hasher or CredentialHasher()

    @classmethod
    async def from_settings(cls, settings: Optional[Settings] = None) -> "AccountStore":
        """
        Connect to MongoDB and build an adapter from settings.

        The caller owns the returned adapter's store and must close it.

        Raises:
            ConfigurationError: If the environment settings fail validation,
                or the lifetime or hasher parameters are unusable
            StoreConnectionError: If the server cannot be reached
        """
        if settings is None:
            try:
                settings = get_settings()
            except ValidationError as exc:
                raise ConfigurationError(f"Invalid account store settings: {exc}") from exc

        # Validate configuration before any connection is opened.
        hasher = CredentialHasher.from_settings(settings)
        TokenIssuer(settings.signup_token_expiration)

        store = await open_document_store(settings)
        return cls(
            store,
            settings.mongo_collection,
            settings.signup_token_expiration,
            hasher=hasher,
        )

    async def create(self, name: str, email: str, secret: str) -> Account:
        """
        Create a new account.

        The stored copy is re-read by its signup token and returned, so the
        caller sees exactly what persisted, including the store-assigned id.
        Insert and re-read are separate round trips: if the account is
        removed in between, AccountNotFoundError is raised even though the
        insert succeeded.

        Args:
            name: User name
            email: User email
            secret: Plain text secret; only its hash is stored

        Returns:
            The stored Account

        Raises:
            HashingError: If hashing fails; nothing is written
            StoreOperationError: If the insert or re-read fails
            StoreConnectionError: If the store is unreachable
            AccountNotFoundError: If the account vanished before the re-read
        """
        signup = self.token_issuer.issue()
        account = {
            "name": name,
            "email": email,
            "signupToken": signup.token,
            "signupTimestamp": signup.issued_at,
            "signupTokenExpires": signup.expires_at,
            "failedLoginAttempts": 0,
        }

        credential = await asyncio.to_thread(self.hasher.hash, secret)
        account["salt"] = credential.salt
        account["derived_key"] = credential.derived_key

        await self.store.insert_one(self.collection, account)

        stored = await self.find_by_field(LookupField.SIGNUP_TOKEN, signup.token)
        if stored is None:
            raise AccountNotFoundError(
                f'Account "{name}" was removed before it could be read back',
                signupToken=signup.token,
            )
        return stored

    async def find_by_field(
        self,
        field: LookupField,
        value: str,
        extra_criteria: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Account]:
        """
        Find a single account by name, email or signup token.

        Args:
            field: Lookup key
            value: Value the lookup key must equal
            extra_criteria: Additional equality matches to scope the lookup

        Returns:
            The first matching Account, or None if nothing matches

        Raises:
            InvalidQueryError: If field, value or extra_criteria are not allowed
        """
        query = _equality_filter(field, value, extra_criteria)
        document = await self.store.find_one(self.collection, query)
        return Account.from_document(document)

    async def update(self, account: Account) -> Account:
        """
        Overwrite the stored fields present on account.

        Fields not set on the model are left untouched in storage. The
        account passed in is returned as-is; it is not re-read.

        Raises:
            InvalidQueryError: If the account has no id or no fields to set
            AccountNotFoundError: If no stored account has that id
        """
        if account.id is None:
            raise InvalidQueryError("Cannot update an account without an id")

        fields = account.to_update_fields()
        if not fields:
            raise InvalidQueryError(f"Nothing to update for account {account.id}")

        matched = await self.store.update_one(self.collection, account.id, fields)
        if matched == 0:
            raise AccountNotFoundError(
                f'Cannot find user with id "{account.id}"',
                id=account.id,
            )
        return account

    async def remove(self, name: str) -> bool:
        """
        Delete the account with the given name.

        Returns:
            True once exactly one account was deleted

        Raises:
            InvalidQueryError: If name is not a string
            AccountNotFoundError: If no account has that name
        """
        if not isinstance(name, str):
            raise InvalidQueryError(f"Account name must be a string, got {type(name).__name__}")

        deleted = await self.store.delete_one(self.collection, {"name": name})
        if deleted == 0:
            raise AccountNotFoundError(f'Cannot find user "{name}"', name=name)
        return True
