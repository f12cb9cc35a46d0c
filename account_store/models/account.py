"""
Account model for the accounts collection.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator

from account_store.core.errors import InvalidQueryError


def check_field_name(key: Any) -> str:
    """
    Ensure a stored key is a plain top-level field name.

    Raises:
        InvalidQueryError: For empty, "$"-prefixed or dotted keys
    """
    if not isinstance(key, str) or not key or key.startswith("$") or "." in key:
        raise InvalidQueryError(f"Invalid field name: {key!r}")
    return key


def is_operator_document(value: Any) -> bool:
    """True if value is a mapping with any "$"-prefixed key."""
    return isinstance(value, Mapping) and any(str(k).startswith("$") for k in value)


class LookupField(str, Enum):
    """Stored keys an account can be looked up by."""
    NAME = "name"
    EMAIL = "email"
    SIGNUP_TOKEN = "signupToken"


class Account(BaseModel):
    """
    Account document model.

    Attribute names are snake_case; the stored document uses the aliases.
    Unknown keys written by the caller are kept as extra fields.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    name: Optional[str] = Field(None, description="Unique user name")
    email: Optional[str] = Field(None, description="Unique email address")
    signup_token: Optional[str] = Field(
        None,
        alias="signupToken",
        description="Token issued at signup to verify the account"
    )
    signup_timestamp: Optional[datetime] = Field(
        None,
        alias="signupTimestamp",
        description="Account creation timestamp"
    )
    signup_token_expires: Optional[datetime] = Field(
        None,
        alias="signupTokenExpires",
        description="Signup token expiration timestamp"
    )
    failed_login_attempts: Optional[int] = Field(
        None,
        alias="failedLoginAttempts",
        description="Number of consecutive failed login attempts"
    )
    salt: Optional[str] = Field(None, description="Hex encoded hashing salt")
    derived_key: Optional[str] = Field(None, description="Hex encoded PBKDF2 derived key")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        if isinstance(value, ObjectId):
            return str(value)
        return value

    @field_validator("signup_timestamp", "signup_token_expires")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # The driver hands back naive datetimes unless the client is tz aware.
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def from_document(cls, document: Optional[dict]) -> Optional["Account"]:
        """Build an Account from a stored document, or None if missing."""
        if document is None:
            return None
        return cls.model_validate(document)

    def to_update_fields(self) -> dict[str, Any]:
        """
        Fields explicitly set on this model, keyed by stored name, without _id.

        Raises:
            InvalidQueryError: If an extra field name is dotted or "$"-prefixed
        """
        fields = self.model_dump(by_alias=True, exclude_unset=True, exclude={"id"})
        for key in fields:
            check_field_name(key)
        return fields

    def signup_token_expired(self, now: Optional[datetime] = None) -> bool:
        """
        Check whether the signup token has expired.

        Args:
            now: Instant to compare against; defaults to the current UTC time

        Returns:
            True if expired or no expiry is recorded, False otherwise
        """
        if self.signup_token_expires is None:
            return True
        if now is None:
            now = datetime.now(timezone.utc)
        return now >= self.signup_token_expires
