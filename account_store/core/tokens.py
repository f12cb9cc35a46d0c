"""
Signup token issuance.
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Optional

from account_store.core.errors import ConfigurationError


class SignupToken(NamedTuple):
    """A freshly issued signup token and its validity window."""
    token: str
    issued_at: datetime
    expires_at: datetime


def utc_now() -> datetime:
    """Current UTC time truncated to the store's millisecond resolution."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond - now.microsecond % 1000)


class TokenIssuer:
    """Issues unique signup tokens that expire after a fixed lifetime."""

    def __init__(self, lifetime: timedelta):
        if lifetime <= timedelta(0):
            raise ConfigurationError(
                f"Signup token lifetime must be positive, got {lifetime}"
            )
        # Timestamps are stored with millisecond precision.
        if lifetime.microseconds % 1000:
            raise ConfigurationError(
                f"Signup token lifetime must be whole milliseconds, got {lifetime}"
            )
        self.lifetime = lifetime

    def issue(self, now: Optional[datetime] = None) -> SignupToken:
        """
        Issue a new signup token.

        Args:
            now: Issue instant; defaults to the current UTC time

        Returns:
            SignupToken with expires_at exactly one lifetime after issued_at
        """
        issued_at = now if now is not None else utc_now()
        return SignupToken(
            token=str(uuid.uuid4()),
            issued_at=issued_at,
            expires_at=issued_at + self.lifetime,
        )
