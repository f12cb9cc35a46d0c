"""
Adapter configuration loaded from environment variables.
"""
import re
from datetime import timedelta
from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

_DURATION_PATTERN = re.compile(
    r"^\s*(?P<amount>\d+(?:\.\d+)?)\s*(?P<unit>[a-z]*)\s*$",
    re.IGNORECASE,
)

_DURATION_UNITS = {
    "ms": timedelta(milliseconds=1),
    "msec": timedelta(milliseconds=1),
    "msecs": timedelta(milliseconds=1),
    "millisecond": timedelta(milliseconds=1),
    "milliseconds": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "sec": timedelta(seconds=1),
    "secs": timedelta(seconds=1),
    "second": timedelta(seconds=1),
    "seconds": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "min": timedelta(minutes=1),
    "mins": timedelta(minutes=1),
    "minute": timedelta(minutes=1),
    "minutes": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "hr": timedelta(hours=1),
    "hrs": timedelta(hours=1),
    "hour": timedelta(hours=1),
    "hours": timedelta(hours=1),
    "d": timedelta(days=1),
    "day": timedelta(days=1),
    "days": timedelta(days=1),
    "w": timedelta(weeks=1),
    "week": timedelta(weeks=1),
    "weeks": timedelta(weeks=1),
}


def parse_duration(value: str) -> timedelta:
    """
    Parse a short human duration such as "1 day", "24h" or "500ms".

    A bare number is read as milliseconds.

    Args:
        value: Duration string

    Returns:
        Parsed timedelta

    Raises:
        ValueError: If the string is not a recognised duration
    """
    match = _DURATION_PATTERN.match(value)
    if match is None:
        raise ValueError(f"Invalid duration: {value!r}")

    unit = match.group("unit").lower() or "ms"
    if unit not in _DURATION_UNITS:
        raise ValueError(f"Unknown duration unit {unit!r} in {value!r}")

    return float(match.group("amount")) * _DURATION_UNITS[unit]


class Settings(BaseSettings):
    """Adapter settings from environment variables."""

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017/"
    mongo_db_name: str = "accounts"
    mongo_collection: str = "users"
    mongo_params: Optional[str] = None

    # Signup token
    signup_token_expiration: timedelta = timedelta(days=1)

    # Credential hashing (PBKDF2-HMAC)
    hash_digest: str = "sha256"
    hash_rounds: int = 29000
    hash_salt_size: int = 16
    hash_key_length: int = 32

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @field_validator("signup_token_expiration", mode="before")
    @classmethod
    def _parse_expiration(cls, value):
        # Bare numbers are milliseconds whether they come from code or the
        # environment. ISO-8601 durations ("P1D") are left for pydantic.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return timedelta(milliseconds=value)
        if isinstance(value, str) and not value.strip().upper().startswith("P"):
            return parse_duration(value)
        return value

    @property
    def database_name(self) -> str:
        """Database name without any trailing "?query" part."""
        return self.mongo_db_name.split("?", 1)[0]

    @property
    def connection_url(self) -> str:
        """
        Full MongoDB connection URL.

        The URL is the base URI, the database name (including any inline
        query string) and the optional extra parameters, joined as-is.
        """
        return self.mongo_uri + self.mongo_db_name + (self.mongo_params or "")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
