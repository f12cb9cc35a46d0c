"""
Credential hashing for account secrets.

Secrets are run through PBKDF2-HMAC with a fresh random salt on every call.
Only the hex encoded salt and derived key are ever persisted.
"""
from typing import NamedTuple

from passlib.crypto.digest import lookup_hash, pbkdf2_hmac
from passlib.utils import consteq, getrandbytes, rng

from account_store.core.errors import ConfigurationError, HashingError


class HashedCredential(NamedTuple):
    """Salt and derived key produced for a single secret."""
    salt: str
    derived_key: str


class CredentialHasher:
    """Salted, one-way hashing of account secrets."""

    def __init__(
        self,
        digest: str = "sha256",
        rounds: int = 29000,
        salt_size: int = 16,
        key_length: int = 32,
    ):
        """
        Initialize the hasher.

        Args:
            digest: Name of the HMAC digest (e.g. "sha256", "sha512")
            rounds: PBKDF2 iteration count
            salt_size: Number of random salt bytes
            key_length: Length of the derived key in bytes

        Raises:
            ConfigurationError: If any parameter is unusable
        """
        try:
            lookup_hash(digest)
        except (ValueError, TypeError) as exc:
            raise ConfigurationError(f"Unsupported hash digest: {digest!r}") from exc

        if rounds < 1:
            raise ConfigurationError("hash rounds must be at least 1")
        if salt_size < 8:
            raise ConfigurationError("hash salt size must be at least 8 bytes")
        if key_length < 16:
            raise ConfigurationError("hash key length must be at least 16 bytes")

        self.digest = digest
        self.rounds = rounds
        self.salt_size = salt_size
        self.key_length = key_length

    @classmethod
    def from_settings(cls, settings) -> "CredentialHasher":
        """Build a hasher from adapter settings."""
        return cls(
            digest=settings.hash_digest,
            rounds=settings.hash_rounds,
            salt_size=settings.hash_salt_size,
            key_length=settings.hash_key_length,
        )

    def _derive(self, secret: str, salt: bytes) -> bytes:
        return pbkdf2_hmac(
            self.digest,
            secret.encode("utf-8"),
            salt,
            self.rounds,
            self.key_length,
        )

    def hash(self, secret: str) -> HashedCredential:
        """
        Hash a plaintext secret with a freshly generated salt.

        Args:
            secret: The plain text secret

        Returns:
            HashedCredential with hex encoded salt and derived key

        Raises:
            HashingError: If the salt or key could not be produced
        """
        try:
            salt = getrandbytes(rng, self.salt_size)
            derived_key = self._derive(secret, salt)
        except (AttributeError, TypeError, ValueError, OSError, NotImplementedError) as exc:
            raise HashingError(f"Failed to hash secret: {exc}") from exc

        return HashedCredential(salt=salt.hex(), derived_key=derived_key.hex())

    def verify(self, secret: str, salt: str, derived_key: str) -> bool:
        """
        Check a plaintext secret against a stored salt and derived key.

        Args:
            secret: The plain text secret to check
            salt: Hex encoded salt stored with the account
            derived_key: Hex encoded derived key stored with the account

        Returns:
            True if the secret matches, False otherwise

        Raises:
            HashingError: If the stored salt is not valid hex or hashing fails
        """
        try:
            candidate = self._derive(secret, bytes.fromhex(salt))
        except (AttributeError, TypeError, ValueError, OSError) as exc:
            raise HashingError(f"Failed to verify secret: {exc}") from exc

        return consteq(candidate.hex(), derived_key)
