"""
Core module - Credential hashing, token issuance and errors.
"""
from account_store.core.security import CredentialHasher, HashedCredential
from account_store.core.tokens import SignupToken, TokenIssuer

__all__ = [
    "CredentialHasher",
    "HashedCredential",
    "SignupToken",
    "TokenIssuer",
]
