"""Authentication for Libris: bearer credentials, identities and password hashing."""

from .context import AuthenticatedIdentity, Role
from .passwords import MIN_PASSWORD_LENGTH, hash_password, verify_password
from .tokens import CredentialIssuer, IdentityVerifier

__all__ = [
    "AuthenticatedIdentity",
    "CredentialIssuer",
    "IdentityVerifier",
    "MIN_PASSWORD_LENGTH",
    "Role",
    "hash_password",
    "verify_password",
]
