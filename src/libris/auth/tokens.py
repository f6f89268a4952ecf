"""Signed bearer credentials: issuing them at login and verifying them per request."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import jwt
from jwt.exceptions import InvalidTokenError

from ..config import Settings
from ..logging import get_logger
from .context import AuthenticatedIdentity, Role

if TYPE_CHECKING:
    from ..dbmodels import Users

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "
TOKEN_ISSUER = "libris"
TOKEN_AUDIENCE = "libris-api"


class CredentialIssuer:
    """Signs time-bounded tokens carrying a user's id, email and role.

    The caller is responsible for having authenticated the user first.
    """

    def __init__(self, settings: Settings):
        self.secret_key = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.token_expiry = timedelta(hours=settings.token_expiry_hours)

    def issue(self, user: Users) -> str:
        if not self.secret_key:
            raise RuntimeError("JWT secret is not configured (set LIBRIS_JWT_SECRET)")

        now = datetime.now(UTC)
        payload = {
            "iss": TOKEN_ISSUER,
            "aud": TOKEN_AUDIENCE,
            "iat": now,
            "exp": now + self.token_expiry,
            "sub": str(user.id),
            "id": str(user.id),
            "email": user.email,
            "role": user.role,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)


class IdentityVerifier:
    """Turns an Authorization header into an identity, or None for anonymous requests.

    Never raises: a missing, malformed, expired or forged token simply means
    the request carries no identity.
    """

    def __init__(self, settings: Settings):
        self.secret_key = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm

    def verify(self, authorization: str | None) -> AuthenticatedIdentity | None:
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            return None

        token = authorization[len(BEARER_PREFIX) :].strip()
        if not token:
            return None

        if not self.secret_key:
            logger.warning("Bearer token ignored, JWT secret is not configured")
            return None

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=TOKEN_ISSUER,
                audience=TOKEN_AUDIENCE,
                options={"require": ["exp", "iat", "id", "email", "role"]},
            )
            role = Role(payload["role"])
        except InvalidTokenError as e:
            logger.warning("JWT token validation failed", error=str(e))
            return None
        except ValueError as e:
            logger.warning("JWT token carries an unknown role", error=str(e))
            return None

        return AuthenticatedIdentity(
            user_id=str(payload["id"]),
            email=str(payload["email"]),
            role=role,
        )
