"""Unit tests for credential issuing and bearer token verification."""

from datetime import UTC, datetime, timedelta
from types import SimpleNamespace
from uuid import uuid4

import jwt
import pytest

from libris.auth.context import Role
from libris.auth.tokens import TOKEN_AUDIENCE, TOKEN_ISSUER, CredentialIssuer, IdentityVerifier
from libris.config import Settings


@pytest.fixture
def issuer(test_settings):
    return CredentialIssuer(test_settings)


@pytest.fixture
def verifier(test_settings):
    return IdentityVerifier(test_settings)


@pytest.fixture
def user():
    return SimpleNamespace(id=uuid4(), email="reader@example.com", role="Admin")


@pytest.fixture
def secret_key(test_settings):
    return test_settings.jwt_secret


def _encode(payload: dict, secret: str) -> str:
    return jwt.encode(payload, secret, algorithm="HS256")


def _claims(user, **overrides) -> dict:
    now = datetime.now(UTC)
    payload = {
        "iss": TOKEN_ISSUER,
        "aud": TOKEN_AUDIENCE,
        "iat": now,
        "exp": now + timedelta(hours=1),
        "id": str(user.id),
        "email": user.email,
        "role": user.role,
    }
    payload.update(overrides)
    return payload


class TestCredentialIssuer:
    def test_issue_embeds_identity_and_one_day_expiry(self, issuer, user, secret_key):
        token = issuer.issue(user)

        payload = jwt.decode(
            token, secret_key, algorithms=["HS256"], audience=TOKEN_AUDIENCE
        )
        assert payload["id"] == str(user.id)
        assert payload["email"] == user.email
        assert payload["role"] == "Admin"
        assert payload["exp"] - payload["iat"] == 24 * 60 * 60

    def test_issue_without_secret_fails(self, user):
        issuer = CredentialIssuer(Settings(_env_file=None, jwt_secret=None))

        with pytest.raises(RuntimeError, match="JWT secret is not configured"):
            issuer.issue(user)


class TestIdentityVerifier:
    def test_round_trip(self, issuer, verifier, user):
        identity = verifier.verify(f"Bearer {issuer.issue(user)}")

        assert identity is not None
        assert identity.user_id == str(user.id)
        assert identity.email == user.email
        assert identity.role is Role.ADMIN

    @pytest.mark.parametrize("header", [None, "", "Bearer ", "Bearer    ", "Token abc", "bearer abc"])
    def test_missing_or_malformed_header_is_anonymous(self, verifier, header):
        assert verifier.verify(header) is None

    def test_expired_token_is_anonymous(self, verifier, user, secret_key):
        past = datetime.now(UTC) - timedelta(days=2)
        token = _encode(_claims(user, iat=past, exp=past + timedelta(days=1)), secret_key)

        assert verifier.verify(f"Bearer {token}") is None

    def test_wrong_signature_is_anonymous(self, verifier, user):
        token = _encode(_claims(user), secret="some-other-secret")

        assert verifier.verify(f"Bearer {token}") is None

    def test_garbage_token_is_anonymous(self, verifier):
        assert verifier.verify("Bearer not.a.jwt") is None

    def test_missing_claim_is_anonymous(self, verifier, user, secret_key):
        claims = _claims(user)
        del claims["role"]

        assert verifier.verify(f"Bearer {_encode(claims, secret_key)}") is None

    def test_unknown_role_is_anonymous(self, verifier, user, secret_key):
        token = _encode(_claims(user, role="Superuser"), secret_key)

        assert verifier.verify(f"Bearer {token}") is None

    def test_no_secret_configured_is_anonymous(self, issuer, user):
        verifier = IdentityVerifier(Settings(_env_file=None, jwt_secret=None))

        assert verifier.verify(f"Bearer {issuer.issue(user)}") is None
