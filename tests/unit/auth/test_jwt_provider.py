"""Unit tests for JWTAuthProvider token issue and verification."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from jose import jwt as jose_jwt

from infrastructure.auth.jwt_provider import JWTAuthProvider

LIFETIME = 360000


@pytest.fixture
def provider() -> JWTAuthProvider:
    return JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_seconds=LIFETIME)


class TestCreateToken:
    def test_round_trips_user_id(self, provider: JWTAuthProvider) -> None:
        user_id = uuid4()

        claims = provider.validate_token(provider.create_token(user_id))

        assert claims is not None
        assert claims.user_id == user_id

    def test_expiry_is_issue_time_plus_lifetime(self, provider: JWTAuthProvider) -> None:
        issued = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

        token = provider.create_token(uuid4(), now=issued)
        payload = jose_jwt.get_unverified_claims(token)

        assert payload["iat"] == int(issued.timestamp())
        assert payload["exp"] - payload["iat"] == LIFETIME

    def test_payload_carries_only_identity_and_window(self, provider: JWTAuthProvider) -> None:
        token = provider.create_token(uuid4())

        assert set(jose_jwt.get_unverified_claims(token)) == {"sub", "iat", "exp"}

    def test_naive_issue_time_is_treated_as_utc(self, provider: JWTAuthProvider) -> None:
        naive = datetime(2026, 1, 1, 12, 0, 0)
        aware = naive.replace(tzinfo=timezone.utc)

        payload = jose_jwt.get_unverified_claims(provider.create_token(uuid4(), now=naive))
        assert payload["iat"] == int(aware.timestamp())


class TestValidateToken:
    def test_valid_just_before_expiry(self, provider: JWTAuthProvider) -> None:
        issued = datetime.now(timezone.utc) - timedelta(seconds=LIFETIME - 60)

        claims = provider.validate_token(provider.create_token(uuid4(), now=issued))

        assert claims is not None
        assert claims.expires_at > datetime.now(timezone.utc)

    def test_rejects_expired_token(self, provider: JWTAuthProvider) -> None:
        issued = datetime.now(timezone.utc) - timedelta(seconds=LIFETIME + 60)

        assert provider.validate_token(provider.create_token(uuid4(), now=issued)) is None

    def test_rejects_tampered_token(self, provider: JWTAuthProvider) -> None:
        token = provider.create_token(uuid4())
        header, payload, signature = token.split(".")
        flipped = "A" if signature[0] != "A" else "B"

        assert provider.validate_token(f"{header}.{payload}.{flipped}{signature[1:]}") is None

    def test_rejects_token_signed_with_other_secret(self, provider: JWTAuthProvider) -> None:
        other = JWTAuthProvider(secret_key="other-secret", algorithm="HS256", expire_seconds=LIFETIME)

        assert provider.validate_token(other.create_token(uuid4())) is None

    def test_rejects_garbage(self, provider: JWTAuthProvider) -> None:
        assert provider.validate_token("not.a.jwt") is None
        assert provider.validate_token("") is None

    def test_rejects_token_without_sub(self, provider: JWTAuthProvider) -> None:
        token = jose_jwt.encode({"exp": 9999999999}, "test-secret", algorithm="HS256")

        assert provider.validate_token(token) is None

    def test_rejects_token_without_exp(self, provider: JWTAuthProvider) -> None:
        token = jose_jwt.encode({"sub": str(uuid4())}, "test-secret", algorithm="HS256")

        assert provider.validate_token(token) is None

    def test_rejects_non_uuid_subject(self, provider: JWTAuthProvider) -> None:
        token = jose_jwt.encode(
            {"sub": "not-a-uuid", "exp": 9999999999}, "test-secret", algorithm="HS256"
        )

        assert provider.validate_token(token) is None
