"""JWT authentication provider implementation.

Tokens are HS256-signed with the process-wide secret from settings and
carry only the subject and its validity window:

    {
        "sub": "user-uuid",
        "iat": 1234567890,
        "exp": 1235927890
    }

Verification is purely cryptographic. A token stays valid until ``exp``
even if its user has since been deleted, and rotating the secret
invalidates every outstanding token.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import TokenClaims

logger = logging.getLogger(__name__)


class JWTAuthProvider:
    """JWT-based authentication provider."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_seconds: int = settings.jwt_expire_seconds,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_seconds = expire_seconds

    @property
    def expire_seconds(self) -> int:
        return self._expire_seconds

    def validate_token(self, token: str) -> Optional[TokenClaims]:
        """
        Validate a JWT and extract the identity it asserts.

        Args:
            token: The JWT to validate

        Returns:
            TokenClaims if valid, None if malformed, tampered with or expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require_exp": True, "require_sub": True},
            )
        except ExpiredSignatureError:
            logger.debug("Rejected expired token")
            return None
        except JWTError:
            return None

        try:
            user_id = UUID(payload["sub"])
            issued_at = datetime.fromtimestamp(payload.get("iat", 0), tz=timezone.utc)
            expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        except (KeyError, TypeError, ValueError):
            return None

        return TokenClaims(user_id=user_id, issued_at=issued_at, expires_at=expires_at)

    def create_token(self, user_id: UUID, now: Optional[datetime] = None) -> str:
        """
        Create a signed JWT for a user.

        Args:
            user_id: The user the token identifies
            now: Issue time (UTC), defaults to the current time

        Returns:
            The generated JWT string
        """
        issued_at = now or datetime.now(timezone.utc)
        if issued_at.tzinfo is None:
            issued_at = issued_at.replace(tzinfo=timezone.utc)
        expire = issued_at + timedelta(seconds=self._expire_seconds)

        payload: dict = {
            "sub": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int(expire.timestamp()),
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
