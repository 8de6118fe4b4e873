"""Authentication provider protocol."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol
from uuid import UUID


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by a verified token."""

    user_id: UUID
    issued_at: datetime
    expires_at: datetime


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    def validate_token(self, token: str) -> Optional[TokenClaims]:
        """
        Validate an authentication token.

        Args:
            token: The bearer token to validate

        Returns:
            TokenClaims if valid, None if malformed, tampered with or expired
        """
        ...

    def create_token(self, user_id: UUID, now: Optional[datetime] = None) -> str:
        """
        Create an authentication token for a user.

        Args:
            user_id: The user the token identifies
            now: Issue time, defaults to the current UTC time

        Returns:
            The generated token string
        """
        ...
