"""User (identity) domain entity."""

import hashlib
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

GRAVATAR_URL = "https://www.gravatar.com/avatar/{digest}?s=200&r=pg&d=mm"


def gravatar_url(email: str) -> str:
    """Build the Gravatar avatar URL for an email address."""
    digest = hashlib.md5(
        email.strip().lower().encode("utf-8"), usedforsecurity=False
    ).hexdigest()
    return GRAVATAR_URL.format(digest=digest)


@dataclass
class User:
    """Domain entity for a registered user.

    ``password_hash`` stays inside the service layer; API schemas never
    expose it.
    """

    name: str
    email: str
    password_hash: str
    id: UUID = field(default_factory=uuid4)
    avatar: str = ""
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Normalize email and derive the avatar when none was given."""
        self.email = self.email.strip().lower()
        if not self.avatar:
            self.avatar = gravatar_url(self.email)


@dataclass(frozen=True, slots=True)
class UserSummary:
    """Read-only identity fields shown next to profiles."""

    id: UUID
    name: str
    avatar: str
