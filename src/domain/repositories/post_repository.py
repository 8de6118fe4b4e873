"""Post repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.post import Post


class IPostRepository(Protocol):
    """Repository interface for Post aggregates."""

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        ...

    async def get_all(self) -> list[Post]:
        """Get all posts, newest first."""
        ...

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        ...

    async def save(self, post: Post) -> Post:
        """Write the whole post document back, checking ``post.version``."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a post and return success status."""
        ...

    async def delete_by_user(self, user_id: UUID) -> int:
        """Delete every post authored by a user. Returns the number removed."""
        ...
