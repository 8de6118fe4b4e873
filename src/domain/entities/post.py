"""Post aggregate with likes and comments."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Comment:
    """A comment on a post, with the commenter's name/avatar snapshot."""

    user_id: UUID
    text: str
    name: str
    avatar: str = ""
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Post:
    """Domain entity for a Post.

    ``name`` and ``avatar`` are copied from the author when the post is
    created and are not refreshed afterwards. A user id appears in
    ``likes`` at most once.
    """

    user_id: UUID
    text: str
    name: str
    avatar: str = ""
    id: UUID = field(default_factory=uuid4)
    likes: list[UUID] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    version: int = 1
    created_at: datetime = field(default_factory=datetime.utcnow)

    def is_liked_by(self, user_id: UUID) -> bool:
        return user_id in self.likes

    def is_authored_by(self, user_id: UUID) -> bool:
        return self.user_id == user_id

    def find_comment(self, comment_id: UUID) -> Comment | None:
        return next((c for c in self.comments if c.id == comment_id), None)
