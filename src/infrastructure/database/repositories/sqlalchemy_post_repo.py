"""SQLAlchemy implementation of Post repository."""

from dataclasses import replace
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ConcurrentModificationError
from domain.entities.post import Comment, Post
from infrastructure.database.models import PostModel


class SQLAlchemyPostRepository:
    """SQLAlchemy implementation of IPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        stmt = select(PostModel).where(PostModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Post]:
        """Get all posts, newest first."""
        stmt = select(PostModel).order_by(PostModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        model = self._to_model(post)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def save(self, post: Post) -> Post:
        """Compare-and-swap write of the likes and comments of a post.

        Author, text and the author snapshot never change after creation.
        """
        stmt = (
            update(PostModel)
            .where(PostModel.id == post.id, PostModel.version == post.version)
            .values(
                likes=[str(user_id) for user_id in post.likes],
                comments=[_comment_to_doc(c) for c in post.comments],
                version=post.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise ConcurrentModificationError("post", str(post.id))
        return replace(post, version=post.version + 1)

    async def delete(self, id: UUID) -> bool:
        """Delete a post."""
        stmt = delete(PostModel).where(PostModel.id == id)
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    async def delete_by_user(self, user_id: UUID) -> int:
        """Delete every post authored by a user."""
        stmt = delete(PostModel).where(PostModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.rowcount or 0

    def _to_entity(self, model: PostModel) -> Post:
        """Convert ORM model to domain entity."""
        return Post(
            id=model.id,
            user_id=model.user_id,
            text=model.text,
            name=model.name,
            avatar=model.avatar,
            likes=[UUID(user_id) for user_id in model.likes or []],
            comments=[_comment_from_doc(d) for d in model.comments or []],
            version=model.version,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Post) -> PostModel:
        """Convert domain entity to ORM model."""
        return PostModel(
            id=entity.id,
            user_id=entity.user_id,
            text=entity.text,
            name=entity.name,
            avatar=entity.avatar,
            likes=[str(user_id) for user_id in entity.likes],
            comments=[_comment_to_doc(c) for c in entity.comments],
            version=entity.version,
            created_at=entity.created_at,
        )


def _comment_to_doc(comment: Comment) -> dict[str, Any]:
    return {
        "id": str(comment.id),
        "user_id": str(comment.user_id),
        "text": comment.text,
        "name": comment.name,
        "avatar": comment.avatar,
        "created_at": comment.created_at.isoformat(),
    }


def _comment_from_doc(doc: dict[str, Any]) -> Comment:
    return Comment(
        id=UUID(doc["id"]),
        user_id=UUID(doc["user_id"]),
        text=doc["text"],
        name=doc["name"],
        avatar=doc.get("avatar", ""),
        created_at=datetime.fromisoformat(doc["created_at"]),
    )
