"""Post service layer: posts, likes and comments."""

from typing import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    AlreadyLikedError,
    AuthorizationError,
    CommentNotFoundError,
    PostNotFoundError,
    UserNotFoundError,
)
from domain.entities.post import Comment, Post
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.validation import require_fields

logger = structlog.get_logger()


class PostService:
    """Service layer for Post business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_posts(self) -> list[Post]:
        """Get all posts, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.get_all()  # type: ignore[no-any-return]

    async def get_post(self, post_id: UUID) -> Post:
        """Get a single post."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))
            return post

    async def create_post(self, user_id: UUID, text: str) -> Post:
        """Create a post, snapshotting the author's name and avatar."""
        require_fields({"text": text}, {"text": "Text is required"})

        async with self._uow_factory() as uow:
            author = await uow.users.get(user_id)
            if not author:
                raise UserNotFoundError(str(user_id))

            post = Post(
                user_id=user_id,
                text=text.strip(),
                name=author.name,
                avatar=author.avatar,
            )
            created = await uow.posts.create(post)
            await uow.commit()
            return created

    async def delete_post(self, post_id: UUID, user_id: UUID) -> None:
        """Delete a post. Only its author may do this."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))
            if not post.is_authored_by(user_id):
                raise AuthorizationError("User not authorized to delete this post")

            await uow.posts.delete(post_id)
            await uow.commit()

        logger.info("post_deleted", post_id=str(post_id))

    async def like_post(self, post_id: UUID, user_id: UUID) -> list[UUID]:
        """Add the user's like. A second like by the same user is rejected."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))
            if post.is_liked_by(user_id):
                raise AlreadyLikedError(str(post_id))

            post.likes.append(user_id)
            saved = await uow.posts.save(post)
            await uow.commit()
            return saved.likes

    async def unlike_post(self, post_id: UUID, user_id: UUID) -> list[UUID]:
        """Remove every like by the user. Succeeds even if there was none."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))

            post.likes = [voter for voter in post.likes if voter != user_id]
            saved = await uow.posts.save(post)
            await uow.commit()
            return saved.likes

    async def add_comment(self, post_id: UUID, user_id: UUID, text: str) -> list[Comment]:
        """Add a comment at the front of the post's comment list."""
        require_fields({"text": text}, {"text": "Text is required"})

        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))
            author = await uow.users.get(user_id)
            if not author:
                raise UserNotFoundError(str(user_id))

            post.comments.insert(
                0,
                Comment(
                    user_id=user_id,
                    text=text.strip(),
                    name=author.name,
                    avatar=author.avatar,
                ),
            )
            saved = await uow.posts.save(post)
            await uow.commit()
            return saved.comments

    async def remove_comment(
        self, post_id: UUID, comment_id: UUID, user_id: UUID
    ) -> list[Comment]:
        """Remove a comment. Only the comment's author may do this."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))

            comment = post.find_comment(comment_id)
            if comment is None:
                raise CommentNotFoundError(str(comment_id))
            if comment.user_id != user_id:
                raise AuthorizationError("User not authorized to delete this comment")

            post.comments = [c for c in post.comments if c.id != comment_id]
            saved = await uow.posts.save(post)
            await uow.commit()
            return saved.comments
