"""Unit tests for Post service layer."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    AlreadyLikedError,
    AuthorizationError,
    CommentNotFoundError,
    PostNotFoundError,
    UserNotFoundError,
    ValidationFailedError,
)
from domain.entities.post import Comment, Post
from domain.entities.user import User
from domain.services.post_service import PostService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> PostService:
    return PostService(lambda: uow)


@pytest.fixture
def sample_post(user_id: UUID) -> Post:
    return Post(user_id=user_id, text="Hello world", name="Alice")


class TestCreatePost:
    @pytest.mark.asyncio
    async def test_snapshots_author_name_and_avatar(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, author: User
    ) -> None:
        uow.users.get.return_value = author

        post = await service.create_post(user_id, "  Hello  ")

        assert post.text == "Hello"
        assert post.name == "Alice"
        assert post.avatar == author.avatar
        assert post.likes == []
        assert post.comments == []
        assert uow.committed is True

    @pytest.mark.asyncio
    async def test_blank_text_is_rejected(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        with pytest.raises(ValidationFailedError) as exc_info:
            await service.create_post(user_id, "   ")

        assert exc_info.value.errors == [{"field": "text", "message": "Text is required"}]
        uow.posts.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_author_raises(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.create_post(user_id, "Hello")


class TestGetPost:
    @pytest.mark.asyncio
    async def test_missing_post_raises_not_found(
        self, service: PostService, uow: FakeUnitOfWork
    ) -> None:
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError) as exc_info:
            await service.get_post(uuid4())

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_list_returns_repository_order(
        self, service: PostService, uow: FakeUnitOfWork, sample_post: Post
    ) -> None:
        uow.posts.get_all.return_value = [sample_post]

        assert await service.list_posts() == [sample_post]


class TestDeletePost:
    @pytest.mark.asyncio
    async def test_author_can_delete(
        self, service: PostService, uow: FakeUnitOfWork, sample_post: Post, user_id: UUID
    ) -> None:
        uow.posts.get.return_value = sample_post

        await service.delete_post(sample_post.id, user_id)

        uow.posts.delete.assert_called_once_with(sample_post.id)
        assert uow.committed is True

    @pytest.mark.asyncio
    async def test_other_user_is_forbidden(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        sample_post: Post,
        other_user_id: UUID,
    ) -> None:
        uow.posts.get.return_value = sample_post

        with pytest.raises(AuthorizationError) as exc_info:
            await service.delete_post(sample_post.id, other_user_id)

        assert exc_info.value.status_code == 403
        uow.posts.delete.assert_not_called()


class TestLikes:
    @pytest.mark.asyncio
    async def test_like_adds_voter(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        sample_post: Post,
        other_user_id: UUID,
    ) -> None:
        uow.posts.get.return_value = sample_post

        likes = await service.like_post(sample_post.id, other_user_id)

        assert likes == [other_user_id]
        uow.posts.save.assert_called_once()

    @pytest.mark.asyncio
    async def test_second_like_is_rejected(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        sample_post: Post,
        other_user_id: UUID,
    ) -> None:
        sample_post.likes = [other_user_id]
        uow.posts.get.return_value = sample_post

        with pytest.raises(AlreadyLikedError) as exc_info:
            await service.like_post(sample_post.id, other_user_id)

        assert exc_info.value.status_code == 400
        assert sample_post.likes == [other_user_id]
        uow.posts.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_unlike_removes_voter(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        sample_post: Post,
        user_id: UUID,
        other_user_id: UUID,
    ) -> None:
        sample_post.likes = [other_user_id, user_id]
        uow.posts.get.return_value = sample_post

        likes = await service.unlike_post(sample_post.id, other_user_id)

        assert likes == [user_id]

    @pytest.mark.asyncio
    async def test_unlike_without_like_succeeds(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        sample_post: Post,
        other_user_id: UUID,
    ) -> None:
        uow.posts.get.return_value = sample_post

        likes = await service.unlike_post(sample_post.id, other_user_id)

        assert likes == []

    @pytest.mark.asyncio
    async def test_like_missing_post_raises(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.like_post(uuid4(), user_id)


class TestComments:
    @pytest.mark.asyncio
    async def test_newest_comment_goes_first(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        sample_post: Post,
        user_id: UUID,
        author: User,
    ) -> None:
        uow.posts.get.return_value = sample_post
        uow.users.get.return_value = author

        await service.add_comment(sample_post.id, user_id, "first")
        comments = await service.add_comment(sample_post.id, user_id, "second")

        assert [c.text for c in comments] == ["second", "first"]
        assert comments[0].name == "Alice"

    @pytest.mark.asyncio
    async def test_blank_comment_is_rejected(
        self, service: PostService, sample_post: Post, user_id: UUID
    ) -> None:
        with pytest.raises(ValidationFailedError):
            await service.add_comment(sample_post.id, user_id, "")

    @pytest.mark.asyncio
    async def test_commenter_can_remove_comment(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        sample_post: Post,
        other_user_id: UUID,
    ) -> None:
        keep = Comment(user_id=sample_post.user_id, text="keep", name="Alice")
        drop = Comment(user_id=other_user_id, text="drop", name="Bob")
        sample_post.comments = [drop, keep]
        uow.posts.get.return_value = sample_post

        comments = await service.remove_comment(sample_post.id, drop.id, other_user_id)

        assert [c.text for c in comments] == ["keep"]

    @pytest.mark.asyncio
    async def test_only_commenter_can_remove_comment(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        sample_post: Post,
        user_id: UUID,
        other_user_id: UUID,
    ) -> None:
        comment = Comment(user_id=other_user_id, text="mine", name="Bob")
        sample_post.comments = [comment]
        uow.posts.get.return_value = sample_post

        # Post author is not the commenter
        with pytest.raises(AuthorizationError):
            await service.remove_comment(sample_post.id, comment.id, user_id)

        assert sample_post.comments == [comment]

    @pytest.mark.asyncio
    async def test_remove_unknown_comment_raises(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        sample_post: Post,
        user_id: UUID,
    ) -> None:
        uow.posts.get.return_value = sample_post

        with pytest.raises(CommentNotFoundError):
            await service.remove_comment(sample_post.id, uuid4(), user_id)
