"""Post API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_post_service
from api.v1.schemas.post import (
    CommentCreate,
    CommentListResponse,
    LikesResponse,
    PostCreate,
    PostDetailResponse,
    PostListResponse,
    PostResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post(
    "",
    response_model=PostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
    responses={400: {"description": "Text is required"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: PostCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Create a post as the authenticated user."""
    post = await service.create_post(user.user_id, body.text or "")
    return PostDetailResponse(data=PostResponse.from_entity(post))


@router.get(
    "",
    response_model=PostListResponse,
    summary="List all posts",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostListResponse:
    """Get all posts, newest first."""
    posts = await service.list_posts()
    return PostListResponse(data=[PostResponse.from_entity(p) for p in posts])


@router.get(
    "/{post_id}",
    response_model=PostDetailResponse,
    summary="Get a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Get a single post by ID."""
    post = await service.get_post(post_id)
    return PostDetailResponse(data=PostResponse.from_entity(post))


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a post",
    responses={
        204: {"description": "Post deleted"},
        403: {"description": "Only the author can delete a post"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> None:
    """Delete a post authored by the caller."""
    await service.delete_post(post_id, user.user_id)
    return None


@router.put(
    "/like/{post_id}",
    response_model=LikesResponse,
    summary="Like a post",
    responses={
        400: {"description": "Post is already liked"},
        404: {"description": "Post not found"},
        409: {"description": "Post was modified concurrently"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def like_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> LikesResponse:
    """Like a post. Liking twice is rejected."""
    likes = await service.like_post(post_id, user.user_id)
    return LikesResponse(data=likes)


@router.put(
    "/unlike/{post_id}",
    response_model=LikesResponse,
    summary="Unlike a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def unlike_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> LikesResponse:
    """Remove the caller's like. Idempotent."""
    likes = await service.unlike_post(post_id, user.user_id)
    return LikesResponse(data=likes)


@router.post(
    "/comment/{post_id}",
    response_model=CommentListResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
    responses={
        400: {"description": "Text is required"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_comment(
    request: Request,
    post_id: UUID,
    body: CommentCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> CommentListResponse:
    """Add a comment to the top of a post's comments."""
    comments = await service.add_comment(post_id, user.user_id, body.text or "")
    return CommentListResponse.from_entities(comments)


@router.delete(
    "/comment/{post_id}/{comment_id}",
    response_model=CommentListResponse,
    summary="Delete a comment",
    responses={
        403: {"description": "Only the commenter can delete a comment"},
        404: {"description": "Post or comment not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_comment(
    request: Request,
    post_id: UUID,
    comment_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> CommentListResponse:
    """Delete one of the caller's comments."""
    comments = await service.remove_comment(post_id, comment_id, user.user_id)
    return CommentListResponse.from_entities(comments)
