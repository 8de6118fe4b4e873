"""Pydantic schemas for Post API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.post import Comment, Post


class PostCreate(BaseModel):
    """Schema for creating a Post. Blank text is rejected by the service."""

    text: str | None = Field(None, max_length=5000)


class CommentCreate(BaseModel):
    """Schema for commenting on a Post."""

    text: str | None = Field(None, max_length=2000)


class CommentResponse(BaseModel):
    """Schema for a comment."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    text: str
    name: str
    avatar: str
    created_at: datetime


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user_id": "456e4567-e89b-12d3-a456-426614174000",
                "text": "Hello world",
                "name": "Alice",
                "avatar": "https://www.gravatar.com/avatar/...",
                "likes": [],
                "comments": [],
                "version": 1,
                "created_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    user_id: UUID
    text: str
    name: str
    avatar: str
    likes: list[UUID]
    comments: list[CommentResponse]
    version: int
    created_at: datetime

    @classmethod
    def from_entity(cls, post: Post) -> "PostResponse":
        return cls(
            id=post.id,
            user_id=post.user_id,
            text=post.text,
            name=post.name,
            avatar=post.avatar,
            likes=post.likes,
            comments=[CommentResponse.model_validate(c) for c in post.comments],
            version=post.version,
            created_at=post.created_at,
        )


class PostListResponse(BaseModel):
    """Schema for list of Posts."""

    data: list[PostResponse]


class PostDetailResponse(BaseModel):
    """Schema for single Post."""

    data: PostResponse


class LikesResponse(BaseModel):
    """Voter IDs of a post after a like/unlike."""

    data: list[UUID]


class CommentListResponse(BaseModel):
    """Comments of a post after adding/removing one."""

    data: list[CommentResponse]

    @classmethod
    def from_entities(cls, comments: list[Comment]) -> "CommentListResponse":
        return cls(data=[CommentResponse.model_validate(c) for c in comments])
