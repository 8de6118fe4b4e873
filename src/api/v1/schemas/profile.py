"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from domain.entities.profile import SOCIAL_FIELDS, Education, Experience, Profile
from domain.entities.user import UserSummary


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's profile.

    Social links are accepted as top-level fields and grouped before they
    reach the service. ``skills`` is a comma-separated string.
    """

    company: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=255)
    bio: str | None = Field(None, max_length=2000)
    status: str | None = Field(None, max_length=255)
    github_username: str | None = Field(
        None,
        max_length=100,
        validation_alias=AliasChoices("github_username", "githubusername"),
    )
    skills: str | None = Field(None, max_length=1000)
    youtube: str | None = Field(None, max_length=500)
    twitter: str | None = Field(None, max_length=500)
    facebook: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=500)

    def to_fields(self) -> dict[str, Any]:
        """Submitted values, with social links nested under ``social``."""
        submitted = self.model_dump(exclude_none=True)
        social = {name: submitted.pop(name) for name in SOCIAL_FIELDS if name in submitted}
        if social:
            submitted["social"] = social
        return submitted


class ExperienceCreate(BaseModel):
    """Schema for adding an experience entry.

    Required fields are checked by the service so that every missing field
    is reported together.
    """

    title: str | None = Field(None, max_length=255)
    company: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=255)
    from_date: date | None = Field(None, validation_alias=AliasChoices("from", "from_date"))
    to_date: date | None = Field(None, validation_alias=AliasChoices("to", "to_date"))
    current: bool = False
    description: str | None = Field(None, max_length=2000)


class EducationCreate(BaseModel):
    """Schema for adding an education entry."""

    school: str | None = Field(None, max_length=255)
    degree: str | None = Field(None, max_length=255)
    field_of_study: str | None = Field(
        None,
        max_length=255,
        validation_alias=AliasChoices("field_of_study", "fieldofstudy"),
    )
    from_date: date | None = Field(None, validation_alias=AliasChoices("from", "from_date"))
    to_date: date | None = Field(None, validation_alias=AliasChoices("to", "to_date"))
    current: bool = False
    description: str | None = Field(None, max_length=2000)


class ExperienceResponse(BaseModel):
    """Schema for an experience entry."""

    id: UUID
    title: str
    company: str
    location: str | None = None
    from_date: date = Field(serialization_alias="from")
    to_date: date | None = Field(None, serialization_alias="to")
    current: bool
    description: str | None = None

    @classmethod
    def from_entity(cls, entry: Experience) -> "ExperienceResponse":
        return cls(
            id=entry.id,
            title=entry.title,
            company=entry.company,
            location=entry.location,
            from_date=entry.from_date,
            to_date=entry.to_date,
            current=entry.current,
            description=entry.description,
        )


class EducationResponse(BaseModel):
    """Schema for an education entry."""

    id: UUID
    school: str
    degree: str
    field_of_study: str
    from_date: date = Field(serialization_alias="from")
    to_date: date | None = Field(None, serialization_alias="to")
    current: bool
    description: str | None = None

    @classmethod
    def from_entity(cls, entry: Education) -> "EducationResponse":
        return cls(
            id=entry.id,
            school=entry.school,
            degree=entry.degree,
            field_of_study=entry.field_of_study,
            from_date=entry.from_date,
            to_date=entry.to_date,
            current=entry.current,
            description=entry.description,
        )


class ProfileOwner(BaseModel):
    """Owner name and avatar shown with a profile."""

    id: UUID
    name: str
    avatar: str


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user_id": "456e4567-e89b-12d3-a456-426614174000",
                "user": {
                    "id": "456e4567-e89b-12d3-a456-426614174000",
                    "name": "Alice",
                    "avatar": "https://www.gravatar.com/avatar/...",
                },
                "status": "Developer",
                "skills": ["go", "rust", "c++"],
                "social": {"twitter": "https://twitter.com/alice"},
                "experience": [],
                "education": [],
                "version": 1,
            }
        },
    )

    id: UUID
    user_id: UUID
    user: ProfileOwner | None = None
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    status: str | None = None
    github_username: str | None = None
    skills: list[str]
    social: dict[str, str]
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    version: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(
        cls, profile: Profile, user: UserSummary | None = None
    ) -> "ProfileResponse":
        return cls(
            id=profile.id,
            user_id=profile.user_id,
            user=ProfileOwner(id=user.id, name=user.name, avatar=user.avatar) if user else None,
            company=profile.company,
            website=profile.website,
            location=profile.location,
            bio=profile.bio,
            status=profile.status,
            github_username=profile.github_username,
            skills=profile.skills,
            social=profile.social,
            experience=[ExperienceResponse.from_entity(e) for e in profile.experience],
            education=[EducationResponse.from_entity(e) for e in profile.education],
            version=profile.version,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


class ProfileListResponse(BaseModel):
    """Schema for list of Profiles."""

    data: list[ProfileResponse]


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse


class GitHubRepoResponse(BaseModel):
    """Public GitHub repository summary."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    html_url: str
    description: str | None = None
    stargazers_count: int = 0
    watchers_count: int = 0
    forks_count: int = 0


class GitHubRepoListResponse(BaseModel):
    """Schema for list of GitHub repositories."""

    data: list[GitHubRepoResponse]
