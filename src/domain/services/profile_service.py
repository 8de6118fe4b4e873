"""Profile service layer: upsert, experience/education entries and reads."""

from collections.abc import Mapping
from typing import Any, Callable, Optional
from uuid import UUID

import structlog

from core.exceptions import (
    EducationNotFoundError,
    ExperienceNotFoundError,
    ProfileMissingError,
    ProfileNotFoundError,
    UserNotFoundError,
)
from domain.entities.profile import (
    PROFILE_FIELDS,
    SOCIAL_FIELDS,
    Education,
    Experience,
    Profile,
    ProfileWithUser,
    split_skills,
)
from domain.entities.user import UserSummary
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.validation import is_blank, require_fields
from infrastructure.github.client import GitHubClient, GitHubRepo

logger = structlog.get_logger()

EXPERIENCE_REQUIRED = {
    "title": "Title is required",
    "company": "Company is required",
    "from_date": "From date is required",
}
EXPERIENCE_FIELDS = (*EXPERIENCE_REQUIRED, "location", "to_date", "current", "description")

EDUCATION_REQUIRED = {
    "school": "School is required",
    "degree": "Degree is required",
    "field_of_study": "Field of study is required",
    "from_date": "From date is required",
}
EDUCATION_FIELDS = (*EDUCATION_REQUIRED, "to_date", "current", "description")


def build_profile_patch(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Reduce submitted input to the changes an upsert may apply.

    Only whitelisted scalar fields with a non-blank value are kept.
    ``skills`` is split on commas and trimmed. ``social`` entries outside
    the whitelist are dropped.
    """
    patch: dict[str, Any] = {
        name: fields[name]
        for name in PROFILE_FIELDS
        if name in fields and not is_blank(fields[name])
    }

    skills = fields.get("skills")
    if isinstance(skills, str) and skills.strip():
        patch["skills"] = split_skills(skills)
    elif isinstance(skills, (list, tuple)) and skills:
        patch["skills"] = [str(s).strip() for s in skills if str(s).strip()]

    social = fields.get("social") or {}
    social_patch = {
        name: social[name]
        for name in SOCIAL_FIELDS
        if name in social and not is_blank(social[name])
    }
    if social_patch:
        patch["social"] = social_patch

    return patch


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        github_client: Optional[GitHubClient] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._github = github_client or GitHubClient()

    async def get_my_profile(self, user_id: UUID) -> ProfileWithUser:
        """Get the caller's own profile with their name and avatar."""
        return await self.get_profile_by_user(user_id)

    async def get_profile_by_user(self, user_id: UUID) -> ProfileWithUser:
        """Get a user's profile with their name and avatar."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            user = await uow.users.get(user_id)
            summary = UserSummary(id=user.id, name=user.name, avatar=user.avatar) if user else None
            return ProfileWithUser(profile=profile, user=summary)

    async def list_profiles(self) -> list[ProfileWithUser]:
        """Get every profile with owner name and avatar (batch fetch)."""
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.get_all()
            users = await uow.users.get_many([p.user_id for p in profiles])

        result = []
        for profile in profiles:
            user = users.get(profile.user_id)
            summary = UserSummary(id=user.id, name=user.name, avatar=user.avatar) if user else None
            result.append(ProfileWithUser(profile=profile, user=summary))
        return result

    async def upsert_profile(self, user_id: UUID, fields: Mapping[str, Any]) -> Profile:
        """Create the user's profile or merge the submitted fields into it.

        Fields that were not submitted keep their stored values. Social
        links merge per network.
        """
        patch = build_profile_patch(fields)

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)

            if profile is None:
                if not await uow.users.get(user_id):
                    raise UserNotFoundError(str(user_id))
                profile = Profile(user_id=user_id, **patch)
                created = await uow.profiles.create(profile)
                await uow.commit()
                logger.info("profile_created", user_id=str(user_id))
                return created

            social = patch.pop("social", None)
            for name, value in patch.items():
                setattr(profile, name, value)
            if social:
                profile.social = {**profile.social, **social}

            saved = await uow.profiles.save(profile)
            await uow.commit()
            return saved

    async def add_experience(self, user_id: UUID, data: Mapping[str, Any]) -> Profile:
        """Insert an experience entry at the front of the profile's list."""
        require_fields(data, EXPERIENCE_REQUIRED)
        entry = Experience(**{k: data[k] for k in EXPERIENCE_FIELDS if data.get(k) is not None})

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if profile is None:
                logger.error("experience_add_without_profile", user_id=str(user_id))
                raise ProfileMissingError(str(user_id))

            profile.add_experience(entry)
            saved = await uow.profiles.save(profile)
            await uow.commit()
            return saved

    async def remove_experience(self, user_id: UUID, experience_id: UUID) -> Profile:
        """Remove an experience entry, keeping the order of the others."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if profile is None:
                raise ProfileNotFoundError(str(user_id))
            if not profile.remove_experience(experience_id):
                raise ExperienceNotFoundError(str(experience_id))

            saved = await uow.profiles.save(profile)
            await uow.commit()
            return saved

    async def add_education(self, user_id: UUID, data: Mapping[str, Any]) -> Profile:
        """Insert an education entry at the front of the profile's list."""
        require_fields(data, EDUCATION_REQUIRED)
        entry = Education(**{k: data[k] for k in EDUCATION_FIELDS if data.get(k) is not None})

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if profile is None:
                logger.error("education_add_without_profile", user_id=str(user_id))
                raise ProfileMissingError(str(user_id))

            profile.add_education(entry)
            saved = await uow.profiles.save(profile)
            await uow.commit()
            return saved

    async def remove_education(self, user_id: UUID, education_id: UUID) -> Profile:
        """Remove an education entry, keeping the order of the others."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if profile is None:
                raise ProfileNotFoundError(str(user_id))
            if not profile.remove_education(education_id):
                raise EducationNotFoundError(str(education_id))

            saved = await uow.profiles.save(profile)
            await uow.commit()
            return saved

    async def get_github_repos(self, username: str) -> list[GitHubRepo]:
        """Fetch a GitHub user's public repositories."""
        return await self._github.get_repos(username)
