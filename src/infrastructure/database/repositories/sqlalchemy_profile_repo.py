"""SQLAlchemy implementation of Profile repository."""

from dataclasses import replace
from datetime import date, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ConcurrentModificationError
from domain.entities.profile import Education, Experience, Profile
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Profile]:
        """Get every profile."""
        stmt = select(ProfileModel).order_by(ProfileModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def save(self, profile: Profile) -> Profile:
        """Compare-and-swap write of the whole profile document."""
        now = datetime.utcnow()
        stmt = (
            update(ProfileModel)
            .where(
                ProfileModel.id == profile.id,
                ProfileModel.version == profile.version,
            )
            .values(
                **self._document_values(profile),
                version=profile.version + 1,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise ConcurrentModificationError("profile", str(profile.id))
        return replace(profile, version=profile.version + 1, updated_at=now)

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user."""
        stmt = delete(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    def _document_values(self, entity: Profile) -> dict[str, Any]:
        return {
            "company": entity.company,
            "website": entity.website,
            "location": entity.location,
            "bio": entity.bio,
            "status": entity.status,
            "github_username": entity.github_username,
            "skills": list(entity.skills),
            "social": dict(entity.social),
            "experience": [_experience_to_doc(e) for e in entity.experience],
            "education": [_education_to_doc(e) for e in entity.education],
        }

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            company=model.company,
            website=model.website,
            location=model.location,
            bio=model.bio,
            status=model.status,
            github_username=model.github_username,
            skills=list(model.skills or []),
            social=dict(model.social or {}),
            experience=[_experience_from_doc(d) for d in model.experience or []],
            education=[_education_from_doc(d) for d in model.education or []],
            version=model.version,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            user_id=entity.user_id,
            version=entity.version,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            **self._document_values(entity),
        )


def _date_or_none(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _experience_to_doc(entry: Experience) -> dict[str, Any]:
    return {
        "id": str(entry.id),
        "title": entry.title,
        "company": entry.company,
        "location": entry.location,
        "from_date": entry.from_date.isoformat(),
        "to_date": entry.to_date.isoformat() if entry.to_date else None,
        "current": entry.current,
        "description": entry.description,
    }


def _experience_from_doc(doc: dict[str, Any]) -> Experience:
    return Experience(
        id=UUID(doc["id"]),
        title=doc["title"],
        company=doc["company"],
        location=doc.get("location"),
        from_date=date.fromisoformat(doc["from_date"]),
        to_date=_date_or_none(doc.get("to_date")),
        current=bool(doc.get("current", False)),
        description=doc.get("description"),
    )


def _education_to_doc(entry: Education) -> dict[str, Any]:
    return {
        "id": str(entry.id),
        "school": entry.school,
        "degree": entry.degree,
        "field_of_study": entry.field_of_study,
        "from_date": entry.from_date.isoformat(),
        "to_date": entry.to_date.isoformat() if entry.to_date else None,
        "current": entry.current,
        "description": entry.description,
    }


def _education_from_doc(doc: dict[str, Any]) -> Education:
    return Education(
        id=UUID(doc["id"]),
        school=doc["school"],
        degree=doc["degree"],
        field_of_study=doc["field_of_study"],
        from_date=date.fromisoformat(doc["from_date"]),
        to_date=_date_or_none(doc.get("to_date")),
        current=bool(doc.get("current", False)),
        description=doc.get("description"),
    )
