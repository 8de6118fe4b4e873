"""Profile aggregate and its nested experience/education entries."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from domain.entities.user import UserSummary

PROFILE_FIELDS: tuple[str, ...] = (
    "company",
    "website",
    "location",
    "bio",
    "status",
    "github_username",
)

SOCIAL_FIELDS: tuple[str, ...] = (
    "youtube",
    "twitter",
    "facebook",
    "linkedin",
    "instagram",
)


def split_skills(raw: str) -> list[str]:
    """Split a comma-delimited skills string into trimmed, non-empty entries."""
    return [skill.strip() for skill in raw.split(",") if skill.strip()]


@dataclass
class Experience:
    """A job entry on a profile."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: Optional[str] = None
    to_date: Optional[date] = None
    current: bool = False
    description: Optional[str] = None


@dataclass
class Education:
    """A school entry on a profile."""

    school: str
    degree: str
    field_of_study: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: Optional[date] = None
    current: bool = False
    description: Optional[str] = None


@dataclass
class Profile:
    """Domain entity for a user's developer profile.

    Experience and education are kept newest first: new entries are
    always inserted at the front. ``version`` increases on every save and
    is checked by the repository to detect concurrent writers.
    """

    user_id: UUID
    id: UUID = field(default_factory=uuid4)
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = None
    github_username: Optional[str] = None
    skills: list[str] = field(default_factory=list)
    social: dict[str, str] = field(default_factory=dict)
    experience: list[Experience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    version: int = 1
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def add_experience(self, entry: Experience) -> None:
        self.experience.insert(0, entry)

    def add_education(self, entry: Education) -> None:
        self.education.insert(0, entry)

    def remove_experience(self, experience_id: UUID) -> bool:
        """Remove an experience entry by id. Returns False if no entry matched."""
        index = _index_of(self.experience, experience_id)
        if index is None:
            return False
        del self.experience[index]
        return True

    def remove_education(self, education_id: UUID) -> bool:
        """Remove an education entry by id. Returns False if no entry matched."""
        index = _index_of(self.education, education_id)
        if index is None:
            return False
        del self.education[index]
        return True


def _index_of(entries: list[Experience] | list[Education], entry_id: UUID) -> int | None:
    for index, entry in enumerate(entries):
        if entry.id == entry_id:
            return index
    return None


@dataclass(frozen=True, slots=True)
class ProfileWithUser:
    """Read-only value object: a Profile bundled with its owner's identity fields."""

    profile: Profile
    user: UserSummary | None
