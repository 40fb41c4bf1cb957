"""
Record Data Structures

Defines data classes for the records a user owns: a singleton profile plus the
work experience, education, skill and project collections.
These structures are shared by the Editing and Preview contexts.
"""

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Type


class Proficiency(str, Enum):
    """Skill proficiency levels."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


PROFICIENCY_LEVELS = tuple(level.value for level in Proficiency)


class _RowMixin:
    """Conversion between record instances and plain row dicts."""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]):
        """Build a record from a row, ignoring columns the record doesn't define."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in row.items() if key in known})

    def to_row(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Profile(_RowMixin):
    """
    Singleton profile for a user, keyed by the user id itself.

    Attributes:
        id: Owning user id
        full_name: Full name shown in the resume header
        title: Professional title (e.g., "Backend Engineer")
        bio: Professional summary
        avatar_url: Reference to an uploaded avatar image
    """

    id: str
    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    title: str = ""
    bio: str = ""
    website: str = ""
    linkedin: str = ""
    github: str = ""
    avatar_url: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class WorkExperience(_RowMixin):
    """
    Work experience entry.

    Attributes:
        start_date: Free-form start date, None when unknown
        end_date: Free-form end date, None when unknown or current
        is_current: Whether this is the user's current position
        display_order: Position within the rendered sequence
    """

    user_id: str
    id: Optional[str] = None
    company: str = ""
    position: str = ""
    location: str = ""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: str = ""
    is_current: bool = False
    display_order: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def effective_end_date(self) -> Optional[str]:
        """End date with the current-position rule applied (always None when current)."""
        if self.is_current:
            return None
        return self.end_date


@dataclass
class Education(_RowMixin):
    """
    Education entry.

    Attributes:
        gpa: Free text (e.g., "3.8/4.0")
    """

    user_id: str
    id: Optional[str] = None
    institution: str = ""
    degree: str = ""
    field_of_study: str = ""
    location: str = ""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    gpa: str = ""
    description: str = ""
    display_order: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class Skill(_RowMixin):
    """
    Skill entry.

    Attributes:
        category: Free text, usually one of the suggested vocabulary entries
        proficiency: One of PROFICIENCY_LEVELS
    """

    user_id: str
    id: Optional[str] = None
    name: str = ""
    category: str = "Technical"
    proficiency: str = Proficiency.INTERMEDIATE.value
    display_order: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class Project(_RowMixin):
    """
    Project entry.

    Attributes:
        technologies: Technology names in display order
        url: Live project URL
        github_url: Source repository URL
        is_featured: Whether the project is shown in the condensed preview
    """

    user_id: str
    id: Optional[str] = None
    title: str = ""
    description: str = ""
    technologies: List[str] = field(default_factory=list)
    url: str = ""
    github_url: str = ""
    image_url: str = ""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_featured: bool = False
    display_order: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


# Collection name -> record class, for the four per-user sequences
RECORD_TYPES: Dict[str, Type] = {
    "work_experience": WorkExperience,
    "education": Education,
    "skills": Skill,
    "projects": Project,
}

# Collection name -> column the store orders by
ORDER_KEYS = {
    "work_experience": "display_order",
    "education": "display_order",
    "skills": "category",
    "projects": "display_order",
}

# Fields set by the store rather than by an edit
SYSTEM_FIELDS = ("id", "user_id", "created_at", "updated_at")


def editable_fields(record_type: Type) -> List[str]:
    """Names of the fields an editor is allowed to overwrite."""
    return [f.name for f in fields(record_type) if f.name not in SYSTEM_FIELDS]
