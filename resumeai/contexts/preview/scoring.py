"""
Completeness scoring.

Rates how filled-out a resume is on a 0-100 scale using a fixed checklist. Each
condition is satisfied or not; there is no partial credit. Absent values simply
fail their condition.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

SUMMARY_MIN_LENGTH = 50
MIN_SKILL_COUNT = 3

# Points awarded per satisfied condition
SCORE_WEIGHTS = {
    "full_name": 10,
    "email": 10,
    "phone": 10,
    "summary": 20,
    "skills": 20,
    "experience": 20,
    "projects": 10,
}


@dataclass(frozen=True)
class CompletenessSnapshot:
    """The seven inputs the completeness score is computed from."""

    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    summary: Optional[str] = None
    skills: Optional[Sequence] = None
    experience: Optional[Sequence] = None
    projects: Optional[Sequence] = None

    @classmethod
    def from_aggregate(cls, aggregate) -> "CompletenessSnapshot":
        """Snapshot a ResumeAggregate (the profile bio is the summary)."""
        profile = aggregate.profile
        return cls(
            full_name=profile.full_name if profile else None,
            email=profile.email if profile else None,
            phone=profile.phone if profile else None,
            summary=profile.bio if profile else None,
            skills=aggregate.skills,
            experience=aggregate.experiences,
            projects=aggregate.projects,
        )


@dataclass(frozen=True)
class ValidationGap:
    """An unsatisfied completeness condition and the points it costs."""

    condition: str
    points: int
    message: str


def _length(value) -> int:
    return len(value) if value else 0


_CHECKS: Tuple[Tuple[str, Callable[[CompletenessSnapshot], bool], str], ...] = (
    ("full_name", lambda s: _length(s.full_name) > 0, "Add your full name"),
    ("email", lambda s: _length(s.email) > 0, "Add an email address"),
    ("phone", lambda s: _length(s.phone) > 0, "Add a phone number"),
    (
        "summary",
        lambda s: _length(s.summary) > SUMMARY_MIN_LENGTH,
        f"Write a summary longer than {SUMMARY_MIN_LENGTH} characters",
    ),
    (
        "skills",
        lambda s: _length(s.skills) >= MIN_SKILL_COUNT,
        f"List at least {MIN_SKILL_COUNT} skills",
    ),
    ("experience", lambda s: _length(s.experience) > 0, "Add a work experience entry"),
    ("projects", lambda s: _length(s.projects) > 0, "Add a project"),
)


def calculate_completeness_score(snapshot: CompletenessSnapshot) -> int:
    """
    Compute the completeness score for a snapshot.

    | Condition                  | Points |
    |----------------------------|--------|
    | full name non-empty        | 10     |
    | email non-empty            | 10     |
    | phone non-empty            | 10     |
    | summary longer than 50     | 20     |
    | at least 3 skills          | 20     |
    | at least 1 experience      | 20     |
    | at least 1 project         | 10     |

    Returns:
        Integer score between 0 and 100
    """
    return sum(SCORE_WEIGHTS[name] for name, check, _ in _CHECKS if check(snapshot))


def find_validation_gaps(snapshot: CompletenessSnapshot) -> List[ValidationGap]:
    """List every unsatisfied condition, in checklist order."""
    return [
        ValidationGap(condition=name, points=SCORE_WEIGHTS[name], message=message)
        for name, check, message in _CHECKS
        if not check(snapshot)
    ]
