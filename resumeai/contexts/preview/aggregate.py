"""
Resume Aggregate

Read-only union of a user's profile and their four record collections, plus the
derived views the preview renders from it: skills grouped by category, featured
projects, technology lists and date ranges.
"""

import asyncio
from dataclasses import dataclass
from functools import reduce
from typing import Dict, List, Optional, Sequence, Tuple

from resumeai.contexts.preview.logger import log_aggregate_ready, log_fetch_failure
from resumeai.contexts.records import (
    Education,
    Profile,
    Project,
    RecordStore,
    Skill,
    StoreError,
    WorkExperience,
    require_user_id,
)

PRESENT_LABEL = "Present"
DATE_SEPARATOR = " – "
LIST_SEPARATOR = " • "

# Aggregate attribute -> store collection
AGGREGATE_COLLECTIONS = {
    "experiences": "work_experience",
    "educations": "education",
    "skills": "skills",
    "projects": "projects",
}


def group_skills_by_category(skills: Sequence[Skill]) -> Dict[str, List[Skill]]:
    """
    Partition skills into an ordered mapping of category -> skills.

    Categories appear in the order they are first seen and skills keep their
    input order inside each category. No secondary sort is applied.
    """

    def add_skill(groups: Dict[str, List[Skill]], skill: Skill) -> Dict[str, List[Skill]]:
        groups.setdefault(skill.category, []).append(skill)
        return groups

    return reduce(add_skill, skills, {})


def select_featured_projects(projects: Sequence[Project]) -> List[Project]:
    """Projects flagged as featured, in their existing order."""
    return [project for project in projects if project.is_featured]


def join_technologies(technologies: Sequence[str], separator: str = LIST_SEPARATOR) -> str:
    """Join technology names with one separator between entries and none after the last."""
    return separator.join(technologies or ())


def format_date_range(
    start_date: Optional[str],
    end_date: Optional[str],
    is_current: bool = False,
    present_label: str = PRESENT_LABEL,
    separator: str = DATE_SEPARATOR,
) -> str:
    """
    Format a "start – end" range.

    Missing dates render as the empty string. When is_current is set the end is
    replaced by present_label whatever end_date holds.

    Examples:
        format_date_range("2020-01", "2022-06")
        # "2020-01 – 2022-06"

        format_date_range("2021-03", "2023-01", is_current=True)
        # "2021-03 – Present"
    """
    end_text = present_label if is_current else (end_date or "")
    return f"{start_date or ''}{separator}{end_text}"


def format_degree(degree: Optional[str], field_of_study: Optional[str]) -> str:
    """Education heading: "Degree in Field", or whichever half is present."""
    if degree and field_of_study:
        return f"{degree} in {field_of_study}"
    return degree or field_of_study or ""


@dataclass(frozen=True)
class ResumeAggregate:
    """
    In-memory union of a user's profile and record collections.

    Attributes:
        user_id: Owner of every record in the aggregate
        profile: Profile record, None when the user never saved one
        experiences: Work experience in display order
        educations: Education in display order
        skills: Skills in category order
        projects: Projects in display order
    """

    user_id: str
    profile: Optional[Profile] = None
    experiences: Tuple[WorkExperience, ...] = ()
    educations: Tuple[Education, ...] = ()
    skills: Tuple[Skill, ...] = ()
    projects: Tuple[Project, ...] = ()

    @property
    def skills_by_category(self) -> Dict[str, List[Skill]]:
        return group_skills_by_category(self.skills)

    @property
    def featured_projects(self) -> List[Project]:
        return select_featured_projects(self.projects)

    @property
    def is_empty(self) -> bool:
        return self.profile is None and not any(
            getattr(self, attribute) for attribute in AGGREGATE_COLLECTIONS
        )


async def load_aggregate(
    store: RecordStore,
    user_id: str,
    profile: Optional[Profile] = None,
    previous: Optional[ResumeAggregate] = None,
) -> ResumeAggregate:
    """
    Fetch the four record collections concurrently and build an aggregate.

    The profile is passed in already loaded. A collection whose fetch fails with
    StoreError keeps its value from `previous` (empty when there is none); the
    other collections are still used.

    Args:
        store: Record store to read from
        user_id: Authenticated user id
        profile: The user's profile, if loaded
        previous: Aggregate from an earlier load, used as fallback on failure

    Returns:
        ResumeAggregate for the user

    Raises:
        NotAuthenticatedError: If user_id is empty
    """
    require_user_id(user_id)

    attributes = list(AGGREGATE_COLLECTIONS)
    results = await asyncio.gather(
        *(store.list_records(AGGREGATE_COLLECTIONS[a], user_id) for a in attributes),
        return_exceptions=True,
    )

    collections = {}
    for attribute, result in zip(attributes, results):
        if isinstance(result, StoreError):
            log_fetch_failure(AGGREGATE_COLLECTIONS[attribute], user_id, result)
            collections[attribute] = getattr(previous, attribute) if previous else ()
        elif isinstance(result, BaseException):
            raise result
        else:
            collections[attribute] = tuple(result)

    aggregate = ResumeAggregate(user_id=user_id, profile=profile, **collections)
    log_aggregate_ready(aggregate)
    return aggregate
