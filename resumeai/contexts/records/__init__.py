"""
Records Context

Responsibilities:
- Defines the record types a user owns (profile, work experience, education, skills, projects)
- Defines the record store contract and a persistent SQLite implementation
- Translates storage failures into StoreError
- Refuses to run for callers without an authenticated user id

Owns: Record data structures, persistence, store errors
Never: Aggregates records across collections or renders them
"""

from resumeai.contexts.records.exceptions import (
    NotAuthenticatedError,
    StoreError,
    UnknownCollectionError,
)
from resumeai.contexts.records.record_data_structures import (
    ORDER_KEYS,
    PROFICIENCY_LEVELS,
    RECORD_TYPES,
    Education,
    Proficiency,
    Profile,
    Project,
    Skill,
    WorkExperience,
)
from resumeai.contexts.records.record_store import (
    RecordCollection,
    RecordStore,
    SQLiteRecordStore,
    require_user_id,
)

__all__ = [
    # Record types
    "Profile",
    "WorkExperience",
    "Education",
    "Skill",
    "Project",
    "Proficiency",
    "PROFICIENCY_LEVELS",
    "RECORD_TYPES",
    "ORDER_KEYS",
    # Store
    "RecordStore",
    "RecordCollection",
    "SQLiteRecordStore",
    "require_user_id",
    # Errors
    "StoreError",
    "NotAuthenticatedError",
    "UnknownCollectionError",
]
