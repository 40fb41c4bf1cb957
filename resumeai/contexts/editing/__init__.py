"""
Editing Context

Responsibilities:
- Loads each record collection for the acting user
- Keeps one edit buffer per collection and saves it as an insert or full overwrite
- Deletes records by id and reloads after every mutation
- Offers suggested text for free-form fields through a pluggable suggester

Owns: Section editors, form normalization, text suggestions
Never: Aggregates collections or renders previews
"""

from resumeai.contexts.editing.section_editor import (
    NEW_RECORD,
    EducationEditor,
    ExperienceEditor,
    ProfileEditor,
    ProjectsEditor,
    SectionEditor,
    SkillsEditor,
    parse_technologies,
)
from resumeai.contexts.editing.suggestions import (
    MissingSuggestionContextError,
    RandomTemplateSuggester,
    TextSuggester,
)

__all__ = [
    # Editors
    "SectionEditor",
    "ProfileEditor",
    "ExperienceEditor",
    "EducationEditor",
    "SkillsEditor",
    "ProjectsEditor",
    "NEW_RECORD",
    "parse_technologies",
    # Suggestions
    "TextSuggester",
    "RandomTemplateSuggester",
    "MissingSuggestionContextError",
]
