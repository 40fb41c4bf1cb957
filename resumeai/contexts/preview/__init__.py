"""
Preview Context

Responsibilities:
- Fetches a user's record collections concurrently into a read-only aggregate
- Groups skills by category and selects featured projects
- Renders the aggregate as a Markdown or printable HTML resume, and a cover letter
- Scores resume completeness on a 0-100 checklist

Owns: Aggregation, derived views, completeness scoring, document rendering
Never: Mutates stored records
"""

from resumeai.contexts.preview.aggregate import (
    ResumeAggregate,
    format_date_range,
    group_skills_by_category,
    join_technologies,
    load_aggregate,
    select_featured_projects,
)
from resumeai.contexts.preview.exceptions import PreviewRenderError
from resumeai.contexts.preview.preview_engine import PreviewEngine
from resumeai.contexts.preview.renderer import (
    build_preview_context,
    render_cover_letter,
    render_resume,
)
from resumeai.contexts.preview.scoring import (
    CompletenessSnapshot,
    ValidationGap,
    calculate_completeness_score,
    find_validation_gaps,
)

__all__ = [
    # Aggregation
    "ResumeAggregate",
    "load_aggregate",
    "group_skills_by_category",
    "select_featured_projects",
    "join_technologies",
    "format_date_range",
    # Rendering
    "PreviewEngine",
    "build_preview_context",
    "render_resume",
    "render_cover_letter",
    "PreviewRenderError",
    # Scoring
    "CompletenessSnapshot",
    "ValidationGap",
    "calculate_completeness_score",
    "find_validation_gaps",
]
