"""
Preview Engine

Holds the latest aggregate for one user and re-renders it on demand. Each refresh
falls back to the previously loaded collections for any fetch that fails, so the
preview degrades to stale or empty sections instead of failing.
"""

from typing import Any, Dict, List, Optional

from resumeai.contexts.preview.aggregate import ResumeAggregate, load_aggregate
from resumeai.contexts.preview.logger import log_render_result
from resumeai.contexts.preview.registries import TemplateRegistry
from resumeai.contexts.preview.renderer import render_cover_letter, render_resume
from resumeai.contexts.preview.scoring import (
    CompletenessSnapshot,
    ValidationGap,
    calculate_completeness_score,
    find_validation_gaps,
)
from resumeai.contexts.records import Profile, RecordStore, require_user_id
from resumeai.utils.config import load_config


class PreviewEngine:
    """Aggregation and rendering for one user's resume preview."""

    def __init__(self, store: RecordStore, user_id: str, config: Dict[str, Any] = None):
        self.store = store
        self.user_id = require_user_id(user_id)
        self.config = config or load_config()
        self.registry = TemplateRegistry()
        self.aggregate = ResumeAggregate(user_id=user_id)

    async def refresh(self, profile: Optional[Profile] = None) -> ResumeAggregate:
        """Reload the four collections and attach the given profile."""
        self.aggregate = await load_aggregate(
            self.store, self.user_id, profile=profile, previous=self.aggregate
        )
        return self.aggregate

    def snapshot(self) -> CompletenessSnapshot:
        return CompletenessSnapshot.from_aggregate(self.aggregate)

    def score(self) -> int:
        return calculate_completeness_score(self.snapshot())

    def gaps(self) -> List[ValidationGap]:
        return find_validation_gaps(self.snapshot())

    def render(self, output_format: str = "markdown") -> str:
        document = render_resume(
            self.aggregate, output_format, config=self.config, registry=self.registry
        )
        log_render_result(output_format, len(document), self.score())
        return document

    def render_cover_letter(self, date: str = None) -> str:
        return render_cover_letter(
            self.aggregate.profile,
            [skill.name for skill in self.aggregate.skills],
            date=date,
            config=self.config,
            registry=self.registry,
        )
