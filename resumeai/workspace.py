"""
Resume Workspace

Top-level container for one authenticated user: owns the profile editor (and with
it the shared profile), one editor per record collection, and the preview engine.
"""

from typing import Any, Dict

from resumeai.contexts.editing import (
    EducationEditor,
    ExperienceEditor,
    ProfileEditor,
    ProjectsEditor,
    SectionEditor,
    SkillsEditor,
)
from resumeai.contexts.preview import PreviewEngine, ResumeAggregate
from resumeai.contexts.records import RecordStore, UnknownCollectionError, require_user_id
from resumeai.utils.config import load_config


class ResumeWorkspace:
    """
    Everything one user edits and previews.

    Example:
        store = SQLiteRecordStore()
        workspace = ResumeWorkspace(store, user_id)
        await workspace.open()
        await workspace.editors["skills"].add(name="Python", category="Technical")
        await workspace.refresh_preview()
        print(workspace.preview.render())
    """

    def __init__(self, store: RecordStore, user_id: str, config: Dict[str, Any] = None):
        self.user_id = require_user_id(user_id)
        self.store = store
        self.config = config or load_config()

        self.profile_editor = ProfileEditor(store, user_id)
        self.editors: Dict[str, SectionEditor] = {
            "work_experience": ExperienceEditor(store, user_id),
            "education": EducationEditor(store, user_id),
            "skills": SkillsEditor(store, user_id),
            "projects": ProjectsEditor(store, user_id),
        }
        self.preview = PreviewEngine(store, user_id, config=self.config)

    @property
    def profile(self):
        return self.profile_editor.profile

    def editor(self, collection: str) -> SectionEditor:
        try:
            return self.editors[collection]
        except KeyError:
            raise UnknownCollectionError(
                f"Unknown collection '{collection}'. Valid collections: {list(self.editors)}"
            ) from None

    async def open(self) -> None:
        """Load the profile and every collection, one after another."""
        await self.profile_editor.load()
        for editor in self.editors.values():
            await editor.load()

    async def refresh_preview(self) -> ResumeAggregate:
        return await self.preview.refresh(self.profile)
