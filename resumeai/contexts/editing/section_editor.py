"""
Section Editors

One editor per record collection. Each editor keeps the user's records as last
loaded from the store and a single edit buffer holding either a new record or a
copy of an existing one. Saving inserts or overwrites, deleting removes by id, and
both re-fetch the whole collection afterwards.

Store failures never escape an editor: a failed load keeps the previous records,
a failed mutation leaves the editor as it was and sets `error_message`.
"""

from typing import Any, Dict, List, Optional, Type

from resumeai.contexts.editing.logger import (
    _log_debug,
    log_delete_result,
    log_load_failure,
    log_save_result,
)
from resumeai.contexts.editing.suggestions import (
    MissingSuggestionContextError,
    RandomTemplateSuggester,
    TextSuggester,
)
from resumeai.contexts.records import (
    PROFICIENCY_LEVELS,
    Education,
    Profile,
    Project,
    RecordStore,
    Skill,
    StoreError,
    WorkExperience,
    require_user_id,
)
from resumeai.contexts.records.record_data_structures import editable_fields

NEW_RECORD = "new"
DATE_FIELDS = ("start_date", "end_date")


def parse_technologies(text: str) -> List[str]:
    """Split a comma-separated technology list, dropping blanks."""
    return [item.strip() for item in (text or "").split(",") if item.strip()]


def _dates_to_form(values: Dict[str, Any]) -> Dict[str, Any]:
    for key in DATE_FIELDS:
        if key in values and values[key] is None:
            values[key] = ""
    return values


def _dates_from_form(values: Dict[str, Any]) -> Dict[str, Any]:
    for key in DATE_FIELDS:
        if key in values and not values[key]:
            values[key] = None
    return values


class SectionEditor:
    """
    Base editor for a per-user record collection.

    Subclasses set `collection` and `record_type` and may override the
    `_to_form` / `_from_form` / `validate` hooks.

    Attributes:
        store_collection: Per-collection view of the store this editor reads and writes
        records: Records as last loaded from the store
        editing_id: NEW_RECORD, the id of the record being edited, or None
        buffer: Form values of the record being edited
        error_message: Inline message from the last failed action, if any
    """

    collection: str = None
    record_type: Type = None

    def __init__(self, store: RecordStore, user_id: str):
        self.store = store
        self.store_collection = store.collection(self.collection)
        self.user_id = require_user_id(user_id)
        self.records: list = []
        self.editing_id: Optional[str] = None
        self.buffer: Dict[str, Any] = {}
        self.error_message: Optional[str] = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def is_new(self) -> bool:
        return self.editing_id == NEW_RECORD

    # Form hooks

    def _to_form(self, values: Dict[str, Any]) -> Dict[str, Any]:
        return _dates_to_form(values)

    def _from_form(self, values: Dict[str, Any]) -> Dict[str, Any]:
        return _dates_from_form(values)

    def validate(self, values: Dict[str, Any]) -> Optional[str]:
        """Return an error message if values can't be saved, else None."""
        return None

    def _editable_values(self, record) -> Dict[str, Any]:
        row = record.to_row()
        return {key: row[key] for key in editable_fields(self.record_type)}

    # Actions

    async def load(self) -> list:
        """Fetch the collection, keeping the previous records if the fetch fails."""
        try:
            self.records = await self.store_collection.list(self.user_id)
        except StoreError as e:
            log_load_failure(self.collection, e)
        return self.records

    def start_new(self) -> Dict[str, Any]:
        """Put a blank record (appended after the current ones) in the buffer."""
        blank = self.record_type(user_id=self.user_id, display_order=len(self.records))
        self.editing_id = NEW_RECORD
        self.buffer = self._to_form(self._editable_values(blank))
        self.error_message = None
        return self.buffer

    def start_edit(self, record) -> Dict[str, Any]:
        """Put a copy of an existing record in the buffer, replacing any other edit."""
        self.editing_id = record.id
        self.buffer = self._to_form(self._editable_values(record))
        self.error_message = None
        return self.buffer

    def cancel(self) -> None:
        self.editing_id = None
        self.buffer = {}
        self.error_message = None

    def update_buffer(self, **values) -> Dict[str, Any]:
        """
        Set form values on the buffer.

        Raises:
            RuntimeError: If no record is being edited
            KeyError: If a value names a field the record doesn't have
        """
        if not self.is_editing:
            raise RuntimeError(f"No {self.collection} record is being edited")
        unknown = set(values) - set(self.buffer)
        if unknown:
            raise KeyError(f"Unknown {self.collection} fields: {sorted(unknown)}")
        self.buffer.update(values)
        return self.buffer

    async def save(self) -> bool:
        """
        Insert the buffer as a new record or overwrite the edited one, then reload.

        Returns:
            True if the record was saved
        """
        if not self.is_editing:
            return False

        values = self._from_form(dict(self.buffer))
        message = self.validate(values)
        if message:
            self.error_message = message
            return False

        is_new = self.is_new
        try:
            if is_new:
                saved = await self.store_collection.insert(
                    self.record_type(user_id=self.user_id, **values)
                )
            else:
                saved = await self.store_collection.update(self.editing_id, values)
        except StoreError as e:
            log_save_result(self.collection, is_new, error=e)
            self.error_message = f"Could not save {self.collection.replace('_', ' ')}: {e.message}"
            return False

        log_save_result(self.collection, is_new, saved.id)
        self.cancel()
        await self.load()
        return True

    async def add(self, **values) -> bool:
        """Start a new record with the given values and save it."""
        self.start_new()
        self.update_buffer(**values)
        return await self.save()

    async def delete(self, record_id: str) -> bool:
        """Delete a record by id, then reload."""
        try:
            await self.store_collection.delete(record_id)
        except StoreError as e:
            log_delete_result(self.collection, record_id, error=e)
            self.error_message = f"Could not delete {self.collection.replace('_', ' ')}: {e.message}"
            return False

        log_delete_result(self.collection, record_id)
        self.error_message = None
        if self.editing_id == record_id:
            self.cancel()
        await self.load()
        return True

    def _suggest(self, suggester: TextSuggester, target_field: str) -> Optional[str]:
        try:
            text = suggester.suggest(self.buffer)
        except MissingSuggestionContextError as e:
            self.error_message = str(e)
            return None
        self.buffer[target_field] = text
        _log_debug(f"Suggested {target_field} for {self.collection}")
        return text


class ExperienceEditor(SectionEditor):
    collection = "work_experience"
    record_type = WorkExperience

    def _from_form(self, values: Dict[str, Any]) -> Dict[str, Any]:
        values = _dates_from_form(values)
        if values.get("is_current"):
            values["end_date"] = None
        return values

    def suggest_description(self, suggester: TextSuggester = None) -> Optional[str]:
        """Fill the description from a suggestion; needs a position."""
        if not self.is_editing:
            raise RuntimeError("No work experience record is being edited")
        suggester = suggester or RandomTemplateSuggester.from_config("experience_description")
        return self._suggest(suggester, "description")


class EducationEditor(SectionEditor):
    collection = "education"
    record_type = Education


class SkillsEditor(SectionEditor):
    collection = "skills"
    record_type = Skill

    def validate(self, values: Dict[str, Any]) -> Optional[str]:
        if not values.get("name"):
            return "Skill name is required"
        if values.get("proficiency") not in PROFICIENCY_LEVELS:
            return f"Proficiency must be one of: {', '.join(PROFICIENCY_LEVELS)}"
        return None


class ProjectsEditor(SectionEditor):
    collection = "projects"
    record_type = Project

    def _to_form(self, values: Dict[str, Any]) -> Dict[str, Any]:
        values = _dates_to_form(values)
        values["technologies"] = ", ".join(values.get("technologies") or [])
        return values

    def _from_form(self, values: Dict[str, Any]) -> Dict[str, Any]:
        values = _dates_from_form(values)
        technologies = values.get("technologies")
        if isinstance(technologies, str):
            values["technologies"] = parse_technologies(technologies)
        return values


class ProfileEditor:
    """
    Editor for the singleton profile.

    The saved profile (`profile`) is the object the workspace shares with the
    preview; only this editor replaces it.
    """

    collection = "profiles"

    def __init__(self, store: RecordStore, user_id: str):
        self.store = store
        self.user_id = require_user_id(user_id)
        self.profile: Optional[Profile] = None
        self.buffer: Dict[str, Any] = self._blank_buffer()
        self.error_message: Optional[str] = None

    def _blank_buffer(self) -> Dict[str, Any]:
        row = Profile(id=self.user_id).to_row()
        return {key: row[key] for key in editable_fields(Profile)}

    async def load(self) -> Optional[Profile]:
        """Fetch the profile; the buffer is refilled only when one exists."""
        try:
            profile = await self.store.get_profile(self.user_id)
        except StoreError as e:
            log_load_failure(self.collection, e)
            return self.profile

        if profile is not None:
            self.profile = profile
            row = profile.to_row()
            self.buffer = {key: row[key] for key in self.buffer}
        return self.profile

    def update_buffer(self, **values) -> Dict[str, Any]:
        unknown = set(values) - set(self.buffer)
        if unknown:
            raise KeyError(f"Unknown profile fields: {sorted(unknown)}")
        self.buffer.update(values)
        return self.buffer

    async def save(self) -> bool:
        """Create or overwrite the profile from the buffer."""
        profile = Profile(id=self.user_id, **self.buffer)
        try:
            saved = await self.store.save_profile(profile)
        except StoreError as e:
            log_save_result(self.collection, self.profile is None, error=e)
            self.error_message = f"Could not save profile: {e.message}"
            return False

        log_save_result(self.collection, self.profile is None, saved.id)
        self.profile = saved
        self.error_message = None
        return True

    def suggest_bio(self, suggester: TextSuggester = None) -> Optional[str]:
        """Fill the bio from a suggestion; needs a professional title."""
        suggester = suggester or RandomTemplateSuggester.from_config("bio")
        try:
            text = suggester.suggest(self.buffer)
        except MissingSuggestionContextError as e:
            self.error_message = str(e)
            return None
        self.buffer["bio"] = text
        return text
