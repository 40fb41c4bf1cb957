"""
Integration tests for the section editors.
Tests: the edit buffer lifecycle, saves and deletes against a SQLite store, and
behavior when the store fails.
"""

import asyncio
import random

import pytest

from resumeai.contexts.editing import (
    NEW_RECORD,
    EducationEditor,
    ExperienceEditor,
    ProfileEditor,
    ProjectsEditor,
    RandomTemplateSuggester,
    SkillsEditor,
    parse_technologies,
)
from resumeai.contexts.records import NotAuthenticatedError, Profile, Project, RecordCollection, Skill


@pytest.mark.unit
@pytest.mark.parametrize(
    "text, expected",
    [
        ("Python, FastAPI ,Postgres", ["Python", "FastAPI", "Postgres"]),
        ("Python,, ,Go", ["Python", "Go"]),
        ("", []),
        (None, []),
    ],
)
def test_parse_technologies(text, expected):
    assert parse_technologies(text) == expected


@pytest.mark.integration
def test_editor_requires_user(store):
    with pytest.raises(NotAuthenticatedError):
        SkillsEditor(store, "")


@pytest.mark.integration
def test_editor_works_through_its_collection_view(flaky_store):
    editor = ProjectsEditor(flaky_store, "u1")
    assert isinstance(editor.store_collection, RecordCollection)
    assert editor.store_collection.name == "projects"

    flaky_store.fail("list", "projects")
    asyncio.run(flaky_store.insert_record("projects", Project(user_id="u1", title="Ledger")))
    assert asyncio.run(editor.load()) == []

    flaky_store.heal()
    assert [p.title for p in asyncio.run(editor.load())] == ["Ledger"]


class TestEditBuffer:
    """Starting, updating and cancelling edits."""

    @pytest.mark.integration
    def test_start_new_appends_after_existing(self, store):
        editor = EducationEditor(store, "u1")
        asyncio.run(editor.add(institution="MIT"))
        asyncio.run(editor.add(institution="ETH"))

        buffer = editor.start_new()

        assert editor.editing_id == NEW_RECORD
        assert editor.is_new
        assert buffer["display_order"] == 2
        assert buffer["start_date"] == ""

    @pytest.mark.integration
    def test_start_edit_copies_record(self, store):
        editor = EducationEditor(store, "u1")
        asyncio.run(editor.add(institution="MIT", degree="BSc"))
        record = editor.records[0]

        buffer = editor.start_edit(record)
        buffer["degree"] = "MSc"

        assert editor.editing_id == record.id
        assert record.degree == "BSc"

    @pytest.mark.integration
    def test_only_one_record_edited_at_a_time(self, store):
        editor = EducationEditor(store, "u1")
        asyncio.run(editor.add(institution="MIT"))
        asyncio.run(editor.add(institution="ETH"))

        editor.start_edit(editor.records[0])
        editor.start_edit(editor.records[1])

        assert editor.editing_id == editor.records[1].id
        assert editor.buffer["institution"] == "ETH"

    @pytest.mark.integration
    def test_cancel_clears_buffer(self, store):
        editor = EducationEditor(store, "u1")
        editor.start_new()
        editor.cancel()

        assert not editor.is_editing
        assert editor.buffer == {}

    @pytest.mark.integration
    def test_update_buffer_guards(self, store):
        editor = EducationEditor(store, "u1")
        with pytest.raises(RuntimeError):
            editor.update_buffer(institution="MIT")

        editor.start_new()
        with pytest.raises(KeyError):
            editor.update_buffer(hobby="chess")
        with pytest.raises(KeyError):
            editor.update_buffer(user_id="someone-else")

    @pytest.mark.integration
    def test_save_without_edit_is_a_no_op(self, store):
        editor = EducationEditor(store, "u1")
        assert asyncio.run(editor.save()) is False


class TestExperienceEditor:
    """Work experience with the current-position rule."""

    @pytest.mark.integration
    def test_current_position_saves_without_end_date(self, store):
        editor = ExperienceEditor(store, "u1")
        editor.start_new()
        editor.update_buffer(
            company="Acme",
            position="Engineer",
            start_date="2022-01",
            end_date="2023-06",
            is_current=True,
        )

        assert asyncio.run(editor.save()) is True
        saved = editor.records[0]
        assert saved.is_current is True
        assert saved.end_date is None
        assert not editor.is_editing

    @pytest.mark.integration
    def test_blank_dates_are_stored_as_absent(self, store):
        editor = ExperienceEditor(store, "u1")
        asyncio.run(editor.add(company="Acme", start_date="", end_date=""))

        saved = editor.records[0]
        assert saved.start_date is None
        assert saved.end_date is None

    @pytest.mark.integration
    def test_edit_overwrites_existing_record(self, store):
        editor = ExperienceEditor(store, "u1")
        asyncio.run(editor.add(company="Acme", position="Engineer"))
        original = editor.records[0]

        editor.start_edit(original)
        editor.update_buffer(position="Senior Engineer")
        assert asyncio.run(editor.save()) is True

        assert len(editor.records) == 1
        assert editor.records[0].id == original.id
        assert editor.records[0].position == "Senior Engineer"
        assert editor.records[0].company == "Acme"

    @pytest.mark.integration
    def test_suggest_description_needs_position(self, store):
        editor = ExperienceEditor(store, "u1")
        editor.start_new()

        assert editor.suggest_description() is None
        assert editor.error_message == "Please enter your position first"

        editor.update_buffer(position="Engineer")
        suggester = RandomTemplateSuggester(["Shipped things as {position}."], required_field="position")
        assert editor.suggest_description(suggester) == "Shipped things as Engineer."
        assert editor.buffer["description"] == "Shipped things as Engineer."

    @pytest.mark.integration
    def test_suggest_description_requires_edit(self, store):
        with pytest.raises(RuntimeError):
            ExperienceEditor(store, "u1").suggest_description()


class TestSkillsEditor:
    """Validation before saving."""

    @pytest.mark.integration
    def test_name_required(self, store):
        editor = SkillsEditor(store, "u1")
        assert asyncio.run(editor.add(name="")) is False
        assert editor.error_message == "Skill name is required"
        assert editor.is_editing
        assert asyncio.run(store.list_records("skills", "u1")) == []

    @pytest.mark.integration
    def test_proficiency_must_be_known(self, store):
        editor = SkillsEditor(store, "u1")
        assert asyncio.run(editor.add(name="Python", proficiency="Wizard")) is False
        assert editor.error_message.startswith("Proficiency must be one of")

    @pytest.mark.integration
    def test_defaults_applied(self, store):
        editor = SkillsEditor(store, "u1")
        assert asyncio.run(editor.add(name="Python")) is True

        skill = editor.records[0]
        assert skill.category == "Technical"
        assert skill.proficiency == "Intermediate"


class TestProjectsEditor:
    """Technologies edited as comma-separated text."""

    @pytest.mark.integration
    def test_technologies_parsed_on_save(self, store):
        editor = ProjectsEditor(store, "u1")
        asyncio.run(editor.add(title="Ledger", technologies="Python, FastAPI,  Postgres", is_featured=True))

        project = editor.records[0]
        assert project.technologies == ["Python", "FastAPI", "Postgres"]
        assert project.is_featured is True

    @pytest.mark.integration
    def test_technologies_joined_when_editing(self, store):
        editor = ProjectsEditor(store, "u1")
        asyncio.run(editor.add(title="Ledger", technologies="Python, Go"))

        buffer = editor.start_edit(editor.records[0])
        assert buffer["technologies"] == "Python, Go"


class TestDelete:
    """Deleting and reloading."""

    @pytest.mark.integration
    def test_delete_reloads_collection(self, store):
        editor = EducationEditor(store, "u1")
        asyncio.run(editor.add(institution="MIT"))
        asyncio.run(editor.add(institution="ETH"))

        assert asyncio.run(editor.delete(editor.records[0].id)) is True
        assert [r.institution for r in editor.records] == ["ETH"]

    @pytest.mark.integration
    def test_deleting_edited_record_cancels_edit(self, store):
        editor = EducationEditor(store, "u1")
        asyncio.run(editor.add(institution="MIT"))
        record = editor.records[0]

        editor.start_edit(record)
        asyncio.run(editor.delete(record.id))

        assert not editor.is_editing


class TestStoreFailures:
    """Store errors surface as editor state, never as exceptions."""

    @pytest.mark.integration
    def test_failed_save_keeps_edit_mode(self, flaky_store):
        editor = ExperienceEditor(flaky_store, "u1")
        flaky_store.fail("insert", "work_experience")

        editor.start_new()
        editor.update_buffer(company="Acme")
        assert asyncio.run(editor.save()) is False

        assert editor.is_editing
        assert editor.buffer["company"] == "Acme"
        assert editor.error_message.startswith("Could not save work experience")

        flaky_store.heal()
        assert asyncio.run(editor.save()) is True
        assert editor.error_message is None
        assert [r.company for r in editor.records] == ["Acme"]

    @pytest.mark.integration
    def test_failed_load_keeps_previous_records(self, flaky_store):
        editor = SkillsEditor(flaky_store, "u1")
        asyncio.run(editor.add(name="Python"))

        flaky_store.fail("list", "skills")
        asyncio.run(flaky_store.insert_record("skills", Skill(user_id="u1", name="Go")))
        records = asyncio.run(editor.load())

        assert [s.name for s in records] == ["Python"]

    @pytest.mark.integration
    def test_failed_delete_sets_error(self, flaky_store):
        editor = SkillsEditor(flaky_store, "u1")
        asyncio.run(editor.add(name="Python"))
        flaky_store.fail("delete")

        assert asyncio.run(editor.delete(editor.records[0].id)) is False
        assert editor.error_message.startswith("Could not delete skills")
        assert len(editor.records) == 1

    @pytest.mark.integration
    def test_successful_delete_clears_earlier_error(self, flaky_store):
        editor = SkillsEditor(flaky_store, "u1")
        asyncio.run(editor.add(name="Python"))
        asyncio.run(editor.add(name="Go"))
        flaky_store.fail("delete")
        asyncio.run(editor.delete(editor.records[0].id))
        assert editor.error_message is not None

        flaky_store.heal()
        assert asyncio.run(editor.delete(editor.records[1].id)) is True
        assert editor.error_message is None


class TestProfileEditor:
    """Singleton profile editing."""

    @pytest.mark.integration
    def test_load_without_profile_keeps_blank_buffer(self, store):
        editor = ProfileEditor(store, "u1")
        assert asyncio.run(editor.load()) is None
        assert editor.buffer["full_name"] == ""
        assert "id" not in editor.buffer

    @pytest.mark.integration
    def test_save_then_reload(self, store):
        editor = ProfileEditor(store, "u1")
        editor.update_buffer(full_name="Jane Doe", email="j@x.com")
        assert asyncio.run(editor.save()) is True
        assert editor.profile.full_name == "Jane Doe"

        fresh = ProfileEditor(store, "u1")
        asyncio.run(fresh.load())
        assert fresh.buffer["email"] == "j@x.com"
        assert fresh.profile == editor.profile

    @pytest.mark.integration
    def test_failed_save_keeps_previous_profile(self, flaky_store):
        editor = ProfileEditor(flaky_store, "u1")
        editor.update_buffer(full_name="Jane")
        asyncio.run(editor.save())

        flaky_store.fail("save_profile")
        editor.update_buffer(full_name="Janet")

        assert asyncio.run(editor.save()) is False
        assert editor.profile.full_name == "Jane"
        assert editor.error_message.startswith("Could not save profile")

    @pytest.mark.integration
    def test_failed_load_keeps_previous_profile(self, flaky_store):
        asyncio.run(flaky_store.save_profile(Profile(id="u1", full_name="Jane")))
        editor = ProfileEditor(flaky_store, "u1")
        asyncio.run(editor.load())

        flaky_store.fail("get_profile")
        assert asyncio.run(editor.load()).full_name == "Jane"

    @pytest.mark.integration
    def test_suggest_bio_needs_title(self, store):
        editor = ProfileEditor(store, "u1")

        assert editor.suggest_bio() is None
        assert editor.error_message == "Please enter your professional title first"
        assert editor.buffer["bio"] == ""

    @pytest.mark.integration
    def test_suggest_bio_mentions_title(self, store):
        editor = ProfileEditor(store, "u1")
        editor.update_buffer(title="Data Engineer")
        suggester = RandomTemplateSuggester.from_config("bio", rng=random.Random(7))

        bio = editor.suggest_bio(suggester)

        assert "Data Engineer" in bio
        assert editor.buffer["bio"] == bio
