"""
End-to-end tests for the resume workspace.
Tests: editing every section through the workspace and previewing the result.
"""

import asyncio

import pytest

from resumeai.contexts.records import SQLiteRecordStore, UnknownCollectionError
from resumeai.utils.event_logging import get_recent_events
from resumeai.workspace import ResumeWorkspace

BIO = "Backend engineer focused on reliable payment systems and developer tooling."


async def fill_everything_but_projects(workspace: ResumeWorkspace) -> None:
    await workspace.open()
    workspace.profile_editor.update_buffer(
        full_name="Jane Doe",
        email="jane@example.com",
        phone="555-0100",
        title="Backend Engineer",
        bio=BIO,
    )
    await workspace.profile_editor.save()

    skills = workspace.editor("skills")
    for name in ("Python", "SQL", "Go"):
        await skills.add(name=name)

    await workspace.editor("work_experience").add(
        company="Acme", position="Engineer", start_date="2020-01", is_current=True
    )
    await workspace.refresh_preview()


@pytest.mark.integration
def test_everything_but_projects_scores_ninety(store):
    workspace = ResumeWorkspace(store, "u1")
    asyncio.run(fill_everything_but_projects(workspace))

    assert workspace.preview.score() == 90
    assert [gap.condition for gap in workspace.preview.gaps()] == ["projects"]

    markdown = workspace.preview.render()
    assert "# Jane Doe" in markdown
    assert "Acme | 2020-01 – Present" in markdown
    assert "**Technical**: Python • SQL • Go" in markdown
    assert "## Projects" not in markdown


@pytest.mark.integration
def test_featured_project_completes_the_resume(store):
    workspace = ResumeWorkspace(store, "u1")
    asyncio.run(fill_everything_but_projects(workspace))

    async def add_project():
        await workspace.editor("projects").add(
            title="Ledger", technologies="Python, Postgres", is_featured=True
        )
        await workspace.refresh_preview()

    asyncio.run(add_project())

    assert workspace.preview.score() == 100
    html = workspace.preview.render("html")
    assert "Ledger" in html
    assert "Python • Postgres" in html


@pytest.mark.integration
def test_state_survives_a_new_session(tmp_path, events_file):
    db_path = tmp_path / "resumeai.db"
    first = ResumeWorkspace(SQLiteRecordStore(db_path, events_file=events_file), "u1")
    asyncio.run(fill_everything_but_projects(first))

    second = ResumeWorkspace(SQLiteRecordStore(db_path, events_file=events_file), "u1")

    async def reopen():
        await second.open()
        await second.refresh_preview()

    asyncio.run(reopen())

    assert second.profile.full_name == "Jane Doe"
    assert [s.name for s in second.editors["skills"].records] == ["Python", "SQL", "Go"]
    assert second.preview.render() == first.preview.render()


@pytest.mark.integration
def test_mutations_are_audited(store, events_file):
    workspace = ResumeWorkspace(store, "u1")
    asyncio.run(fill_everything_but_projects(workspace))

    events = get_recent_events(20, user_id="u1", events_file=events_file)
    assert [e["collection"] for e in events].count("skills") == 3
    assert events[0]["event_type"] == "profile_save"


@pytest.mark.integration
def test_cover_letter_from_workspace(store):
    workspace = ResumeWorkspace(store, "u1")
    asyncio.run(fill_everything_but_projects(workspace))

    letter = workspace.preview.render_cover_letter(date="05/06/2025")

    assert letter.startswith("05/06/2025")
    assert "Backend Engineer position" in letter
    assert "expertise in Python, SQL, Go," in letter
    assert BIO in letter


@pytest.mark.integration
def test_unknown_editor(store):
    with pytest.raises(UnknownCollectionError):
        ResumeWorkspace(store, "u1").editor("hobbies")
