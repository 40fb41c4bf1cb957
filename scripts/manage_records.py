#!/usr/bin/env python3
"""
Command-line interface for editing a user's resume records.

Commands:
    profile        - Show or update the profile
    add-experience - Add a work experience entry
    add-education  - Add an education entry
    add-skill      - Add a skill
    add-project    - Add a project
    list           - List records in a collection
    delete         - Delete a record by id
    events         - Show recent record events

Examples:\n

    manage_records.py profile --user u1 --full-name "Jane Doe" --email j@x.com

    manage_records.py add-skill --user u1 Python --category Technical --proficiency Expert

    manage_records.py list skills --user u1
"""

import asyncio
import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from resumeai.contexts.editing.logger import setup_editing_logger
from resumeai.contexts.records import PROFICIENCY_LEVELS, SQLiteRecordStore
from resumeai.utils.config import load_config
from resumeai.utils.event_logging import get_recent_events
from resumeai.utils.timestamp import format_timestamp
from resumeai.workspace import ResumeWorkspace

load_dotenv()
DB_PATH = Path(os.getenv("RESUMEAI_DB_PATH", "outs/resumeai.db"))
DEFAULT_USER_ID = os.getenv("RESUMEAI_USER_ID")

UserOption = Annotated[
    Optional[str],
    typer.Option("--user", "-u", help="User id (defaults to RESUMEAI_USER_ID)"),
]
DatabaseOption = Annotated[Path, typer.Option("--db", help="Record database path")]

app = typer.Typer(
    help="Edit resume records (profile, experience, education, skills, projects)",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _open_workspace(user: Optional[str], db: Path, log_session: bool = True) -> ResumeWorkspace:
    user_id = user or DEFAULT_USER_ID
    if not user_id:
        typer.secho("Error: no user id (pass --user or set RESUMEAI_USER_ID)\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    if log_session:
        setup_editing_logger(user_id=user_id)
    workspace = ResumeWorkspace(SQLiteRecordStore(db), user_id)
    asyncio.run(workspace.open())
    return workspace


def _add(workspace: ResumeWorkspace, collection: str, **values) -> None:
    editor = workspace.editor(collection)
    if asyncio.run(editor.add(**values)):
        typer.secho(f"✓ Added to {collection} ({len(editor.records)} total)", fg=typer.colors.GREEN)
    else:
        typer.secho(f"✗ {editor.error_message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("profile")
def profile_command(
    user: UserOption = None,
    db: DatabaseOption = DB_PATH,
    full_name: Annotated[Optional[str], typer.Option("--full-name")] = None,
    title: Annotated[Optional[str], typer.Option("--title")] = None,
    bio: Annotated[Optional[str], typer.Option("--bio")] = None,
    email: Annotated[Optional[str], typer.Option("--email")] = None,
    phone: Annotated[Optional[str], typer.Option("--phone")] = None,
    location: Annotated[Optional[str], typer.Option("--location")] = None,
    website: Annotated[Optional[str], typer.Option("--website")] = None,
    linkedin: Annotated[Optional[str], typer.Option("--linkedin")] = None,
    github: Annotated[Optional[str], typer.Option("--github")] = None,
    suggest_bio: Annotated[
        bool, typer.Option("--suggest-bio", help="Fill the bio with a suggestion based on the title")
    ] = False,
):
    """
    Show the profile, updating any fields given as options.

    Examples:\n

        $ manage_records.py profile --user u1                          # Show profile

        $ manage_records.py profile --user u1 --title "Data Engineer" --suggest-bio
    """
    workspace = _open_workspace(user, db)
    editor = workspace.profile_editor

    updates = {
        key: value
        for key, value in dict(
            full_name=full_name,
            title=title,
            bio=bio,
            email=email,
            phone=phone,
            location=location,
            website=website,
            linkedin=linkedin,
            github=github,
        ).items()
        if value is not None
    }
    editor.update_buffer(**updates)

    if suggest_bio and editor.suggest_bio() is None:
        typer.secho(f"✗ {editor.error_message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if updates or suggest_bio:
        if not asyncio.run(editor.save()):
            typer.secho(f"✗ {editor.error_message}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
        typer.secho("✓ Profile saved", fg=typer.colors.GREEN)

    typer.secho("\nProfile", fg=typer.colors.BLUE, bold=True)
    for key, value in editor.buffer.items():
        if value:
            typer.echo(f"  {key}: {value}")
    typer.echo("")


@app.command("add-experience")
def add_experience_command(
    company: Annotated[str, typer.Argument(help="Company name")],
    position: Annotated[str, typer.Argument(help="Position held")],
    user: UserOption = None,
    db: DatabaseOption = DB_PATH,
    location: Annotated[str, typer.Option("--location")] = "",
    start_date: Annotated[str, typer.Option("--start")] = "",
    end_date: Annotated[str, typer.Option("--end")] = "",
    current: Annotated[bool, typer.Option("--current", help="Current position")] = False,
    description: Annotated[str, typer.Option("--description", "-d")] = "",
    suggest: Annotated[
        bool, typer.Option("--suggest", help="Fill the description with a suggestion")
    ] = False,
):
    """Add a work experience entry."""
    workspace = _open_workspace(user, db)
    editor = workspace.editor("work_experience")
    editor.start_new()
    editor.update_buffer(
        company=company,
        position=position,
        location=location,
        start_date=start_date,
        end_date=end_date,
        is_current=current,
        description=description,
    )
    if suggest:
        editor.suggest_description()
    if not asyncio.run(editor.save()):
        typer.secho(f"✗ {editor.error_message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.secho(f"✓ Added to work_experience ({len(editor.records)} total)", fg=typer.colors.GREEN)


@app.command("add-education")
def add_education_command(
    institution: Annotated[str, typer.Argument(help="Institution name")],
    user: UserOption = None,
    db: DatabaseOption = DB_PATH,
    degree: Annotated[str, typer.Option("--degree")] = "",
    field_of_study: Annotated[str, typer.Option("--field")] = "",
    location: Annotated[str, typer.Option("--location")] = "",
    start_date: Annotated[str, typer.Option("--start")] = "",
    end_date: Annotated[str, typer.Option("--end")] = "",
    gpa: Annotated[str, typer.Option("--gpa")] = "",
    description: Annotated[str, typer.Option("--description", "-d")] = "",
):
    """Add an education entry."""
    workspace = _open_workspace(user, db)
    _add(
        workspace,
        "education",
        institution=institution,
        degree=degree,
        field_of_study=field_of_study,
        location=location,
        start_date=start_date,
        end_date=end_date,
        gpa=gpa,
        description=description,
    )


@app.command("add-skill")
def add_skill_command(
    name: Annotated[str, typer.Argument(help="Skill name")],
    user: UserOption = None,
    db: DatabaseOption = DB_PATH,
    category: Annotated[str, typer.Option("--category", "-c", help="Skill category")] = "Technical",
    proficiency: Annotated[
        str,
        typer.Option("--proficiency", "-p", help=f"One of: {', '.join(PROFICIENCY_LEVELS)}"),
    ] = "Intermediate",
):
    """Add a skill."""
    suggested = load_config()["vocabulary"]["skill_categories"]
    if category not in suggested:
        typer.secho(
            f"Note: '{category}' is not one of the suggested categories ({', '.join(suggested)})",
            fg=typer.colors.YELLOW,
        )
    workspace = _open_workspace(user, db)
    _add(workspace, "skills", name=name, category=category, proficiency=proficiency)


@app.command("add-project")
def add_project_command(
    title: Annotated[str, typer.Argument(help="Project title")],
    user: UserOption = None,
    db: DatabaseOption = DB_PATH,
    description: Annotated[str, typer.Option("--description", "-d")] = "",
    technologies: Annotated[
        str, typer.Option("--tech", "-t", help="Comma-separated technologies")
    ] = "",
    url: Annotated[str, typer.Option("--url")] = "",
    github_url: Annotated[str, typer.Option("--github-url")] = "",
    featured: Annotated[bool, typer.Option("--featured", help="Show in the preview")] = False,
):
    """Add a project."""
    workspace = _open_workspace(user, db)
    _add(
        workspace,
        "projects",
        title=title,
        description=description,
        technologies=technologies,
        url=url,
        github_url=github_url,
        is_featured=featured,
    )


@app.command("list")
def list_command(
    collection: Annotated[
        str, typer.Argument(help="work_experience, education, skills or projects")
    ],
    user: UserOption = None,
    db: DatabaseOption = DB_PATH,
):
    """List records in a collection, in display order."""
    workspace = _open_workspace(user, db, log_session=False)
    records = workspace.editor(collection).records

    typer.secho(f"\n{collection} ({len(records)})", fg=typer.colors.BLUE, bold=True)
    for record in records:
        row = record.to_row()
        summary = next(
            (row[key] for key in ("position", "institution", "name", "title") if row.get(key)),
            "",
        )
        typer.echo(f"  {record.id}  {summary}")
    typer.echo("")


@app.command("delete")
def delete_command(
    collection: Annotated[str, typer.Argument(help="Collection name")],
    record_id: Annotated[str, typer.Argument(help="Record id")],
    user: UserOption = None,
    db: DatabaseOption = DB_PATH,
):
    """Delete a record by id."""
    workspace = _open_workspace(user, db)
    editor = workspace.editor(collection)
    if not asyncio.run(editor.delete(record_id)):
        typer.secho(f"✗ {editor.error_message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.secho(f"✓ Deleted {record_id}", fg=typer.colors.GREEN)


@app.command("events")
def events_command(
    n: Annotated[int, typer.Option("--count", "-n", help="Number of events")] = 10,
    user: UserOption = None,
    collection: Annotated[Optional[str], typer.Option("--collection", "-c")] = None,
    event_type: Annotated[Optional[str], typer.Option("--type", "-t")] = None,
):
    """Show recent record events."""
    events: List[dict] = get_recent_events(
        n, user_id=user, event_type=event_type, collection=collection
    )
    if not events:
        typer.echo("No events found.")
        return
    for event in events:
        when = format_timestamp(event["timestamp"], relative=True)
        typer.echo(
            f"  {when:>10}  {event['event_type']:<12} {event['collection']:<16} {event.get('record_id')}"
        )


if __name__ == "__main__":
    app()
