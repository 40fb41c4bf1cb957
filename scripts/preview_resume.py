#!/usr/bin/env python3
"""
Resume Preview CLI

Renders a user's resume from their stored records, reports the completeness
score, and renders a cover letter.

Commands:
    render       - Render the resume preview (Markdown or HTML)
    score        - Show the completeness score and what is missing
    cover-letter - Render a cover letter

Examples:\n

    preview_resume.py render --user u1                       # Markdown to stdout

    preview_resume.py render --user u1 --format html -o cv.html

    preview_resume.py score --user u1
"""

import asyncio
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from resumeai.contexts.preview.logger import setup_preview_logger
from resumeai.contexts.records import SQLiteRecordStore
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
    help="Render resume previews, completeness scores and cover letters",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


async def _load(user_id: str, db: Path) -> ResumeWorkspace:
    workspace = ResumeWorkspace(SQLiteRecordStore(db), user_id)
    await workspace.profile_editor.load()
    await workspace.refresh_preview()
    return workspace


def _workspace(user: Optional[str], db: Path) -> ResumeWorkspace:
    user_id = user or DEFAULT_USER_ID
    if not user_id:
        typer.secho("Error: no user id (pass --user or set RESUMEAI_USER_ID)\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return asyncio.run(_load(user_id, db))


@app.command("render")
def render_command(
    user: UserOption = None,
    db: DatabaseOption = DB_PATH,
    output_format: Annotated[
        str, typer.Option("--format", "-f", help="markdown or html")
    ] = "markdown",
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Write to this file instead of stdout")
    ] = None,
):
    """
    Render the resume preview.

    Examples:\n

        $ preview_resume.py render --user u1

        $ preview_resume.py render --user u1 --format html --output resume.html
    """
    if output is not None:
        # Session log only when the document is not going to stdout
        setup_preview_logger(output_format=output_format)

    workspace = _workspace(user, db)
    if workspace.preview.aggregate.is_empty:
        typer.secho("Note: no records found for this user yet", fg=typer.colors.YELLOW, err=True)
    try:
        document = workspace.preview.render(output_format)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(document)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(document, encoding="utf-8")
        typer.secho(f"✓ Wrote {output}", fg=typer.colors.GREEN)


@app.command("score")
def score_command(
    user: UserOption = None,
    db: DatabaseOption = DB_PATH,
):
    """Show the completeness score and the unmet conditions."""
    workspace = _workspace(user, db)
    score = workspace.preview.score()
    gaps = workspace.preview.gaps()

    color = typer.colors.GREEN if score >= 80 else typer.colors.YELLOW if score >= 50 else typer.colors.RED
    typer.secho(f"\nCompleteness score: {score}/100", fg=color, bold=True)
    for gap in gaps:
        typer.echo(f"  - {gap.message} (+{gap.points})")
    typer.echo("")


@app.command("cover-letter")
def cover_letter_command(
    user: UserOption = None,
    db: DatabaseOption = DB_PATH,
):
    """Render a cover letter from the profile and skills."""
    workspace = _workspace(user, db)
    typer.echo(workspace.preview.render_cover_letter())


if __name__ == "__main__":
    app()
