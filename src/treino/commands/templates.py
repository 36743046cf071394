"""Workout template inspection commands."""

import click

from ..db import WorkoutTemplateRepository, get_db_path
from .base import (
    async_command,
    echo_info,
    echo_json,
    ensure_initialized,
    format_table,
    truncate,
)


@click.group()
@click.pass_context
def templates(ctx):
    """Inspect workout templates."""
    ensure_initialized(ctx)


@templates.command(name="list")
@click.argument("user_id")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@async_command
async def list_templates(user_id: str, as_json: bool):
    """List a user's templates, most recently updated first."""
    repo = WorkoutTemplateRepository(get_db_path())
    all_templates = await repo.list_by_user(user_id)

    if as_json:
        echo_json([t.to_dict() for t in all_templates])
        return

    if not all_templates:
        echo_info(f"No templates found for {user_id}")
        return

    headers = ["ID", "Title", "Intensity", "Exercises", "Tags", "Updated"]
    rows = []
    for t in all_templates:
        updated = t.updated_at.strftime("%Y-%m-%d %H:%M") if t.updated_at else "N/A"
        rows.append([
            str(t.id),
            truncate(t.title),
            t.intensity.value,
            str(len(t.exercises)),
            truncate(", ".join(t.tag_names), 24),
            updated,
        ])

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(all_templates)} template(s)")
