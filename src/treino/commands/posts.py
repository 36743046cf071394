"""Workout post inspection commands."""

import click

from ..db import get_db_path
from ..services import WorkoutService
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
def posts(ctx):
    """Inspect logged workouts."""
    ensure_initialized(ctx)


@posts.command(name="list")
@click.argument("user_id")
@click.option("--page", default=1, type=click.IntRange(min=1), help="Page number (default: 1)")
@click.option("--page-size", default=10, type=click.IntRange(min=1), help="Posts per page (default: 10)")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@async_command
async def list_posts(user_id: str, page: int, page_size: int, as_json: bool):
    """List one page of a user's posts, newest first."""
    service = WorkoutService.for_database(get_db_path())
    result = await service.list_posts(user_id, page, page_size)

    if as_json:
        echo_json(result.to_dict())
        return

    if not result.items:
        echo_info(f"No posts on page {page} for {user_id} ({result.total} in total)")
        return

    headers = ["ID", "Date", "Title", "Intensity", "Exercises", "Media"]
    rows = [
        [
            str(p.id),
            p.date.strftime("%Y-%m-%d %H:%M"),
            truncate(p.title),
            p.intensity.value,
            str(len(p.exercises)),
            str(len(p.media)),
        ]
        for p in result.items
    ]

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Page {result.page}/{max(result.total_pages, 1)} - {result.total} post(s) in total")
