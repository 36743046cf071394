"""Tag vocabulary commands."""

import click

from ..db import TagRepository, get_db_path
from .base import async_command, echo_info, ensure_initialized


@click.group()
@click.pass_context
def tags(ctx):
    """Inspect the shared tag vocabulary."""
    ensure_initialized(ctx)


@tags.command(name="list")
@async_command
async def list_tags():
    """List every tag in use, across all users."""
    repo = TagRepository(get_db_path())
    all_tags = await repo.list_all()

    if not all_tags:
        echo_info("No tags yet")
        return

    for tag in all_tags:
        click.echo(tag.name)
