"""Initialize database command."""

import click

from ..config import get_settings
from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the treino database.

    Creates the data directory and the SQLite schema. Safe to run again on
    an existing database.
    """
    db_path = get_db_path(get_settings().database_path)

    echo_info(f"Initializing database at {db_path}")
    await init_db(db_path)
    echo_success("Database initialized")

    click.echo()
    click.echo("Next steps:")
    click.echo("  treino serve                 # start the API on port 3000")
    click.echo("  treino templates list <uid>  # inspect a user's templates")
