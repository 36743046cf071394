"""CLI entry point for treino."""

import click

from . import __version__
from .commands import init, posts, serve, tags, templates
from .config import get_settings
from .log_config import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="treino")
def main():
    """treino: workout templates and workout posts backend.

    Example usage:

        # Create the database
        treino init

        # Run the API
        treino serve --port 3000

        # Inspect stored data
        treino templates list <user-id>
        treino posts list <user-id> --page 2
    """
    configure_logging(get_settings().log_level)


# Register commands
main.add_command(init)
main.add_command(serve)
main.add_command(templates)
main.add_command(posts)
main.add_command(tags)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
