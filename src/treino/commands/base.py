"""Shared CLI utilities."""

import asyncio
import json
from functools import wraps

import click

from ..config import get_settings


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_settings().database_path
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + f"No database at {db_path}. Run 'treino init' first."
        )
        ctx.exit(1)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2))


def truncate(text: str | None, width: int = 30) -> str:
    if not text:
        return ""
    return text[:width] + "..." if len(text) > width else text


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row))
        )

    return "\n".join(line.rstrip() for line in lines)
