"""Database engine setup, connections and transactions."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from ..config import get_settings
from ..errors import StorageError

logger = logging.getLogger(__name__)

# SQLite INTEGER is a signed 64-bit value
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS tags (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT UNIQUE NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS workout_templates (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id TEXT NOT NULL,
        title TEXT NOT NULL,
        description TEXT,
        intensity TEXT NOT NULL CHECK (intensity IN ('LOW', 'MEDIUM', 'HIGH')),
        duration_seconds INTEGER,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS template_exercises (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        template_id INTEGER NOT NULL,
        name TEXT NOT NULL,
        order_index INTEGER NOT NULL DEFAULT 0,
        sets INTEGER,
        reps INTEGER,
        rest_seconds INTEGER,
        weight REAL,
        rpe REAL,
        notes TEXT,
        FOREIGN KEY (template_id) REFERENCES workout_templates(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS template_tags (
        template_id INTEGER NOT NULL,
        tag_id INTEGER NOT NULL,
        PRIMARY KEY (template_id, tag_id),
        FOREIGN KEY (template_id) REFERENCES workout_templates(id) ON DELETE CASCADE,
        FOREIGN KEY (tag_id) REFERENCES tags(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS workout_posts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id TEXT NOT NULL,
        template_id INTEGER,
        title TEXT NOT NULL,
        description TEXT,
        date TEXT NOT NULL,
        intensity TEXT NOT NULL CHECK (intensity IN ('LOW', 'MEDIUM', 'HIGH')),
        duration_seconds INTEGER,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
        FOREIGN KEY (template_id) REFERENCES workout_templates(id) ON DELETE SET NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS post_exercises (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        post_id INTEGER NOT NULL,
        name TEXT NOT NULL,
        order_index INTEGER NOT NULL DEFAULT 0,
        sets INTEGER,
        reps INTEGER,
        rest_seconds INTEGER,
        weight REAL,
        rpe REAL,
        notes TEXT,
        completed_sets INTEGER,
        FOREIGN KEY (post_id) REFERENCES workout_posts(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS post_tags (
        post_id INTEGER NOT NULL,
        tag_id INTEGER NOT NULL,
        PRIMARY KEY (post_id, tag_id),
        FOREIGN KEY (post_id) REFERENCES workout_posts(id) ON DELETE CASCADE,
        FOREIGN KEY (tag_id) REFERENCES tags(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS media_attachments (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        post_id INTEGER NOT NULL,
        url TEXT NOT NULL,
        type TEXT NOT NULL,
        size_bytes INTEGER,
        FOREIGN KEY (post_id) REFERENCES workout_posts(id) ON DELETE CASCADE
    )
    """,
    # Indexes for common queries
    "CREATE INDEX IF NOT EXISTS idx_templates_user ON workout_templates(user_id, updated_at)",
    "CREATE INDEX IF NOT EXISTS idx_posts_user_date ON workout_posts(user_id, date)",
    "CREATE INDEX IF NOT EXISTS idx_template_exercises_template ON template_exercises(template_id)",
    "CREATE INDEX IF NOT EXISTS idx_post_exercises_post ON post_exercises(post_id)",
    "CREATE INDEX IF NOT EXISTS idx_media_post ON media_attachments(post_id)",
]


def get_db_path(db_path: Path | None = None) -> Path:
    """Get the database file path, creating its directory if needed."""
    if db_path is None:
        db_path = get_settings().database_path
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return db_path


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_db_timestamp(value: datetime) -> str:
    """Serialize a datetime so that stored values sort lexicographically.

    Naive datetimes are taken to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def from_db_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


@asynccontextmanager
async def connect(db_path: Path) -> AsyncIterator[aiosqlite.Connection]:
    """Open a connection with explicit transaction control.

    Any sqlite error raised while the connection is open, including an
    integer too large to bind, surfaces as StorageError.
    """
    try:
        async with aiosqlite.connect(db_path, isolation_level=None) as db:
            db.row_factory = aiosqlite.Row
            await db.execute("PRAGMA foreign_keys = ON")
            yield db
    except (aiosqlite.Error, OverflowError) as exc:
        raise StorageError(str(exc)) from exc


@asynccontextmanager
async def transaction(
    db: aiosqlite.Connection, mode: str = "IMMEDIATE"
) -> AsyncIterator[aiosqlite.Connection]:
    """Run the enclosed statements as one unit; roll back on any error.

    Use mode="DEFERRED" for read-only snapshots.
    """
    await db.execute(f"BEGIN {mode}")
    try:
        yield db
    except Exception:
        await db.execute("ROLLBACK")
        raise
    await db.execute("COMMIT")


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    db_path = get_db_path(db_path)

    async with connect(db_path) as db:
        async with transaction(db):
            for statement in SCHEMA:
                await db.execute(statement)

    logger.info(f"Database ready at {db_path}")
