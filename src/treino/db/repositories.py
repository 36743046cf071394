"""Data access layer for treino."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Sequence

import aiosqlite

from ..models.workout import (
    ExerciseLog,
    ExerciseSpec,
    Intensity,
    MediaAttachment,
    Tag,
    WorkoutPost,
    WorkoutTemplate,
)
from .engine import (
    SQLITE_INT_MAX,
    SQLITE_INT_MIN,
    connect,
    from_db_timestamp,
    get_db_path,
    to_db_timestamp,
    transaction,
    utcnow,
)

logger = logging.getLogger(__name__)


def _placeholders(values: Sequence) -> str:
    return ", ".join("?" for _ in values)


async def _connect_or_create_tags(
    db: aiosqlite.Connection, names: Iterable[str]
) -> list[int]:
    """Resolve tag names to ids, creating the missing tags.

    Duplicate names collapse to a single id. Must run inside a transaction.
    """
    tag_ids: list[int] = []
    for name in dict.fromkeys(names):
        await db.execute("INSERT OR IGNORE INTO tags (name) VALUES (?)", (name,))
        cursor = await db.execute("SELECT id FROM tags WHERE name = ?", (name,))
        row = await cursor.fetchone()
        tag_ids.append(row["id"])
    return tag_ids


async def _load_tags(
    db: aiosqlite.Connection, link_table: str, owner_column: str, owner_ids: list[int]
) -> dict[int, list[Tag]]:
    """Load the tags linked to each owner id, ordered by name."""
    tags: dict[int, list[Tag]] = {owner_id: [] for owner_id in owner_ids}
    if not owner_ids:
        return tags
    cursor = await db.execute(
        f"""
        SELECT l.{owner_column} AS owner_id, t.id, t.name
        FROM {link_table} l JOIN tags t ON t.id = l.tag_id
        WHERE l.{owner_column} IN ({_placeholders(owner_ids)})
        ORDER BY t.name
        """,
        owner_ids,
    )
    for row in await cursor.fetchall():
        tags[row["owner_id"]].append(Tag(id=row["id"], name=row["name"]))
    return tags


def _exercise_values(exercise: ExerciseSpec) -> tuple:
    return (
        exercise.name,
        exercise.order_index,
        exercise.sets,
        exercise.reps,
        exercise.rest_seconds,
        exercise.weight,
        exercise.rpe,
        exercise.notes,
    )


class UserRepository:
    """Repository for users."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def upsert(self, user_id: str) -> bool:
        """Create the user if absent. Returns True when a row was created."""
        async with connect(self.db_path) as db:
            async with transaction(db):
                cursor = await db.execute(
                    "INSERT OR IGNORE INTO users (id, created_at) VALUES (?, ?)",
                    (user_id, to_db_timestamp(utcnow())),
                )
                return cursor.rowcount == 1


class TagRepository:
    """Repository for the global tag vocabulary."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def list_all(self) -> list[Tag]:
        """List all tags ordered by name."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT id, name FROM tags ORDER BY name")
            rows = await cursor.fetchall()
            return [Tag(id=row["id"], name=row["name"]) for row in rows]


class WorkoutTemplateRepository:
    """Repository for workout templates and their exercises and tags."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(
        self,
        user_id: str,
        title: str,
        intensity: Intensity,
        description: str | None = None,
        duration_seconds: int | None = None,
        exercises: Sequence[ExerciseSpec] = (),
        tag_names: Sequence[str] = (),
    ) -> WorkoutTemplate:
        """Create a template with its exercises and tags in one transaction."""
        now = to_db_timestamp(utcnow())
        async with connect(self.db_path) as db:
            async with transaction(db):
                cursor = await db.execute(
                    """
                    INSERT INTO workout_templates
                    (user_id, title, description, intensity, duration_seconds,
                     created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        user_id,
                        title,
                        description,
                        Intensity(intensity).value,
                        duration_seconds,
                        now,
                        now,
                    ),
                )
                template_id = cursor.lastrowid

                await db.executemany(
                    """
                    INSERT INTO template_exercises
                    (template_id, name, order_index, sets, reps, rest_seconds,
                     weight, rpe, notes)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    [(template_id, *_exercise_values(e)) for e in exercises],
                )

                tag_ids = await _connect_or_create_tags(db, tag_names)
                await db.executemany(
                    "INSERT OR IGNORE INTO template_tags (template_id, tag_id) VALUES (?, ?)",
                    [(template_id, tag_id) for tag_id in tag_ids],
                )

                templates = await self._fetch(db, "id = ?", (template_id,))

        logger.debug(f"Stored template {template_id} with {len(exercises)} exercise(s)")
        return templates[0]

    async def get(self, template_id: int) -> WorkoutTemplate | None:
        """Get a template by ID, populated with exercises and tags."""
        if not SQLITE_INT_MIN <= template_id <= SQLITE_INT_MAX:
            return None
        async with connect(self.db_path) as db:
            templates = await self._fetch(db, "id = ?", (template_id,))
            return templates[0] if templates else None

    async def list_by_user(self, user_id: str) -> list[WorkoutTemplate]:
        """List a user's templates, most recently updated first."""
        async with connect(self.db_path) as db:
            return await self._fetch(db, "user_id = ?", (user_id,))

    async def _fetch(
        self, db: aiosqlite.Connection, where: str, params: tuple
    ) -> list[WorkoutTemplate]:
        cursor = await db.execute(
            f"""
            SELECT * FROM workout_templates
            WHERE {where}
            ORDER BY updated_at DESC, id DESC
            """,
            params,
        )
        rows = await cursor.fetchall()
        ids = [row["id"] for row in rows]

        exercises: dict[int, list[ExerciseSpec]] = {i: [] for i in ids}
        if ids:
            cursor = await db.execute(
                f"""
                SELECT * FROM template_exercises
                WHERE template_id IN ({_placeholders(ids)})
                ORDER BY order_index, id
                """,
                ids,
            )
            for ex_row in await cursor.fetchall():
                exercises[ex_row["template_id"]].append(self._row_to_exercise(ex_row))

        tags = await _load_tags(db, "template_tags", "template_id", ids)

        return [
            self._row_to_template(row, exercises[row["id"]], tags[row["id"]])
            for row in rows
        ]

    def _row_to_exercise(self, row: aiosqlite.Row) -> ExerciseSpec:
        """Convert a database row to an ExerciseSpec."""
        return ExerciseSpec(
            id=row["id"],
            name=row["name"],
            order_index=row["order_index"],
            sets=row["sets"],
            reps=row["reps"],
            rest_seconds=row["rest_seconds"],
            weight=row["weight"],
            rpe=row["rpe"],
            notes=row["notes"],
        )

    def _row_to_template(
        self, row: aiosqlite.Row, exercises: list[ExerciseSpec], tags: list[Tag]
    ) -> WorkoutTemplate:
        """Convert a database row to a WorkoutTemplate."""
        return WorkoutTemplate(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            description=row["description"],
            intensity=Intensity(row["intensity"]),
            duration_seconds=row["duration_seconds"],
            exercises=exercises,
            tags=tags,
            created_at=from_db_timestamp(row["created_at"]),
            updated_at=from_db_timestamp(row["updated_at"]),
        )


class WorkoutPostRepository:
    """Repository for workout posts and their exercises, tags and media."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(
        self,
        user_id: str,
        title: str,
        date: datetime,
        intensity: Intensity,
        template_id: int | None = None,
        description: str | None = None,
        duration_seconds: int | None = None,
        exercises: Sequence[ExerciseLog] = (),
        tag_names: Sequence[str] = (),
        media: Sequence[MediaAttachment] = (),
    ) -> WorkoutPost:
        """Create a post with its exercises, tags and media in one transaction."""
        now = to_db_timestamp(utcnow())
        async with connect(self.db_path) as db:
            async with transaction(db):
                cursor = await db.execute(
                    """
                    INSERT INTO workout_posts
                    (user_id, template_id, title, description, date, intensity,
                     duration_seconds, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        user_id,
                        template_id,
                        title,
                        description,
                        to_db_timestamp(date),
                        Intensity(intensity).value,
                        duration_seconds,
                        now,
                        now,
                    ),
                )
                post_id = cursor.lastrowid

                await db.executemany(
                    """
                    INSERT INTO post_exercises
                    (post_id, name, order_index, sets, reps, rest_seconds,
                     weight, rpe, notes, completed_sets)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (post_id, *_exercise_values(e), e.completed_sets)
                        for e in exercises
                    ],
                )

                tag_ids = await _connect_or_create_tags(db, tag_names)
                await db.executemany(
                    "INSERT OR IGNORE INTO post_tags (post_id, tag_id) VALUES (?, ?)",
                    [(post_id, tag_id) for tag_id in tag_ids],
                )

                await db.executemany(
                    """
                    INSERT INTO media_attachments (post_id, url, type, size_bytes)
                    VALUES (?, ?, ?, ?)
                    """,
                    [(post_id, m.url, m.type, m.size_bytes) for m in media],
                )

                posts = await self._fetch(db, "id = ?", (post_id,))

        logger.debug(
            f"Stored post {post_id} with {len(exercises)} exercise(s), "
            f"{len(media)} media item(s)"
        )
        return posts[0]

    async def page_by_user(
        self, user_id: str, offset: int, limit: int
    ) -> tuple[list[WorkoutPost], int]:
        """Get one page of a user's posts (newest first) and their total count.

        Both reads share one transaction so the page and the count describe
        the same snapshot.
        """
        async with connect(self.db_path) as db:
            async with transaction(db, "DEFERRED"):
                cursor = await db.execute(
                    "SELECT COUNT(*) FROM workout_posts WHERE user_id = ?", (user_id,)
                )
                total = (await cursor.fetchone())[0]
                if offset >= total:
                    return [], total
                posts = await self._fetch(
                    db,
                    "user_id = ?",
                    (user_id,),
                    limit=min(limit, SQLITE_INT_MAX),
                    offset=offset,
                )
        return posts, total

    async def _fetch(
        self,
        db: aiosqlite.Connection,
        where: str,
        params: tuple,
        limit: int = -1,
        offset: int = 0,
    ) -> list[WorkoutPost]:
        cursor = await db.execute(
            f"""
            SELECT * FROM workout_posts
            WHERE {where}
            ORDER BY date DESC, id DESC
            LIMIT ? OFFSET ?
            """,
            (*params, limit, offset),
        )
        rows = await cursor.fetchall()
        ids = [row["id"] for row in rows]

        exercises: dict[int, list[ExerciseLog]] = {i: [] for i in ids}
        media: dict[int, list[MediaAttachment]] = {i: [] for i in ids}
        if ids:
            cursor = await db.execute(
                f"""
                SELECT * FROM post_exercises
                WHERE post_id IN ({_placeholders(ids)})
                ORDER BY order_index, id
                """,
                ids,
            )
            for ex_row in await cursor.fetchall():
                exercises[ex_row["post_id"]].append(self._row_to_exercise(ex_row))

            cursor = await db.execute(
                f"""
                SELECT * FROM media_attachments
                WHERE post_id IN ({_placeholders(ids)})
                ORDER BY id
                """,
                ids,
            )
            for m_row in await cursor.fetchall():
                media[m_row["post_id"]].append(
                    MediaAttachment(
                        id=m_row["id"],
                        url=m_row["url"],
                        type=m_row["type"],
                        size_bytes=m_row["size_bytes"],
                    )
                )

        tags = await _load_tags(db, "post_tags", "post_id", ids)

        return [
            self._row_to_post(row, exercises[row["id"]], tags[row["id"]], media[row["id"]])
            for row in rows
        ]

    def _row_to_exercise(self, row: aiosqlite.Row) -> ExerciseLog:
        """Convert a database row to an ExerciseLog."""
        return ExerciseLog(
            id=row["id"],
            name=row["name"],
            order_index=row["order_index"],
            sets=row["sets"],
            reps=row["reps"],
            rest_seconds=row["rest_seconds"],
            weight=row["weight"],
            rpe=row["rpe"],
            notes=row["notes"],
            completed_sets=row["completed_sets"],
        )

    def _row_to_post(
        self,
        row: aiosqlite.Row,
        exercises: list[ExerciseLog],
        tags: list[Tag],
        media: list[MediaAttachment],
    ) -> WorkoutPost:
        """Convert a database row to a WorkoutPost."""
        return WorkoutPost(
            id=row["id"],
            user_id=row["user_id"],
            template_id=row["template_id"],
            title=row["title"],
            description=row["description"],
            date=from_db_timestamp(row["date"]),
            intensity=Intensity(row["intensity"]),
            duration_seconds=row["duration_seconds"],
            exercises=exercises,
            tags=tags,
            media=media,
            created_at=from_db_timestamp(row["created_at"]),
            updated_at=from_db_timestamp(row["updated_at"]),
        )
