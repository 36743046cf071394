"""Workout templates and workout posts: creation and listing."""

import logging
from pathlib import Path

from ..db.engine import utcnow
from ..db.repositories import (
    UserRepository,
    WorkoutPostRepository,
    WorkoutTemplateRepository,
)
from ..models.workout import (
    DEFAULT_POST_TITLE,
    ExerciseDraft,
    ExerciseLog,
    ExerciseSpec,
    Intensity,
    MediaAttachment,
    PostDraft,
    PostPage,
    TemplateDraft,
    WorkoutPost,
    WorkoutTemplate,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10


def _first_given(*values):
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def _exercise_specs(drafts: list[ExerciseDraft]) -> list[ExerciseSpec]:
    return [
        ExerciseSpec(
            name=d.name,
            order_index=d.order_index if d.order_index is not None else idx,
            sets=d.sets,
            reps=d.reps,
            rest_seconds=d.rest_seconds,
            weight=d.weight,
            rpe=d.rpe,
            notes=d.notes,
        )
        for idx, d in enumerate(drafts)
    ]


def _exercise_logs(drafts: list[ExerciseDraft]) -> list[ExerciseLog]:
    return [
        ExerciseLog(
            name=d.name,
            order_index=d.order_index if d.order_index is not None else idx,
            sets=d.sets,
            reps=d.reps,
            rest_seconds=d.rest_seconds,
            weight=d.weight,
            rpe=d.rpe,
            notes=d.notes,
            completed_sets=d.completed_sets,
        )
        for idx, d in enumerate(drafts)
    ]


def _copy_template_exercises(template: WorkoutTemplate) -> list[ExerciseLog]:
    """Copy a template's planned exercises into fresh, unsaved log entries."""
    return [
        ExerciseLog(
            name=e.name,
            order_index=e.order_index,
            sets=e.sets,
            reps=e.reps,
            rest_seconds=e.rest_seconds,
            weight=e.weight,
            rpe=e.rpe,
            notes=e.notes,
        )
        for e in template.exercises
    ]


class WorkoutService:
    """Business rules for templates and posts.

    Holds no state between calls; every operation reads and writes through
    the repositories it was constructed with.
    """

    def __init__(
        self,
        users: UserRepository,
        templates: WorkoutTemplateRepository,
        posts: WorkoutPostRepository,
    ):
        self.users = users
        self.templates = templates
        self.posts = posts

    @classmethod
    def for_database(cls, db_path: Path) -> "WorkoutService":
        """Wire a service to repositories on one SQLite file."""
        return cls(
            users=UserRepository(db_path),
            templates=WorkoutTemplateRepository(db_path),
            posts=WorkoutPostRepository(db_path),
        )

    async def ensure_user(self, user_id: str) -> None:
        """Create the user row on first sight; no-op afterwards."""
        if await self.users.upsert(user_id):
            logger.info(f"Registered new user {user_id}")

    async def create_template(self, user_id: str, draft: TemplateDraft) -> WorkoutTemplate:
        """Create a template owned by user_id."""
        await self.ensure_user(user_id)

        template = await self.templates.create(
            user_id=user_id,
            title=draft.title,
            description=draft.description,
            intensity=draft.intensity,
            duration_seconds=draft.duration_seconds,
            exercises=_exercise_specs(draft.exercises or []),
            tag_names=draft.tags or [],
        )
        logger.info(f"User {user_id} created template {template.id}")
        return template

    async def list_templates(self, user_id: str) -> list[WorkoutTemplate]:
        """List the user's templates, most recently updated first."""
        return await self.templates.list_by_user(user_id)

    async def create_post(self, user_id: str, draft: PostDraft) -> WorkoutPost:
        """Log a workout session.

        Fields left out fall back to the referenced template, then to fixed
        defaults. A template_id that does not resolve is treated as absent.
        Ownership of the template is not checked.
        """
        await self.ensure_user(user_id)

        template = None
        if draft.template_id is not None:
            template = await self.templates.get(draft.template_id)
            if template is None:
                logger.info(
                    f"Template {draft.template_id} not found; post for {user_id} "
                    "uses default values"
                )

        if draft.exercises:
            exercises = _exercise_logs(draft.exercises)
        elif template is not None:
            exercises = _copy_template_exercises(template)
        else:
            exercises = []

        if draft.tags:
            tag_names = list(draft.tags)
        elif template is not None:
            tag_names = template.tag_names
        else:
            tag_names = []

        media = [
            MediaAttachment(url=m.url, type=m.type, size_bytes=m.size_bytes)
            for m in draft.media or []
        ]

        post = await self.posts.create(
            user_id=user_id,
            template_id=template.id if template is not None else None,
            title=_first_given(
                draft.title, template.title if template else None, DEFAULT_POST_TITLE
            ),
            description=_first_given(
                draft.description, template.description if template else None
            ),
            date=draft.date if draft.date is not None else utcnow(),
            intensity=_first_given(
                draft.intensity, template.intensity if template else None, Intensity.MEDIUM
            ),
            duration_seconds=_first_given(
                draft.duration_seconds, template.duration_seconds if template else None
            ),
            exercises=exercises,
            tag_names=tag_names,
            media=media,
        )
        logger.info(f"User {user_id} created post {post.id}")
        return post

    async def list_posts(
        self, user_id: str, page: int = DEFAULT_PAGE, page_size: int = DEFAULT_PAGE_SIZE
    ) -> PostPage:
        """Get one page of the user's posts, newest first, with the total count."""
        if page < 1 or page_size < 1:
            raise ValueError("page and page_size must be positive integers")

        offset = (page - 1) * page_size
        items, total = await self.posts.page_by_user(user_id, offset=offset, limit=page_size)
        return PostPage(items=items, total=total, page=page, page_size=page_size)
