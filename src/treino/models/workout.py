"""Workout template and workout post data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

DEFAULT_POST_TITLE = "Treino"


class Intensity(str, Enum):
    """Perceived intensity of a workout."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


@dataclass
class ExerciseSpec:
    """A planned exercise within a workout template."""

    name: str
    order_index: int = 0
    sets: int | None = None
    reps: int | None = None
    rest_seconds: int | None = None
    weight: float | None = None
    rpe: float | None = None  # Rate of perceived exertion
    notes: str | None = None
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "order_index": self.order_index,
            "sets": self.sets,
            "reps": self.reps,
            "rest_seconds": self.rest_seconds,
            "weight": self.weight,
            "rpe": self.rpe,
            "notes": self.notes,
        }


@dataclass
class ExerciseLog(ExerciseSpec):
    """A logged exercise within a workout post."""

    completed_sets: int | None = None

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["completed_sets"] = self.completed_sets
        return data


@dataclass
class Tag:
    """A tag shared by every user (names are globally unique)."""

    name: str
    id: int | None = None

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


@dataclass
class MediaAttachment:
    """A photo or video attached to a workout post."""

    url: str
    type: str  # "image" or "video", not enforced
    size_bytes: int | None = None
    id: int | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "url": self.url,
            "type": self.type,
            "size_bytes": self.size_bytes,
        }


@dataclass
class WorkoutTemplate:
    """A reusable workout plan owned by one user."""

    user_id: str
    title: str
    intensity: Intensity
    description: str | None = None
    duration_seconds: int | None = None
    exercises: list[ExerciseSpec] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def tag_names(self) -> list[str]:
        return [t.name for t in self.tags]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "intensity": self.intensity.value,
            "duration_seconds": self.duration_seconds,
            "exercises": [e.to_dict() for e in self.exercises],
            "tags": [t.to_dict() for t in self.tags],
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


@dataclass
class WorkoutPost:
    """A logged workout session, optionally derived from a template."""

    user_id: str
    title: str
    date: datetime
    intensity: Intensity
    template_id: int | None = None
    description: str | None = None
    duration_seconds: int | None = None
    exercises: list[ExerciseLog] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    media: list[MediaAttachment] = field(default_factory=list)
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "template_id": self.template_id,
            "title": self.title,
            "description": self.description,
            "date": _iso(self.date),
            "intensity": self.intensity.value,
            "duration_seconds": self.duration_seconds,
            "exercises": [e.to_dict() for e in self.exercises],
            "tags": [t.to_dict() for t in self.tags],
            "media": [m.to_dict() for m in self.media],
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


@dataclass
class PostPage:
    """One page of a user's posts plus the unpaginated total."""

    items: list[WorkoutPost]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return (self.total + self.page_size - 1) // self.page_size

    def to_dict(self) -> dict:
        return {
            "items": [p.to_dict() for p in self.items],
            "total": self.total,
            "page": self.page,
            "page_size": self.page_size,
        }


# -----------------------------------------------------------------------------
# Input drafts handed to the service by the request layer
# -----------------------------------------------------------------------------


@dataclass
class ExerciseDraft:
    """An exercise as submitted by the client."""

    name: str
    order_index: int | None = None
    sets: int | None = None
    reps: int | None = None
    rest_seconds: int | None = None
    weight: float | None = None
    rpe: float | None = None
    notes: str | None = None
    completed_sets: int | None = None


@dataclass
class MediaDraft:
    url: str
    type: str
    size_bytes: int | None = None


@dataclass
class TemplateDraft:
    """Validated input for creating a template."""

    title: str
    intensity: Intensity
    description: str | None = None
    duration_seconds: int | None = None
    exercises: list[ExerciseDraft] | None = None
    tags: list[str] | None = None


@dataclass
class PostDraft:
    """Validated input for creating a post. Every field may be omitted."""

    template_id: int | None = None
    title: str | None = None
    description: str | None = None
    date: datetime | None = None
    intensity: Intensity | None = None
    duration_seconds: int | None = None
    exercises: list[ExerciseDraft] | None = None
    tags: list[str] | None = None
    media: list[MediaDraft] | None = None
