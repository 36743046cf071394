"""Request and response shapes for the HTTP API (camelCase on the wire)."""

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..db.engine import SQLITE_INT_MAX, SQLITE_INT_MIN
from ..models.workout import (
    ExerciseDraft,
    Intensity,
    MediaDraft,
    PostDraft,
    TemplateDraft,
)

# Integers must be JSON integers that fit a SQLite INTEGER column
DbInt = Annotated[int, Field(strict=True, ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)]
NonNegativeDbInt = Annotated[int, Field(strict=True, ge=0, le=SQLITE_INT_MAX)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# Requests
# =============================================================================


class TemplateExerciseIn(CamelModel):
    name: str = Field(min_length=1)
    order_index: Optional[NonNegativeDbInt] = None
    sets: Optional[DbInt] = None
    reps: Optional[DbInt] = None
    rest_seconds: Optional[DbInt] = None
    weight: Optional[float] = None
    rpe: Optional[float] = None
    notes: Optional[str] = None

    def to_draft(self) -> ExerciseDraft:
        return ExerciseDraft(**self.model_dump())


class PostExerciseIn(TemplateExerciseIn):
    completed_sets: Optional[DbInt] = None


class MediaIn(CamelModel):
    url: str = Field(min_length=1)
    type: str = Field(min_length=1, description="image or video")
    size_bytes: Optional[DbInt] = None


class CreateTemplateRequest(CamelModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    intensity: Intensity
    duration_seconds: Optional[NonNegativeDbInt] = None
    exercises: Optional[List[TemplateExerciseIn]] = None
    tags: Optional[List[str]] = None

    def to_draft(self) -> TemplateDraft:
        return TemplateDraft(
            title=self.title,
            description=self.description,
            intensity=self.intensity,
            duration_seconds=self.duration_seconds,
            exercises=[e.to_draft() for e in self.exercises] if self.exercises is not None else None,
            tags=self.tags,
        )


class CreatePostRequest(CamelModel):
    template_id: Optional[DbInt] = None
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None
    intensity: Optional[Intensity] = None
    duration_seconds: Optional[NonNegativeDbInt] = None
    exercises: Optional[List[PostExerciseIn]] = None
    tags: Optional[List[str]] = None
    media: Optional[List[MediaIn]] = None

    @field_validator("date", mode="before")
    @classmethod
    def date_must_be_iso_string(cls, v):
        if v is not None and not isinstance(v, str):
            raise ValueError("date must be an ISO 8601 string")
        return v

    def to_draft(self) -> PostDraft:
        return PostDraft(
            template_id=self.template_id,
            title=self.title,
            description=self.description,
            date=self.date,
            intensity=self.intensity,
            duration_seconds=self.duration_seconds,
            exercises=[e.to_draft() for e in self.exercises] if self.exercises is not None else None,
            tags=self.tags,
            media=(
                [MediaDraft(url=m.url, type=m.type, size_bytes=m.size_bytes) for m in self.media]
                if self.media is not None
                else None
            ),
        )


class PageQuery(CamelModel):
    page: int = Field(default=1, ge=1, le=SQLITE_INT_MAX)
    page_size: int = Field(default=10, ge=1, le=SQLITE_INT_MAX)


# =============================================================================
# Responses
# =============================================================================


class TagOut(CamelModel):
    id: int
    name: str


class ExerciseOut(CamelModel):
    id: int
    name: str
    order_index: int
    sets: Optional[int] = None
    reps: Optional[int] = None
    rest_seconds: Optional[int] = None
    weight: Optional[float] = None
    rpe: Optional[float] = None
    notes: Optional[str] = None


class ExerciseLogOut(ExerciseOut):
    completed_sets: Optional[int] = None


class MediaOut(CamelModel):
    id: int
    url: str
    type: str
    size_bytes: Optional[int] = None


class TemplateOut(CamelModel):
    id: int
    user_id: str
    title: str
    description: Optional[str] = None
    intensity: Intensity
    duration_seconds: Optional[int] = None
    exercises: List[ExerciseOut]
    tags: List[TagOut]
    created_at: datetime
    updated_at: datetime


class PostOut(CamelModel):
    id: int
    user_id: str
    template_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    date: datetime
    intensity: Intensity
    duration_seconds: Optional[int] = None
    exercises: List[ExerciseLogOut]
    tags: List[TagOut]
    media: List[MediaOut]
    created_at: datetime
    updated_at: datetime


class PostPageOut(CamelModel):
    items: List[PostOut]
    total: int
    page: int
    page_size: int
