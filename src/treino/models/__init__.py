"""Data models for treino."""

from .workout import (
    DEFAULT_POST_TITLE,
    ExerciseDraft,
    ExerciseLog,
    ExerciseSpec,
    Intensity,
    MediaAttachment,
    MediaDraft,
    PostDraft,
    PostPage,
    Tag,
    TemplateDraft,
    WorkoutPost,
    WorkoutTemplate,
)

__all__ = [
    "DEFAULT_POST_TITLE",
    "ExerciseDraft",
    "ExerciseLog",
    "ExerciseSpec",
    "Intensity",
    "MediaAttachment",
    "MediaDraft",
    "PostDraft",
    "PostPage",
    "Tag",
    "TemplateDraft",
    "WorkoutPost",
    "WorkoutTemplate",
]
