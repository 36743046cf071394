"""Database layer for treino."""

from .engine import connect, get_db_path, init_db, transaction
from .repositories import (
    TagRepository,
    UserRepository,
    WorkoutPostRepository,
    WorkoutTemplateRepository,
)

__all__ = [
    "connect",
    "get_db_path",
    "init_db",
    "TagRepository",
    "transaction",
    "UserRepository",
    "WorkoutPostRepository",
    "WorkoutTemplateRepository",
]
