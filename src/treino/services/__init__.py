"""Domain services for treino."""

from .workouts import WorkoutService

__all__ = ["WorkoutService"]
