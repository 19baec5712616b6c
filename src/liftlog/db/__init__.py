"""Database layer for liftlog."""

from .engine import connect, init_db
from .repositories import (
    BodyMetricRepository,
    ExerciseRepository,
    SetRepository,
    WidgetRepository,
    WorkoutRepository,
)

__all__ = [
    "BodyMetricRepository",
    "connect",
    "ExerciseRepository",
    "init_db",
    "SetRepository",
    "WidgetRepository",
    "WorkoutRepository",
]
