"""Application services for liftlog."""

from .metrics import MetricsService
from .tracker import Tracker
from .workouts import WorkoutService

__all__ = ["MetricsService", "Tracker", "WorkoutService"]
