"""CLI commands for liftlog."""

from .init import init
from .metrics import metrics
from .serve import serve
from .stats import stats
from .widgets import widgets
from .workouts import exercises, sets, workouts

__all__ = [
    "exercises",
    "init",
    "metrics",
    "serve",
    "sets",
    "stats",
    "widgets",
    "workouts",
]
