"""Data models for liftlog."""

from .metrics import BodyMetrics, BodyMetricSeries, Goal, MetricEntry, MetricType
from .widgets import WidgetConfig, WidgetType, default_widgets
from .workout import Exercise, Workout, WorkoutSet

__all__ = [
    "BodyMetrics",
    "BodyMetricSeries",
    "default_widgets",
    "Exercise",
    "Goal",
    "MetricEntry",
    "MetricType",
    "WidgetConfig",
    "WidgetType",
    "Workout",
    "WorkoutSet",
]
