"""Interactive manual entry."""

from .client import ManualWorkoutClient

__all__ = ["ManualWorkoutClient"]
