"""Derived statistics routes."""

from fastapi import APIRouter, Depends

from ...services.tracker import Tracker
from ..deps import get_tracker

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/summary")
async def summary(tracker: Tracker = Depends(get_tracker)):
    """Dashboard totals."""
    return tracker.workouts.stats().to_dict()


@router.get("/chart")
async def chart(tracker: Tracker = Depends(get_tracker)):
    """Per-exercise max weight and volume over time."""
    return {"series": tracker.workouts.chart_data().to_dict()}


@router.get("/personal-record/{exercise_name}")
async def personal_record(exercise_name: str, tracker: Tracker = Depends(get_tracker)):
    """Whether the newest session of an exercise beat the one before it."""
    previous = tracker.workouts.previous_exercise(exercise_name)
    return {
        "exercise": exercise_name,
        "is_personal_record": tracker.workouts.is_personal_record(exercise_name),
        "previous": previous.to_dict() if previous else None,
    }
