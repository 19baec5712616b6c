"""Workout, exercise and set routes."""

from datetime import date as date_type

from fastapi import APIRouter, Depends, Form

from ...errors import NotFoundError
from ...models.workout import Workout
from ...services.tracker import Tracker
from ..deps import get_tracker, outcome_response

router = APIRouter(prefix="/workouts", tags=["workouts"])


def _workouts(tracker: Tracker) -> list[dict]:
    return [w.to_dict() for w in tracker.workouts.workouts]


@router.get("")
async def list_workouts(tracker: Tracker = Depends(get_tracker)):
    """All workouts for the session."""
    return {"workouts": _workouts(tracker), "source": tracker.store.source_name}


@router.get("/{workout_id}")
async def get_workout(workout_id: str, tracker: Tracker = Depends(get_tracker)):
    """One workout with its exercises and sets."""
    try:
        workout = tracker.workouts.get_workout(workout_id)
    except NotFoundError as e:
        return {"error": str(e)}
    return {"workout": workout.to_dict()}


@router.post("")
async def add_workout(
    date: str = Form(None),
    program: str = Form(""),
    phase: str = Form(""),
    tracker: Tracker = Depends(get_tracker),
):
    """Create an empty workout."""
    workout = Workout(date=date or date_type.today().isoformat(), program=program, phase=phase)
    outcome = await tracker.workouts.add_workout(workout)
    return outcome_response(outcome, "workouts", _workouts(tracker))


@router.put("/{workout_id}")
async def update_workout(
    workout_id: str,
    date: str | None = Form(None),
    program: str | None = Form(None),
    phase: str | None = Form(None),
    tracker: Tracker = Depends(get_tracker),
):
    """Change a workout's date, program or phase."""
    outcome = await tracker.workouts.update_workout(
        workout_id, date=date, program=program, phase=phase
    )
    return outcome_response(outcome, "workouts", _workouts(tracker))


@router.delete("/{workout_id}")
async def delete_workout(workout_id: str, tracker: Tracker = Depends(get_tracker)):
    outcome = await tracker.workouts.delete_workout(workout_id)
    return outcome_response(outcome, "workouts", _workouts(tracker))


@router.delete("")
async def clear_workouts(tracker: Tracker = Depends(get_tracker)):
    """Delete every workout for the session."""
    outcome = await tracker.workouts.clear_all_workouts()
    return outcome_response(outcome, "workouts", _workouts(tracker))


# Exercises


@router.post("/{workout_id}/exercises")
async def add_exercise(
    workout_id: str, name: str = Form(...), tracker: Tracker = Depends(get_tracker)
):
    outcome = await tracker.workouts.add_exercise(workout_id, name)
    return outcome_response(outcome, "workouts", _workouts(tracker))


@router.put("/{workout_id}/exercises/{exercise_id}")
async def update_exercise(
    workout_id: str,
    exercise_id: str,
    name: str = Form(...),
    tracker: Tracker = Depends(get_tracker),
):
    outcome = await tracker.workouts.update_exercise(workout_id, exercise_id, name)
    return outcome_response(outcome, "workouts", _workouts(tracker))


@router.delete("/{workout_id}/exercises/{exercise_id}")
async def delete_exercise(
    workout_id: str, exercise_id: str, tracker: Tracker = Depends(get_tracker)
):
    outcome = await tracker.workouts.delete_exercise(workout_id, exercise_id)
    return outcome_response(outcome, "workouts", _workouts(tracker))


# Sets


@router.post("/{workout_id}/exercises/{exercise_id}/sets")
async def add_set(
    workout_id: str,
    exercise_id: str,
    reps: int = Form(...),
    weight: float = Form(0.0),
    tracker: Tracker = Depends(get_tracker),
):
    """Add a set; weight is in pounds."""
    outcome = await tracker.workouts.add_set(workout_id, exercise_id, reps, weight)
    return outcome_response(outcome, "workouts", _workouts(tracker))


@router.put("/{workout_id}/exercises/{exercise_id}/sets/{set_id}")
async def update_set(
    workout_id: str,
    exercise_id: str,
    set_id: str,
    reps: int | None = Form(None),
    weight: float | None = Form(None),
    tracker: Tracker = Depends(get_tracker),
):
    outcome = await tracker.workouts.update_set(
        workout_id, exercise_id, set_id, reps=reps, weight=weight
    )
    return outcome_response(outcome, "workouts", _workouts(tracker))


@router.delete("/{workout_id}/exercises/{exercise_id}/sets/{set_id}")
async def delete_set(
    workout_id: str, exercise_id: str, set_id: str, tracker: Tracker = Depends(get_tracker)
):
    outcome = await tracker.workouts.delete_set(workout_id, exercise_id, set_id)
    return outcome_response(outcome, "workouts", _workouts(tracker))
