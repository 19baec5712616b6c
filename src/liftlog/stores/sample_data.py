"""Sample workouts shown on first run without an account."""

from datetime import datetime, timedelta

from ..models.workout import Exercise, Workout, WorkoutSet
from ..utils.ids import generate_id

SAMPLE_PROGRAM = "MAPS Anabolic"
SAMPLE_PHASE = "Phase 1"


def _exercise(name: str, sets: list[tuple[int, float]]) -> Exercise:
    return Exercise(
        id=generate_id(),
        name=name,
        sets=[WorkoutSet(id=generate_id(), reps=reps, weight=weight) for reps, weight in sets],
    )


def _workout(date: datetime, exercises: list[Exercise]) -> Workout:
    return Workout(
        id=generate_id(),
        date=date.isoformat(),
        program=SAMPLE_PROGRAM,
        phase=SAMPLE_PHASE,
        exercises=exercises,
    )


def create_sample_workouts(today: datetime | None = None) -> list[Workout]:
    """Three sample workouts spanning the last week."""
    today = today or datetime.now()
    yesterday = today - timedelta(days=1)
    last_week = today - timedelta(days=7)

    return [
        _workout(
            last_week,
            [
                _exercise("Bench Press", [(8, 135), (8, 145), (6, 155)]),
                _exercise("Squat", [(8, 185), (8, 205), (6, 225)]),
            ],
        ),
        _workout(
            yesterday,
            [
                _exercise("Bench Press", [(8, 145), (6, 155), (5, 165)]),
                _exercise("Pull-up", [(8, 0), (8, 0), (7, 0)]),
            ],
        ),
        _workout(
            today,
            [
                _exercise("Squat", [(8, 205), (8, 225), (6, 245)]),
                _exercise("Deadlift", [(5, 225), (5, 245), (3, 265)]),
            ],
        ),
    ]
