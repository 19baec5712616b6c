"""Derived workout statistics.

All functions here are pure: they never mutate their inputs and are
recomputed from scratch on every call.
"""

from dataclasses import dataclass, field

from ..models.workout import Exercise, Workout, WorkoutSet


@dataclass
class WorkoutStats:
    """Summary numbers shown on the dashboard."""

    total_workouts: int = 0
    total_exercises: int = 0
    total_sets: int = 0
    most_frequent_exercise: tuple[str, int] = ("None", 0)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        name, count = self.most_frequent_exercise
        return {
            "total_workouts": self.total_workouts,
            "total_exercises": self.total_exercises,
            "total_sets": self.total_sets,
            "most_frequent_exercise": {"name": name, "count": count},
        }


@dataclass
class ExerciseProgress:
    """One point in an exercise's history."""

    date: str
    max_weight: float
    volume_load: float

    def to_dict(self) -> dict:
        return {"date": self.date, "max_weight": self.max_weight, "volume_load": self.volume_load}


@dataclass
class ChartData:
    """Per-exercise chronological series."""

    series: dict[str, list[ExerciseProgress]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {name: [p.to_dict() for p in points] for name, points in self.series.items()}


def calculate_set_volume(workout_set: WorkoutSet) -> float:
    """Volume of a single set (reps x weight)."""
    return workout_set.reps * workout_set.weight


def calculate_exercise_volume(exercise: Exercise) -> float:
    return sum(calculate_set_volume(s) for s in exercise.sets)


def calculate_workout_volume(workout: Workout) -> float:
    return sum(calculate_exercise_volume(e) for e in workout.exercises)


def get_max_weight(exercise: Exercise) -> float:
    """Heaviest weight used for an exercise, 0 when it has no sets."""
    if not exercise.sets:
        return 0
    return max(s.weight for s in exercise.sets)


def calculate_workout_stats(workouts: list[Workout]) -> WorkoutStats:
    """Calculate overall workout statistics.

    The most frequent exercise is the name with the highest occurrence
    count; on a tie the name seen first wins.
    """
    if not workouts:
        return WorkoutStats()

    total_exercises = sum(len(w.exercises) for w in workouts)
    total_sets = sum(len(e.sets) for w in workouts for e in w.exercises)

    exercise_counts: dict[str, int] = {}
    for workout in workouts:
        for exercise in workout.exercises:
            exercise_counts[exercise.name] = exercise_counts.get(exercise.name, 0) + 1

    most_frequent = ("None", 0)
    for name, count in exercise_counts.items():
        if count > most_frequent[1]:
            most_frequent = (name, count)

    return WorkoutStats(
        total_workouts=len(workouts),
        total_exercises=total_exercises,
        total_sets=total_sets,
        most_frequent_exercise=most_frequent,
    )


def prepare_chart_data(workouts: list[Workout]) -> ChartData:
    """Build a date-sorted max weight / volume series for every exercise."""
    series: dict[str, list[tuple[Workout, ExerciseProgress]]] = {}

    for workout in workouts:
        for exercise in workout.exercises:
            series.setdefault(exercise.name, []).append(
                (
                    workout,
                    ExerciseProgress(
                        date=workout.date,
                        max_weight=get_max_weight(exercise),
                        volume_load=calculate_exercise_volume(exercise),
                    ),
                )
            )

    return ChartData(
        series={
            name: [point for _, point in sorted(points, key=lambda p: p[0].performed_at)]
            for name, points in series.items()
        }
    )


def sort_workouts_newest_first(workouts: list[Workout]) -> list[Workout]:
    return sorted(workouts, key=lambda w: w.performed_at, reverse=True)


def find_previous_exercise(
    exercise_name: str, workouts: list[Workout], before: Workout | None = None
) -> Exercise | None:
    """Find the exercise in the most recent session prior to the current one.

    The current session is ``before`` when given, otherwise the newest
    workout that contains the exercise.
    """
    ordered = sort_workouts_newest_first(workouts)
    if before is None:
        current_seen = False
    else:
        # Only sessions listed after the current one count as earlier
        ids = [w.id for w in ordered]
        if before.id in ids:
            ordered = ordered[ids.index(before.id) + 1 :]
        else:
            ordered = [w for w in ordered if w.performed_at < before.performed_at]
        current_seen = True

    for workout in ordered:
        exercise = _find_by_name(workout, exercise_name)
        if exercise is None:
            continue
        if current_seen:
            return exercise
        current_seen = True
    return None


def is_personal_record(current: Exercise, previous: Exercise | None) -> bool:
    """True when the current max weight beats the previous session's."""
    if previous is None:
        return False
    return get_max_weight(current) > get_max_weight(previous)


def is_latest_personal_record(exercise_name: str, workouts: list[Workout]) -> bool:
    """Check whether the newest session containing an exercise set a record."""
    for workout in sort_workouts_newest_first(workouts):
        current = _find_by_name(workout, exercise_name)
        if current is not None:
            return is_personal_record(
                current, find_previous_exercise(exercise_name, workouts, before=workout)
            )
    return False


def _find_by_name(workout: Workout, exercise_name: str) -> Exercise | None:
    return next((e for e in workout.exercises if e.name == exercise_name), None)
