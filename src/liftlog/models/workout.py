"""Workout data models."""

from dataclasses import dataclass, field, replace
from datetime import datetime

from ..errors import NotFoundError, ValidationError


@dataclass
class WorkoutSet:
    """One set of repetitions at a given weight.

    Weight is stored in pounds.
    """

    reps: int
    weight: float
    id: str = ""

    def validate(self) -> None:
        """Check the set can be submitted."""
        if self.reps <= 0:
            raise ValidationError("Reps must be greater than zero")
        if self.weight < 0:
            raise ValidationError("Weight cannot be negative")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"id": self.id, "reps": self.reps, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutSet":
        """Create from dictionary."""
        return cls(
            id=str(data.get("id", "")),
            reps=int(data["reps"]),
            weight=float(data["weight"]),
        )


@dataclass
class Exercise:
    """A named movement performed within a workout."""

    name: str
    sets: list[WorkoutSet] = field(default_factory=list)
    id: str = ""

    def find_set(self, set_id: str) -> WorkoutSet:
        for s in self.sets:
            if s.id == set_id:
                return s
        raise NotFoundError("Set", set_id)

    def with_sets(self, sets: list[WorkoutSet]) -> "Exercise":
        """Return a copy of this exercise holding a new set list."""
        return replace(self, sets=list(sets))

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "sets": [s.to_dict() for s in self.sets],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Exercise":
        """Create from dictionary."""
        return cls(
            id=str(data.get("id", "")),
            name=data["name"],
            sets=[WorkoutSet.from_dict(s) for s in data.get("sets", [])],
        )


@dataclass
class Workout:
    """A logged training session."""

    date: str
    program: str = ""
    phase: str = ""
    exercises: list[Exercise] = field(default_factory=list)
    id: str = ""

    @property
    def performed_at(self) -> datetime:
        """Parsed workout date used for ordering."""
        return parse_date(self.date)

    def find_exercise(self, exercise_id: str) -> Exercise:
        for exercise in self.exercises:
            if exercise.id == exercise_id:
                return exercise
        raise NotFoundError("Exercise", exercise_id)

    def with_exercises(self, exercises: list[Exercise]) -> "Workout":
        """Return a copy of this workout holding a new exercise list."""
        return replace(self, exercises=list(exercises))

    def validate(self) -> None:
        """Check the workout can be submitted."""
        if not self.date:
            raise ValidationError("Workout date is required")
        parse_date(self.date)
        for exercise in self.exercises:
            if not exercise.name.strip():
                raise ValidationError("Exercise name is required")
            for s in exercise.sets:
                s.validate()

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "date": self.date,
            "program": self.program,
            "phase": self.phase,
            "exercises": [e.to_dict() for e in self.exercises],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Workout":
        """Create from dictionary."""
        return cls(
            id=str(data.get("id", "")),
            date=data["date"],
            program=data.get("program", ""),
            phase=data.get("phase", ""),
            exercises=[Exercise.from_dict(e) for e in data.get("exercises", [])],
        )


def parse_date(value: str) -> datetime:
    """Parse an ISO date or datetime string.

    A trailing ``Z`` is accepted and timezone information is dropped so
    that dates from different sources compare cleanly.
    """
    if value.endswith("Z"):
        value = value[:-1]
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value}") from e
    return parsed.replace(tzinfo=None)
