"""Manual workout entry via interactive prompts."""

from datetime import date

import questionary
from questionary import Style

from ...models.workout import Exercise, Workout, WorkoutSet
from ...utils.units import kg_to_lbs

# Custom style for prompts
custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("selected", "fg:#cc5454"),
        ("separator", "fg:#cc5454"),
        ("instruction", ""),
        ("text", ""),
    ]
)


def _positive_int(text: str) -> bool | str:
    try:
        return int(text) > 0 or "Reps must be greater than zero"
    except ValueError:
        return "Enter a whole number"


def _non_negative_float(text: str) -> bool | str:
    try:
        return float(text) >= 0 or "Weight cannot be negative"
    except ValueError:
        return "Enter a number"


class ManualWorkoutClient:
    """Interactive prompts for logging a workout."""

    def __init__(self, recent_exercises: list[str] | None = None):
        self.recent_exercises = recent_exercises or []

    async def collect_workout(self) -> Workout | None:
        """Prompt for a workout; returns None if the user aborts."""
        print("\n=== Log Workout ===\n")

        workout_date = await questionary.text(
            "Date (YYYY-MM-DD):",
            default=date.today().isoformat(),
            style=custom_style,
        ).ask_async()
        if workout_date is None:
            return None

        program = await questionary.text("Program:", default="", style=custom_style).ask_async()
        phase = await questionary.text("Phase:", default="", style=custom_style).ask_async()

        exercises: list[Exercise] = []
        while True:
            exercise = await self._collect_exercise()
            if exercise is None:
                break
            exercises.append(exercise)

            more = await questionary.confirm(
                "Add another exercise?", default=True, style=custom_style
            ).ask_async()
            if not more:
                break

        return Workout(
            date=workout_date,
            program=program or "",
            phase=phase or "",
            exercises=exercises,
        )

    async def _collect_exercise(self) -> Exercise | None:
        """Prompt for one exercise and its sets."""
        if self.recent_exercises:
            name = await questionary.autocomplete(
                "Exercise name:",
                choices=self.recent_exercises,
                style=custom_style,
            ).ask_async()
        else:
            name = await questionary.text("Exercise name:", style=custom_style).ask_async()

        if not name or not name.strip():
            return None

        sets: list[WorkoutSet] = []
        print("\nEnter weight in kg. It is stored in pounds.\n")
        while True:
            reps = await questionary.text(
                f"Set {len(sets) + 1} reps:", validate=_positive_int, style=custom_style
            ).ask_async()
            if reps is None:
                break
            weight = await questionary.text(
                f"Set {len(sets) + 1} weight (kg):",
                default="0",
                validate=_non_negative_float,
                style=custom_style,
            ).ask_async()
            if weight is None:
                break
            sets.append(WorkoutSet(reps=int(reps), weight=kg_to_lbs(float(weight))))

            more = await questionary.confirm(
                "Add another set?", default=True, style=custom_style
            ).ask_async()
            if not more:
                break

        return Exercise(name=name.strip(), sets=sets)
