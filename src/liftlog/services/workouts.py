"""Workout, exercise and set operations."""

from dataclasses import replace
from typing import Callable

from ..errors import NotFoundError, ValidationError
from ..models.workout import Exercise, Workout, WorkoutSet
from ..notifications import Notifier
from ..state.container import StateContainer
from ..stores.base import BaseStore, StoreResult
from ..sync.optimistic import Mutation, OptimisticCoordinator, Outcome, reconcile_workout_ids
from ..utils import workout_stats
from ..utils.ids import generate_id


def _unique_id(taken: set[str]) -> str:
    new_id = generate_id()
    while new_id in taken:
        new_id = generate_id()
    taken.add(new_id)
    return new_id


def _all_ids(workouts: list[Workout]) -> set[str]:
    """Every workout, exercise and set id currently in the collection."""
    ids: set[str] = set()
    for workout in workouts:
        ids.add(workout.id)
        for exercise in workout.exercises:
            ids.add(exercise.id)
            ids.update(s.id for s in exercise.sets)
    return ids


def _assign_ids(exercises: list[Exercise], taken: set[str]) -> list[Exercise]:
    """Give every exercise and set a fresh local id not found in ``taken``.

    Ids supplied by the caller are replaced, so placeholders never collide
    when server ids are folded back in.
    """
    return [
        replace(
            exercise,
            id=_unique_id(taken),
            sets=[replace(s, id=_unique_id(taken)) for s in exercise.sets],
        )
        for exercise in exercises
    ]


def _update_workout(
    workouts: list[Workout], workout_id: str, change: Callable[[Workout], Workout]
) -> list[Workout]:
    """Return a new list with one workout replaced by ``change(workout)``."""
    for index, workout in enumerate(workouts):
        if workout.id == workout_id:
            updated = list(workouts)
            updated[index] = change(workout)
            return updated
    raise NotFoundError("Workout", workout_id)


def _update_exercise(
    workout: Workout, exercise_id: str, change: Callable[[Exercise], Exercise]
) -> Workout:
    for index, exercise in enumerate(workout.exercises):
        if exercise.id == exercise_id:
            exercises = list(workout.exercises)
            exercises[index] = change(exercise)
            return workout.with_exercises(exercises)
    raise NotFoundError("Exercise", exercise_id)


class WorkoutService:
    """Optimistic operations on the session's workout collection."""

    def __init__(
        self,
        container: StateContainer[list[Workout]],
        store: BaseStore,
        notifier: Notifier,
    ):
        self.container = container
        self.store = store
        self.coordinator = OptimisticCoordinator(container, notifier)

    @property
    def workouts(self) -> list[Workout]:
        return self.container.value

    def get_workout(self, workout_id: str) -> Workout:
        for workout in self.workouts:
            if workout.id == workout_id:
                return workout
        raise NotFoundError("Workout", workout_id)

    # Workouts

    async def add_workout(self, workout: Workout) -> Outcome:
        """Add a workout with any exercises and sets it already holds."""
        staged: dict[str, Workout] = {}

        def apply(workouts: list[Workout]) -> list[Workout]:
            workout.validate()
            taken = _all_ids(workouts)
            workout_id = workout.id if workout.id and workout.id not in taken else _unique_id(taken)
            taken.add(workout_id)
            staged["workout"] = replace(
                workout, id=workout_id, exercises=_assign_ids(workout.exercises, taken)
            )
            return workouts + [staged["workout"]]

        return await self.coordinator.run(
            Mutation(
                label="add workout",
                apply=apply,
                remote=lambda: self.store.add_workout(staged["workout"]),
                reconcile=lambda state, result: self._reconcile(state, staged["workout"].id, result),
                success_title="Workout added",
                success_description="Your new workout has been added successfully.",
                local_id=lambda: staged["workout"].id,
            )
        )

    async def update_workout(
        self,
        workout_id: str,
        date: str | None = None,
        program: str | None = None,
        phase: str | None = None,
        exercises: list[Exercise] | None = None,
    ) -> Outcome:
        """Update a workout's date, program or phase.

        When ``exercises`` is given it replaces the workout's exercises and
        sets wholesale; they get fresh ids that the store may reassign.
        """
        staged: dict[str, Workout] = {}

        def apply(workouts: list[Workout]) -> list[Workout]:
            taken = _all_ids(workouts)

            def change(workout: Workout) -> Workout:
                updated = replace(
                    workout,
                    date=workout.date if date is None else date,
                    program=workout.program if program is None else program,
                    phase=workout.phase if phase is None else phase,
                )
                if exercises is not None:
                    updated = updated.with_exercises(_assign_ids(exercises, taken))
                updated.validate()
                staged["workout"] = updated
                return updated

            return _update_workout(workouts, workout_id, change)

        return await self.coordinator.run(
            Mutation(
                label="update workout",
                apply=apply,
                remote=lambda: self.store.update_workout(
                    staged["workout"], replace_exercises=exercises is not None
                ),
                reconcile=lambda state, result: self._reconcile(state, workout_id, result),
                success_title="Workout updated",
                success_description="Your workout has been updated successfully.",
            )
        )

    async def delete_workout(self, workout_id: str) -> Outcome:
        def apply(workouts: list[Workout]) -> list[Workout]:
            remaining = [w for w in workouts if w.id != workout_id]
            if len(remaining) == len(workouts):
                raise NotFoundError("Workout", workout_id)
            return remaining

        return await self.coordinator.run(
            Mutation(
                label="delete workout",
                apply=apply,
                remote=lambda: self.store.delete_workout(workout_id),
                success_title="Workout deleted",
                success_description="Your workout has been deleted successfully.",
            )
        )

    async def clear_all_workouts(self) -> Outcome:
        return await self.coordinator.run(
            Mutation(
                label="clear workouts",
                apply=lambda workouts: [],
                remote=self.store.clear_workouts,
                success_title="Workouts cleared",
                success_description="All workouts have been removed.",
            )
        )

    # Exercises

    async def add_exercise(
        self, workout_id: str, name: str, sets: list[WorkoutSet] | None = None
    ) -> Outcome:
        staged: dict[str, Exercise] = {}

        def apply(workouts: list[Workout]) -> list[Workout]:
            taken = _all_ids(workouts)

            def change(workout: Workout) -> Workout:
                if not name.strip():
                    raise ValidationError("Exercise name is required")
                new_exercise = Exercise(name=name.strip(), sets=list(sets or []))
                exercise = _assign_ids([new_exercise], taken)[0]
                for s in exercise.sets:
                    s.validate()
                staged["exercise"] = exercise
                return workout.with_exercises(workout.exercises + [exercise])

            return _update_workout(workouts, workout_id, change)

        return await self.coordinator.run(
            Mutation(
                label="add exercise",
                apply=apply,
                remote=lambda: self.store.add_exercise(workout_id, staged["exercise"]),
                reconcile=lambda state, result: self._reconcile(state, staged["exercise"].id, result),
                success_title="Exercise added",
                success_description=f"{name.strip()} has been added to your workout.",
                local_id=lambda: staged["exercise"].id,
            )
        )

    async def update_exercise(self, workout_id: str, exercise_id: str, name: str) -> Outcome:
        staged: dict[str, Exercise] = {}

        def rename(exercise: Exercise) -> Exercise:
            if not name.strip():
                raise ValidationError("Exercise name is required")
            staged["exercise"] = replace(exercise, name=name.strip())
            return staged["exercise"]

        return await self.coordinator.run(
            Mutation(
                label="update exercise",
                apply=lambda workouts: _update_workout(
                    workouts, workout_id, lambda w: _update_exercise(w, exercise_id, rename)
                ),
                remote=lambda: self.store.update_exercise(staged["exercise"]),
                success_title="Exercise updated",
                success_description="Your exercise has been renamed.",
            )
        )

    async def delete_exercise(self, workout_id: str, exercise_id: str) -> Outcome:
        def change(workout: Workout) -> Workout:
            workout.find_exercise(exercise_id)
            return workout.with_exercises([e for e in workout.exercises if e.id != exercise_id])

        return await self.coordinator.run(
            Mutation(
                label="delete exercise",
                apply=lambda workouts: _update_workout(workouts, workout_id, change),
                remote=lambda: self.store.delete_exercise(exercise_id),
                success_title="Exercise deleted",
                success_description="The exercise has been removed from your workout.",
            )
        )

    # Sets

    async def add_set(self, workout_id: str, exercise_id: str, reps: int, weight: float) -> Outcome:
        staged: dict[str, WorkoutSet] = {}

        def apply(workouts: list[Workout]) -> list[Workout]:
            taken = _all_ids(workouts)

            def add(exercise: Exercise) -> Exercise:
                new_set = WorkoutSet(id=_unique_id(taken), reps=reps, weight=weight)
                new_set.validate()
                staged["set"] = new_set
                return exercise.with_sets(exercise.sets + [new_set])

            return _update_workout(
                workouts, workout_id, lambda w: _update_exercise(w, exercise_id, add)
            )

        return await self.coordinator.run(
            Mutation(
                label="add set",
                apply=apply,
                remote=lambda: self.store.add_set(exercise_id, staged["set"]),
                reconcile=lambda state, result: self._reconcile(state, staged["set"].id, result),
                success_title="Set added",
                success_description=f"{reps} reps at {weight:g} lbs recorded.",
                local_id=lambda: staged["set"].id,
            )
        )

    async def update_set(
        self,
        workout_id: str,
        exercise_id: str,
        set_id: str,
        reps: int | None = None,
        weight: float | None = None,
    ) -> Outcome:
        staged: dict[str, WorkoutSet] = {}

        def change(exercise: Exercise) -> Exercise:
            current = exercise.find_set(set_id)
            updated = replace(
                current,
                reps=current.reps if reps is None else reps,
                weight=current.weight if weight is None else weight,
            )
            updated.validate()
            staged["set"] = updated
            return exercise.with_sets([updated if s.id == set_id else s for s in exercise.sets])

        return await self.coordinator.run(
            Mutation(
                label="update set",
                apply=lambda workouts: _update_workout(
                    workouts, workout_id, lambda w: _update_exercise(w, exercise_id, change)
                ),
                remote=lambda: self.store.update_set(staged["set"]),
                success_title="Set updated",
                success_description="Your set has been updated.",
            )
        )

    async def delete_set(self, workout_id: str, exercise_id: str, set_id: str) -> Outcome:
        def remove(exercise: Exercise) -> Exercise:
            exercise.find_set(set_id)
            return exercise.with_sets([s for s in exercise.sets if s.id != set_id])

        return await self.coordinator.run(
            Mutation(
                label="delete set",
                apply=lambda workouts: _update_workout(
                    workouts, workout_id, lambda w: _update_exercise(w, exercise_id, remove)
                ),
                remote=lambda: self.store.delete_set(set_id),
                success_title="Set deleted",
                success_description="The set has been removed.",
            )
        )

    # Derived statistics

    def stats(self) -> workout_stats.WorkoutStats:
        return workout_stats.calculate_workout_stats(self.workouts)

    def chart_data(self) -> workout_stats.ChartData:
        return workout_stats.prepare_chart_data(self.workouts)

    def previous_exercise(self, exercise_name: str) -> Exercise | None:
        return workout_stats.find_previous_exercise(exercise_name, self.workouts)

    def is_personal_record(self, exercise_name: str) -> bool:
        return workout_stats.is_latest_personal_record(exercise_name, self.workouts)

    def is_personal_record_in(self, workout: Workout, exercise: Exercise) -> bool:
        """Whether ``exercise`` beat the session before ``workout``."""
        previous = workout_stats.find_previous_exercise(
            exercise.name, self.workouts, before=workout
        )
        return workout_stats.is_personal_record(exercise, previous)

    # Helpers

    def _reconcile(self, workouts: list[Workout], placeholder: str, result: StoreResult) -> list[Workout]:
        id_map = dict(result.id_map)
        if result.id and result.id != placeholder:
            id_map[placeholder] = result.id
        return reconcile_workout_ids(workouts, id_map)

