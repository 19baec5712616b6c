"""Remote store backed by the SQL tables."""

import logging
from functools import wraps
from pathlib import Path

import aiosqlite

from ..config import get_db_path
from ..db.repositories import (
    BodyMetricRepository,
    ExerciseRepository,
    SetRepository,
    WidgetRepository,
    WorkoutRepository,
)
from ..errors import StoreError
from ..models.metrics import BodyMetrics, Goal, MetricEntry, MetricType
from ..models.widgets import WidgetConfig
from ..models.workout import Exercise, Workout, WorkoutSet
from ..utils.metrics_utils import transform_metrics_rows, transform_widget_rows
from .base import BaseStore, StoreResult

logger = logging.getLogger(__name__)


def store_call(action: str):
    """Convert database errors raised by a store method into a failed result."""

    def decorator(f):
        @wraps(f)
        async def wrapper(*args, **kwargs) -> StoreResult:
            try:
                return await f(*args, **kwargs)
            except (aiosqlite.Error, OSError) as e:
                logger.warning("Failed to %s: %s", action, e)
                return StoreResult.failed(f"Failed to {action}: {e}")

        return wrapper

    return decorator


def _changed(rowcount: int, entity: str) -> StoreResult:
    if rowcount == 0:
        return StoreResult.failed(f"{entity} not found")
    return StoreResult.ok()


class RemoteStore(BaseStore):
    """Store for an authenticated user.

    Reads raise ``StoreError`` on failure; mutations report failures in the
    returned ``StoreResult``.
    """

    def __init__(self, user_id: str, db_path: Path | None = None):
        self.user_id = user_id
        self.db_path = db_path or get_db_path()
        self.workouts = WorkoutRepository(self.db_path)
        self.exercises = ExerciseRepository(self.db_path)
        self.sets = SetRepository(self.db_path)
        self.metrics = BodyMetricRepository(self.db_path)
        self.widgets = WidgetRepository(self.db_path)

    @property
    def source_name(self) -> str:
        return "remote"

    @property
    def is_remote(self) -> bool:
        return True

    async def load_workouts(self) -> list[Workout]:
        try:
            return await self.workouts.list_for_user(self.user_id)
        except (aiosqlite.Error, OSError) as e:
            raise StoreError(f"Failed to load workouts: {e}") from e

    async def load_metrics(self) -> BodyMetrics:
        try:
            rows = await self.metrics.list_for_user(self.user_id)
            goals = await self.metrics.list_goals(self.user_id)
        except (aiosqlite.Error, OSError) as e:
            raise StoreError(f"Failed to load metrics: {e}") from e
        return transform_metrics_rows(rows, goals)

    async def load_widgets(self) -> list[WidgetConfig]:
        try:
            rows = await self.widgets.list_for_user(self.user_id)
        except (aiosqlite.Error, OSError) as e:
            raise StoreError(f"Failed to load widgets: {e}") from e
        return transform_widget_rows(rows)

    @store_call("add workout")
    async def add_workout(self, workout: Workout) -> StoreResult:
        workout_id, id_map = await self.workouts.create(self.user_id, workout)
        return StoreResult.ok(id=workout_id, id_map=id_map)

    @store_call("update workout")
    async def update_workout(self, workout: Workout, replace_exercises: bool = False) -> StoreResult:
        changed, id_map = await self.workouts.update(
            self.user_id, workout, replace_exercises=replace_exercises
        )
        if changed == 0:
            return StoreResult.failed("Workout not found")
        return StoreResult.ok(id_map=id_map)

    @store_call("delete workout")
    async def delete_workout(self, workout_id: str) -> StoreResult:
        return _changed(await self.workouts.delete(self.user_id, workout_id), "Workout")

    @store_call("clear workouts")
    async def clear_workouts(self) -> StoreResult:
        await self.workouts.delete_all(self.user_id)
        return StoreResult.ok()

    @store_call("add exercise")
    async def add_exercise(self, workout_id: str, exercise: Exercise) -> StoreResult:
        exercise_id, id_map = await self.exercises.create(self.user_id, workout_id, exercise)
        if exercise_id is None:
            return StoreResult.failed("Workout not found")
        return StoreResult.ok(id=exercise_id, id_map=id_map)

    @store_call("update exercise")
    async def update_exercise(self, exercise: Exercise) -> StoreResult:
        return _changed(
            await self.exercises.rename(self.user_id, exercise.id, exercise.name), "Exercise"
        )

    @store_call("delete exercise")
    async def delete_exercise(self, exercise_id: str) -> StoreResult:
        return _changed(await self.exercises.delete(self.user_id, exercise_id), "Exercise")

    @store_call("add set")
    async def add_set(self, exercise_id: str, workout_set: WorkoutSet) -> StoreResult:
        set_id = await self.sets.create(self.user_id, exercise_id, workout_set)
        if set_id is None:
            return StoreResult.failed("Exercise not found")
        return StoreResult.ok(id=set_id)

    @store_call("update set")
    async def update_set(self, workout_set: WorkoutSet) -> StoreResult:
        return _changed(await self.sets.update(self.user_id, workout_set), "Set")

    @store_call("delete set")
    async def delete_set(self, set_id: str) -> StoreResult:
        return _changed(await self.sets.delete(self.user_id, set_id), "Set")

    @store_call("add metric")
    async def add_metric_entry(self, metric_type: MetricType, entry: MetricEntry) -> StoreResult:
        metric_id = await self.metrics.create(self.user_id, metric_type, entry)
        return StoreResult.ok(id=metric_id)

    @store_call("delete metric")
    async def delete_metric_entry(self, entry_id: str) -> StoreResult:
        return _changed(await self.metrics.delete(self.user_id, entry_id), "Metric entry")

    @store_call("set goal")
    async def set_goal(self, metric_type: MetricType, goal: Goal) -> StoreResult:
        await self.metrics.upsert_goal(self.user_id, metric_type, goal)
        return StoreResult.ok()

    @store_call("update widgets")
    async def save_widgets(self, widgets: list[WidgetConfig]) -> StoreResult:
        await self.widgets.replace_all(self.user_id, widgets)
        return StoreResult.ok()
