"""Pytest configuration and fixtures."""

from datetime import datetime
from pathlib import Path

import pytest

from liftlog.models.metrics import BodyMetrics
from liftlog.models.widgets import default_widgets
from liftlog.models.workout import Exercise, Workout, WorkoutSet
from liftlog.notifications import NotificationCenter
from liftlog.state.container import StateContainer
from liftlog.stores.base import BaseStore, StoreResult
from liftlog.stores.local import LocalStorage
from liftlog.stores.sample_data import create_sample_workouts


def _nested_ids(exercises):
    return [e.id for e in exercises] + [s.id for e in exercises for s in e.sets]


class FakeStore(BaseStore):
    """In-memory store with scriptable failures and server ids.

    Set ``fail`` to make every mutation return a failed result, or
    ``raise_error`` to make it raise. Created entities get ids
    ``srv-1``, ``srv-2``... unless ``assign_ids`` is False.
    """

    def __init__(self, workouts=None, metrics=None, widgets=None, assign_ids: bool = True):
        self.workouts = workouts or []
        self.metrics = metrics or BodyMetrics()
        self.widgets = widgets or default_widgets()
        self.assign_ids = assign_ids
        self.fail: str | None = None
        self.raise_error: Exception | None = None
        self.calls: list[tuple] = []
        self._counter = 0

    @property
    def source_name(self) -> str:
        return "fake"

    def _next_id(self) -> str:
        self._counter += 1
        return f"srv-{self._counter}"

    async def _result(self, name: str, *args, created: bool = False, nested: list[str] | None = None):
        self.calls.append((name, *args))
        if self.raise_error is not None:
            raise self.raise_error
        if self.fail is not None:
            return StoreResult.failed(self.fail)
        if not (created and self.assign_ids):
            return StoreResult.ok()
        return StoreResult.ok(
            id=self._next_id(), id_map={old: self._next_id() for old in nested or []}
        )

    async def load_workouts(self):
        return self.workouts

    async def load_metrics(self):
        return self.metrics

    async def load_widgets(self):
        return self.widgets

    async def add_workout(self, workout):
        return await self._result(
            "add_workout", workout, created=True, nested=_nested_ids(workout.exercises)
        )

    async def update_workout(self, workout, replace_exercises=False):
        result = await self._result("update_workout", workout)
        if result.success and replace_exercises and self.assign_ids:
            result.id_map = {old: self._next_id() for old in _nested_ids(workout.exercises)}
        return result

    async def delete_workout(self, workout_id):
        return await self._result("delete_workout", workout_id)

    async def clear_workouts(self):
        return await self._result("clear_workouts")

    async def add_exercise(self, workout_id, exercise):
        return await self._result(
            "add_exercise", workout_id, exercise, created=True, nested=[s.id for s in exercise.sets]
        )

    async def update_exercise(self, exercise):
        return await self._result("update_exercise", exercise)

    async def delete_exercise(self, exercise_id):
        return await self._result("delete_exercise", exercise_id)

    async def add_set(self, exercise_id, workout_set):
        return await self._result("add_set", exercise_id, workout_set, created=True)

    async def update_set(self, workout_set):
        return await self._result("update_set", workout_set)

    async def delete_set(self, set_id):
        return await self._result("delete_set", set_id)

    async def add_metric_entry(self, metric_type, entry):
        return await self._result("add_metric_entry", metric_type, entry, created=True)

    async def delete_metric_entry(self, entry_id):
        return await self._result("delete_metric_entry", entry_id)

    async def set_goal(self, metric_type, goal):
        return await self._result("set_goal", metric_type, goal)

    async def save_widgets(self, widgets):
        return await self._result("save_widgets", widgets)


@pytest.fixture
def sample_workouts():
    """Two dated workouts with stable ids."""
    return [
        Workout(
            id="w1",
            date="2024-01-01",
            program="MAPS Anabolic",
            phase="Phase 1",
            exercises=[
                Exercise(
                    id="e1",
                    name="Bench Press",
                    sets=[
                        WorkoutSet(id="s1", reps=8, weight=135),
                        WorkoutSet(id="s2", reps=6, weight=155),
                    ],
                ),
                Exercise(id="e2", name="Squat", sets=[WorkoutSet(id="s3", reps=5, weight=225)]),
            ],
        ),
        Workout(
            id="w2",
            date="2024-01-08",
            exercises=[
                Exercise(
                    id="e3",
                    name="Bench Press",
                    sets=[WorkoutSet(id="s4", reps=5, weight=165)],
                ),
            ],
        ),
    ]


@pytest.fixture
def generated_samples():
    """The built-in sample workouts, anchored to a fixed day."""
    return create_sample_workouts(today=datetime(2024, 3, 15, 9, 0))


@pytest.fixture
def notifications():
    return NotificationCenter()


@pytest.fixture
def workouts_state(sample_workouts):
    return StateContainer(sample_workouts, "workouts")


@pytest.fixture
def fake_store(sample_workouts):
    return FakeStore(workouts=sample_workouts)


@pytest.fixture
def local_storage(tmp_path) -> LocalStorage:
    return LocalStorage(tmp_path / "local")


@pytest.fixture
def db_path(tmp_path) -> Path:
    return tmp_path / "test.db"


@pytest.fixture
def store_factory():
    """Build FakeStore instances inside a test."""
    return FakeStore
