"""Local fallback store used when no user session exists."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable

from ..errors import ValidationError
from ..models.metrics import BodyMetrics, Goal, MetricEntry, MetricType
from ..models.widgets import WidgetConfig, default_widgets
from ..models.workout import Exercise, Workout, WorkoutSet, parse_date
from ..state.container import StateContainer
from ..utils.metrics_utils import transform_widget_rows
from .base import BaseStore, StoreResult
from .sample_data import create_sample_workouts

logger = logging.getLogger(__name__)

WORKOUTS_KEY = "workouts"
METRICS_KEY = "bodyMetrics"
WIDGETS_KEY = "widgets"


class LocalStorage:
    """Durable key-value storage, one JSON document per key."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        """Overwrite the value for ``key`` atomically."""
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, self._path(key))
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class LocalFallbackStore(BaseStore):
    """Store backed by local storage.

    Locally generated ids are authoritative, so every mutation succeeds
    without returning an id. Persistence happens by mirroring the attached
    state containers on every change.
    """

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    @property
    def source_name(self) -> str:
        return "local"

    def attach(self, key: str, container: StateContainer, serialize: Callable[[Any], Any]) -> Callable[[], None]:
        """Mirror ``container`` to ``key`` whenever it changes."""

        def mirror(value: Any) -> None:
            try:
                self.storage.set_item(key, json.dumps(serialize(value)))
            except OSError:
                logger.exception("Failed to write %s to local storage", key)

        return container.subscribe(mirror)

    def _read(self, key: str) -> Any | None:
        raw = self.storage.get_item(key)
        if raw is None:
            return None
        return json.loads(raw)

    async def load_workouts(self) -> list[Workout]:
        try:
            data = self._read(WORKOUTS_KEY)
            if data is not None:
                workouts = [Workout.from_dict(w) for w in data]
                for workout in workouts:
                    parse_date(workout.date)
                return workouts
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError, ValidationError) as e:
            logger.warning("Stored workouts could not be parsed, using sample data: %s", e)
        return create_sample_workouts()

    async def load_metrics(self) -> BodyMetrics:
        try:
            data = self._read(METRICS_KEY)
            if data is not None:
                return BodyMetrics.from_dict(data)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Stored body metrics could not be parsed: %s", e)
        return BodyMetrics()

    async def load_widgets(self) -> list[WidgetConfig]:
        try:
            data = self._read(WIDGETS_KEY)
            if data is not None:
                return transform_widget_rows(data)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Stored widgets could not be parsed: %s", e)
        return default_widgets()

    async def add_workout(self, workout: Workout) -> StoreResult:
        return StoreResult.ok()

    async def update_workout(self, workout: Workout, replace_exercises: bool = False) -> StoreResult:
        return StoreResult.ok()

    async def delete_workout(self, workout_id: str) -> StoreResult:
        return StoreResult.ok()

    async def clear_workouts(self) -> StoreResult:
        return StoreResult.ok()

    async def add_exercise(self, workout_id: str, exercise: Exercise) -> StoreResult:
        return StoreResult.ok()

    async def update_exercise(self, exercise: Exercise) -> StoreResult:
        return StoreResult.ok()

    async def delete_exercise(self, exercise_id: str) -> StoreResult:
        return StoreResult.ok()

    async def add_set(self, exercise_id: str, workout_set: WorkoutSet) -> StoreResult:
        return StoreResult.ok()

    async def update_set(self, workout_set: WorkoutSet) -> StoreResult:
        return StoreResult.ok()

    async def delete_set(self, set_id: str) -> StoreResult:
        return StoreResult.ok()

    async def add_metric_entry(self, metric_type: MetricType, entry: MetricEntry) -> StoreResult:
        return StoreResult.ok()

    async def delete_metric_entry(self, entry_id: str) -> StoreResult:
        return StoreResult.ok()

    async def set_goal(self, metric_type: MetricType, goal: Goal) -> StoreResult:
        return StoreResult.ok()

    async def save_widgets(self, widgets: list[WidgetConfig]) -> StoreResult:
        return StoreResult.ok()
