"""Store contract shared by the remote backend and the local fallback."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from ..models.metrics import BodyMetrics, Goal, MetricEntry, MetricType
from ..models.widgets import WidgetConfig
from ..models.workout import Exercise, Workout, WorkoutSet


@dataclass
class StoreResult:
    """Outcome of a store call.

    ``id`` is the authoritative identifier of a created entity. ``id_map``
    maps placeholder ids of nested entities created in the same call to
    their authoritative ids.
    """

    success: bool
    error: str | None = None
    id: str | None = None
    id_map: dict[str, str] = field(default_factory=dict)

    @classmethod
    def ok(cls, id: str | None = None, id_map: dict[str, str] | None = None) -> "StoreResult":
        return cls(success=True, id=id, id_map=id_map or {})

    @classmethod
    def failed(cls, error: str) -> "StoreResult":
        return cls(success=False, error=error)


class BaseStore(ABC):
    """Base class for stores.

    Every mutating call returns a ``StoreResult``; failures are reported in
    the result rather than raised.
    """

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return the name of this store."""
        pass

    @property
    def is_remote(self) -> bool:
        return False

    # Reads

    @abstractmethod
    async def load_workouts(self) -> list[Workout]:
        pass

    @abstractmethod
    async def load_metrics(self) -> BodyMetrics:
        pass

    @abstractmethod
    async def load_widgets(self) -> list[WidgetConfig]:
        pass

    # Workouts

    @abstractmethod
    async def add_workout(self, workout: Workout) -> StoreResult:
        pass

    @abstractmethod
    async def update_workout(self, workout: Workout, replace_exercises: bool = False) -> StoreResult:
        """Save workout fields, and the nested exercises when ``replace_exercises``."""
        pass

    @abstractmethod
    async def delete_workout(self, workout_id: str) -> StoreResult:
        pass

    @abstractmethod
    async def clear_workouts(self) -> StoreResult:
        pass

    # Exercises

    @abstractmethod
    async def add_exercise(self, workout_id: str, exercise: Exercise) -> StoreResult:
        pass

    @abstractmethod
    async def update_exercise(self, exercise: Exercise) -> StoreResult:
        pass

    @abstractmethod
    async def delete_exercise(self, exercise_id: str) -> StoreResult:
        pass

    # Sets

    @abstractmethod
    async def add_set(self, exercise_id: str, workout_set: WorkoutSet) -> StoreResult:
        pass

    @abstractmethod
    async def update_set(self, workout_set: WorkoutSet) -> StoreResult:
        pass

    @abstractmethod
    async def delete_set(self, set_id: str) -> StoreResult:
        pass

    # Metrics and widgets

    @abstractmethod
    async def add_metric_entry(self, metric_type: MetricType, entry: MetricEntry) -> StoreResult:
        pass

    @abstractmethod
    async def delete_metric_entry(self, entry_id: str) -> StoreResult:
        pass

    @abstractmethod
    async def set_goal(self, metric_type: MetricType, goal: Goal) -> StoreResult:
        pass

    @abstractmethod
    async def save_widgets(self, widgets: list[WidgetConfig]) -> StoreResult:
        pass
