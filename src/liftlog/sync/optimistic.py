"""Optimistic mutation coordinator.

Every create/update/delete follows the same protocol:

1. Snapshot the container.
2. Apply the mutation locally and commit it immediately.
3. Call the store.
4. On success, fold any server-assigned ids back into the state.
5. On failure, restore the snapshot.

Exactly one notification is produced either way, and failures resolve to
an ``Outcome`` instead of raising, so callers never need an error branch.
Mutations on one container run one at a time, so a rollback can only ever
undo its own change.
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Awaitable, Callable, Generic, TypeVar

import aiosqlite

from ..errors import NotFoundError, StoreError, ValidationError
from ..models.metrics import BodyMetrics, MetricType
from ..models.workout import Workout
from ..notifications import DESTRUCTIVE, Notification, Notifier
from ..state.container import StateContainer
from ..stores.base import StoreResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Failures that resolve to a failed Outcome. Anything else is a bug and propagates.
HANDLED_ERRORS = (NotFoundError, ValidationError, StoreError, aiosqlite.Error, OSError)


@dataclass
class Mutation(Generic[T]):
    """One optimistic operation.

    Attributes:
        label: Short description used in logs and default error text
        apply: Builds the next state from the current one without mutating it
        remote: Issues the store call
        reconcile: Folds a successful result back into the state
        success_title: Title of the success notification
        success_description: Description of the success notification
        local_id: Returns the id the created entity holds in local state,
            reported when the store assigns none
    """

    label: str
    apply: Callable[[T], T]
    remote: Callable[[], Awaitable[StoreResult]]
    reconcile: Callable[[T, StoreResult], T] | None = None
    success_title: str = "Saved"
    success_description: str = "Your changes have been saved."
    local_id: Callable[[], str | None] | None = None


@dataclass
class Outcome:
    """Resolved result of a mutation."""

    success: bool
    notification: Notification
    error: str | None = None
    id: str | None = None

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "error": self.error,
            "id": self.id,
            "notification": self.notification.to_dict(),
        }


class OptimisticCoordinator(Generic[T]):
    """Runs mutations against one state container."""

    def __init__(self, container: StateContainer[T], notifier: Notifier):
        self.container = container
        self.notifier = notifier
        self._lock = asyncio.Lock()

    async def run(self, mutation: Mutation[T]) -> Outcome:
        """Apply a mutation optimistically and reconcile with the store."""
        async with self._lock:
            snapshot = self.container.value

            try:
                next_state = mutation.apply(snapshot)
            except (NotFoundError, ValidationError) as e:
                logger.info("Rejected %s: %s", mutation.label, e)
                return self._fail(mutation, str(e))

            self.container.replace(next_state)

            try:
                result = await mutation.remote()
                if not result.success:
                    raise StoreError(result.error or f"Failed to {mutation.label}")
            except HANDLED_ERRORS as e:
                logger.warning("Rolling back %s: %s", mutation.label, e)
                self.container.replace(snapshot)
                return self._fail(mutation, str(e))

            if mutation.reconcile is not None:
                self.container.replace(mutation.reconcile(self.container.value, result))

            logger.debug("Committed %s", mutation.label)
            notification = Notification(
                title=mutation.success_title, description=mutation.success_description
            )
            self.notifier.notify(notification)
            created_id = result.id
            if created_id is None and mutation.local_id is not None:
                created_id = mutation.local_id()
            return Outcome(success=True, notification=notification, id=created_id)

    def submit(self, mutation: Mutation[T]) -> "asyncio.Task[Outcome]":
        """Schedule a mutation without waiting for the store round-trip."""
        return asyncio.ensure_future(self.run(mutation))

    def _fail(self, mutation: Mutation[T], error: str) -> Outcome:
        notification = Notification(
            title="Error",
            description=error or f"Failed to {mutation.label}",
            variant=DESTRUCTIVE,
        )
        self.notifier.notify(notification)
        return Outcome(success=False, notification=notification, error=error)


def reconcile_workout_ids(workouts: list[Workout], id_map: dict[str, str]) -> list[Workout]:
    """Swap placeholder ids for authoritative ones.

    Only workouts, exercises and sets whose id appears in ``id_map`` are
    copied; everything else is returned as the same object.
    """
    if not id_map:
        return workouts

    def fix_exercise(exercise):
        sets = [replace(s, id=id_map[s.id]) if s.id in id_map else s for s in exercise.sets]
        changed_sets = any(a is not b for a, b in zip(sets, exercise.sets))
        if exercise.id in id_map or changed_sets:
            return replace(exercise, id=id_map.get(exercise.id, exercise.id), sets=sets)
        return exercise

    result = []
    for workout in workouts:
        exercises = [fix_exercise(e) for e in workout.exercises]
        changed = any(a is not b for a, b in zip(exercises, workout.exercises))
        if workout.id in id_map or changed:
            workout = replace(workout, id=id_map.get(workout.id, workout.id), exercises=exercises)
        result.append(workout)
    return result


def reconcile_metric_id(
    metrics: BodyMetrics, metric_type: MetricType, placeholder: str, date: str, new_id: str
) -> BodyMetrics:
    """Replace a placeholder metric id, matching the entry by id and date."""
    series = metrics.get(metric_type)
    entries = [
        replace(e, id=new_id) if e.id == placeholder and e.date == date else e
        for e in series.entries
    ]
    return metrics.with_series(metric_type, series.with_entries(entries))
