"""Tests for optimistic mutations, rollback and id reconciliation."""

import asyncio
import copy

import aiosqlite
import pytest

from liftlog.models.metrics import BodyMetrics, MetricType
from liftlog.models.widgets import default_widgets
from liftlog.models.workout import Exercise, Workout, WorkoutSet
from liftlog.notifications import DESTRUCTIVE, NotificationCenter
from liftlog.services.metrics import MetricsService
from liftlog.services.workouts import WorkoutService
from liftlog.state.container import StateContainer
from liftlog.stores.base import StoreResult
from liftlog.sync.optimistic import Mutation, OptimisticCoordinator, reconcile_workout_ids


def _all_ids(workouts):
    ids = []
    for w in workouts:
        ids.append(w.id)
        for e in w.exercises:
            ids.append(e.id)
            ids.extend(s.id for s in e.sets)
    return ids


@pytest.fixture
def service(workouts_state, fake_store, notifications):
    return WorkoutService(workouts_state, fake_store, notifications)


@pytest.fixture
def metrics_service(fake_store, notifications):
    return MetricsService(
        StateContainer(BodyMetrics(), "bodyMetrics"),
        StateContainer(default_widgets(), "widgets"),
        fake_store,
        notifications,
    )


WORKOUT_MUTATIONS = [
    ("add_workout", lambda s: s.add_workout(Workout(date="2024-02-01"))),
    ("update_workout", lambda s: s.update_workout("w1", program="GZCLP")),
    (
        "update_workout_exercises",
        lambda s: s.update_workout(
            "w1", exercises=[Exercise(name="Row", sets=[WorkoutSet(reps=8, weight=95)])]
        ),
    ),
    ("delete_workout", lambda s: s.delete_workout("w1")),
    ("clear_all_workouts", lambda s: s.clear_all_workouts()),
    ("add_exercise", lambda s: s.add_exercise("w1", "Deadlift")),
    ("update_exercise", lambda s: s.update_exercise("w1", "e1", "Incline Bench")),
    ("delete_exercise", lambda s: s.delete_exercise("w1", "e1")),
    ("add_set", lambda s: s.add_set("w1", "e1", 5, 175)),
    ("update_set", lambda s: s.update_set("w1", "e1", "s1", reps=10)),
    ("delete_set", lambda s: s.delete_set("w1", "e1", "s2")),
]


class TestRollback:
    """A failed store call restores the exact prior state."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name,call", WORKOUT_MUTATIONS, ids=[m[0] for m in WORKOUT_MUTATIONS])
    async def test_failed_result_rolls_back(self, service, fake_store, notifications, name, call):
        before = copy.deepcopy(service.workouts)
        fake_store.fail = "Backend unavailable"

        outcome = await call(service)

        assert outcome.success is False
        assert service.workouts == before
        assert len(notifications.history) == 1
        assert notifications.latest.variant == DESTRUCTIVE
        assert notifications.latest.description == "Backend unavailable"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name,call", WORKOUT_MUTATIONS, ids=[m[0] for m in WORKOUT_MUTATIONS])
    async def test_raised_error_rolls_back(self, service, fake_store, name, call):
        before = copy.deepcopy(service.workouts)
        fake_store.raise_error = aiosqlite.OperationalError("database is locked")

        outcome = await call(service)

        assert outcome.success is False
        assert "database is locked" in outcome.error
        assert service.workouts == before

    @pytest.mark.asyncio
    async def test_metric_rollback(self, metrics_service, fake_store):
        fake_store.fail = "nope"

        outcome = await metrics_service.add_metric(MetricType.WEIGHT, 82.5, "2024-01-01")

        assert outcome.success is False
        assert metrics_service.metrics == BodyMetrics()

    @pytest.mark.asyncio
    async def test_widget_rollback(self, metrics_service, fake_store):
        fake_store.fail = "nope"

        await metrics_service.toggle_widget_visibility("1")

        assert metrics_service.widgets == default_widgets()

    @pytest.mark.asyncio
    async def test_state_is_visible_before_store_returns(self, service, fake_store):
        seen = []

        async def slow_add_set(exercise_id, workout_set):
            seen.append(len(service.workouts[0].exercises[0].sets))
            return StoreResult.ok()

        fake_store.add_set = slow_add_set
        await service.add_set("w1", "e1", 5, 175)

        assert seen == [3]


class TestNotFound:
    """Mutations on missing entities leave state untouched."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "call",
        [
            lambda s: s.update_workout("missing", program="x"),
            lambda s: s.delete_workout("missing"),
            lambda s: s.add_exercise("missing", "Row"),
            lambda s: s.update_exercise("w1", "missing", "Row"),
            lambda s: s.delete_exercise("w1", "missing"),
            lambda s: s.add_set("w1", "missing", 5, 100),
            lambda s: s.update_set("w1", "e1", "missing", reps=3),
            lambda s: s.delete_set("w1", "e1", "missing"),
        ],
    )
    async def test_missing_entity(self, service, fake_store, notifications, call):
        before = service.workouts
        revision = service.container.revision

        outcome = await call(service)

        assert outcome.success is False
        assert outcome.error.endswith("not found")
        assert service.workouts is before
        assert service.container.revision == revision
        assert fake_store.calls == []
        assert len(notifications.history) == 1

    @pytest.mark.asyncio
    async def test_invalid_set_rejected_locally(self, service, fake_store):
        outcome = await service.add_set("w1", "e1", 0, 100)

        assert outcome.success is False
        assert fake_store.calls == []

    @pytest.mark.asyncio
    async def test_blank_exercise_name_rejected(self, service, fake_store):
        outcome = await service.add_exercise("w1", "   ")

        assert outcome.success is False
        assert outcome.error == "Exercise name is required"
        assert fake_store.calls == []

    @pytest.mark.asyncio
    async def test_missing_widget(self, metrics_service, fake_store):
        outcome = await metrics_service.swap_widget_positions("1", "42")

        assert outcome.success is False
        assert metrics_service.widgets == default_widgets()


class TestReconciliation:
    """Server ids replace placeholders and nothing else."""

    @pytest.mark.asyncio
    async def test_add_set_changes_exactly_one_id(self, service):
        before = _all_ids(service.workouts)

        outcome = await service.add_set("w1", "e1", 5, 175)

        after = _all_ids(service.workouts)
        assert outcome.success is True
        assert outcome.id == "srv-1"
        assert set(after) - set(before) == {"srv-1"}
        assert set(before) <= set(after)

    @pytest.mark.asyncio
    async def test_add_workout_reconciles_nested_ids(self, service):
        workout = Workout(
            date="2024-02-01",
            exercises=[Exercise(name="Row", sets=[WorkoutSet(reps=10, weight=95)])],
        )

        outcome = await service.add_workout(workout)

        added = service.get_workout(outcome.id)
        assert added.id.startswith("srv-")
        assert added.exercises[0].id.startswith("srv-")
        assert added.exercises[0].sets[0].id.startswith("srv-")

    @pytest.mark.asyncio
    async def test_local_ids_kept_without_server_id(
        self, sample_workouts, notifications, store_factory
    ):
        store = store_factory(workouts=sample_workouts, assign_ids=False)
        service = WorkoutService(StateContainer(sample_workouts), store, notifications)

        await service.add_set("w1", "e1", 5, 175)

        new_set = service.workouts[0].exercises[0].sets[-1]
        assert new_set.id
        assert new_set.id == store.calls[0][2].id

    @pytest.mark.asyncio
    async def test_metric_placeholder_replaced(self, metrics_service):
        outcome = await metrics_service.add_metric(MetricType.WEIGHT, 82.5, "2024-01-01")

        entries = metrics_service.metrics.weight.entries
        assert outcome.success is True
        assert [e.id for e in entries] == ["srv-1"]

    @pytest.mark.asyncio
    async def test_local_ids_reported_without_server_id(
        self, sample_workouts, notifications, store_factory
    ):
        store = store_factory(workouts=sample_workouts, assign_ids=False)
        service = WorkoutService(StateContainer(sample_workouts), store, notifications)

        workout_outcome = await service.add_workout(Workout(date="2024-02-01"))
        exercise_outcome = await service.add_exercise(workout_outcome.id, "Row")
        set_outcome = await service.add_set(workout_outcome.id, exercise_outcome.id, 10, 95)

        added = service.get_workout(workout_outcome.id)
        assert added.exercises[0].id == exercise_outcome.id
        assert added.exercises[0].sets[0].id == set_outcome.id
        assert None not in (workout_outcome.id, exercise_outcome.id, set_outcome.id)

    @pytest.mark.asyncio
    async def test_repeated_caller_set_ids_get_distinct_ids(self, service):
        workout = Workout(
            date="2024-02-01",
            exercises=[
                Exercise(id="1", name="Row", sets=[WorkoutSet(id="1", reps=10, weight=95)]),
                Exercise(id="2", name="Curl", sets=[WorkoutSet(id="1", reps=12, weight=30)]),
            ],
        )

        outcome = await service.add_workout(workout)

        added = service.get_workout(outcome.id)
        set_ids = [s.id for e in added.exercises for s in e.sets]
        assert len(set(set_ids)) == 2
        assert all(i.startswith("srv-") for i in set_ids)
        assert len(set(_all_ids(service.workouts))) == len(_all_ids(service.workouts))

    @pytest.mark.asyncio
    async def test_update_workout_replaces_exercises(self, service, fake_store):
        exercises = [Exercise(name="Row", sets=[WorkoutSet(reps=8, weight=95)])]

        outcome = await service.update_workout("w1", program="GZCLP", exercises=exercises)

        updated = service.get_workout("w1")
        assert outcome.success is True
        assert updated.program == "GZCLP"
        assert [e.name for e in updated.exercises] == ["Row"]
        assert updated.exercises[0].id.startswith("srv-")
        assert updated.exercises[0].sets[0].id.startswith("srv-")
        assert fake_store.calls[0][0] == "update_workout"

    @pytest.mark.asyncio
    async def test_update_workout_rejects_invalid_exercises(self, service, fake_store):
        before = service.workouts

        outcome = await service.update_workout(
            "w1", exercises=[Exercise(name="Row", sets=[WorkoutSet(reps=0, weight=95)])]
        )

        assert outcome.success is False
        assert service.workouts is before
        assert fake_store.calls == []

    def test_unmatched_entities_are_not_copied(self, sample_workouts):
        result = reconcile_workout_ids(sample_workouts, {"s3": "srv-9"})

        assert result[0] is not sample_workouts[0]
        assert result[0].exercises[0] is sample_workouts[0].exercises[0]
        assert result[0].exercises[1].sets[0].id == "srv-9"
        assert result[1] is sample_workouts[1]


class TestSuccess:
    """Successful mutations notify once and keep invariants."""

    @pytest.mark.asyncio
    async def test_set_count_grows(self, service):
        count = len(service.workouts[0].exercises[0].sets)

        for weight in (175, 180, 185):
            await service.add_set("w1", "e1", 3, weight)

        assert len(service.workouts[0].exercises[0].sets) == count + 3

    @pytest.mark.asyncio
    async def test_set_count_after_adds_and_removes(self, service):
        start = len(service.workouts[0].exercises[0].sets)
        added = removed = 0

        for step in range(12):
            sets = service.workouts[0].exercises[0].sets
            if step % 3 == 2 and sets:
                outcome = await service.delete_set("w1", "e1", sets[0].id)
                removed += 1
            else:
                outcome = await service.add_set("w1", "e1", 5, 100 + step)
                added += 1
            assert outcome.success is True

        set_ids = [s.id for s in service.workouts[0].exercises[0].sets]
        assert len(set_ids) == start + added - removed
        assert len(set(set_ids)) == len(set_ids)

    @pytest.mark.asyncio
    async def test_single_success_notification(self, service, notifications):
        await service.delete_set("w1", "e1", "s1")

        assert len(notifications.history) == 1
        assert notifications.latest.title == "Set deleted"
        assert not notifications.latest.is_error

    @pytest.mark.asyncio
    async def test_previous_snapshot_untouched(self, service):
        snapshot = service.workouts

        await service.update_set("w1", "e1", "s1", weight=140)

        assert snapshot[0].exercises[0].sets[0].weight == 135
        assert service.workouts[0].exercises[0].sets[0].weight == 140

    @pytest.mark.asyncio
    async def test_widget_update_collapses_duplicates(self, metrics_service):
        widgets = default_widgets() + [default_widgets()[0]]

        await metrics_service.update_widgets(widgets)

        assert len(metrics_service.widgets) == 4

    @pytest.mark.asyncio
    async def test_goal_progress_after_updates(self, metrics_service):
        await metrics_service.add_metric(MetricType.WEIGHT, 90, "2024-01-01")
        await metrics_service.add_metric(MetricType.WEIGHT, 85, "2024-02-01")
        await metrics_service.set_goal(MetricType.WEIGHT, 80)

        assert metrics_service.goal_progress(MetricType.WEIGHT) == 50
        assert metrics_service.latest_value(MetricType.WEIGHT) == 85


class TestConcurrency:
    """Overlapping mutations on one container run one at a time."""

    @pytest.mark.asyncio
    async def test_failed_mutation_does_not_undo_later_success(
        self, sample_workouts, store_factory
    ):
        store = store_factory(workouts=sample_workouts)
        gate = asyncio.Event()
        original_add_set = store.add_set
        attempts = []

        async def gated_add_set(exercise_id, workout_set):
            attempts.append(workout_set)
            if len(attempts) == 1:
                await gate.wait()
                return StoreResult.failed("timeout")
            return await original_add_set(exercise_id, workout_set)

        store.add_set = gated_add_set
        service = WorkoutService(StateContainer(sample_workouts), store, NotificationCenter())

        first = asyncio.ensure_future(service.add_set("w1", "e1", 5, 170))
        second = asyncio.ensure_future(service.add_set("w1", "e1", 5, 175))
        await asyncio.sleep(0)
        gate.set()
        results = await asyncio.gather(first, second)

        assert [r.success for r in results] == [False, True]
        weights = [s.weight for s in service.workouts[0].exercises[0].sets]
        assert weights == [135, 155, 175]

    @pytest.mark.asyncio
    async def test_submit_returns_task(self, workouts_state, notifications):
        coordinator = OptimisticCoordinator(workouts_state, notifications)

        async def remote():
            return StoreResult.ok()

        task = coordinator.submit(
            Mutation(label="clear", apply=lambda ws: [], remote=remote, success_title="Cleared")
        )
        outcome = await task

        assert outcome.success is True
        assert workouts_state.value == []
        assert outcome.to_dict()["notification"]["title"] == "Cleared"
