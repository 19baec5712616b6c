"""Tests for the SQL-backed remote store."""

import pytest
import pytest_asyncio

from liftlog.db import init_db
from liftlog.errors import StoreError
from liftlog.models.metrics import Goal, MetricEntry, MetricType
from liftlog.models.widgets import default_widgets
from liftlog.models.workout import Exercise, Workout, WorkoutSet
from liftlog.stores.remote import RemoteStore


@pytest_asyncio.fixture
async def store(db_path):
    await init_db(db_path)
    return RemoteStore("alice", db_path)


def _workout():
    return Workout(
        id="local-w",
        date="2024-01-01",
        program="GZCLP",
        exercises=[
            Exercise(
                id="local-e",
                name="Squat",
                sets=[WorkoutSet(id="local-s1", reps=5, weight=225), WorkoutSet(id="local-s2", reps=3, weight=245)],
            )
        ],
    )


class TestRemoteWorkouts:
    """Tests for workout persistence."""

    @pytest.mark.asyncio
    async def test_add_workout_returns_ids(self, store):
        result = await store.add_workout(_workout())

        assert result.success is True
        assert result.id and result.id != "local-w"
        assert set(result.id_map) == {"local-e", "local-s1", "local-s2"}

        workouts = await store.load_workouts()
        assert workouts[0].id == result.id
        assert workouts[0].exercises[0].id == result.id_map["local-e"]
        assert [s.weight for s in workouts[0].exercises[0].sets] == [225, 245]

    @pytest.mark.asyncio
    async def test_workouts_newest_first(self, store):
        await store.add_workout(Workout(date="2024-01-01"))
        await store.add_workout(Workout(date="2024-03-01"))

        assert [w.date for w in await store.load_workouts()] == ["2024-03-01", "2024-01-01"]

    @pytest.mark.asyncio
    async def test_nested_add_and_cascade_delete(self, store):
        workout_id = (await store.add_workout(Workout(date="2024-01-01"))).id

        exercise = await store.add_exercise(workout_id, Exercise(id="tmp", name="Row"))
        added_set = await store.add_set(exercise.id, WorkoutSet(id="tmp-s", reps=10, weight=95))
        assert added_set.success and added_set.id != "tmp-s"

        assert (await store.delete_workout(workout_id)).success
        assert await store.load_workouts() == []
        assert (await store.delete_set(added_set.id)).success is False

    @pytest.mark.asyncio
    async def test_missing_parents(self, store):
        assert (await store.add_exercise("nope", Exercise(name="Row"))).error == "Workout not found"
        assert (await store.add_set("nope", WorkoutSet(reps=1, weight=0))).error == "Exercise not found"
        assert (await store.update_workout(Workout(id="nope", date="2024-01-01"))).error == "Workout not found"

    @pytest.mark.asyncio
    async def test_schema_init_is_idempotent(self, store, db_path):
        result = await store.add_workout(_workout())

        await init_db(db_path)

        (workout,) = await store.load_workouts()
        assert workout.id == result.id

    @pytest.mark.asyncio
    async def test_update_replaces_exercises(self, store):
        created = await store.add_workout(_workout())
        replacement = Workout(
            id=created.id,
            date="2024-01-02",
            program="GZCLP",
            exercises=[
                Exercise(id="new-e", name="Front Squat", sets=[WorkoutSet(id="new-s", reps=3, weight=185)])
            ],
        )

        result = await store.update_workout(replacement, replace_exercises=True)

        assert result.success is True
        assert set(result.id_map) == {"new-e", "new-s"}
        (workout,) = await store.load_workouts()
        assert workout.date == "2024-01-02"
        assert [e.name for e in workout.exercises] == ["Front Squat"]
        assert workout.exercises[0].id == result.id_map["new-e"]
        assert workout.exercises[0].sets[0].id == result.id_map["new-s"]

    @pytest.mark.asyncio
    async def test_update_without_exercises_keeps_children(self, store):
        created = await store.add_workout(_workout())

        result = await store.update_workout(Workout(id=created.id, date="2024-02-01"))

        assert result.success is True
        assert result.id_map == {}
        (workout,) = await store.load_workouts()
        assert workout.exercises[0].id == created.id_map["local-e"]

    @pytest.mark.asyncio
    async def test_rows_are_user_scoped(self, store, db_path):
        result = await store.add_workout(_workout())
        mallory = RemoteStore("mallory", db_path)

        assert await mallory.load_workouts() == []
        assert (await mallory.delete_workout(result.id)).success is False
        assert (await mallory.delete_exercise(result.id_map["local-e"])).success is False
        assert len(await store.load_workouts()) == 1

    @pytest.mark.asyncio
    async def test_negative_weight_rejected_by_schema(self, store):
        workout_id = (await store.add_workout(_workout())).id
        exercise_id = (await store.load_workouts())[0].exercises[0].id

        result = await store.add_set(exercise_id, WorkoutSet(reps=5, weight=-10))

        assert result.success is False
        assert result.error.startswith("Failed to add set")
        assert workout_id


class TestRemoteMetrics:
    """Tests for metric, goal and widget persistence."""

    @pytest.mark.asyncio
    async def test_metric_entries_and_goal(self, store):
        result = await store.add_metric_entry(
            MetricType.WEIGHT, MetricEntry(id="temp-1", date="2024-01-01", value=82)
        )
        await store.set_goal(MetricType.WEIGHT, Goal(target=80))
        await store.set_goal(MetricType.WEIGHT, Goal(target=78, deadline="2024-06-01"))

        metrics = await store.load_metrics()
        assert metrics.weight.entries[0].id == result.id
        assert metrics.weight.goal == Goal(target=78, deadline="2024-06-01")
        assert metrics.body_fat.goal is None

    @pytest.mark.asyncio
    async def test_widgets_default_then_saved(self, store):
        assert await store.load_widgets() == default_widgets()

        widgets = default_widgets()
        widgets[0] = widgets[0].toggled()
        await store.save_widgets(widgets)

        assert await store.load_widgets() == widgets

    @pytest.mark.asyncio
    async def test_load_without_database_raises(self, tmp_path):
        store = RemoteStore("alice", tmp_path / "missing" / "nowhere.db")

        with pytest.raises(StoreError):
            await store.load_workouts()
