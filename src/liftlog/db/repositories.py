"""Data access layer for liftlog.

Every query is scoped by the owning user id, mirroring the row-level
security of the hosted tables.
"""

from pathlib import Path
from uuid import uuid4

import aiosqlite

from ..config import get_db_path
from ..models.metrics import Goal, MetricEntry, MetricType
from ..models.widgets import WidgetConfig
from ..models.workout import Exercise, Workout, WorkoutSet
from .engine import connect

_OWNED_WORKOUT = "SELECT id FROM workouts WHERE user_id = ?"
_OWNED_EXERCISE = (
    "SELECT e.id FROM exercises e JOIN workouts w ON e.workout_id = w.id WHERE w.user_id = ?"
)


def new_id() -> str:
    """Server-assigned identifier."""
    return str(uuid4())


async def _insert_sets(
    db: aiosqlite.Connection, exercise_id: str, sets: list[WorkoutSet], id_map: dict[str, str]
) -> None:
    cursor = await db.execute(
        "SELECT COALESCE(MAX(position) + 1, 0) FROM sets WHERE exercise_id = ?", (exercise_id,)
    )
    (position,) = await cursor.fetchone()
    for offset, workout_set in enumerate(sets):
        set_id = new_id()
        await db.execute(
            "INSERT INTO sets (id, exercise_id, reps, weight, position) VALUES (?, ?, ?, ?, ?)",
            (set_id, exercise_id, workout_set.reps, workout_set.weight, position + offset),
        )
        if workout_set.id:
            id_map[workout_set.id] = set_id


async def _insert_exercises(
    db: aiosqlite.Connection, workout_id: str, exercises: list[Exercise], id_map: dict[str, str]
) -> None:
    cursor = await db.execute(
        "SELECT COALESCE(MAX(position) + 1, 0) FROM exercises WHERE workout_id = ?", (workout_id,)
    )
    (position,) = await cursor.fetchone()
    for offset, exercise in enumerate(exercises):
        exercise_id = new_id()
        await db.execute(
            "INSERT INTO exercises (id, workout_id, name, position) VALUES (?, ?, ?, ?)",
            (exercise_id, workout_id, exercise.name, position + offset),
        )
        if exercise.id:
            id_map[exercise.id] = exercise_id
        await _insert_sets(db, exercise_id, exercise.sets, id_map)


class WorkoutRepository:
    """Repository for workouts with their exercises and sets."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def list_for_user(self, user_id: str) -> list[Workout]:
        """List a user's workouts, newest first, with nested exercises and sets."""
        async with connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM workouts WHERE user_id = ? ORDER BY date DESC", (user_id,)
            )
            workout_rows = await cursor.fetchall()

            cursor = await db.execute(
                f"""
                SELECT * FROM exercises WHERE workout_id IN ({_OWNED_WORKOUT})
                ORDER BY position
                """,
                (user_id,),
            )
            exercise_rows = await cursor.fetchall()

            cursor = await db.execute(
                f"SELECT * FROM sets WHERE exercise_id IN ({_OWNED_EXERCISE}) ORDER BY position",
                (user_id,),
            )
            set_rows = await cursor.fetchall()

        sets_by_exercise: dict[str, list[WorkoutSet]] = {}
        for row in set_rows:
            sets_by_exercise.setdefault(row["exercise_id"], []).append(self._row_to_set(row))

        exercises_by_workout: dict[str, list[Exercise]] = {}
        for row in exercise_rows:
            exercises_by_workout.setdefault(row["workout_id"], []).append(
                Exercise(id=row["id"], name=row["name"], sets=sets_by_exercise.get(row["id"], []))
            )

        return [
            Workout(
                id=row["id"],
                date=row["date"],
                program=row["program"] or "",
                phase=row["phase"] or "",
                exercises=exercises_by_workout.get(row["id"], []),
            )
            for row in workout_rows
        ]

    async def create(self, user_id: str, workout: Workout) -> tuple[str, dict[str, str]]:
        """Create a workout and everything nested in it.

        Returns the new workout id and a map of client ids to new ids for
        the nested exercises and sets.
        """
        workout_id = new_id()
        id_map: dict[str, str] = {}
        async with connect(self.db_path) as db:
            await db.execute(
                "INSERT INTO workouts (id, user_id, date, program, phase) VALUES (?, ?, ?, ?, ?)",
                (workout_id, user_id, workout.date, workout.program, workout.phase),
            )
            await _insert_exercises(db, workout_id, workout.exercises, id_map)
            await db.commit()
        return workout_id, id_map

    async def update(
        self, user_id: str, workout: Workout, replace_exercises: bool = False
    ) -> tuple[int, dict[str, str]]:
        """Update workout fields, optionally rewriting its exercises and sets.

        Returns the number of workout rows changed and a map of client ids
        to new ids for any rewritten exercises and sets.
        """
        id_map: dict[str, str] = {}
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                UPDATE workouts SET date = ?, program = ?, phase = ?
                WHERE id = ? AND user_id = ?
                """,
                (workout.date, workout.program, workout.phase, workout.id, user_id),
            )
            changed = cursor.rowcount
            if changed and replace_exercises:
                # Sets cascade with their exercises
                await db.execute("DELETE FROM exercises WHERE workout_id = ?", (workout.id,))
                await _insert_exercises(db, workout.id, workout.exercises, id_map)
            await db.commit()
        return changed, id_map

    async def delete(self, user_id: str, workout_id: str) -> int:
        """Delete a workout (exercises and sets cascade)."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM workouts WHERE id = ? AND user_id = ?", (workout_id, user_id)
            )
            await db.commit()
            return cursor.rowcount

    async def delete_all(self, user_id: str) -> int:
        """Delete every workout a user owns."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("DELETE FROM workouts WHERE user_id = ?", (user_id,))
            await db.commit()
            return cursor.rowcount

    def _row_to_set(self, row: aiosqlite.Row) -> WorkoutSet:
        return WorkoutSet(id=row["id"], reps=row["reps"], weight=float(row["weight"]))


class ExerciseRepository:
    """Repository for exercises within workouts."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(
        self, user_id: str, workout_id: str, exercise: Exercise
    ) -> tuple[str | None, dict[str, str]]:
        """Add an exercise to a workout the user owns.

        Returns ``(None, {})`` when the workout does not exist.
        """
        id_map: dict[str, str] = {}
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT 1 FROM workouts WHERE id = ? AND user_id = ?", (workout_id, user_id)
            )
            if await cursor.fetchone() is None:
                return None, {}
            placeholder = exercise.id or "new"
            await _insert_exercises(
                db,
                workout_id,
                [Exercise(id=placeholder, name=exercise.name, sets=exercise.sets)],
                id_map,
            )
            await db.commit()
        return id_map.pop(placeholder), id_map

    async def rename(self, user_id: str, exercise_id: str, name: str) -> int:
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"UPDATE exercises SET name = ? WHERE id = ? AND id IN ({_OWNED_EXERCISE})",
                (name, exercise_id, user_id),
            )
            await db.commit()
            return cursor.rowcount

    async def delete(self, user_id: str, exercise_id: str) -> int:
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"DELETE FROM exercises WHERE id = ? AND id IN ({_OWNED_EXERCISE})",
                (exercise_id, user_id),
            )
            await db.commit()
            return cursor.rowcount


class SetRepository:
    """Repository for sets within exercises."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, user_id: str, exercise_id: str, workout_set: WorkoutSet) -> str | None:
        """Add a set to an exercise; returns None when the exercise is missing."""
        id_map: dict[str, str] = {}
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"SELECT 1 FROM exercises WHERE id = ? AND id IN ({_OWNED_EXERCISE})",
                (exercise_id, user_id),
            )
            if await cursor.fetchone() is None:
                return None
            placeholder = workout_set.id or "new"
            await _insert_sets(
                db,
                exercise_id,
                [WorkoutSet(id=placeholder, reps=workout_set.reps, weight=workout_set.weight)],
                id_map,
            )
            await db.commit()
        return id_map[placeholder]

    async def update(self, user_id: str, workout_set: WorkoutSet) -> int:
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"""
                UPDATE sets SET reps = ?, weight = ?
                WHERE id = ? AND exercise_id IN ({_OWNED_EXERCISE})
                """,
                (workout_set.reps, workout_set.weight, workout_set.id, user_id),
            )
            await db.commit()
            return cursor.rowcount

    async def delete(self, user_id: str, set_id: str) -> int:
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"DELETE FROM sets WHERE id = ? AND exercise_id IN ({_OWNED_EXERCISE})",
                (set_id, user_id),
            )
            await db.commit()
            return cursor.rowcount


class BodyMetricRepository:
    """Repository for body metric readings and goals."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def list_for_user(self, user_id: str) -> list[dict]:
        async with connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM body_metrics WHERE user_id = ? ORDER BY date", (user_id,)
            )
            rows = await cursor.fetchall()
            return [
                {
                    "id": row["id"],
                    "metric_type": row["metric_type"],
                    "value": row["value"],
                    "date": row["date"],
                }
                for row in rows
            ]

    async def create(self, user_id: str, metric_type: MetricType, entry: MetricEntry) -> str:
        metric_id = new_id()
        async with connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO body_metrics (id, user_id, metric_type, value, date)
                VALUES (?, ?, ?, ?, ?)
                """,
                (metric_id, user_id, metric_type.value, entry.value, entry.date),
            )
            await db.commit()
        return metric_id

    async def delete(self, user_id: str, metric_id: str) -> int:
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM body_metrics WHERE id = ? AND user_id = ?", (metric_id, user_id)
            )
            await db.commit()
            return cursor.rowcount

    async def list_goals(self, user_id: str) -> list[dict]:
        async with connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM body_goals WHERE user_id = ?", (user_id,))
            rows = await cursor.fetchall()
            return [
                {
                    "id": row["id"],
                    "metric_type": row["metric_type"],
                    "target": row["target"],
                    "deadline": row["deadline"],
                }
                for row in rows
            ]

    async def upsert_goal(self, user_id: str, metric_type: MetricType, goal: Goal) -> None:
        """Create or replace the goal for a metric type."""
        async with connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO body_goals (id, user_id, metric_type, target, deadline)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT (user_id, metric_type)
                DO UPDATE SET target = excluded.target, deadline = excluded.deadline
                """,
                (new_id(), user_id, metric_type.value, goal.target, goal.deadline),
            )
            await db.commit()


class WidgetRepository:
    """Repository for dashboard widget configuration."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def list_for_user(self, user_id: str) -> list[dict]:
        async with connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM widget_configs WHERE user_id = ? ORDER BY position", (user_id,)
            )
            rows = await cursor.fetchall()
            return [
                {
                    "id": row["widget_id"],
                    "type": row["type"],
                    "position": row["position"],
                    "visible": bool(row["visible"]),
                }
                for row in rows
            ]

    async def replace_all(self, user_id: str, widgets: list[WidgetConfig]) -> None:
        """Replace a user's widget rows wholesale in one transaction."""
        async with connect(self.db_path) as db:
            await db.execute("DELETE FROM widget_configs WHERE user_id = ?", (user_id,))
            for widget in widgets:
                await db.execute(
                    """
                    INSERT INTO widget_configs (id, user_id, widget_id, type, position, visible)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (new_id(), user_id, widget.id, widget.type.value, widget.position, int(widget.visible)),
                )
            await db.commit()
