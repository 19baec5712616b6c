"""Database engine setup and initialization."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from ..config import get_db_path


@asynccontextmanager
async def connect(db_path: Path) -> AsyncIterator[aiosqlite.Connection]:
    """Open a connection with foreign key enforcement enabled."""
    async with aiosqlite.connect(db_path) as db:
        await db.execute("PRAGMA foreign_keys = ON")
        yield db


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with connect(db_path) as db:
        # Workouts and their nested exercises and sets
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workouts (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                date TEXT NOT NULL,
                program TEXT DEFAULT '',
                phase TEXT DEFAULT '',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercises (
                id TEXT PRIMARY KEY,
                workout_id TEXT NOT NULL,
                name TEXT NOT NULL,
                position INTEGER DEFAULT 0,
                FOREIGN KEY (workout_id) REFERENCES workouts(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS sets (
                id TEXT PRIMARY KEY,
                exercise_id TEXT NOT NULL,
                reps INTEGER NOT NULL CHECK (reps >= 0),
                weight REAL NOT NULL CHECK (weight >= 0),
                position INTEGER DEFAULT 0,
                FOREIGN KEY (exercise_id) REFERENCES exercises(id) ON DELETE CASCADE
            )
        """)

        # Body metrics, one row per reading
        await db.execute("""
            CREATE TABLE IF NOT EXISTS body_metrics (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                metric_type TEXT NOT NULL,
                value REAL NOT NULL,
                date TEXT NOT NULL
            )
        """)

        # One goal per metric type per user
        await db.execute("""
            CREATE TABLE IF NOT EXISTS body_goals (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                metric_type TEXT NOT NULL,
                target REAL NOT NULL,
                deadline TEXT,
                UNIQUE (user_id, metric_type)
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS widget_configs (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                widget_id TEXT NOT NULL,
                type TEXT NOT NULL,
                position INTEGER NOT NULL,
                visible INTEGER DEFAULT 1,
                UNIQUE(user_id, type)
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workouts_user
            ON workouts(user_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercises_workout
            ON exercises(workout_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_sets_exercise
            ON sets(exercise_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_body_metrics_user
            ON body_metrics(user_id, metric_type)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_widget_configs_user
            ON widget_configs(user_id)
        """)

        await db.commit()

