"""Tests for the command line interface."""

import re

import pytest
from click.testing import CliRunner

from liftlog.cli import main


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LIFTLOG_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("LIFTLOG_USER", raising=False)
    return CliRunner()


def _invoke(runner, *args):
    return runner.invoke(main, list(args), catch_exceptions=False)


def _created_id(output: str) -> str:
    return re.search(r"id: (\S+)", output).group(1)


class TestInit:
    def test_init_creates_database(self, runner, tmp_path):
        result = _invoke(runner, "init")

        assert result.exit_code == 0
        assert (tmp_path / "data" / "liftlog.db").exists()
        assert "Database initialized" in result.output

    def test_user_commands_require_init(self, runner):
        result = _invoke(runner, "--user", "alice", "workouts", "list")

        assert result.exit_code == 1
        assert "liftlog init" in result.output


class TestLocalWorkouts:
    """Commands without --user work against local storage."""

    def test_list_shows_samples(self, runner):
        result = _invoke(runner, "workouts", "list")

        assert result.exit_code == 0
        assert "MAPS Anabolic" in result.output
        assert "Source: local" in result.output

    def test_summary(self, runner):
        result = _invoke(runner, "stats", "summary")

        assert "Workouts:   3" in result.output
        assert "Most frequent exercise: Bench Press (2)" in result.output

    def test_created_ids_are_addressable(self, runner):
        result = _invoke(runner, "workouts", "add", "--date", "2024-03-20")
        workout_id = _created_id(result.output)
        assert workout_id != "None"

        result = _invoke(runner, "exercises", "add", workout_id, "Deadlift")
        assert result.exit_code == 0
        exercise_id = _created_id(result.output)
        assert exercise_id != "None"

        result = _invoke(runner, "sets", "add", workout_id, exercise_id, "-r", "5", "-w", "315")
        assert result.exit_code == 0

        result = _invoke(runner, "workouts", "show", workout_id)
        assert "Deadlift" in result.output
        assert "[" + exercise_id[:8] + "]" in result.output

    def test_show_marks_records_per_session(self, runner):
        result = _invoke(runner, "workouts", "list")
        ids = re.findall(r"^(\w{8})\s", result.output, re.MULTILINE)
        newest, yesterday, last_week = ids[:3]

        # Bench beat last week's session yesterday, Squat beat it today
        assert "Bench Press (PR)" in _invoke(runner, "workouts", "show", yesterday).output
        assert "Squat (PR)" in _invoke(runner, "workouts", "show", newest).output
        assert "(PR)" not in _invoke(runner, "workouts", "show", last_week).output

    def test_delete_missing_workout_fails(self, runner):
        result = _invoke(runner, "workouts", "delete", "nope", "--yes")

        assert result.exit_code == 1
        assert "Workout not found" in result.output


class TestUserWorkouts:
    """Commands with --user work against the database."""

    def test_add_exercise_and_set(self, runner):
        _invoke(runner, "init")

        result = _invoke(runner, "--user", "alice", "workouts", "add", "--date", "2024-05-01")
        assert result.exit_code == 0
        assert "Workout added" in result.output
        workout_id = _created_id(result.output)

        result = _invoke(runner, "--user", "alice", "exercises", "add", workout_id[:8], "Deadlift")
        exercise_id = _created_id(result.output)

        result = _invoke(
            runner, "--user", "alice", "sets", "add", workout_id, exercise_id, "-r", "5", "-w", "100", "--kg"
        )
        assert result.exit_code == 0

        result = _invoke(runner, "--user", "alice", "workouts", "show", workout_id)
        assert "Deadlift" in result.output
        assert "5 x 100.0 kg" in result.output

    def test_users_do_not_share_workouts(self, runner):
        _invoke(runner, "init")
        _invoke(runner, "--user", "alice", "workouts", "add", "--date", "2024-05-01")

        result = _invoke(runner, "--user", "bob", "workouts", "list")
        assert "No workouts logged yet." in result.output


class TestMetricsAndWidgets:
    def test_metrics_goal_progress(self, runner):
        _invoke(runner, "metrics", "add", "weight", "90", "--date", "2024-01-01")
        _invoke(runner, "metrics", "add", "weight", "85", "--date", "2024-02-01")
        result = _invoke(runner, "metrics", "goal", "weight", "80")
        assert "Goal Updated" in result.output

        result = _invoke(runner, "metrics", "list", "--type", "weight")
        assert "Goal: 80 kg" in result.output
        assert "Progress: 50%" in result.output

    def test_invalid_metric_type(self, runner):
        result = runner.invoke(main, ["metrics", "add", "calories", "2000"])
        assert result.exit_code == 2

    def test_widget_move_and_toggle(self, runner):
        _invoke(runner, "widgets", "move", "1", "4")
        _invoke(runner, "widgets", "toggle", "2")

        result = _invoke(runner, "widgets", "list")
        rows = re.findall(r"^(\d+)\s+\d+\s+", result.output, re.MULTILINE)
        assert rows == ["4", "3", "1"]

    def test_toggle_unknown_widget_fails(self, runner):
        result = _invoke(runner, "widgets", "toggle", "99")
        assert result.exit_code == 1


class TestLogWorkout:
    """Interactive logging with the prompts stubbed out."""

    def test_log_records_workout(self, runner, monkeypatch):
        from liftlog.clients.manual import client as manual
        from liftlog.models.workout import Exercise, Workout, WorkoutSet

        async def collect(self):
            return Workout(
                date="2099-01-01",
                exercises=[Exercise(name="Squat", sets=[WorkoutSet(reps=3, weight=300)])],
            )

        monkeypatch.setattr(manual.ManualWorkoutClient, "collect_workout", collect)

        result = _invoke(runner, "workouts", "log")

        assert result.exit_code == 0
        assert "Workout added" in result.output
        assert "New personal record: Squat!" in result.output

    def test_log_cancelled(self, runner, monkeypatch):
        from liftlog.clients.manual import client as manual

        async def collect(self):
            return None

        monkeypatch.setattr(manual.ManualWorkoutClient, "collect_workout", collect)

        result = _invoke(runner, "workouts", "log")
        assert "Workout entry cancelled." in result.output

    def test_prompt_validators(self):
        from liftlog.clients.manual.client import _non_negative_float, _positive_int

        assert _positive_int("5") is True
        assert _positive_int("0") == "Reps must be greater than zero"
        assert _positive_int("five") == "Enter a whole number"
        assert _non_negative_float("0") is True
        assert _non_negative_float("-2.5") == "Weight cannot be negative"
