"""Workout, exercise and set commands."""

from datetime import date

import click

from ..clients.manual import ManualWorkoutClient
from ..models.workout import Workout
from ..services.tracker import Tracker
from ..utils.units import format_kg, kg_to_lbs
from ..utils.workout_stats import calculate_workout_volume, sort_workouts_newest_first
from .base import (
    async_command,
    echo_info,
    echo_warning,
    finish,
    format_table,
    open_tracker,
    resolve_id,
)


def _workout_id(tracker: Tracker, ref: str) -> str:
    return resolve_id([w.id for w in tracker.workouts.workouts], ref)


def _exercise_id(tracker: Tracker, workout_id: str, ref: str) -> str:
    for workout in tracker.workouts.workouts:
        if workout.id == workout_id:
            return resolve_id([e.id for e in workout.exercises], ref)
    return ref


def _set_id(tracker: Tracker, workout_id: str, exercise_id: str, ref: str) -> str:
    for workout in tracker.workouts.workouts:
        if workout.id != workout_id:
            continue
        for exercise in workout.exercises:
            if exercise.id == exercise_id:
                return resolve_id([s.id for s in exercise.sets], ref)
    return ref


def _weight_lbs(weight: float, kg: bool) -> float:
    return kg_to_lbs(weight) if kg else weight


@click.group()
def workouts():
    """Manage logged workouts."""
    pass


@workouts.command("list")
@click.pass_context
@async_command
async def list_workouts(ctx: click.Context):
    """List all workouts, newest first."""
    tracker = await open_tracker(ctx)
    items = sort_workouts_newest_first(tracker.workouts.workouts)

    if not items:
        echo_info("No workouts logged yet.")
        click.echo("Run 'liftlog workouts log' to record one.")
        return

    rows = []
    for w in items:
        rows.append(
            [
                w.id[:8],
                w.date,
                w.program or "-",
                w.phase or "-",
                str(len(w.exercises)),
                str(sum(len(e.sets) for e in w.exercises)),
                f"{calculate_workout_volume(w):g}",
            ]
        )

    click.echo()
    headers = ["ID", "Date", "Program", "Phase", "Exercises", "Sets", "Volume (lbs)"]
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Source: {tracker.store.source_name}")


@workouts.command("show")
@click.argument("workout_id")
@click.pass_context
@async_command
async def show_workout(ctx: click.Context, workout_id: str):
    """Show one workout with its exercises and sets."""
    tracker = await open_tracker(ctx)
    workout = next(
        (w for w in tracker.workouts.workouts if w.id == _workout_id(tracker, workout_id)), None
    )
    if workout is None:
        echo_warning(f"Workout {workout_id} not found.")
        ctx.exit(1)

    click.echo()
    click.echo(click.style(f"Workout {workout.date}", bold=True))
    if workout.program or workout.phase:
        click.echo(f"{workout.program} {workout.phase}".strip())
    click.echo("=" * 50)

    for exercise in workout.exercises:
        click.echo()
        pr = " (PR)" if tracker.workouts.is_personal_record_in(workout, exercise) else ""
        click.echo(click.style(f"{exercise.name}{pr}", bold=True) + f"  [{exercise.id[:8]}]")
        for i, s in enumerate(exercise.sets, 1):
            click.echo(f"  {i}. {s.reps} x {format_kg(s.weight)}  [{s.id[:8]}]")


@workouts.command("add")
@click.option("--date", "workout_date", default=None, help="Workout date (YYYY-MM-DD, default: today)")
@click.option("--program", default="", help="Training program name")
@click.option("--phase", default="", help="Program phase")
@click.pass_context
@async_command
async def add_workout(ctx: click.Context, workout_date: str | None, program: str, phase: str):
    """Add an empty workout."""
    tracker = await open_tracker(ctx)
    workout = Workout(date=workout_date or date.today().isoformat(), program=program, phase=phase)
    outcome = await tracker.workouts.add_workout(workout)
    if outcome.success:
        echo_info(f"Workout id: {outcome.id}")
    finish(ctx, outcome)


@workouts.command("log")
@click.pass_context
@async_command
async def log_workout(ctx: click.Context):
    """Log a complete workout interactively."""
    tracker = await open_tracker(ctx)
    recent = list(
        dict.fromkeys(e.name for w in tracker.workouts.workouts for e in w.exercises)
    )

    client = ManualWorkoutClient(recent_exercises=recent)
    workout = await client.collect_workout()
    if workout is None:
        echo_warning("Workout entry cancelled.")
        return

    outcome = await tracker.workouts.add_workout(workout)
    if outcome.success:
        logged = tracker.workouts.get_workout(outcome.id)
        for exercise in logged.exercises:
            if tracker.workouts.is_personal_record_in(logged, exercise):
                click.echo(click.style(f"New personal record: {exercise.name}!", fg="yellow"))
    finish(ctx, outcome)


@workouts.command("update")
@click.argument("workout_id")
@click.option("--date", "workout_date", default=None, help="New date (YYYY-MM-DD)")
@click.option("--program", default=None, help="New program name")
@click.option("--phase", default=None, help="New phase")
@click.pass_context
@async_command
async def update_workout(
    ctx: click.Context,
    workout_id: str,
    workout_date: str | None,
    program: str | None,
    phase: str | None,
):
    """Change a workout's date, program or phase."""
    tracker = await open_tracker(ctx)
    outcome = await tracker.workouts.update_workout(
        _workout_id(tracker, workout_id), date=workout_date, program=program, phase=phase
    )
    finish(ctx, outcome)


@workouts.command("delete")
@click.argument("workout_id")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete_workout(ctx: click.Context, workout_id: str, yes: bool):
    """Delete a workout and everything in it."""
    tracker = await open_tracker(ctx)
    if not yes and not click.confirm(f"Delete workout {workout_id}?"):
        return
    outcome = await tracker.workouts.delete_workout(_workout_id(tracker, workout_id))
    finish(ctx, outcome)


@workouts.command("clear")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def clear_workouts(ctx: click.Context, yes: bool):
    """Delete every workout."""
    tracker = await open_tracker(ctx)
    if not yes and not click.confirm("Delete ALL workouts?"):
        return
    outcome = await tracker.workouts.clear_all_workouts()
    finish(ctx, outcome)


@click.group()
def exercises():
    """Manage exercises within a workout."""
    pass


@exercises.command("add")
@click.argument("workout_id")
@click.argument("name")
@click.pass_context
@async_command
async def add_exercise(ctx: click.Context, workout_id: str, name: str):
    """Add an exercise to a workout."""
    tracker = await open_tracker(ctx)
    outcome = await tracker.workouts.add_exercise(_workout_id(tracker, workout_id), name)
    if outcome.success:
        echo_info(f"Exercise id: {outcome.id}")
    finish(ctx, outcome)


@exercises.command("rename")
@click.argument("workout_id")
@click.argument("exercise_id")
@click.argument("name")
@click.pass_context
@async_command
async def rename_exercise(ctx: click.Context, workout_id: str, exercise_id: str, name: str):
    """Rename an exercise."""
    tracker = await open_tracker(ctx)
    wid = _workout_id(tracker, workout_id)
    outcome = await tracker.workouts.update_exercise(
        wid, _exercise_id(tracker, wid, exercise_id), name
    )
    finish(ctx, outcome)


@exercises.command("delete")
@click.argument("workout_id")
@click.argument("exercise_id")
@click.pass_context
@async_command
async def delete_exercise(ctx: click.Context, workout_id: str, exercise_id: str):
    """Remove an exercise and its sets."""
    tracker = await open_tracker(ctx)
    wid = _workout_id(tracker, workout_id)
    outcome = await tracker.workouts.delete_exercise(wid, _exercise_id(tracker, wid, exercise_id))
    finish(ctx, outcome)


@click.group()
def sets():
    """Manage sets within an exercise."""
    pass


@sets.command("add")
@click.argument("workout_id")
@click.argument("exercise_id")
@click.option("--reps", "-r", type=int, required=True, help="Repetitions")
@click.option("--weight", "-w", type=float, default=0.0, help="Weight (lbs unless --kg)")
@click.option("--kg", is_flag=True, help="Weight is given in kilograms")
@click.pass_context
@async_command
async def add_set(
    ctx: click.Context, workout_id: str, exercise_id: str, reps: int, weight: float, kg: bool
):
    """Add a set to an exercise."""
    tracker = await open_tracker(ctx)
    wid = _workout_id(tracker, workout_id)
    outcome = await tracker.workouts.add_set(
        wid, _exercise_id(tracker, wid, exercise_id), reps, _weight_lbs(weight, kg)
    )
    finish(ctx, outcome)


@sets.command("update")
@click.argument("workout_id")
@click.argument("exercise_id")
@click.argument("set_id")
@click.option("--reps", "-r", type=int, default=None, help="New repetitions")
@click.option("--weight", "-w", type=float, default=None, help="New weight (lbs unless --kg)")
@click.option("--kg", is_flag=True, help="Weight is given in kilograms")
@click.pass_context
@async_command
async def update_set(
    ctx: click.Context,
    workout_id: str,
    exercise_id: str,
    set_id: str,
    reps: int | None,
    weight: float | None,
    kg: bool,
):
    """Change a set's reps or weight."""
    tracker = await open_tracker(ctx)
    wid = _workout_id(tracker, workout_id)
    eid = _exercise_id(tracker, wid, exercise_id)
    outcome = await tracker.workouts.update_set(
        wid,
        eid,
        _set_id(tracker, wid, eid, set_id),
        reps=reps,
        weight=None if weight is None else _weight_lbs(weight, kg),
    )
    finish(ctx, outcome)


@sets.command("delete")
@click.argument("workout_id")
@click.argument("exercise_id")
@click.argument("set_id")
@click.pass_context
@async_command
async def delete_set(ctx: click.Context, workout_id: str, exercise_id: str, set_id: str):
    """Remove a set."""
    tracker = await open_tracker(ctx)
    wid = _workout_id(tracker, workout_id)
    eid = _exercise_id(tracker, wid, exercise_id)
    outcome = await tracker.workouts.delete_set(wid, eid, _set_id(tracker, wid, eid, set_id))
    finish(ctx, outcome)
