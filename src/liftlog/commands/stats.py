"""Workout statistics commands."""

import click

from ..utils.units import format_kg
from .base import async_command, echo_info, echo_warning, format_table, open_tracker


@click.group()
def stats():
    """Summaries and progress charts."""
    pass


@stats.command("summary")
@click.pass_context
@async_command
async def summary(ctx: click.Context):
    """Show totals and the most frequent exercise."""
    tracker = await open_tracker(ctx)
    s = tracker.workouts.stats()
    name, count = s.most_frequent_exercise

    click.echo()
    click.echo(click.style("Training Summary", bold=True))
    click.echo("=" * 40)
    click.echo(f"Workouts:   {s.total_workouts}")
    click.echo(f"Exercises:  {s.total_exercises}")
    click.echo(f"Sets:       {s.total_sets}")
    click.echo(f"Most frequent exercise: {name} ({count})")


@stats.command("chart")
@click.argument("exercise", required=False)
@click.pass_context
@async_command
async def chart(ctx: click.Context, exercise: str | None):
    """Show max weight and volume over time per exercise."""
    tracker = await open_tracker(ctx)
    series = tracker.workouts.chart_data().series

    if exercise is not None:
        if exercise not in series:
            echo_warning(f"No history for {exercise}.")
            ctx.exit(1)
        series = {exercise: series[exercise]}

    if not series:
        echo_info("No workouts logged yet.")
        return

    for name, points in series.items():
        click.echo()
        click.echo(click.style(name, bold=True))
        rows = [[p.date, format_kg(p.max_weight), f"{p.volume_load:g} lbs"] for p in points]
        click.echo(format_table(["Date", "Max weight", "Volume"], rows))


@stats.command("pr")
@click.argument("exercise")
@click.pass_context
@async_command
async def personal_record(ctx: click.Context, exercise: str):
    """Check whether the latest session of an exercise is a personal record."""
    tracker = await open_tracker(ctx)
    previous = tracker.workouts.previous_exercise(exercise)

    if tracker.workouts.is_personal_record(exercise):
        click.echo(click.style(f"{exercise}: new personal record!", fg="yellow", bold=True))
    else:
        click.echo(f"{exercise}: no new personal record.")

    if previous is not None and previous.sets:
        best = max(s.weight for s in previous.sets)
        click.echo(f"Previous best set: {format_kg(best)}")
