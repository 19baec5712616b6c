"""Body metric commands."""

from datetime import date

import click

from ..models.metrics import METRIC_UNITS, MetricType
from .base import async_command, echo_info, finish, format_table, open_tracker, resolve_id

METRIC_CHOICE = click.Choice([t.value for t in MetricType])


@click.group()
def metrics():
    """Track body weight, body fat and muscle mass."""
    pass


@metrics.command("list")
@click.option("--type", "metric_type", type=METRIC_CHOICE, default=None, help="Only this metric")
@click.pass_context
@async_command
async def list_metrics(ctx: click.Context, metric_type: str | None):
    """Show readings, goals and goal progress."""
    tracker = await open_tracker(ctx)
    types = [MetricType(metric_type)] if metric_type else list(MetricType)

    for t in types:
        series = tracker.metrics.metrics.get(t)
        unit = METRIC_UNITS[t]

        click.echo()
        click.echo(click.style(t.value, bold=True))
        click.echo("=" * 40)

        if not series.entries:
            echo_info("No readings yet.")
        else:
            rows = [[e.id[:8], e.date, f"{e.value:g} {unit}"] for e in series.entries]
            click.echo(format_table(["ID", "Date", "Value"], rows))

        if series.goal is not None:
            deadline = f" by {series.goal.deadline}" if series.goal.deadline else ""
            click.echo()
            click.echo(f"Goal: {series.goal.target:g} {unit}{deadline}")
            progress = tracker.metrics.goal_progress(t)
            if progress is not None:
                click.echo(f"Progress: {progress:.0f}%")

        if t is not MetricType.WEIGHT:
            kg = tracker.metrics.body_composition_kg(t)
            if kg is not None:
                click.echo(f"Approx. {kg:.1f} kg")


@metrics.command("add")
@click.argument("metric_type", type=METRIC_CHOICE)
@click.argument("value", type=float)
@click.option("--date", "entry_date", default=None, help="Reading date (YYYY-MM-DD, default: today)")
@click.pass_context
@async_command
async def add_metric(ctx: click.Context, metric_type: str, value: float, entry_date: str | None):
    """Record a body metric reading."""
    tracker = await open_tracker(ctx)
    outcome = await tracker.metrics.add_metric(
        MetricType(metric_type), value, entry_date or date.today().isoformat()
    )
    finish(ctx, outcome)


@metrics.command("delete")
@click.argument("metric_type", type=METRIC_CHOICE)
@click.argument("entry_id")
@click.pass_context
@async_command
async def delete_metric(ctx: click.Context, metric_type: str, entry_id: str):
    """Delete a body metric reading."""
    tracker = await open_tracker(ctx)
    t = MetricType(metric_type)
    entry_id = resolve_id([e.id for e in tracker.metrics.metrics.get(t).entries], entry_id)
    outcome = await tracker.metrics.delete_metric(t, entry_id)
    finish(ctx, outcome)


@metrics.command("goal")
@click.argument("metric_type", type=METRIC_CHOICE)
@click.argument("target", type=float)
@click.option("--deadline", default=None, help="Target date (YYYY-MM-DD)")
@click.pass_context
@async_command
async def set_goal(ctx: click.Context, metric_type: str, target: float, deadline: str | None):
    """Set the goal for a body metric."""
    tracker = await open_tracker(ctx)
    outcome = await tracker.metrics.set_goal(MetricType(metric_type), target, deadline)
    finish(ctx, outcome)
