"""Dashboard widget commands."""

import click

from ..models.metrics import MetricType
from ..models.widgets import WidgetType
from ..services.tracker import Tracker
from .base import async_command, finish, format_table, open_tracker


def _widget_value(tracker: Tracker, widget_type: WidgetType) -> str:
    s = tracker.workouts.stats()
    metrics = tracker.metrics

    if widget_type is WidgetType.TOTAL_WORKOUTS:
        return str(s.total_workouts)
    if widget_type is WidgetType.TOTAL_EXERCISES:
        return str(s.total_exercises)
    if widget_type is WidgetType.TOTAL_SETS:
        return str(s.total_sets)
    if widget_type is WidgetType.MOST_FREQUENT_EXERCISE:
        return s.most_frequent_exercise[0]
    if widget_type is WidgetType.CURRENT_WEIGHT:
        value = metrics.latest_value(MetricType.WEIGHT)
        return "-" if value is None else f"{value:g} kg"
    if widget_type is WidgetType.WEIGHT_GOAL:
        progress = metrics.goal_progress(MetricType.WEIGHT)
        return "-" if progress is None else f"{progress:.0f}%"

    metric_type = MetricType(widget_type.value)
    value = metrics.latest_value(metric_type)
    return "-" if value is None else f"{value:g}%"


@click.group()
def widgets():
    """Arrange the dashboard."""
    pass


@widgets.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include hidden widgets")
@click.pass_context
@async_command
async def list_widgets(ctx: click.Context, show_all: bool):
    """Show the dashboard in display order."""
    tracker = await open_tracker(ctx)
    items = tracker.metrics.widgets if show_all else tracker.metrics.visible_widgets()

    rows = [
        [w.id, str(w.position), w.title, _widget_value(tracker, w.type), "yes" if w.visible else "no"]
        for w in items
    ]
    click.echo()
    click.echo(format_table(["ID", "Pos", "Widget", "Value", "Visible"], rows))


@widgets.command("move")
@click.argument("source_id")
@click.argument("target_id")
@click.pass_context
@async_command
async def move_widget(ctx: click.Context, source_id: str, target_id: str):
    """Swap the positions of two widgets."""
    tracker = await open_tracker(ctx)
    outcome = await tracker.metrics.swap_widget_positions(source_id, target_id)
    finish(ctx, outcome)


@widgets.command("toggle")
@click.argument("widget_id")
@click.pass_context
@async_command
async def toggle_widget(ctx: click.Context, widget_id: str):
    """Show or hide a widget."""
    tracker = await open_tracker(ctx)
    outcome = await tracker.metrics.toggle_widget_visibility(widget_id)
    finish(ctx, outcome)


@widgets.command("reset")
@click.pass_context
@async_command
async def reset_widgets(ctx: click.Context):
    """Restore the default dashboard."""
    tracker = await open_tracker(ctx)
    outcome = await tracker.metrics.reset_widgets()
    finish(ctx, outcome)
