"""Helpers for body metrics and dashboard widgets."""

from ..models.metrics import BodyMetrics, Goal, MetricEntry, MetricType
from ..models.widgets import WidgetConfig, WidgetType, default_widgets


def latest_metric_value(metrics: BodyMetrics, metric_type: MetricType) -> float | None:
    """Most recent reading for a metric (entries are kept date-ascending)."""
    entries = metrics.get(metric_type).entries
    if not entries:
        return None
    return entries[-1].value


def calculate_goal_progress(metrics: BodyMetrics, metric_type: MetricType) -> float | None:
    """Percentage of the way from the first reading to the goal.

    Works in either direction (losing weight, gaining muscle) and is
    clamped to 0..100. Returns None without a goal or readings.
    """
    series = metrics.get(metric_type)
    if series.goal is None or not series.entries:
        return None

    start = series.entries[0].value
    latest = series.entries[-1].value
    target = series.goal.target

    if target == start:
        return 100.0 if latest == target else 0.0

    if target < start:
        progress = (start - latest) / (start - target) * 100
    else:
        progress = (latest - start) / (target - start) * 100
    return min(100.0, max(0.0, progress))


def body_composition_kg(metrics: BodyMetrics, metric_type: MetricType) -> float | None:
    """Convert a percentage metric to kilograms using the latest body weight."""
    percentage = latest_metric_value(metrics, metric_type)
    weight = latest_metric_value(metrics, MetricType.WEIGHT)
    if percentage is None or weight is None:
        return None
    return round(percentage * weight / 100, 1)


def transform_metrics_rows(metric_rows: list[dict], goal_rows: list[dict]) -> BodyMetrics:
    """Build BodyMetrics from flat metric and goal rows."""
    metrics = BodyMetrics()
    for metric_type in MetricType:
        series = metrics.get(metric_type)
        entries = [
            MetricEntry(id=str(row["id"]), date=row["date"], value=float(row["value"]))
            for row in metric_rows
            if row["metric_type"] == metric_type.value
        ]
        goal_row = next((g for g in goal_rows if g["metric_type"] == metric_type.value), None)
        goal = None
        if goal_row is not None:
            goal = Goal(target=float(goal_row["target"]), deadline=goal_row.get("deadline") or None)
        metrics = metrics.with_series(metric_type, series.with_entries(entries).with_goal(goal))
    return metrics


def normalize_widgets(widgets: list[WidgetConfig]) -> list[WidgetConfig]:
    """Collapse duplicate widget types and order by position.

    The last config for a type wins. Equal positions keep their
    insertion order.
    """
    by_type: dict[WidgetType, WidgetConfig] = {}
    for widget in widgets:
        by_type.pop(widget.type, None)
        by_type[widget.type] = widget
    return sorted(by_type.values(), key=lambda w: w.position)


def transform_widget_rows(rows: list[dict] | None) -> list[WidgetConfig]:
    """Build widget configs from stored rows, defaulting when none exist."""
    if not rows:
        return default_widgets()
    return normalize_widgets([WidgetConfig.from_dict(row) for row in rows])


def swap_widget_positions(
    widgets: list[WidgetConfig], source_id: str, target_id: str
) -> list[WidgetConfig]:
    """Swap the positions of two widgets (drag and drop reordering)."""
    source = next((w for w in widgets if w.id == source_id), None)
    target = next((w for w in widgets if w.id == target_id), None)
    if source is None or target is None or source_id == target_id:
        return list(widgets)

    swapped = []
    for widget in widgets:
        if widget.id == source_id:
            swapped.append(widget.moved_to(target.position))
        elif widget.id == target_id:
            swapped.append(widget.moved_to(source.position))
        else:
            swapped.append(widget)
    return sorted(swapped, key=lambda w: w.position)


def toggle_widget_visibility(widgets: list[WidgetConfig], widget_id: str) -> list[WidgetConfig]:
    return [w.toggled() if w.id == widget_id else w for w in widgets]
