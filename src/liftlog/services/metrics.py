"""Body metric, goal and dashboard widget operations."""

from typing import Callable

from ..errors import NotFoundError, ValidationError
from ..models.metrics import BodyMetrics, Goal, MetricEntry, MetricType
from ..models.widgets import WidgetConfig, default_widgets
from ..models.workout import parse_date
from ..notifications import Notifier
from ..state.container import StateContainer
from ..stores.base import BaseStore
from ..sync.optimistic import Mutation, OptimisticCoordinator, Outcome, reconcile_metric_id
from ..utils import metrics_utils
from ..utils.ids import temp_id

METRIC_LABELS = {
    MetricType.WEIGHT: "weight",
    MetricType.BODY_FAT: "body fat",
    MetricType.MUSCLE_MASS: "muscle mass",
}


class MetricsService:
    """Optimistic operations on body metrics and widget settings."""

    def __init__(
        self,
        metrics: StateContainer[BodyMetrics],
        widgets: StateContainer[list[WidgetConfig]],
        store: BaseStore,
        notifier: Notifier,
    ):
        self.metrics_state = metrics
        self.widgets_state = widgets
        self.store = store
        self.metrics_coordinator = OptimisticCoordinator(metrics, notifier)
        self.widgets_coordinator = OptimisticCoordinator(widgets, notifier)

    @property
    def metrics(self) -> BodyMetrics:
        return self.metrics_state.value

    @property
    def widgets(self) -> list[WidgetConfig]:
        return self.widgets_state.value

    async def add_metric(self, metric_type: MetricType, value: float, date: str) -> Outcome:
        """Record a reading; the placeholder id is swapped for the stored one."""
        entry = MetricEntry(id=temp_id(), date=date, value=value)

        def apply(metrics: BodyMetrics) -> BodyMetrics:
            if value < 0:
                raise ValidationError("Value cannot be negative")
            parse_date(date)
            series = metrics.get(metric_type)
            return metrics.with_series(metric_type, series.with_entries(series.entries + [entry]))

        def reconcile(metrics: BodyMetrics, result) -> BodyMetrics:
            if not result.id or result.id == entry.id:
                return metrics
            return reconcile_metric_id(metrics, metric_type, entry.id, entry.date, result.id)

        return await self.metrics_coordinator.run(
            Mutation(
                label="add metric",
                apply=apply,
                remote=lambda: self.store.add_metric_entry(metric_type, entry),
                reconcile=reconcile,
                success_title="Metric Added",
                success_description=f"Your {METRIC_LABELS[metric_type]} has been updated.",
                local_id=lambda: entry.id,
            )
        )

    async def delete_metric(self, metric_type: MetricType, entry_id: str) -> Outcome:
        def apply(metrics: BodyMetrics) -> BodyMetrics:
            series = metrics.get(metric_type)
            remaining = [e for e in series.entries if e.id != entry_id]
            if len(remaining) == len(series.entries):
                raise NotFoundError("Metric entry", entry_id)
            return metrics.with_series(metric_type, series.with_entries(remaining))

        return await self.metrics_coordinator.run(
            Mutation(
                label="delete metric",
                apply=apply,
                remote=lambda: self.store.delete_metric_entry(entry_id),
                success_title="Metric Deleted",
                success_description=f"Your {METRIC_LABELS[metric_type]} entry has been removed.",
            )
        )

    async def set_goal(
        self, metric_type: MetricType, target: float, deadline: str | None = None
    ) -> Outcome:
        goal = Goal(target=target, deadline=deadline or None)

        def apply(metrics: BodyMetrics) -> BodyMetrics:
            if target < 0:
                raise ValidationError("Goal target cannot be negative")
            if goal.deadline:
                parse_date(goal.deadline)
            return metrics.with_series(metric_type, metrics.get(metric_type).with_goal(goal))

        return await self.metrics_coordinator.run(
            Mutation(
                label="update goal",
                apply=apply,
                remote=lambda: self.store.set_goal(metric_type, goal),
                success_title="Goal Updated",
                success_description=f"Your {METRIC_LABELS[metric_type]} goal has been updated.",
            )
        )

    async def update_widgets(self, widgets: list[WidgetConfig]) -> Outcome:
        """Save the dashboard layout (order and visibility)."""
        return await self._save_layout(lambda current: widgets)

    async def swap_widget_positions(self, source_id: str, target_id: str) -> Outcome:
        def build(current: list[WidgetConfig]) -> list[WidgetConfig]:
            self._require_widget(current, source_id)
            self._require_widget(current, target_id)
            return metrics_utils.swap_widget_positions(current, source_id, target_id)

        return await self._save_layout(build)

    async def toggle_widget_visibility(self, widget_id: str) -> Outcome:
        def build(current: list[WidgetConfig]) -> list[WidgetConfig]:
            self._require_widget(current, widget_id)
            return metrics_utils.toggle_widget_visibility(current, widget_id)

        return await self._save_layout(build)

    async def reset_widgets(self) -> Outcome:
        return await self._save_layout(lambda current: default_widgets())

    async def _save_layout(
        self, build: Callable[[list[WidgetConfig]], list[WidgetConfig]]
    ) -> Outcome:
        staged: dict[str, list[WidgetConfig]] = {}

        def apply(current: list[WidgetConfig]) -> list[WidgetConfig]:
            staged["widgets"] = metrics_utils.normalize_widgets(build(current))
            return staged["widgets"]

        return await self.widgets_coordinator.run(
            Mutation(
                label="update dashboard",
                apply=apply,
                remote=lambda: self.store.save_widgets(staged["widgets"]),
                success_title="Dashboard Updated",
                success_description="Your dashboard layout has been saved.",
            )
        )

    @staticmethod
    def _require_widget(widgets: list[WidgetConfig], widget_id: str) -> None:
        if not any(w.id == widget_id for w in widgets):
            raise NotFoundError("Widget", widget_id)

    # Derived values

    def latest_value(self, metric_type: MetricType) -> float | None:
        return metrics_utils.latest_metric_value(self.metrics, metric_type)

    def goal_progress(self, metric_type: MetricType) -> float | None:
        return metrics_utils.calculate_goal_progress(self.metrics, metric_type)

    def body_composition_kg(self, metric_type: MetricType) -> float | None:
        return metrics_utils.body_composition_kg(self.metrics, metric_type)

    def visible_widgets(self) -> list[WidgetConfig]:
        return [w for w in self.widgets if w.visible]
