"""Session-scoped facade over workout and metrics state."""

import logging
from pathlib import Path

from ..errors import StoreError
from ..models.metrics import BodyMetrics
from ..models.widgets import WidgetConfig, default_widgets
from ..models.workout import Workout
from ..notifications import NotificationCenter
from ..session import Session, SessionProvider, select_store
from ..state.container import StateContainer
from ..stores.base import BaseStore
from ..stores.local import (
    METRICS_KEY,
    WIDGETS_KEY,
    WORKOUTS_KEY,
    LocalFallbackStore,
    LocalStorage,
)
from .metrics import MetricsService
from .workouts import WorkoutService

logger = logging.getLogger(__name__)


class Tracker:
    """Everything one session needs: state, store and services.

    The data source is chosen once, when the tracker is created.
    """

    def __init__(
        self,
        session_provider: SessionProvider,
        storage: LocalStorage,
        db_path: Path | None = None,
        notifications: NotificationCenter | None = None,
        store: BaseStore | None = None,
    ):
        self.session: Session | None = session_provider.current_session()
        self.store = store or select_store(self.session, storage, db_path)
        self.notifications = notifications or NotificationCenter()

        self.workouts_state: StateContainer[list[Workout]] = StateContainer([], "workouts")
        self.metrics_state: StateContainer[BodyMetrics] = StateContainer(BodyMetrics(), "bodyMetrics")
        self.widgets_state: StateContainer[list[WidgetConfig]] = StateContainer(
            default_widgets(), "widgets"
        )

        self.workouts = WorkoutService(self.workouts_state, self.store, self.notifications)
        self.metrics = MetricsService(
            self.metrics_state, self.widgets_state, self.store, self.notifications
        )
        self.loaded = False

    @property
    def user_id(self) -> str | None:
        return self.session.user_id if self.session else None

    async def load(self) -> None:
        """Fill the state containers from the selected store."""
        if isinstance(self.store, LocalFallbackStore):
            self.store.attach(WORKOUTS_KEY, self.workouts_state, lambda ws: [w.to_dict() for w in ws])
            self.store.attach(METRICS_KEY, self.metrics_state, lambda m: m.to_dict())
            self.store.attach(WIDGETS_KEY, self.widgets_state, lambda ws: [w.to_dict() for w in ws])

        try:
            workouts = await self.store.load_workouts()
            metrics = await self.store.load_metrics()
            widgets = await self.store.load_widgets()
        except StoreError as e:
            logger.error("Failed to load data for %s: %s", self.user_id, e)
            self.notifications.error(f"Failed to load data: {e}")
            workouts, metrics, widgets = [], BodyMetrics(), default_widgets()

        self.workouts_state.replace(workouts)
        self.metrics_state.replace(metrics)
        self.widgets_state.replace(widgets)
        self.loaded = True
        logger.debug(
            "Loaded %d workouts from %s store", len(workouts), self.store.source_name
        )
