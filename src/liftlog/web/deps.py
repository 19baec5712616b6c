"""Request dependencies shared by the routers."""

import asyncio
import logging

from fastapi import Header, Request

from ..config import Settings
from ..notifications import NotificationCenter
from ..services.tracker import Tracker
from ..session import StaticSessionProvider
from ..stores.local import LocalStorage
from ..sync.optimistic import Outcome

logger = logging.getLogger(__name__)


class TrackerRegistry:
    """One loaded tracker per user id (None for anonymous clients)."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._trackers: dict[str | None, Tracker] = {}
        self._lock = asyncio.Lock()

    async def get(self, user_id: str | None) -> Tracker:
        async with self._lock:
            tracker = self._trackers.get(user_id)
            if tracker is None:
                tracker = Tracker(
                    StaticSessionProvider.for_user(user_id),
                    LocalStorage(self.settings.data_dir / "local"),
                    db_path=self.settings.db_path,
                    notifications=NotificationCenter(self.settings.notification_history),
                )
                await tracker.load()
                self._trackers[user_id] = tracker
                logger.info("Opened %s tracker for %s", tracker.store.source_name, user_id or "anonymous")
            return tracker

    def clear(self) -> None:
        self._trackers.clear()


async def get_tracker(request: Request, x_user_id: str | None = Header(default=None)) -> Tracker:
    """Tracker for the session named by the X-User-Id header."""
    return await request.app.state.trackers.get(x_user_id or None)


def outcome_response(outcome: Outcome, key: str, value) -> dict:
    """Mutation response: the resolved outcome plus the current collection."""
    return {**outcome.to_dict(), key: value}
