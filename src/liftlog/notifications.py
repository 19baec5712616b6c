"""User-facing notifications for mutation outcomes."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Protocol, runtime_checkable

DEFAULT = "default"
DESTRUCTIVE = "destructive"


@dataclass
class Notification:
    """A transient message with a title and description."""

    title: str
    description: str
    variant: str = DEFAULT
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def is_error(self) -> bool:
        return self.variant == DESTRUCTIVE

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "title": self.title,
            "description": self.description,
            "variant": self.variant,
            "created_at": self.created_at.isoformat(),
        }


@runtime_checkable
class Notifier(Protocol):
    """Anything that can surface a notification to the user."""

    def notify(self, notification: Notification) -> None:
        ...


class NotificationCenter:
    """Keeps recent notifications and forwards them to sinks."""

    def __init__(self, max_history: int = 50):
        self._history: deque[Notification] = deque(maxlen=max_history)
        self._sinks: list[Callable[[Notification], None]] = []

    def add_sink(self, sink: Callable[[Notification], None]) -> None:
        self._sinks.append(sink)

    def notify(self, notification: Notification) -> None:
        self._history.append(notification)
        for sink in self._sinks:
            sink(notification)

    def success(self, title: str, description: str) -> Notification:
        notification = Notification(title=title, description=description)
        self.notify(notification)
        return notification

    def error(self, description: str, title: str = "Error") -> Notification:
        notification = Notification(title=title, description=description, variant=DESTRUCTIVE)
        self.notify(notification)
        return notification

    @property
    def history(self) -> list[Notification]:
        return list(self._history)

    @property
    def latest(self) -> Notification | None:
        return self._history[-1] if self._history else None

    def clear(self) -> None:
        self._history.clear()
