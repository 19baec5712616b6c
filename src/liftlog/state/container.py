"""Entity state container."""

import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[T], None]


class StateContainer(Generic[T]):
    """Holds the current known-good collection for a session.

    The only write operation is ``replace``. Callers build a new collection
    from the old one, copying every path they touch, so a value captured
    earlier stays valid as a rollback snapshot.
    """

    def __init__(self, initial: T, name: str = "state"):
        self.name = name
        self._value = initial
        self._revision = 0
        self._listeners: list[Listener] = []

    @property
    def value(self) -> T:
        return self._value

    @property
    def revision(self) -> int:
        """Number of replacements applied so far."""
        return self._revision

    def replace(self, new_value: T) -> None:
        """Swap in a new collection and notify listeners."""
        self._value = new_value
        self._revision += 1
        for listener in list(self._listeners):
            try:
                listener(new_value)
            except Exception:
                logger.exception("State listener failed for %s", self.name)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
