"""Session handling and data source selection.

The presence of a user session decides, once per session, whether data
lives in the remote store or in the local fallback store.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from .stores.base import BaseStore
from .stores.local import LocalFallbackStore, LocalStorage
from .stores.remote import RemoteStore


@dataclass(frozen=True)
class Session:
    """An authenticated user session."""

    user_id: str
    email: str | None = None


@runtime_checkable
class SessionProvider(Protocol):
    """Supplies the current session, if any."""

    def current_session(self) -> Session | None:
        ...


class StaticSessionProvider:
    """Session provider with a fixed session (or none)."""

    def __init__(self, session: Session | None = None):
        self._session = session

    @classmethod
    def for_user(cls, user_id: str | None) -> "StaticSessionProvider":
        return cls(Session(user_id=user_id) if user_id else None)

    def current_session(self) -> Session | None:
        return self._session


def select_store(
    session: Session | None, storage: LocalStorage, db_path: Path | None = None
) -> BaseStore:
    """Pick the remote store for a signed-in user, the local fallback otherwise."""
    if session is not None:
        return RemoteStore(session.user_id, db_path)
    return LocalFallbackStore(storage)
