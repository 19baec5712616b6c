"""Persistence backends sharing one store contract."""

from .base import BaseStore, StoreResult
from .local import LocalFallbackStore, LocalStorage
from .remote import RemoteStore

__all__ = [
    "BaseStore",
    "LocalFallbackStore",
    "LocalStorage",
    "RemoteStore",
    "StoreResult",
]
