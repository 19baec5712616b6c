"""In-memory session state."""

from .container import StateContainer

__all__ = ["StateContainer"]
