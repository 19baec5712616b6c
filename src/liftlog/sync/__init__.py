"""Optimistic local-state synchronization."""

from .optimistic import Mutation, OptimisticCoordinator, Outcome

__all__ = ["Mutation", "OptimisticCoordinator", "Outcome"]
