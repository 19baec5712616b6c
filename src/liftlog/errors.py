"""Exception hierarchy for liftlog."""


class LiftlogError(Exception):
    """Base class for liftlog errors."""


class NotFoundError(LiftlogError):
    """Raised when a mutation targets an entity that is not in the current state."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class ValidationError(LiftlogError):
    """Raised when submitted data violates a model invariant."""


class StoreError(LiftlogError):
    """Raised by a store when a persistence call cannot be completed."""
