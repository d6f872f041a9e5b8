"""Exceptions raised by the polo record-keeping core."""

from typing import Any, Optional


class PoloError(Exception):
    """Base exception for all Polo Manager errors."""

    pass


class EntityNotFoundError(PoloError):
    """Raised when an identifier does not resolve to a stored entity."""

    def __init__(self, entity_type: str, entity_id: Any):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} {entity_id} not found")


# ========== Mutation Failures ==========


class EntityOperationError(PoloError):
    """A create/update/delete that failed.

    Carries the attempted operation and the identity of the entity so the
    caller can report exactly what was refused.
    """

    def __init__(self, operation: str, entity_type: str, entity_id: Optional[Any], reason: str):
        self.operation = operation
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.reason = reason
        target = f"{entity_type} {entity_id}" if entity_id is not None else entity_type
        super().__init__(f"{operation} {target} failed: {reason}")


class ValidationFailedError(EntityOperationError):
    """Raised when field values break a domain rule."""

    pass


class DeleteRejectedError(EntityOperationError):
    """Raised when a cascading delete could not be applied in full and was rolled back."""

    pass


# ========== Match Lifecycle ==========


class MatchStateError(PoloError):
    """Raised on an illegal status transition or a mutation outside live play."""

    pass


class ChukkerLimitError(MatchStateError):
    """Raised when the current chukker would pass the match's total chukkers."""

    pass
