"""Domain-level exceptions.

Business rule violations are subclasses of DomainException so the CLI
and the order-entry session can catch them uniformly and show a
user-friendly message.  Every one of them leaves the draft in a
well-defined state that can be continued.

ContractViolation is deliberately outside that hierarchy: it signals a
programming error in a collaborator, not a business outcome.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class InvalidArgument(DomainException):
    """Malformed construction input (negative price, negative stock...)."""


class QuantityOutOfRange(DomainException):
    """A quantity change would leave ``0 <= quantity <= max_quantity``."""

    def __init__(self, item_id: str, requested: int, max_quantity: int) -> None:
        self.item_id = item_id
        self.requested = requested
        self.max_quantity = max_quantity
        if self.at_ceiling:
            message = (
                f"Item '{item_id}' is at its stock limit "
                f"(requested {requested}, only {max_quantity} available)"
            )
        else:
            message = f"Quantity for item '{item_id}' cannot be {requested}"
        super().__init__(message)

    @property
    def at_ceiling(self) -> bool:
        """True for the stock-exhausted case."""
        return self.requested > self.max_quantity


class LineNotFound(DomainException):
    """The draft holds no line for the given item."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class NoClientSelected(DomainException):
    def __init__(self) -> None:
        super().__init__("No client selected")


class EmptyOrder(DomainException):
    def __init__(self) -> None:
        super().__init__("At least one book must be added to the order")


class SubmissionInProgress(DomainException):
    def __init__(self) -> None:
        super().__init__("A submission for this order is already in progress")


class SubmissionFailed(DomainException):
    """The submit collaborator reported failure."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Order submission failed: {reason}")


class DraftClosed(DomainException):
    def __init__(self) -> None:
        super().__init__("Order has already been submitted")


class ContractViolation(Exception):
    """A collaborator contract was broken; not recoverable by the user."""


class SnapshotRejected(ContractViolation):
    """The submitter refused a snapshot for structural reasons."""
