"""Abstract persistence of a finished order."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from bookstore.domain.model.snapshot import OrderSnapshot


@dataclass(frozen=True)
class SubmissionOutcome:
    success: bool
    reason: str | None = None
    order_id: int | None = None

    @staticmethod
    def succeeded(order_id: int | None = None) -> SubmissionOutcome:
        return SubmissionOutcome(success=True, order_id=order_id)

    @staticmethod
    def failed(reason: str) -> SubmissionOutcome:
        return SubmissionOutcome(success=False, reason=reason)


class OrderSubmitter(ABC):

    @abstractmethod
    async def submit(self, snapshot: OrderSnapshot) -> SubmissionOutcome:
        """Persist *snapshot*.

        Business failures (storage unavailable, ...) are reported through
        ``SubmissionOutcome.failed``.  A structurally malformed snapshot
        raises SnapshotRejected instead.
        """
