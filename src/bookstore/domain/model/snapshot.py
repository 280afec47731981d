"""The immutable order handed to the submit collaborator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from bookstore.domain.model.value_objects import Money


@dataclass(frozen=True)
class SnapshotLine:
    item_id: str
    quantity: int
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class OrderSnapshot:
    """Everything persistence needs to record one order.

    Only lines with a positive quantity are ever included.
    """

    client_id: str
    employee_id: str
    branch_id: str
    order_date: datetime
    lines: tuple[SnapshotLine, ...]

    @property
    def total(self) -> Money:
        if not self.lines:
            return Money.zero()
        result = Money.zero(self.lines[0].unit_price.currency)
        for line in self.lines:
            result = result + line.line_total
        return result
