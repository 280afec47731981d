"""Read-side records handed to the domain by the lookup collaborators.

These are plain immutable snapshots: the catalog, client list and
employee records are owned elsewhere and may change independently of
any order in progress.
"""

from __future__ import annotations

from dataclasses import dataclass

from bookstore.domain.exceptions import InvalidArgument
from bookstore.domain.model.value_objects import Money


@dataclass(frozen=True)
class CatalogItem:
    """A search hit: one book with its price and stock at a branch."""

    item_id: str
    title: str
    unit_price: Money
    available_stock: int

    def __post_init__(self) -> None:
        if not isinstance(self.unit_price, Money):
            raise InvalidArgument(
                f"Catalog price must be Money, got {type(self.unit_price).__name__}"
            )
        if isinstance(self.available_stock, bool) or not isinstance(self.available_stock, int):
            raise InvalidArgument("Available stock must be an integer")
        if self.available_stock < 0:
            raise InvalidArgument(
                f"Available stock cannot be negative, got {self.available_stock}"
            )


@dataclass(frozen=True)
class Client:
    id: str
    name: str


@dataclass(frozen=True)
class EmployeeRef:
    """The acting employee and the branch they sell from."""

    employee_id: str
    branch_id: str
