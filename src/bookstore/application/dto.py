"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals (observable lines, locks) to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from bookstore.domain.model.catalog import CatalogItem
from bookstore.domain.model.order_draft import OrderDraft


@dataclass(frozen=True)
class CatalogItemDTO:
    """Output: a search hit as displayed to the user."""

    item_id: str
    title: str
    unit_price: str  # formatted, e.g. "450.00 RUB"
    available_stock: int

    @staticmethod
    def from_domain(item: CatalogItem) -> CatalogItemDTO:
        return CatalogItemDTO(
            item_id=item.item_id,
            title=item.title,
            unit_price=str(item.unit_price),
            available_stock=item.available_stock,
        )


@dataclass(frozen=True)
class DraftLineDTO:
    item_id: str
    title: str
    quantity: int
    max_quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class DraftDTO:
    """Output: the order in progress as displayed to the user."""

    client_id: str | None
    status: str
    lines: list[DraftLineDTO]
    total: str

    @staticmethod
    def from_domain(draft: OrderDraft) -> DraftDTO:
        return DraftDTO(
            client_id=draft.selected_client,
            status=draft.status.value,
            lines=[
                DraftLineDTO(
                    item_id=line.item_id,
                    title=line.title,
                    quantity=line.quantity,
                    max_quantity=line.max_quantity,
                    unit_price=str(line.unit_price),
                    line_total=str(line.line_total),
                )
                for line in draft.lines
            ],
            total=str(draft.order_total),
        )


@dataclass(frozen=True)
class SavedOrderDTO:
    """Output: the result of a successful save."""

    order_id: int | None
    client_id: str
    employee_id: str
    branch_id: str
    order_date: str
    lines: list[DraftLineDTO]
    total: str
