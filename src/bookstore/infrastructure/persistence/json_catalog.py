"""JSON-file-backed implementation of CatalogSearch.

Each record holds a book and its stock per branch::

    {"id": "1", "title": "...", "price": "450.00", "currency": "RUB",
     "stock": {"1": 5, "2": 0}}
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from bookstore.domain.collaborators.catalog_search import CatalogSearch
from bookstore.domain.exceptions import EntityNotFoundError, InvalidArgument
from bookstore.domain.model.catalog import CatalogItem
from bookstore.domain.model.value_objects import Money
from bookstore.infrastructure.persistence.json_file import JsonFile


class JsonCatalog(CatalogSearch):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- CatalogSearch interface ----------------------------------------------

    def search(self, query: str, branch_id: str) -> list[CatalogItem]:
        """Case-insensitive title match among books the branch carries.

        An empty query lists the branch's whole assortment.
        """
        needle = query.strip().lower()
        return [
            self._to_domain(raw, branch_id)
            for raw in self._file.load()
            if branch_id in raw.get("stock", {}) and needle in raw["title"].lower()
        ]

    # --- Stock bookkeeping ----------------------------------------------------

    def stock_after_sale(self, branch_id: str, quantities: dict[str, int]) -> list[dict]:
        """Return the catalog records with sold units removed from a branch.

        Nothing is written; the caller persists the result with
        ``replace_records`` once the sale itself is recorded.  Every book
        is validated before any record is touched.
        """
        records = self._file.load()
        by_id = {raw["id"]: raw for raw in records}

        for item_id, qty in quantities.items():
            raw = by_id.get(item_id)
            if raw is None:
                raise EntityNotFoundError(f"Book with ID '{item_id}' not found")
            available = int(raw.get("stock", {}).get(branch_id, 0))
            if qty > available:
                raise InvalidArgument(
                    f"Insufficient stock for '{raw['title']}' "
                    f"(need {qty}, have {available} available)"
                )

        for item_id, qty in quantities.items():
            stock = by_id[item_id].setdefault("stock", {})
            stock[branch_id] = int(stock.get(branch_id, 0)) - qty

        return records

    def replace_records(self, records: list[dict]) -> None:
        self._file.persist(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict, branch_id: str) -> CatalogItem:
        return CatalogItem(
            item_id=raw["id"],
            title=raw["title"],
            unit_price=Money(Decimal(raw["price"]), raw.get("currency", "RUB")),
            available_stock=int(raw["stock"][branch_id]),
        )
