"""JSON-file-backed implementation of OrderSubmitter.

Saving an order appends it to ``orders.json`` and deducts the sold
units from the branch stock in the catalog.  Stock is re-checked here
because it may have changed since the books were selected.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from bookstore.domain.collaborators.order_submitter import (
    OrderSubmitter,
    SubmissionOutcome,
)
from bookstore.domain.exceptions import DomainException, SnapshotRejected
from bookstore.domain.model.snapshot import OrderSnapshot, SnapshotLine
from bookstore.domain.model.value_objects import Money
from bookstore.infrastructure.persistence.json_catalog import JsonCatalog
from bookstore.infrastructure.persistence.json_file import JsonFile

logger = logging.getLogger(__name__)


class JsonOrderSubmitter(OrderSubmitter):

    def __init__(self, file_path: Path, catalog: JsonCatalog) -> None:
        self._file = JsonFile(file_path)
        self._catalog = catalog

    # --- OrderSubmitter interface ---------------------------------------------

    async def submit(self, snapshot: OrderSnapshot) -> SubmissionOutcome:
        self._check_structure(snapshot)

        quantities: dict[str, int] = {}
        for line in snapshot.lines:
            quantities[line.item_id] = quantities.get(line.item_id, 0) + line.quantity

        # Both files are prepared in memory; stock is written only after
        # the order is, and the order is taken back if that write fails.
        try:
            orders = self._file.load()
            order_id = max((o["id"] for o in orders), default=0) + 1
            catalog_records = self._catalog.stock_after_sale(snapshot.branch_id, quantities)
        except DomainException as exc:
            return SubmissionOutcome.failed(str(exc))
        except (OSError, ValueError) as exc:
            logger.error("could not read order data: %s", exc)
            return SubmissionOutcome.failed(f"Order storage unavailable: {exc}")

        try:
            self._file.persist(orders + [self._to_raw(order_id, snapshot)])
        except (OSError, ValueError) as exc:
            logger.error("could not write order file %s: %s", self._file.path, exc)
            return SubmissionOutcome.failed(f"Order storage unavailable: {exc}")

        try:
            self._catalog.replace_records(catalog_records)
        except (OSError, ValueError) as exc:
            logger.error("could not update stock, withdrawing order #%d: %s", order_id, exc)
            self._file.persist(orders)
            return SubmissionOutcome.failed(f"Order storage unavailable: {exc}")

        logger.info("order #%d saved to %s", order_id, self._file.path)
        return SubmissionOutcome.succeeded(order_id)

    # --- Queries --------------------------------------------------------------

    def get_by_id(self, order_id: int) -> OrderSnapshot | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _check_structure(snapshot: OrderSnapshot) -> None:
        if not isinstance(snapshot, OrderSnapshot):
            raise SnapshotRejected(f"Expected OrderSnapshot, got {type(snapshot).__name__}")
        if not snapshot.client_id or not snapshot.employee_id or not snapshot.branch_id:
            raise SnapshotRejected("Snapshot is missing client, employee or branch")
        if snapshot.order_date.tzinfo is None:
            raise SnapshotRejected("Snapshot order date must be timezone-aware")
        if not snapshot.lines:
            raise SnapshotRejected("Snapshot has no lines")
        for line in snapshot.lines:
            if isinstance(line.quantity, bool) or not isinstance(line.quantity, int) or line.quantity <= 0:
                raise SnapshotRejected(
                    f"Line for item '{line.item_id}' has invalid quantity {line.quantity!r}"
                )

    @staticmethod
    def _to_raw(order_id: int, snapshot: OrderSnapshot) -> dict:
        return {
            "id": order_id,
            "client_id": snapshot.client_id,
            "employee_id": snapshot.employee_id,
            "branch_id": snapshot.branch_id,
            "order_date": snapshot.order_date.isoformat(),
            "lines": [
                {
                    "item_id": line.item_id,
                    "quantity": line.quantity,
                    "unit_price": str(line.unit_price.amount),
                    "currency": line.unit_price.currency,
                }
                for line in snapshot.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> OrderSnapshot:
        return OrderSnapshot(
            client_id=raw["client_id"],
            employee_id=raw["employee_id"],
            branch_id=raw["branch_id"],
            order_date=datetime.fromisoformat(raw["order_date"]),
            lines=tuple(
                SnapshotLine(
                    item_id=line["item_id"],
                    quantity=line["quantity"],
                    unit_price=Money(Decimal(line["unit_price"]), line.get("currency", "RUB")),
                )
                for line in raw["lines"]
            ),
        )
