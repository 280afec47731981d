"""OrderDraft aggregate: the order being assembled in an entry session.

The draft is an aggregate root that exclusively owns its OrderLines.
All composition rules (one line per item, stock ceilings, submit-time
preconditions) are enforced here.

Lifecycle::

    OPEN --submit()--> SUBMITTING --success--> SUBMITTED (terminal)
                           |
                           +--failure--> OPEN (intact, retryable)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable

from bookstore.domain.collaborators.order_submitter import OrderSubmitter
from bookstore.domain.exceptions import (
    DomainException,
    DraftClosed,
    EmptyOrder,
    InvalidArgument,
    LineNotFound,
    NoClientSelected,
    SubmissionFailed,
    SubmissionInProgress,
)
from bookstore.domain.model.catalog import CatalogItem
from bookstore.domain.model.observable import Observable
from bookstore.domain.model.order_line import OrderLine
from bookstore.domain.model.snapshot import OrderSnapshot, SnapshotLine
from bookstore.domain.model.value_objects import Money

logger = logging.getLogger(__name__)


class DraftStatus(Enum):
    OPEN = "OPEN"
    SUBMITTING = "SUBMITTING"
    SUBMITTED = "SUBMITTED"


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of ``OrderDraft.submit``.

    ``error`` is None on success.  ``snapshot`` is set whenever a
    snapshot was actually handed to the submitter.
    """

    snapshot: OrderSnapshot | None = None
    error: DomainException | None = None
    order_id: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderDraft(Observable):
    """A mutable order in progress.

    Observers receive ``"lines"``, ``"order_total"``, ``"selected_client"``
    and ``"status"`` notifications.  A quantity change on any owned line
    is forwarded as ``"order_total"``.

    Line mutations are serialized by a re-entrant lock so two rapid
    selections of the same item cannot both pass the same ceiling check.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        super().__init__()
        self._lines: dict[str, OrderLine] = {}
        self._line_subscriptions: dict[str, Callable[[], None]] = {}
        self._selected_client: str | None = None
        self._status = DraftStatus.OPEN
        self._clock = clock or _utcnow
        self._lock = threading.RLock()

    # --- Read side ------------------------------------------------------------

    @property
    def selected_client(self) -> str | None:
        return self._selected_client

    @property
    def status(self) -> DraftStatus:
        return self._status

    @property
    def is_submitted(self) -> bool:
        return self._status == DraftStatus.SUBMITTED

    @property
    def lines(self) -> tuple[OrderLine, ...]:
        """Lines in selection order."""
        with self._lock:
            return tuple(self._lines.values())

    def line(self, item_id: str) -> OrderLine | None:
        return self._lines.get(item_id)

    @property
    def order_total(self) -> Money:
        with self._lock:
            lines = list(self._lines.values())
        if not lines:
            return Money.zero()
        result = Money.zero(lines[0].unit_price.currency)
        for line in lines:
            result = result + line.line_total
        return result

    # --- Composition ----------------------------------------------------------

    def select_client(self, client_id: str | None) -> None:
        """Set (or with None, clear) the client the order is for.

        Existence is not checked here; the selection may change freely
        until submit.
        """
        if client_id is not None and not str(client_id).strip():
            raise InvalidArgument("Client ID cannot be blank")
        with self._lock:
            self._assert_mutable()
            new_value = None if client_id is None else str(client_id)
            if new_value == self._selected_client:
                return
            self._selected_client = new_value
        self._notify("selected_client")

    def add_or_increment_item(self, item: CatalogItem) -> OrderLine:
        """Select *item* once more.

        The first selection creates a line whose ceiling is the stock
        available right now; later selections increment it.  Raises
        QuantityOutOfRange, leaving the draft unchanged, when the item is
        already at its ceiling, and InvalidArgument when a new item is
        priced in a different currency from the lines already held.
        """
        with self._lock:
            self._assert_mutable()
            line = self._lines.get(item.item_id)
            if line is not None:
                line.increment()
                logger.debug("item %s incremented to %d", item.item_id, line.quantity)
                return line

            currency = self._currency()
            if currency is not None and item.unit_price.currency != currency:
                raise InvalidArgument(
                    f"Item '{item.item_id}' is priced in {item.unit_price.currency}, "
                    f"but this order is in {currency}"
                )

            line = OrderLine.create(
                item_id=item.item_id,
                title=item.title,
                unit_price=item.unit_price,
                max_quantity=item.available_stock,
            )
            # Not attached until the first unit fits, so a refused
            # selection leaves no empty line behind.
            line.increment()
            self._lines[line.item_id] = line
            self._line_subscriptions[line.item_id] = line.subscribe(self._on_line_changed)
            logger.debug("item %s added (ceiling %d)", line.item_id, line.max_quantity)
        self._notify("lines", "order_total")
        return line

    def set_line_quantity(self, item_id: str, quantity: int) -> None:
        with self._lock:
            self._assert_mutable()
            self._require_line(item_id).set_quantity(quantity)

    def decrement_item(self, item_id: str) -> None:
        """Lower a line by one unit; the line stays even at zero."""
        with self._lock:
            self._assert_mutable()
            self._require_line(item_id).decrement()

    def remove_line(self, item_id: str) -> bool:
        """Drop the line for *item_id*.  Returns False if there was none."""
        with self._lock:
            self._assert_mutable()
            line = self._lines.pop(item_id, None)
            if line is None:
                return False
            self._line_subscriptions.pop(item_id)()
        self._notify("lines", "order_total")
        return True

    # --- Validation & submission ----------------------------------------------

    def validate(self) -> DomainException | None:
        """Return the first violated submit precondition, or None.

        Order of checks is fixed: client first, then content.
        """
        with self._lock:
            if self._selected_client is None:
                return NoClientSelected()
            if not any(line.quantity > 0 for line in self._lines.values()):
                return EmptyOrder()
            return None

    async def submit(
        self,
        current_employee_id: str,
        branch_id: str,
        submitter: OrderSubmitter,
    ) -> SubmitResult:
        """Validate, snapshot and hand the order to *submitter*.

        Business failures come back in the result; the draft is then
        unchanged and can be submitted again.  On success the draft
        becomes terminal.
        """
        if not current_employee_id or not branch_id:
            raise InvalidArgument("Employee ID and branch ID are required to submit")

        with self._lock:
            if self._status == DraftStatus.SUBMITTED:
                return SubmitResult(error=DraftClosed())
            if self._status == DraftStatus.SUBMITTING:
                logger.warning("rejected concurrent submit for client %s", self._selected_client)
                return SubmitResult(error=SubmissionInProgress())

            violation = self.validate()
            if violation is not None:
                logger.info("order not submitted: %s", violation)
                return SubmitResult(error=violation)

            snapshot = self._build_snapshot(current_employee_id, branch_id)
            self._set_status(DraftStatus.SUBMITTING)

        succeeded = False
        try:
            outcome = await submitter.submit(snapshot)
            succeeded = outcome.success
        finally:
            with self._lock:
                self._set_status(DraftStatus.SUBMITTED if succeeded else DraftStatus.OPEN)

        if not outcome.success:
            reason = outcome.reason or "unknown error"
            logger.warning("order submission failed: %s", reason)
            return SubmitResult(snapshot=snapshot, error=SubmissionFailed(reason))

        logger.info(
            "order submitted: client=%s lines=%d total=%s order_id=%s",
            snapshot.client_id,
            len(snapshot.lines),
            snapshot.total,
            outcome.order_id,
        )
        return SubmitResult(snapshot=snapshot, order_id=outcome.order_id)

    # --- Internal helpers -----------------------------------------------------

    def _build_snapshot(self, employee_id: str, branch_id: str) -> OrderSnapshot:
        assert self._selected_client is not None
        return OrderSnapshot(
            client_id=self._selected_client,
            employee_id=employee_id,
            branch_id=branch_id,
            order_date=self._clock(),
            lines=tuple(
                SnapshotLine(
                    item_id=line.item_id,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                )
                for line in self._lines.values()
                if line.quantity > 0
            ),
        )

    def _assert_mutable(self) -> None:
        if self._status == DraftStatus.SUBMITTED:
            raise DraftClosed()
        if self._status == DraftStatus.SUBMITTING:
            raise SubmissionInProgress()

    def _currency(self) -> str | None:
        for line in self._lines.values():
            return line.unit_price.currency
        return None

    def _require_line(self, item_id: str) -> OrderLine:
        line = self._lines.get(item_id)
        if line is None:
            raise LineNotFound(f"Item '{item_id}' is not in this order")
        return line

    def _set_status(self, status: DraftStatus) -> None:
        if status == self._status:
            return
        self._status = status
        self._notify("status")

    def _on_line_changed(self, line: OrderLine, property_name: str) -> None:
        if property_name == "line_total":
            self._notify("order_total")
