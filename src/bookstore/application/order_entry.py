"""Application service: Order Entry session.

Drives one employee's order-entry screen: it loads the client list,
resolves who is acting and from which branch, scopes catalog searches
to that branch and feeds the user's picks into an OrderDraft.

Collaborators are passed in explicitly; the session holds no global
state.  Domain errors are re-raised to the caller after being recorded
in ``error_message``, which is what the screen shows.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator

from bookstore.application.dto import (
    CatalogItemDTO,
    DraftDTO,
    DraftLineDTO,
    SavedOrderDTO,
)
from bookstore.domain.collaborators.catalog_search import CatalogSearch
from bookstore.domain.collaborators.client_directory import ClientDirectory
from bookstore.domain.collaborators.current_employee import CurrentEmployee
from bookstore.domain.collaborators.order_submitter import OrderSubmitter
from bookstore.domain.exceptions import DomainException, EntityNotFoundError
from bookstore.domain.model.catalog import CatalogItem, Client, EmployeeRef
from bookstore.domain.model.order_draft import OrderDraft

logger = logging.getLogger(__name__)


class OrderEntrySession:

    def __init__(
        self,
        catalog_search: CatalogSearch,
        client_directory: ClientDirectory,
        current_employee: CurrentEmployee,
        order_submitter: OrderSubmitter,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._catalog_search = catalog_search
        self._client_directory = client_directory
        self._current_employee = current_employee
        self._order_submitter = order_submitter
        self._clock = clock

        self._employee: EmployeeRef | None = None
        self._clients: list[Client] = []
        self._found_items: list[CatalogItem] = []
        self._draft: OrderDraft | None = None
        self.error_message: str | None = None

    # --- Lifecycle ------------------------------------------------------------

    def start(self) -> None:
        """Load clients, resolve the acting employee and open a draft."""
        with self._reporting():
            self._clients = self._client_directory.list_all()
            self._employee = self._current_employee.resolve()
        self._draft = OrderDraft(clock=self._clock)
        logger.info(
            "order entry started: employee=%s branch=%s clients=%d",
            self._employee.employee_id,
            self._employee.branch_id,
            len(self._clients),
        )

    @property
    def employee(self) -> EmployeeRef:
        self._require_started()
        assert self._employee is not None
        return self._employee

    @property
    def draft(self) -> OrderDraft:
        self._require_started()
        assert self._draft is not None
        return self._draft

    @property
    def clients(self) -> list[Client]:
        return list(self._clients)

    @property
    def found_items(self) -> list[CatalogItemDTO]:
        return [CatalogItemDTO.from_domain(item) for item in self._found_items]

    # --- User actions ---------------------------------------------------------

    def search(self, query: str) -> list[CatalogItemDTO]:
        """Search the catalog at the employee's branch."""
        branch_id = self.employee.branch_id
        self._found_items = self._catalog_search.search(query, branch_id)
        logger.debug("search %r at branch %s: %d hits", query, branch_id, len(self._found_items))
        return self.found_items

    def select_book(self, item_id: str) -> DraftDTO:
        """Add one unit of a book from the last search results."""
        with self._reporting():
            item = self._find_result(item_id)
            self.draft.add_or_increment_item(item)
        return self.draft_dto()

    def unselect_book(self, item_id: str) -> DraftDTO:
        with self._reporting():
            self.draft.remove_line(item_id)
        return self.draft_dto()

    def select_client(self, client_id: str) -> None:
        with self._reporting():
            for client in self._clients:
                if client.id == client_id:
                    self.draft.select_client(client.id)
                    return
            raise EntityNotFoundError(f"Client not found: '{client_id}'")

    async def save_order(self) -> SavedOrderDTO:
        """Submit the current draft for the acting employee's branch.

        On success a fresh draft is opened for the next order.
        """
        draft = self.draft
        employee = self.employee
        with self._reporting():
            result = await draft.submit(
                current_employee_id=employee.employee_id,
                branch_id=employee.branch_id,
                submitter=self._order_submitter,
            )
            if result.error is not None:
                raise result.error

        assert result.snapshot is not None
        snapshot = result.snapshot
        saved = SavedOrderDTO(
            order_id=result.order_id,
            client_id=snapshot.client_id,
            employee_id=snapshot.employee_id,
            branch_id=snapshot.branch_id,
            order_date=snapshot.order_date.strftime("%Y-%m-%d %H:%M UTC"),
            lines=[line for line in DraftDTO.from_domain(draft).lines if line.quantity > 0],
            total=str(snapshot.total),
        )
        self._draft = OrderDraft(clock=self._clock)
        self._found_items = []
        return saved

    def draft_dto(self) -> DraftDTO:
        return DraftDTO.from_domain(self.draft)

    # --- Internal helpers -----------------------------------------------------

    @contextmanager
    def _reporting(self) -> Iterator[None]:
        self.error_message = None
        try:
            yield
        except DomainException as exc:
            self.error_message = str(exc)
            raise

    def _find_result(self, item_id: str) -> CatalogItem:
        for item in self._found_items:
            if item.item_id == item_id:
                return item
        raise EntityNotFoundError(f"Book '{item_id}' is not among the search results")

    def _require_started(self) -> None:
        if self._draft is None:
            raise RuntimeError("Order entry session has not been started")
