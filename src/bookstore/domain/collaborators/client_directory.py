"""Abstract lookup for clients an order can be placed for."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.catalog import Client


class ClientDirectory(ABC):

    @abstractmethod
    def list_all(self) -> list[Client]:
        """Return every known client."""

    @abstractmethod
    def get_by_id(self, client_id: str) -> Client | None:
        """Return a client by its ID, or None if not found."""
