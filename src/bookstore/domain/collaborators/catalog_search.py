"""Abstract catalog search.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (JSON, SQL, in-memory) live
in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.catalog import CatalogItem


class CatalogSearch(ABC):

    @abstractmethod
    def search(self, query: str, branch_id: str) -> list[CatalogItem]:
        """Return books matching *query* with their stock at *branch_id*."""
