"""Abstract accessor for the employee acting in the current session."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.catalog import EmployeeRef


class CurrentEmployee(ABC):

    @abstractmethod
    def resolve(self) -> EmployeeRef:
        """Return the acting employee and their branch.

        Raises EntityNotFoundError if the employee is unknown.
        """
