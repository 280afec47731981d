"""JSON-file-backed CurrentEmployee.

The acting employee's ID is supplied by whoever logged them in (the
CLI passes ``--employee``); this adapter only looks up their branch.
"""

from __future__ import annotations

from pathlib import Path

from bookstore.domain.collaborators.current_employee import CurrentEmployee
from bookstore.domain.exceptions import EntityNotFoundError
from bookstore.domain.model.catalog import EmployeeRef
from bookstore.infrastructure.persistence.json_file import JsonFile


class JsonCurrentEmployee(CurrentEmployee):

    def __init__(self, file_path: Path, employee_id: str) -> None:
        self._file = JsonFile(file_path)
        self._employee_id = employee_id

    def resolve(self) -> EmployeeRef:
        for raw in self._file.load():
            if raw["id"] == self._employee_id:
                return EmployeeRef(employee_id=raw["id"], branch_id=raw["branch_id"])
        raise EntityNotFoundError(f"Employee with ID '{self._employee_id}' not found")
