"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from pathlib import Path

from bookstore.application.order_entry import OrderEntrySession
from bookstore.infrastructure.persistence.json_catalog import JsonCatalog
from bookstore.infrastructure.persistence.json_client_directory import (
    JsonClientDirectory,
)
from bookstore.infrastructure.persistence.json_employee_directory import (
    JsonCurrentEmployee,
)
from bookstore.infrastructure.persistence.json_order_submitter import (
    JsonOrderSubmitter,
)

DATA_DIR_ENV = "BOOKSTORE_DATA_DIR"

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir() -> Path:
    override = os.environ.get(DATA_DIR_ENV)
    return Path(override) if override else _DEFAULT_DATA_DIR


def catalog() -> JsonCatalog:
    return JsonCatalog(data_dir() / "catalog.json")


def client_directory() -> JsonClientDirectory:
    return JsonClientDirectory(data_dir() / "clients.json")


def current_employee(employee_id: str) -> JsonCurrentEmployee:
    return JsonCurrentEmployee(data_dir() / "employees.json", employee_id)


def order_submitter() -> JsonOrderSubmitter:
    return JsonOrderSubmitter(data_dir() / "orders.json", catalog())


def order_entry_session(employee_id: str) -> OrderEntrySession:
    return OrderEntrySession(
        catalog_search=catalog(),
        client_directory=client_directory(),
        current_employee=current_employee(employee_id),
        order_submitter=order_submitter(),
    )
