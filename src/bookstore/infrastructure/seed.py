"""Recreate the JSON data directory with demo data.

Writes branches, employees, clients and a small catalog.  Employees may
come from a JSON file (``[{"id": ..., "name": ...}, ...]``); each one is
assigned to a random branch, and every book gets random stock per branch.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path

from bookstore.domain.exceptions import InvalidArgument
from bookstore.infrastructure.persistence.json_file import JsonFile

logger = logging.getLogger(__name__)

DATA_FILES = ("branches.json", "employees.json", "clients.json", "catalog.json", "orders.json")

BRANCHES = [
    {"id": "1", "title": "Bookshop on Mira", "address": "10 Mira Ave"},
    {"id": "2", "title": "Right Bank Bookshop", "address": "105 Krasnoyarsky Rabochy Ave"},
    {"id": "3", "title": "Vzlyotka Bookshop", "address": "Vzlyotka Plaza, 10 Vesny St"},
]

DEFAULT_EMPLOYEES = [
    {"id": "1", "name": "Anna Petrova"},
    {"id": "2", "name": "Ivan Sokolov"},
    {"id": "3", "name": "Maria Volkova"},
]

DEFAULT_CLIENTS = [
    {"id": "1", "name": "City Library No. 4"},
    {"id": "2", "name": "School No. 17"},
    {"id": "3", "name": "Olga Smirnova"},
]

DEFAULT_BOOKS = [
    {"id": "1", "title": "War and Peace", "price": "890.00"},
    {"id": "2", "title": "Crime and Punishment", "price": "450.00"},
    {"id": "3", "title": "The Master and Margarita", "price": "520.00"},
    {"id": "4", "title": "Dead Souls", "price": "390.00"},
    {"id": "5", "title": "Fathers and Sons", "price": "310.00"},
]


def load_employees(path: Path) -> list[dict]:
    records = JsonFile(path).load()
    for raw in records:
        if "id" not in raw or "name" not in raw:
            raise InvalidArgument(f"Employee record needs 'id' and 'name': {raw!r}")
    return records


def seed_data_dir(
    target: Path,
    employees: list[dict] | None = None,
    force: bool = False,
    rng: random.Random | None = None,
) -> dict[str, int]:
    """Write fresh data files into *target*; returns record counts per file.

    Refuses to touch a directory that already holds data unless *force*.
    """
    rng = rng or random.Random()
    existing = [name for name in DATA_FILES if (target / name).exists()]
    if existing and not force:
        raise InvalidArgument(
            f"Data already present in {target} ({', '.join(existing)}); use --force to recreate"
        )

    for name in existing:
        (target / name).unlink()
        logger.info("removed %s", target / name)

    branch_ids = [b["id"] for b in BRANCHES]
    staff = [
        {"id": str(e["id"]), "name": e["name"], "branch_id": rng.choice(branch_ids)}
        for e in (employees if employees is not None else DEFAULT_EMPLOYEES)
    ]
    books = [
        {**book, "currency": "RUB", "stock": {b: rng.randint(0, 10) for b in branch_ids}}
        for book in DEFAULT_BOOKS
    ]

    contents = {
        "branches.json": BRANCHES,
        "employees.json": staff,
        "clients.json": DEFAULT_CLIENTS,
        "catalog.json": books,
        "orders.json": [],
    }
    for name, records in contents.items():
        JsonFile(target / name).persist(records)
    logger.info("seeded %s", target)
    return {name: len(records) for name, records in contents.items()}
