"""Tests for the JSON-file-backed collaborators."""

import asyncio
import json
import random
from datetime import datetime, timezone

import pytest

from bookstore.domain.collaborators.order_submitter import SubmissionOutcome
from bookstore.domain.exceptions import (
    EntityNotFoundError,
    InvalidArgument,
    SnapshotRejected,
)
from bookstore.domain.model.snapshot import OrderSnapshot, SnapshotLine
from bookstore.domain.model.value_objects import Money
from bookstore.infrastructure.persistence.json_catalog import JsonCatalog
from bookstore.infrastructure.persistence.json_client_directory import (
    JsonClientDirectory,
)
from bookstore.infrastructure.persistence.json_employee_directory import (
    JsonCurrentEmployee,
)
from bookstore.infrastructure.persistence.json_file import JsonFile
from bookstore.infrastructure.persistence.json_order_submitter import (
    JsonOrderSubmitter,
)
from bookstore.infrastructure.seed import seed_data_dir

NOW = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def _write(path, records):
    path.write_text(json.dumps(records), encoding="utf-8")


def _fail_writes_to(monkeypatch, file_name):
    original = JsonFile.persist

    def persist(self, records):
        if self.path.name == file_name:
            raise OSError("disk full")
        original(self, records)

    monkeypatch.setattr(JsonFile, "persist", persist)


@pytest.fixture
def catalog(tmp_path):
    _write(tmp_path / "catalog.json", [
        {"id": "1", "title": "War and Peace", "price": "890.00", "stock": {"B1": 2, "B2": 0}},
        {"id": "2", "title": "Dead Souls", "price": "390.00", "stock": {"B2": 4}},
    ])
    return JsonCatalog(tmp_path / "catalog.json")


def _snapshot(quantity: int = 1, item_id: str = "1") -> OrderSnapshot:
    return OrderSnapshot(
        client_id="C1",
        employee_id="E1",
        branch_id="B1",
        order_date=NOW,
        lines=(SnapshotLine(item_id, quantity, Money.of("890.00")),),
    )


class TestJsonCatalog:

    def test_search_matches_title_case_insensitively(self, catalog):
        found = catalog.search("war", "B1")
        assert [(i.item_id, i.available_stock) for i in found] == [("1", 2)]
        assert found[0].unit_price == Money.of("890.00")

    def test_search_only_returns_books_the_branch_carries(self, catalog):
        assert [i.item_id for i in catalog.search("", "B1")] == ["1"]
        assert [i.item_id for i in catalog.search("", "B2")] == ["1", "2"]

    def test_missing_file_is_created_empty(self, tmp_path):
        repo = JsonCatalog(tmp_path / "sub" / "catalog.json")
        assert repo.search("", "B1") == []

    def test_stock_after_sale_does_not_write(self, catalog):
        records = catalog.stock_after_sale("B2", {"2": 3})
        assert catalog.search("souls", "B2")[0].available_stock == 4

        catalog.replace_records(records)
        assert catalog.search("souls", "B2")[0].available_stock == 1

    def test_shortfall_on_any_book_rejects_the_sale(self, catalog):
        with pytest.raises(InvalidArgument, match="Insufficient stock"):
            catalog.stock_after_sale("B2", {"2": 1, "1": 1})
        assert catalog.search("souls", "B2")[0].available_stock == 4

    def test_sale_of_unknown_book(self, catalog):
        with pytest.raises(EntityNotFoundError):
            catalog.stock_after_sale("B1", {"9": 1})


class TestJsonDirectories:

    def test_clients(self, tmp_path):
        _write(tmp_path / "clients.json", [{"id": "C1", "name": "City Library"}])
        directory = JsonClientDirectory(tmp_path / "clients.json")
        assert directory.get_by_id("C1").name == "City Library"
        assert directory.get_by_id("C2") is None

    def test_current_employee(self, tmp_path):
        _write(tmp_path / "employees.json", [{"id": "E1", "name": "Anna", "branch_id": "B1"}])
        ref = JsonCurrentEmployee(tmp_path / "employees.json", "E1").resolve()
        assert (ref.employee_id, ref.branch_id) == ("E1", "B1")

    def test_unknown_employee(self, tmp_path):
        with pytest.raises(EntityNotFoundError, match="E7"):
            JsonCurrentEmployee(tmp_path / "employees.json", "E7").resolve()


class TestJsonOrderSubmitter:

    def test_saves_order_and_deducts_stock(self, tmp_path, catalog):
        submitter = JsonOrderSubmitter(tmp_path / "orders.json", catalog)

        outcome = asyncio.run(submitter.submit(_snapshot(quantity=2)))

        assert outcome == SubmissionOutcome.succeeded(1)
        assert catalog.search("war", "B1")[0].available_stock == 0
        saved = submitter.get_by_id(1)
        assert saved == _snapshot(quantity=2)

    def test_assigns_sequential_ids(self, tmp_path, catalog):
        submitter = JsonOrderSubmitter(tmp_path / "orders.json", catalog)
        asyncio.run(submitter.submit(_snapshot()))
        outcome = asyncio.run(submitter.submit(_snapshot()))
        assert outcome.order_id == 2

    def test_stock_sold_meanwhile_is_a_business_failure(self, tmp_path, catalog):
        submitter = JsonOrderSubmitter(tmp_path / "orders.json", catalog)

        outcome = asyncio.run(submitter.submit(_snapshot(quantity=3)))

        assert not outcome.success
        assert "Insufficient stock" in outcome.reason
        assert submitter.get_by_id(1) is None

    def test_unreadable_order_file_is_reported(self, tmp_path, catalog):
        submitter = JsonOrderSubmitter(tmp_path / "orders.json", catalog)
        (tmp_path / "orders.json").write_text("{not json", encoding="utf-8")

        outcome = asyncio.run(submitter.submit(_snapshot()))

        assert not outcome.success
        assert "storage unavailable" in outcome.reason

    def test_snapshot_without_lines_rejected(self, tmp_path, catalog):
        submitter = JsonOrderSubmitter(tmp_path / "orders.json", catalog)
        empty = OrderSnapshot("C1", "E1", "B1", NOW, ())
        with pytest.raises(SnapshotRejected, match="no lines"):
            asyncio.run(submitter.submit(empty))

    def test_zero_quantity_line_rejected(self, tmp_path, catalog):
        submitter = JsonOrderSubmitter(tmp_path / "orders.json", catalog)
        with pytest.raises(SnapshotRejected, match="invalid quantity"):
            asyncio.run(submitter.submit(_snapshot(quantity=0)))

    def test_failed_order_write_leaves_stock_untouched(self, tmp_path, catalog, monkeypatch):
        submitter = JsonOrderSubmitter(tmp_path / "orders.json", catalog)
        _fail_writes_to(monkeypatch, "orders.json")

        outcome = asyncio.run(submitter.submit(_snapshot(quantity=2)))

        assert outcome == SubmissionOutcome.failed("Order storage unavailable: disk full")
        assert catalog.search("war", "B1")[0].available_stock == 2
        assert submitter.get_by_id(1) is None

        monkeypatch.undo()
        retry = asyncio.run(submitter.submit(_snapshot(quantity=2)))
        assert retry.success
        assert catalog.search("war", "B1")[0].available_stock == 0

    def test_failed_stock_write_withdraws_the_order(self, tmp_path, catalog, monkeypatch):
        submitter = JsonOrderSubmitter(tmp_path / "orders.json", catalog)
        _fail_writes_to(monkeypatch, "catalog.json")

        outcome = asyncio.run(submitter.submit(_snapshot(quantity=1)))

        assert not outcome.success
        assert submitter.get_by_id(1) is None
        assert catalog.search("war", "B1")[0].available_stock == 2


class TestSeed:

    def test_seeds_every_file(self, tmp_path):
        counts = seed_data_dir(tmp_path, rng=random.Random(7))
        assert counts["branches.json"] == 3
        assert counts["orders.json"] == 0

        employees = json.loads((tmp_path / "employees.json").read_text(encoding="utf-8"))
        assert {e["branch_id"] for e in employees} <= {"1", "2", "3"}

    def test_custom_employees(self, tmp_path):
        counts = seed_data_dir(tmp_path, employees=[{"id": 42, "name": "Pavel"}])
        employees = json.loads((tmp_path / "employees.json").read_text(encoding="utf-8"))
        assert counts["employees.json"] == 1
        assert employees[0]["id"] == "42"

    def test_refuses_to_overwrite_without_force(self, tmp_path):
        seed_data_dir(tmp_path)
        with pytest.raises(InvalidArgument, match="--force"):
            seed_data_dir(tmp_path)

    def test_force_recreates(self, tmp_path):
        seed_data_dir(tmp_path)
        _write(tmp_path / "orders.json", [{"id": 1}])
        seed_data_dir(tmp_path, force=True)
        assert json.loads((tmp_path / "orders.json").read_text(encoding="utf-8")) == []
