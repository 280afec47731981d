"""End-to-end tests for the click CLI against a temporary data directory."""

import json

import pytest
from click.testing import CliRunner

from bookstore.infrastructure.bootstrap import DATA_DIR_ENV
from bookstore.infrastructure.cli.main import cli


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path))
    files = {
        "employees.json": [{"id": "E1", "name": "Anna", "branch_id": "B1"}],
        "clients.json": [{"id": "C1", "name": "City Library"}],
        "catalog.json": [
            {"id": "1", "title": "War and Peace", "price": "890.00", "stock": {"B1": 2}},
            {"id": "2", "title": "Dead Souls", "price": "390.00", "stock": {"B1": 5}},
        ],
    }
    for name, records in files.items():
        (tmp_path / name).write_text(json.dumps(records), encoding="utf-8")
    return tmp_path


def _run(*args):
    return CliRunner().invoke(cli, list(args))


class TestOrderCreate:

    def test_creates_order(self, data_dir):
        result = _run("order", "create", "--employee", "E1", "--client", "C1", "--items", "1:2,2:1")

        assert result.exit_code == 0, result.output
        assert "Order #1 saved" in result.output
        assert "2170.00 RUB" in result.output

        orders = json.loads((data_dir / "orders.json").read_text(encoding="utf-8"))
        assert [(l["item_id"], l["quantity"]) for l in orders[0]["lines"]] == [("1", 2), ("2", 1)]

    def test_quantity_beyond_stock_refused(self, data_dir):
        result = _run("order", "create", "--employee", "E1", "--client", "C1", "--items", "1:3")

        assert result.exit_code != 0
        assert "stock limit" in result.output
        assert json.loads((data_dir / "orders.json").read_text(encoding="utf-8")) == []

    def test_unknown_client(self, data_dir):
        result = _run("order", "create", "--employee", "E1", "--client", "C9", "--items", "1:1")
        assert result.exit_code != 0
        assert "Client not found" in result.output

    def test_malformed_items(self, data_dir):
        result = _run("order", "create", "--employee", "E1", "--client", "C1", "--items", "1-2")
        assert result.exit_code != 0
        assert "Expected 'BookId:Quantity'" in result.output

    def test_show_saved_order(self, data_dir):
        _run("order", "create", "--employee", "E1", "--client", "C1", "--items", "2:2")
        result = _run("order", "show", "--id", "1")
        assert result.exit_code == 0, result.output
        assert "780.00 RUB" in result.output

    def test_show_missing_order(self, data_dir):
        result = _run("order", "show", "--id", "5")
        assert result.exit_code != 0
        assert "not found" in result.output


class TestBrowse:

    def test_catalog_search(self, data_dir):
        result = _run("catalog", "search", "souls", "--employee", "E1")
        assert result.exit_code == 0, result.output
        assert "Dead Souls" in result.output
        assert "War and Peace" not in result.output

    def test_client_list(self, data_dir):
        result = _run("client", "list")
        assert "City Library" in result.output


class TestSeedCommand:

    def test_seed_then_refuse(self, tmp_path, monkeypatch):
        monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path / "data"))
        first = _run("seed")
        assert first.exit_code == 0, first.output
        assert (tmp_path / "data" / "catalog.json").exists()

        second = _run("seed")
        assert second.exit_code != 0
        assert "--force" in second.output
