"""Tests for shift, sale and service commands."""

import pytest
from decimal import Decimal
from shiftledger.cli.main import cli


def run(cli_runner, temp_db, *args, user="ana"):
    base = ["--db-path", temp_db.database_path]
    if user is not None:
        base += ["--user", user]
    return cli_runner.invoke(cli, base + list(args))


def test_shift_status_register_closed(cli_runner, temp_db):
    """Test status when no shift is open."""
    result = run(cli_runner, temp_db, "shift", "status")

    assert result.exit_code == 0
    assert "Register closed" in result.output


def test_open_requires_user(cli_runner, temp_db, monkeypatch):
    monkeypatch.delenv("SHIFTLEDGER_USER", raising=False)
    result = run(cli_runner, temp_db, "shift", "open", "100", user=None)

    assert result.exit_code == 1
    assert "No user given" in result.output


def test_user_from_environment(cli_runner, temp_db, monkeypatch):
    monkeypatch.setenv("SHIFTLEDGER_USER", "maria")
    result = run(cli_runner, temp_db, "shift", "open", "100", user=None)

    assert result.exit_code == 0
    assert temp_db.get_open_shift().opened_by == "maria"


def test_full_shift_workflow(cli_runner, temp_db):
    """Open 100, sell 20 cash and 15 transfer, count 110: 10 short."""
    result = run(cli_runner, temp_db, "shift", "open", "100.00")
    assert result.exit_code == 0
    assert "Opened shift" in result.output
    assert "$100.00" in result.output

    result = run(cli_runner, temp_db, "sale", "record", "--amount", "20.00", "--method", "cash")
    assert result.exit_code == 0
    assert "Recorded sale" in result.output

    result = run(cli_runner, temp_db, "sale", "record", "--amount", "15", "--method", "transfer")
    assert result.exit_code == 0

    result = run(cli_runner, temp_db, "shift", "status")
    assert result.exit_code == 0
    assert "Expected cash: $120.00" in result.output
    assert "Transfer:      $15.00" in result.output

    result = run(cli_runner, temp_db, "shift", "close", "110.00", "--notes", "Wrong change")
    assert result.exit_code == 0
    assert "Closed shift" in result.output
    assert "Expected:   $120.00" in result.output
    assert "$10.00 shortage" in result.output

    result = run(cli_runner, temp_db, "shift", "history")
    assert result.exit_code == 0
    assert "$10.00 shortage" in result.output
    assert "Wrong change" in result.output

    shift = temp_db.list_closed_shifts()[0]
    assert shift.difference_amount == Decimal("-10.00")
    assert shift.closed_by == "ana"


def test_sale_with_register_closed(cli_runner, temp_db):
    result = run(cli_runner, temp_db, "sale", "record", "--amount", "20", "--method", "cash")

    assert result.exit_code == 1
    assert "Register closed" in result.output
    assert temp_db.list_recent_transactions() == []


def test_close_twice(cli_runner, temp_db):
    run(cli_runner, temp_db, "shift", "open", "0")
    result = run(cli_runner, temp_db, "shift", "close", "5")
    assert result.exit_code == 0
    assert "$5.00 surplus" in result.output

    result = run(cli_runner, temp_db, "shift", "close", "5")
    assert result.exit_code == 1
    assert "Shift not open" in result.output


def test_open_twice(cli_runner, temp_db):
    run(cli_runner, temp_db, "shift", "open", "10")
    result = run(cli_runner, temp_db, "shift", "open", "20")

    assert result.exit_code == 1
    assert "Shift already open" in result.output


def test_invalid_amount(cli_runner, temp_db):
    result = run(cli_runner, temp_db, "shift", "open", "lots")

    assert result.exit_code == 1
    assert "Invalid amount format" in result.output


def test_amount_too_large(cli_runner, temp_db):
    result = run(cli_runner, temp_db, "shift", "open", "1e30")

    assert result.exit_code == 1
    assert "Invalid amount format" in result.output
    assert "exceeds the maximum" in result.output
    assert temp_db.get_open_shift() is None


def test_invalid_payment_method(cli_runner, temp_db):
    run(cli_runner, temp_db, "shift", "open", "10")
    result = run(cli_runner, temp_db, "sale", "record", "--amount", "5", "--method", "cheque")

    assert result.exit_code == 2
    assert temp_db.list_recent_transactions() == []


def test_sale_needs_amount_or_service(cli_runner, temp_db):
    run(cli_runner, temp_db, "shift", "open", "10")
    result = run(cli_runner, temp_db, "sale", "record", "--method", "cash")

    assert result.exit_code == 1
    assert "exactly one of --amount or --service" in result.output


def test_quantity_needs_service(cli_runner, temp_db):
    run(cli_runner, temp_db, "shift", "open", "10")
    result = run(
        cli_runner, temp_db,
        "sale", "record", "--amount", "20", "--quantity", "3", "--method", "cash",
    )

    assert result.exit_code == 1
    assert "--quantity only applies with --service" in result.output
    assert temp_db.list_recent_transactions() == []


def test_sell_catalog_service_quantity(cli_runner, temp_db, sample_services):
    run(cli_runner, temp_db, "shift", "open", "50")
    result = run(
        cli_runner, temp_db,
        "sale", "record", "--service", "Manicure", "--quantity", "2", "--method", "cash",
    )

    assert result.exit_code == 0
    assert "2 x Manicure" in result.output
    assert "$360.00" in result.output


def test_sell_catalog_service(cli_runner, temp_db, sample_services):
    """Selling a catalog service charges its price."""
    run(cli_runner, temp_db, "shift", "open", "50")
    result = run(
        cli_runner, temp_db,
        "sale", "record", "--service", "Haircut", "--method", "card", "--client", "C-104",
    )

    assert result.exit_code == 0
    assert "1 x Haircut" in result.output
    assert "$250.00" in result.output

    result = run(cli_runner, temp_db, "sale", "list")
    assert result.exit_code == 0
    assert "C-104" in result.output
    assert "card" in result.output


def test_sell_unknown_service(cli_runner, temp_db):
    run(cli_runner, temp_db, "shift", "open", "50")
    result = run(cli_runner, temp_db, "sale", "record", "--service", "Perm", "--method", "cash")

    assert result.exit_code == 1
    assert "Service 'Perm' not found" in result.output


def test_sale_list_empty(cli_runner, temp_db):
    result = run(cli_runner, temp_db, "sale", "list")

    assert result.exit_code == 0
    assert "No sales found" in result.output


def test_shift_show(cli_runner, temp_db):
    run(cli_runner, temp_db, "shift", "open", "100")
    run(cli_runner, temp_db, "sale", "record", "--amount", "50", "--method", "cash")
    run(cli_runner, temp_db, "shift", "close", "150")
    shift_id = temp_db.list_closed_shifts()[0].id

    result = run(cli_runner, temp_db, "shift", "show", str(shift_id))
    assert result.exit_code == 0
    assert "(closed)" in result.output
    assert "balanced" in result.output


def test_shift_show_missing(cli_runner, temp_db):
    result = run(cli_runner, temp_db, "shift", "show", "42")

    assert result.exit_code == 1
    assert "Shift 42 not found" in result.output


class TestServiceCommands:
    """Tests for catalog commands."""

    def test_add_and_list(self, cli_runner, temp_db):
        result = run(cli_runner, temp_db, "service", "add", "Haircut", "--price", "250", "--duration", "45")
        assert result.exit_code == 0
        assert "Created service 'Haircut'" in result.output

        result = run(cli_runner, temp_db, "service", "list")
        assert result.exit_code == 0
        assert "Haircut" in result.output
        assert "$250.00" in result.output
        assert "45 min" in result.output

    def test_list_empty(self, cli_runner, temp_db):
        result = run(cli_runner, temp_db, "service", "list")
        assert "No services found" in result.output

    def test_add_duplicate(self, cli_runner, temp_db, sample_services):
        result = run(cli_runner, temp_db, "service", "add", "Haircut", "--price", "1")
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_change_price(self, cli_runner, temp_db, sample_services, catalog_service):
        result = run(cli_runner, temp_db, "service", "price", "Manicure", "199.99")
        assert result.exit_code == 0
        assert catalog_service.get_service(sample_services["Manicure"]).price == Decimal("199.99")

    def test_deactivate_and_activate(self, cli_runner, temp_db, sample_services):
        result = run(cli_runner, temp_db, "service", "deactivate", "Beard Trim")
        assert result.exit_code == 0

        result = run(cli_runner, temp_db, "service", "list")
        assert "Beard Trim" not in result.output

        result = run(cli_runner, temp_db, "service", "list", "--all")
        assert "Beard Trim" in result.output
        assert "(inactive)" in result.output

        result = run(cli_runner, temp_db, "service", "activate", str(sample_services["Beard Trim"]))
        assert result.exit_code == 0
        assert "Activated service 'Beard Trim'" in result.output
