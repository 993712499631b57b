#!/usr/bin/env python3
"""Tests for budget, snapshot and transfer loaders."""

import json

import pytest

from rebudget.budget import BudgetFileError, encumbrance_snapshot_from, load_line_items, load_transfer_requests
from rebudget.core.models import TransferMode


class TestLoadLineItems:
    """Test loading budget files."""

    @pytest.mark.unit
    def test_csv(self, temp_dir):
        path = temp_dir / "budget.csv"
        path.write_text(
            "Account,Description,Current_Budget,Proposed_Budget,Encumbrances\n"
            '53800,Student Aid,"50,000.00",50000,0\n'
            "52000,Supplies,20000.10,20000.10,1500\n"
            "SUMMARY,Totals,70000.10,70000.10,\n"
        )

        items = load_line_items(path)

        assert [item.account for item in items] == ["53800", "52000", "SUMMARY"]
        assert items[0].current_budget.to_cents() == 5000000
        assert items[1].proposed_budget.to_cents() == 2000010
        assert items[1].encumbrances.to_cents() == 150000
        assert items[2].encumbrances.to_cents() == 0

    @pytest.mark.unit
    def test_csv_without_encumbrances_column(self, temp_dir):
        path = temp_dir / "budget.csv"
        path.write_text("account,description,current_budget,proposed_budget\n52000,Supplies,100,90\n")

        (item,) = load_line_items(path)
        assert item.encumbrances.to_cents() == 0
        assert item.change.to_cents() == -1000

    @pytest.mark.unit
    def test_json_rows_object(self, temp_dir):
        path = temp_dir / "budget.json"
        rows = [{"account": "52000", "description": "Supplies", "current_budget": 20000, "proposed_budget": 19000.5}]
        path.write_text(json.dumps({"rows": rows}))

        (item,) = load_line_items(path)
        assert item.proposed_budget.to_cents() == 1900050

    @pytest.mark.unit
    def test_missing_columns(self, temp_dir):
        path = temp_dir / "budget.csv"
        path.write_text("account,description,current_budget\n52000,Supplies,100\n")

        with pytest.raises(BudgetFileError, match="proposed_budget"):
            load_line_items(path)

    @pytest.mark.unit
    def test_duplicate_accounts(self, temp_dir):
        path = temp_dir / "budget.csv"
        path.write_text(
            "account,description,current_budget,proposed_budget\n52000,A,1,1\n52000,B,2,2\n"
        )
        with pytest.raises(BudgetFileError, match="more than once"):
            load_line_items(path)

    @pytest.mark.unit
    def test_missing_file(self, temp_dir):
        with pytest.raises(BudgetFileError):
            load_line_items(temp_dir / "missing.csv")

    @pytest.mark.unit
    def test_empty_budget_is_an_error(self, temp_dir):
        path = temp_dir / "budget.json"
        path.write_text(json.dumps({"rows": []}))

        with pytest.raises(BudgetFileError, match="has no rows"):
            load_line_items(path)

    @pytest.mark.unit
    def test_directory_instead_of_file(self, temp_dir):
        path = temp_dir / "budget.csv"
        path.mkdir()

        with pytest.raises(BudgetFileError, match="Could not read"):
            load_line_items(path)

    @pytest.mark.unit
    def test_snapshot_defaults_to_budget(self, line_items):
        snapshot = encumbrance_snapshot_from(line_items)
        assert all(not item.is_summary for item in snapshot)
        assert len(snapshot) == len(line_items) - 1


class TestLoadTransferRequests:
    """Test loading transfer queues."""

    @pytest.mark.unit
    def test_json_with_dollars_and_cents(self, temp_dir):
        path = temp_dir / "transfers.json"
        path.write_text(
            json.dumps(
                [
                    {"id": "x1", "from": "53800", "to": "52000", "amount": "10,000.00", "mode": "direct_to_dest"},
                    {"from": "53800", "to": "51110", "amount_cents": 2000000},
                ]
            )
        )

        first, second = load_transfer_requests(path)

        assert first.id == "x1"
        assert first.amount_cents == 1000000
        assert first.mode is TransferMode.DIRECT_TO_DEST
        assert second.id == "t2"
        assert second.amount_cents == 2000000
        assert second.mode is TransferMode.BUDGET_TOTAL

    @pytest.mark.unit
    def test_csv(self, temp_dir):
        path = temp_dir / "transfers.csv"
        path.write_text("from,to,amount,mode\n53800,52000,5000,direct_to_dest\n")

        (request,) = load_transfer_requests(path)
        assert (request.from_account, request.to_account, request.amount_cents) == ("53800", "52000", 500000)

    @pytest.mark.unit
    def test_unknown_mode(self, temp_dir):
        path = temp_dir / "transfers.csv"
        path.write_text("from,to,amount,mode\n53800,52000,5000,sideways\n")

        with pytest.raises(BudgetFileError, match="Unknown transfer mode"):
            load_transfer_requests(path)

    @pytest.mark.unit
    def test_missing_amount(self, temp_dir):
        path = temp_dir / "transfers.json"
        path.write_text(json.dumps([{"from": "53800", "to": "52000"}]))

        with pytest.raises(BudgetFileError, match="no amount"):
            load_transfer_requests(path)

    @pytest.mark.unit
    def test_bad_amount_cents(self, temp_dir):
        path = temp_dir / "transfers.json"
        path.write_text(json.dumps([{"from": "53800", "to": "52000", "amount_cents": "12.5"}]))

        with pytest.raises(BudgetFileError, match="whole number"):
            load_transfer_requests(path)

    @pytest.mark.unit
    def test_empty_queue(self, temp_dir):
        path = temp_dir / "transfers.json"
        path.write_text(json.dumps({"transfers": []}))

        assert load_transfer_requests(path) == ()

    @pytest.mark.unit
    def test_header_only_csv_is_empty_queue(self, temp_dir):
        path = temp_dir / "transfers.csv"
        path.write_text("from,to,amount,mode\n")

        assert load_transfer_requests(path) == ()
