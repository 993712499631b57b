#!/usr/bin/env python3
"""Tests for core data models."""

from decimal import Decimal

import pytest

from rebudget.core.models import (
    AccountRange,
    BudgetLineItem,
    MappingRow,
    PolicyRateDocument,
    ProjectionResult,
    TransferMode,
    baseline_total,
)
from rebudget.core.money import Money


class TestTransferMode:
    """Test TransferMode parsing."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("budget_total", TransferMode.BUDGET_TOTAL),
            ("direct_to_dest", TransferMode.DIRECT_TO_DEST),
            ("Direct-To-Dest", TransferMode.DIRECT_TO_DEST),
            (TransferMode.BUDGET_TOTAL, TransferMode.BUDGET_TOTAL),
        ],
    )
    def test_parse(self, value, expected):
        assert TransferMode.parse(value) is expected

    @pytest.mark.unit
    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown transfer mode"):
            TransferMode.parse("sideways")


class TestBudgetLineItem:
    """Test BudgetLineItem behavior."""

    @pytest.mark.unit
    def test_from_dict_parses_dollar_amounts(self):
        item = BudgetLineItem.from_dict(
            {
                "account": " 52000 ",
                "description": "Supplies",
                "current_budget": "20,000.00",
                "proposed_budget": 18500.5,
                "encumbrances": "",
            }
        )
        assert item.account == "52000"
        assert item.current_budget.to_cents() == 2000000
        assert item.proposed_budget.to_cents() == 1850050
        assert item.encumbrances == Money.zero()

    @pytest.mark.unit
    def test_change_is_derived(self):
        item = BudgetLineItem(
            account="52000",
            description="Supplies",
            current_budget=Money.from_cents(2000000),
            proposed_budget=Money.from_cents(1500000),
        )
        assert item.change.to_cents() == -500000
        assert item.to_dict()["change"] == "-5000.00"

    @pytest.mark.unit
    def test_summary_row(self):
        item = BudgetLineItem("SUMMARY", "Totals", Money.zero(), Money.zero())
        assert item.is_summary

    @pytest.mark.unit
    def test_baseline_total_skips_summary(self, line_items):
        assert baseline_total(line_items).to_cents() == 10000000


class TestAccountRange:
    """Test numeric account ranges."""

    @pytest.mark.unit
    def test_contains(self):
        account_range = AccountRange(low=51000, high=51199)
        assert account_range.contains("51000")
        assert account_range.contains("51199")
        assert not account_range.contains("51200")
        assert not account_range.contains("SUMMARY")
        assert str(account_range) == "51000-51199"


class TestMappingAndProjection:
    """Test audit rows and projection helpers."""

    @pytest.mark.unit
    def test_mapping_row_to_dict(self):
        row = MappingRow(
            transfer_id="t1",
            from_account="53800",
            to_account="52000",
            source_out=Money.from_cents(1276000),
            direct_to_dest=Money.from_cents(1000000),
            indirect_added=Money.from_cents(276000),
            dest_eligible=True,
            mode=TransferMode.DIRECT_TO_DEST,
        )
        assert row.to_dict() == {
            "transfer_id": "t1",
            "from": "53800",
            "to": "52000",
            "source_out_cents": 1276000,
            "direct_to_dest_cents": 1000000,
            "indirect_added_cents": 276000,
            "dest_eligible": True,
            "mode": "direct_to_dest",
        }

    @pytest.mark.unit
    def test_indirect_added_total(self, line_items):
        rows = tuple(
            MappingRow("t", "a", "b", Money.from_cents(c), Money.zero(), Money.from_cents(c), True,
                       TransferMode.BUDGET_TOTAL)
            for c in (100, 250)
        )
        result = ProjectionResult(line_items=line_items, mapping_log=rows)
        assert result.indirect_added_total.to_cents() == 350
        assert result.proposed_total.to_cents() == 10000000

    @pytest.mark.unit
    def test_policy_to_dict(self):
        policy = PolicyRateDocument(
            indirect_rate=Decimal("0.276"),
            eligible_accounts=frozenset({"52000"}),
            eligible_ranges=(AccountRange(51000, 51199),),
        )
        assert policy.to_dict()["eligible_accounts"] == ["52000", "51000-51199"]
        assert policy.indirect_account == "58960"
