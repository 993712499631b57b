"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from decimal import Decimal
from pathlib import Path

import pytest

from rebudget.core.models import BudgetLineItem, PolicyRateDocument
from rebudget.core.money import Money


def make_item(account, description, current, proposed=None, encumbrances=0):
    """Build a line item from dollar amounts."""
    return BudgetLineItem(
        account=account,
        description=description,
        current_budget=Money.from_dollars(current),
        proposed_budget=Money.from_dollars(current if proposed is None else proposed),
        encumbrances=Money.from_dollars(encumbrances),
    )


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def policy() -> PolicyRateDocument:
    """27.6% F&A posted to 58960; 51110, 52000 and 53000 are MTDC-eligible."""
    return PolicyRateDocument(
        indirect_rate=Decimal("0.276"),
        indirect_account="58960",
        eligible_accounts=frozenset({"51110", "52000", "53000"}),
    )


@pytest.fixture
def line_items() -> tuple[BudgetLineItem, ...]:
    """Small baseline budget with an F&A line and a SUMMARY row."""
    return (
        make_item("53800", "Student Aid", 50000),
        make_item("51110", "PI Summer", 0),
        make_item("52000", "Supplies", 20000, encumbrances=1500),
        make_item("58960", "F&A", 30000),
        make_item("SUMMARY", "Project Totals", 100000),
    )


@pytest.fixture
def rates_document() -> dict:
    """Simple-schema rates document as uploaded."""
    return {
        "fa_rate": {"rate": 0.276},
        "wrs_account_numbers": {"indirect_costs": "58960"},
        "mtdc_eligible_accounts": ["51110", "52000", "53000"],
    }


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    monkeypatch.setenv("REBUDGET_ENV", "test")
    monkeypatch.setenv("REBUDGET_DATA_DIR", str(tmp_path / "rebudget_data"))
    monkeypatch.delenv("REBUDGET_INDIRECT_ACCOUNT", raising=False)

    # Each test starts from a fresh configuration
    from rebudget.core import config

    monkeypatch.setattr(config, "_config", None)


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "engine: Tests for the transfer engine")
    config.addinivalue_line("markers", "cli: Tests for command-line commands")
