#!/usr/bin/env python3
"""
Core Data Models for Grant Rebudgeting

Budget line items, policy rates, transfer requests and the audit rows produced
when transfers are applied. All amounts are Money (integer cents).
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from .currency import sum_cents
from .money import Money

# Reserved aggregate row; carried through untouched and excluded from all sums.
SUMMARY_ACCOUNT = "SUMMARY"

# Indirect-cost account used when a policy document names none.
DEFAULT_INDIRECT_ACCOUNT = "58960"


class TransferMode(Enum):
    """How a transfer's requested amount is interpreted."""

    BUDGET_TOTAL = "budget_total"  # total leaving the source, F&A included
    DIRECT_TO_DEST = "direct_to_dest"  # amount the destination receives

    @classmethod
    def parse(cls, value: "str | TransferMode") -> "TransferMode":
        """Parse a mode from its string value (case-insensitive, '-' or '_')."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown transfer mode {value!r} (expected one of: {valid})") from None


@dataclass(frozen=True)
class BudgetLineItem:
    """
    One chart-of-accounts entry in the budget.

    current_budget is the baseline, proposed_budget the working amount.
    Encumbrances are funds already committed against the line.
    """

    account: str
    description: str
    current_budget: Money
    proposed_budget: Money
    encumbrances: Money = field(default_factory=Money.zero)

    @property
    def change(self) -> Money:
        """Proposed minus current."""
        return self.proposed_budget - self.current_budget

    @property
    def is_summary(self) -> bool:
        return self.account == SUMMARY_ACCOUNT

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (amounts as two-decimal strings)."""
        return {
            "account": self.account,
            "description": self.description,
            "current_budget": self.current_budget.to_decimal_str(),
            "proposed_budget": self.proposed_budget.to_decimal_str(),
            "encumbrances": self.encumbrances.to_decimal_str(),
            "change": self.change.to_decimal_str(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BudgetLineItem":
        """Create BudgetLineItem from a dict with dollar amounts."""
        return cls(
            account=str(data["account"]).strip(),
            description=str(data.get("description") or "").strip(),
            current_budget=Money.from_dollars(data["current_budget"]),
            proposed_budget=Money.from_dollars(data["proposed_budget"]),
            encumbrances=Money.from_dollars(data.get("encumbrances")),
        )


@dataclass(frozen=True)
class AccountRange:
    """Inclusive numeric account range such as 51000-51199."""

    low: int
    high: int

    def contains(self, account: str) -> bool:
        if not account.isdigit():
            return False
        return self.low <= int(account) <= self.high

    def __str__(self) -> str:
        return f"{self.low}-{self.high}"


@dataclass(frozen=True)
class PolicyRateDocument:
    """
    Indirect-cost (F&A) policy in effect for a projection.

    Always fully resolved: schema variants are normalized by policy.loader
    before a document reaches the engine.
    """

    indirect_rate: Decimal
    indirect_account: str = DEFAULT_INDIRECT_ACCOUNT
    eligible_accounts: frozenset[str] = frozenset()
    eligible_ranges: tuple[AccountRange, ...] = ()
    excluded_accounts: frozenset[str] = frozenset()
    indirect_description: str = "F&A"

    def to_dict(self) -> dict[str, Any]:
        return {
            "indirect_rate": str(self.indirect_rate),
            "indirect_account": self.indirect_account,
            "eligible_accounts": sorted(self.eligible_accounts) + [str(r) for r in self.eligible_ranges],
            "excluded_accounts": sorted(self.excluded_accounts),
        }


@dataclass(frozen=True)
class TransferRequest:
    """One user-requested reallocation, immutable once queued."""

    id: str
    from_account: str
    to_account: str
    amount_cents: int
    mode: TransferMode = TransferMode.BUDGET_TOTAL


@dataclass(frozen=True)
class TransferImpact:
    """Three-way split computed for a transfer."""

    source_out: Money
    direct_to_dest: Money
    indirect_added: Money
    eligible: bool


@dataclass(frozen=True)
class MappingRow:
    """Audit row for one applied transfer."""

    transfer_id: str
    from_account: str
    to_account: str
    source_out: Money
    direct_to_dest: Money
    indirect_added: Money
    dest_eligible: bool
    mode: TransferMode

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON/CSV export (amounts in cents)."""
        return {
            "transfer_id": self.transfer_id,
            "from": self.from_account,
            "to": self.to_account,
            "source_out_cents": self.source_out.to_cents(),
            "direct_to_dest_cents": self.direct_to_dest.to_cents(),
            "indirect_added_cents": self.indirect_added.to_cents(),
            "dest_eligible": self.dest_eligible,
            "mode": self.mode.value,
        }


@dataclass(frozen=True)
class LedgerStep:
    """Result of applying a single transfer."""

    line_items: tuple[BudgetLineItem, ...]
    mapping_row: MappingRow


@dataclass(frozen=True)
class RejectedTransfer:
    """A transfer dropped from a lenient projection, with the reason."""

    request: TransferRequest
    position: int
    error: Exception

    @property
    def reason(self) -> str:
        return str(self.error)


@dataclass(frozen=True)
class ProjectionResult:
    """Final line items and audit trail from folding a transfer queue."""

    line_items: tuple[BudgetLineItem, ...]
    mapping_log: tuple[MappingRow, ...]
    rejected: tuple[RejectedTransfer, ...] = ()

    @property
    def indirect_added_total(self) -> Money:
        """F&A posted automatically across all applied transfers."""
        return Money.from_cents(sum_cents(row.indirect_added.to_cents() for row in self.mapping_log))

    @property
    def baseline_total(self) -> Money:
        return baseline_total(self.line_items)

    @property
    def proposed_total(self) -> Money:
        return Money.from_cents(
            sum_cents(item.proposed_budget.to_cents() for item in self.line_items if not item.is_summary)
        )


def baseline_total(line_items: "tuple[BudgetLineItem, ...] | list[BudgetLineItem]") -> Money:
    """Sum of current budgets across non-SUMMARY line items."""
    return Money.from_cents(
        sum_cents(item.current_budget.to_cents() for item in line_items if not item.is_summary)
    )
