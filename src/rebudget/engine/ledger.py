#!/usr/bin/env python3
"""
Ledger Applier

Applies one transfer to a working copy of the budget line items: debits the
source, credits the destination, posts any F&A to the indirect-cost line and
produces the audit row. Input line items are never mutated.

Validation order (fail-fast):
1. Neither side may be the indirect-cost account
2. Both accounts must exist in the working line items
3. Source and destination must differ
4. Source balance after the transfer must stay at or above its encumbrance
5. Source balance after the transfer must not be negative (reachable only with a
   negative encumbrance in the snapshot)

After posting, the baseline (current budget) total is re-checked; a mismatch
raises ReconciliationFailure.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace

from ..core.models import (
    BudgetLineItem,
    LedgerStep,
    MappingRow,
    PolicyRateDocument,
    TransferMode,
    TransferRequest,
    baseline_total,
)
from ..core.money import Money
from .errors import (
    EncumbranceBreach,
    ForbiddenIndirectTransfer,
    IdenticalAccounts,
    NegativeBalance,
    ReconciliationFailure,
    UnknownAccount,
)
from .impact import compute_impact

logger = logging.getLogger(__name__)


def encumbrance_for(account: str, snapshot: Iterable[BudgetLineItem]) -> Money:
    """Encumbered amount for account in the snapshot; zero if the account is absent."""
    for item in snapshot:
        if item.account == account and not item.is_summary:
            return item.encumbrances
    return Money.zero()


def _account_positions(line_items: Sequence[BudgetLineItem]) -> dict[str, int]:
    """Map account -> index, ignoring SUMMARY rows."""
    positions: dict[str, int] = {}
    for i, item in enumerate(line_items):
        if not item.is_summary:
            positions.setdefault(item.account, i)
    return positions


def apply_transfer(
    policy: PolicyRateDocument,
    line_items: Sequence[BudgetLineItem],
    encumbrance_snapshot: Iterable[BudgetLineItem],
    from_account: str,
    to_account: str,
    amount_cents: int,
    mode: TransferMode | str,
    transfer_id: str = "",
) -> LedgerStep:
    """
    Apply a single transfer and return the updated line items with its audit row.

    Args:
        policy: Policy in effect
        line_items: Working budget (not modified)
        encumbrance_snapshot: Line items used only to look up encumbrances
        from_account: Source account
        to_account: Destination account
        amount_cents: Requested amount in cents
        mode: TransferMode or its string value
        transfer_id: Id recorded on the mapping row

    Returns:
        LedgerStep with the new line items and the MappingRow

    Raises:
        ForbiddenIndirectTransfer, UnknownAccount, IdenticalAccounts,
        InvalidAmount, EncumbranceBreach, NegativeBalance, ReconciliationFailure
    """
    indirect_account = policy.indirect_account
    if from_account == indirect_account or to_account == indirect_account:
        raise ForbiddenIndirectTransfer(indirect_account)

    # Line items are frozen, so a new list is a safe working copy.
    working = list(line_items)
    positions = _account_positions(working)

    if from_account not in positions:
        raise UnknownAccount(from_account, "source")
    if to_account not in positions:
        raise UnknownAccount(to_account, "destination")
    if from_account == to_account:
        raise IdenticalAccounts(from_account)

    mode = TransferMode.parse(mode)
    impact = compute_impact(policy, to_account, amount_cents, mode)

    source = working[positions[from_account]]
    balance_after = source.proposed_budget - impact.source_out
    encumbrance = encumbrance_for(from_account, encumbrance_snapshot)
    if balance_after < encumbrance:
        raise EncumbranceBreach(from_account, balance_after.to_cents(), encumbrance.to_cents())
    if balance_after.is_negative():
        raise NegativeBalance(from_account, balance_after.to_cents())

    before = baseline_total(working)

    working[positions[from_account]] = replace(source, proposed_budget=balance_after)
    destination = working[positions[to_account]]
    working[positions[to_account]] = replace(
        destination, proposed_budget=destination.proposed_budget + impact.direct_to_dest
    )

    if indirect_account in positions:
        indirect_row = working[positions[indirect_account]]
        working[positions[indirect_account]] = replace(
            indirect_row, proposed_budget=indirect_row.proposed_budget + impact.indirect_added
        )
    else:
        working.append(
            BudgetLineItem(
                account=indirect_account,
                description=policy.indirect_description,
                current_budget=Money.zero(),
                proposed_budget=impact.indirect_added,
            )
        )

    after = baseline_total(working)
    if before != after:
        logger.error("Baseline total changed from %s to %s applying %s", before, after, transfer_id)
        raise ReconciliationFailure(before.to_cents(), after.to_cents())

    mapping_row = MappingRow(
        transfer_id=transfer_id,
        from_account=from_account,
        to_account=to_account,
        source_out=impact.source_out,
        direct_to_dest=impact.direct_to_dest,
        indirect_added=impact.indirect_added,
        dest_eligible=impact.eligible,
        mode=mode,
    )

    logger.debug(
        "Applied %s: %s -> %s, source out %s, direct %s, F&A %s",
        transfer_id or "transfer",
        from_account,
        to_account,
        impact.source_out,
        impact.direct_to_dest,
        impact.indirect_added,
    )

    return LedgerStep(line_items=tuple(working), mapping_row=mapping_row)


def apply_request(
    policy: PolicyRateDocument,
    line_items: Sequence[BudgetLineItem],
    encumbrance_snapshot: Iterable[BudgetLineItem],
    request: TransferRequest,
) -> LedgerStep:
    """Apply a queued TransferRequest."""
    return apply_transfer(
        policy,
        line_items,
        encumbrance_snapshot,
        request.from_account,
        request.to_account,
        request.amount_cents,
        request.mode,
        transfer_id=request.id,
    )
