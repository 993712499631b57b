#!/usr/bin/env python3
"""
Transfer Impact Calculator

Splits a requested transfer into the amount leaving the source, the amount
landing at the destination and the F&A routed to the indirect-cost account.

Modes:
- budget_total: the request is the total debited from the source; F&A is
  carved out of it by dividing by (1 + rate)
- direct_to_dest: the request is what the destination receives; F&A is added
  on top by multiplying by the rate

Each mode rounds exactly once, half away from zero, so the audit trail
always adds up: source_out == direct_to_dest + indirect_added.
"""

from decimal import ROUND_HALF_UP, Decimal

from ..core.models import PolicyRateDocument, TransferImpact, TransferMode
from ..core.money import Money
from .eligibility import is_eligible, rate_for
from .errors import InvalidAmount


def round_cents(value: Decimal) -> int:
    """Round a fractional cent amount to the nearest cent, half away from zero."""
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def compute_impact(
    policy: PolicyRateDocument | None,
    destination_account: str,
    amount_cents: int,
    mode: TransferMode | str,
) -> TransferImpact:
    """
    Compute the three-way split for a transfer.

    Args:
        policy: Policy in effect
        destination_account: Account receiving the transfer
        amount_cents: Requested amount in cents (must be positive)
        mode: TransferMode or its string value

    Returns:
        TransferImpact with source_out, direct_to_dest, indirect_added, eligible

    Raises:
        InvalidAmount: If amount_cents is not a positive integer
        ValueError: If mode is not a known transfer mode

    Example:
        At rate 0.276, budget_total of 2,000,000 cents to an eligible account
        gives direct_to_dest 1,567,398 and indirect_added 432,602.
    """
    if isinstance(amount_cents, bool) or not isinstance(amount_cents, int) or amount_cents <= 0:
        raise InvalidAmount(amount_cents)

    mode = TransferMode.parse(mode)
    eligible = is_eligible(destination_account, policy)
    rate = rate_for(destination_account, policy)

    if mode == TransferMode.BUDGET_TOTAL:
        source_out = amount_cents
        direct_to_dest = round_cents(Decimal(amount_cents) / (1 + rate)) if rate else amount_cents
        indirect_added = source_out - direct_to_dest
    else:
        direct_to_dest = amount_cents
        indirect_added = round_cents(Decimal(amount_cents) * rate) if rate else 0
        source_out = direct_to_dest + indirect_added

    return TransferImpact(
        source_out=Money.from_cents(source_out),
        direct_to_dest=Money.from_cents(direct_to_dest),
        indirect_added=Money.from_cents(indirect_added),
        eligible=eligible,
    )
