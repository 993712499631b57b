#!/usr/bin/env python3
"""
MTDC Eligibility and F&A Rate Resolution

Pure lookups against a resolved PolicyRateDocument.
"""

from decimal import Decimal

from ..core.models import PolicyRateDocument


def is_eligible(account: str, policy: PolicyRateDocument | None) -> bool:
    """
    Decide whether transfers into an account carry an F&A surcharge.

    The indirect-cost account is never eligible for itself, and explicit
    exclusions win over both listed accounts and ranges.

    Args:
        account: Destination account
        policy: Policy in effect (None means nothing is eligible)

    Returns:
        True if the account is MTDC-eligible
    """
    if policy is None:
        return False
    if account == policy.indirect_account:
        return False
    if account in policy.excluded_accounts:
        return False
    if account in policy.eligible_accounts:
        return True
    return any(account_range.contains(account) for account_range in policy.eligible_ranges)


def rate_for(account: str, policy: PolicyRateDocument | None) -> Decimal:
    """F&A rate applied to transfers into account; zero when ineligible."""
    if policy is None or not is_eligible(account, policy):
        return Decimal(0)
    return policy.indirect_rate
