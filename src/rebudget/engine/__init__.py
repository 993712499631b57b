"""
Transfer Engine Package

Pure, synchronous functions that apply budget transfers with automatic F&A.

Components:
- eligibility: MTDC eligibility and F&A rate lookup
- impact: three-way split of a requested transfer
- ledger: single-transfer application with validation and reconciliation
- projector: ordered fold of a transfer queue into final line items and audit trail
"""

from .eligibility import is_eligible, rate_for
from .errors import (
    EncumbranceBreach,
    ForbiddenIndirectTransfer,
    IdenticalAccounts,
    InvalidAmount,
    NegativeBalance,
    RebudgetError,
    ReconciliationFailure,
    TransferError,
    UnknownAccount,
)
from .impact import compute_impact, round_cents
from .ledger import apply_request, apply_transfer, encumbrance_for
from .projector import project, project_skipping_rejected

__all__ = [
    "EncumbranceBreach",
    "ForbiddenIndirectTransfer",
    "IdenticalAccounts",
    "InvalidAmount",
    "NegativeBalance",
    "RebudgetError",
    "ReconciliationFailure",
    "TransferError",
    "UnknownAccount",
    "apply_request",
    "apply_transfer",
    "compute_impact",
    "encumbrance_for",
    "is_eligible",
    "project",
    "project_skipping_rejected",
    "rate_for",
    "round_cents",
]
