"""
Grant Rebudget - budget transfers with automatic F&A

Moves money between grant budget line items while posting facilities and
administrative (F&A) surcharges to the indirect-cost account, keeping every
amount in integer cents and the baseline total conserved.

Packages:
- core: Currency handling, Money, data models, configuration
- engine: Eligibility, transfer impact, ledger application, projection
- policy: Rate document loading and normalization
- budget: Budget/transfer loaders and CSV/JSON export
- cli: Command-line interface

Example Usage:
    from rebudget.engine import compute_impact, project
    from rebudget.policy import load_policy
    from rebudget.budget import load_line_items, load_transfer_requests
"""

__version__ = "0.1.0"
__author__ = "Karl Davis"

from .core.config import Environment, get_config
from .core.currency import from_cents, to_cents
from .core.models import BudgetLineItem, MappingRow, PolicyRateDocument, TransferMode, TransferRequest
from .engine import apply_transfer, compute_impact, project

__all__ = [
    "BudgetLineItem",
    "Environment",
    "MappingRow",
    "PolicyRateDocument",
    "TransferMode",
    "TransferRequest",
    "apply_transfer",
    "compute_impact",
    "from_cents",
    "get_config",
    "project",
    "to_cents",
]
