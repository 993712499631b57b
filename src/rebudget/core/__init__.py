"""
Core Utilities Package

Shared building blocks used by the engine, loaders and CLI.

This package provides:
- Currency handling with integer arithmetic for precision
- Money primitive and budget/transfer data models
- Configuration management for environment-specific settings
- JSON helpers with consistent formatting
"""

from .config import (
    Config,
    Environment,
    get_config,
    reload_config,
)
from .currency import (
    format_cents,
    from_cents,
    sum_cents,
    to_cents,
)
from .models import (
    DEFAULT_INDIRECT_ACCOUNT,
    SUMMARY_ACCOUNT,
    AccountRange,
    BudgetLineItem,
    LedgerStep,
    MappingRow,
    PolicyRateDocument,
    ProjectionResult,
    RejectedTransfer,
    TransferImpact,
    TransferMode,
    TransferRequest,
    baseline_total,
)
from .money import Money

__all__ = [
    "DEFAULT_INDIRECT_ACCOUNT",
    "SUMMARY_ACCOUNT",
    "AccountRange",
    # Data models
    "BudgetLineItem",
    # Configuration
    "Config",
    "Environment",
    "LedgerStep",
    "MappingRow",
    "Money",
    "PolicyRateDocument",
    "ProjectionResult",
    "RejectedTransfer",
    "TransferImpact",
    "TransferMode",
    "TransferRequest",
    "baseline_total",
    # Currency utilities
    "format_cents",
    "from_cents",
    "get_config",
    "reload_config",
    "sum_cents",
    "to_cents",
]
