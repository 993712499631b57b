"""
Budget Files Package

Loading budgets, encumbrance snapshots and transfer queues, and exporting
projection results.
"""

from .export import (
    budget_frame,
    mapping_frame,
    projection_summary,
    write_budget_csv,
    write_mapping_csv,
    write_projection_json,
)
from .loader import BudgetFileError, encumbrance_snapshot_from, load_line_items, load_transfer_requests

__all__ = [
    "BudgetFileError",
    "budget_frame",
    "encumbrance_snapshot_from",
    "load_line_items",
    "load_transfer_requests",
    "mapping_frame",
    "projection_summary",
    "write_budget_csv",
    "write_mapping_csv",
    "write_projection_json",
]
