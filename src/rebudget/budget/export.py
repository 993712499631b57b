#!/usr/bin/env python3
"""
Projection Export

Tabular views of the audit trail and final budget, written as CSV with pandas,
plus a JSON summary of a whole projection.
"""

import logging
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

import pandas as pd

from ..core.json_utils import write_json
from ..core.models import BudgetLineItem, MappingRow, PolicyRateDocument, ProjectionResult

logger = logging.getLogger(__name__)

MAPPING_COLUMNS = [
    "transfer_id",
    "from",
    "to",
    "source_out_cents",
    "direct_to_dest_cents",
    "indirect_added_cents",
    "dest_eligible",
    "mode",
]

BUDGET_COLUMNS = ["account", "description", "current_budget", "proposed_budget", "encumbrances", "change"]


def mapping_frame(mapping_log: Iterable[MappingRow]) -> pd.DataFrame:
    """Audit trail as a DataFrame, one row per applied transfer."""
    return pd.DataFrame([row.to_dict() for row in mapping_log], columns=MAPPING_COLUMNS)


def budget_frame(line_items: Iterable[BudgetLineItem]) -> pd.DataFrame:
    """Line items as a DataFrame with two-decimal string amounts."""
    return pd.DataFrame([item.to_dict() for item in line_items], columns=BUDGET_COLUMNS)


def write_mapping_csv(mapping_log: Iterable[MappingRow], path: str | Path) -> Path:
    """Write the audit trail CSV and return its path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    mapping_frame(mapping_log).to_csv(path, index=False)
    logger.info("Wrote transfer mapping to %s", path)
    return path


def write_budget_csv(line_items: Iterable[BudgetLineItem], path: str | Path) -> Path:
    """Write the final budget CSV and return its path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    budget_frame(line_items).to_csv(path, index=False)
    logger.info("Wrote final budget to %s", path)
    return path


def projection_summary(result: ProjectionResult, policy: PolicyRateDocument) -> dict:
    """Summary dict for a projection, suitable for JSON export."""
    return {
        "metadata": {
            "export_date": datetime.now().isoformat(timespec="seconds"),
            "policy": policy.to_dict(),
        },
        "summary": {
            "transfers_applied": len(result.mapping_log),
            "transfers_rejected": len(result.rejected),
            "indirect_added_cents": result.indirect_added_total.to_cents(),
            "baseline_total": result.baseline_total,
            "proposed_total": result.proposed_total,
        },
        "mapping": [row.to_dict() for row in result.mapping_log],
        "rejected": [
            {"transfer_id": r.request.id, "position": r.position, "reason": r.reason} for r in result.rejected
        ],
        "final_budget": [item.to_dict() for item in result.line_items],
    }


def write_projection_json(result: ProjectionResult, policy: PolicyRateDocument, path: str | Path) -> Path:
    """Write the projection summary JSON and return its path."""
    path = Path(path)
    write_json(path, projection_summary(result, policy))
    logger.info("Wrote projection summary to %s", path)
    return path
