#!/usr/bin/env python3
"""
Budget and Transfer Loaders

Reads budget line items and transfer queues from CSV or JSON into domain
models. Amounts are read as text and converted with to_cents, never through
floats.

Functions:
- load_line_items: Budget or encumbrance snapshot file -> BudgetLineItem tuple
- encumbrance_snapshot_from: Default snapshot mirroring a working budget
- load_transfer_requests: Transfer queue file -> TransferRequest tuple
"""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pandas as pd

from ..core.currency import to_cents
from ..core.json_utils import read_json
from ..core.models import BudgetLineItem, TransferMode, TransferRequest
from ..engine.errors import RebudgetError

logger = logging.getLogger(__name__)

REQUIRED_BUDGET_COLUMNS = ("account", "description", "current_budget", "proposed_budget")
REQUIRED_TRANSFER_COLUMNS = ("from", "to")


class BudgetFileError(RebudgetError):
    """Raised when a budget, snapshot or transfer file cannot be loaded."""

    pass


def _read_records(path: Path) -> list[dict[str, Any]]:
    """Read a CSV or JSON file into a list of dicts with lower-cased keys."""
    if not path.exists():
        raise BudgetFileError(f"File not found: {path}")

    try:
        if path.suffix.lower() == ".json":
            data = read_json(path)
            if isinstance(data, dict) and isinstance(data.get("rows"), list):
                data = data["rows"]
            elif isinstance(data, dict) and isinstance(data.get("transfers"), list):
                data = data["transfers"]
            if not isinstance(data, list):
                raise BudgetFileError(f"{path} must contain a list of rows or an object with a 'rows' list")
            records = [row for row in data if isinstance(row, dict)]
        else:
            df = pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
            df.columns = [str(c).strip() for c in df.columns]
            records = df.to_dict(orient="records")
    except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError, UnicodeDecodeError) as e:
        raise BudgetFileError(f"Could not parse {path}: {e}") from e
    except OSError as e:
        raise BudgetFileError(f"Could not read {path}: {e}") from e

    return [{str(k).strip().lower(): v for k, v in record.items()} for record in records]


def _require_columns(records: list[dict[str, Any]], required: Iterable[str], path: Path) -> None:
    if not records:
        raise BudgetFileError(f"{path} has no rows")
    present = set().union(*(record.keys() for record in records))
    missing = [column for column in required if column not in present]
    if missing:
        raise BudgetFileError(f"{path} is missing required columns: {', '.join(missing)}")


def load_line_items(path: str | Path) -> tuple[BudgetLineItem, ...]:
    """
    Load budget line items from CSV or JSON.

    CSV headers (case-insensitive): account, description, current_budget,
    proposed_budget, and optionally encumbrances. JSON may be a list of rows or
    an object with a "rows" list using the same keys.

    Raises:
        BudgetFileError: On missing files/columns, blank or duplicate accounts
    """
    path = Path(path)
    records = _read_records(path)
    _require_columns(records, REQUIRED_BUDGET_COLUMNS, path)

    line_items: list[BudgetLineItem] = []
    seen: set[str] = set()
    for row_number, record in enumerate(records, start=1):
        account = str(record.get("account") or "").strip()
        if not account:
            if not any(str(v).strip() for v in record.values()):
                continue  # blank line
            raise BudgetFileError(f"{path} row {row_number} has no account")

        try:
            item = BudgetLineItem.from_dict({**record, "account": account})
        except KeyError as e:
            raise BudgetFileError(f"{path} row {row_number} is missing {e.args[0]}") from e
        if not item.is_summary:
            if account in seen:
                raise BudgetFileError(f"{path} lists account {account} more than once")
            seen.add(account)
        line_items.append(item)

    logger.info("Loaded %d line items from %s", len(line_items), path)
    return tuple(line_items)


def encumbrance_snapshot_from(line_items: Iterable[BudgetLineItem]) -> tuple[BudgetLineItem, ...]:
    """Use the working budget's own encumbrances when no separate snapshot is supplied."""
    return tuple(item for item in line_items if not item.is_summary)


def load_transfer_requests(path: str | Path) -> tuple[TransferRequest, ...]:
    """
    Load a transfer queue from CSV or JSON, preserving file order.

    Each row needs from, to and either amount (dollars) or amount_cents.
    mode defaults to budget_total; missing ids become t1, t2, ...
    A file with no rows is an empty queue.

    Raises:
        BudgetFileError: On missing columns, amounts or unknown modes
    """
    path = Path(path)
    records = _read_records(path)
    if not records:
        logger.info("No transfer requests in %s", path)
        return ()
    _require_columns(records, REQUIRED_TRANSFER_COLUMNS, path)

    requests: list[TransferRequest] = []
    for row_number, record in enumerate(records, start=1):
        if "amount_cents" in record and str(record["amount_cents"]).strip() != "":
            try:
                amount_cents = int(str(record["amount_cents"]).strip())
            except ValueError:
                raise BudgetFileError(
                    f"{path} row {row_number}: amount_cents must be a whole number"
                ) from None
        elif "amount" in record:
            amount_cents = to_cents(record["amount"])
        else:
            raise BudgetFileError(f"{path} row {row_number} has no amount or amount_cents")

        try:
            mode = TransferMode.parse(record.get("mode") or TransferMode.BUDGET_TOTAL)
        except ValueError as e:
            raise BudgetFileError(f"{path} row {row_number}: {e}") from e

        requests.append(
            TransferRequest(
                id=str(record.get("id") or f"t{row_number}").strip(),
                from_account=str(record["from"]).strip(),
                to_account=str(record["to"]).strip(),
                amount_cents=amount_cents,
                mode=mode,
            )
        )

    logger.info("Loaded %d transfer requests from %s", len(requests), path)
    return tuple(requests)
