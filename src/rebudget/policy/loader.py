#!/usr/bin/env python3
"""
Policy Document Loader

Reads rate documents (JSON or YAML) and normalizes the schema variants seen in
the wild onto a single PolicyRateDocument, so the engine never has to chase
alternative field names.

Supported shapes:
- simple: fa_rate.rate, wrs_account_numbers.indirect_costs, mtdc_eligible_accounts
- comprehensive: fa_rates.off_campus.research_with_library (or
  fa_rates.on_campus.research), mtdc_excluded_accounts
- flat: indirect_rate, indirect_account, eligible_accounts
"""

import logging
import re
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from ..core.config import get_config
from ..core.json_utils import read_json
from ..core.models import AccountRange, PolicyRateDocument
from ..engine.errors import RebudgetError

logger = logging.getLogger(__name__)

_RANGE = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")


class PolicyDocumentError(RebudgetError):
    """Raised when a policy document cannot be read or normalized."""

    pass


def load_policy(
    path: str | Path,
    default_indirect_account: str | None = None,
    indirect_description: str | None = None,
) -> PolicyRateDocument:
    """
    Load and normalize a policy document from disk.

    Args:
        path: JSON (.json) or YAML (.yaml/.yml) file
        default_indirect_account: Fallback F&A account; config default if None
        indirect_description: Description for a created F&A line; config default if None

    Raises:
        PolicyDocumentError: If the file is missing, malformed or incomplete
    """
    path = Path(path)
    if not path.exists():
        raise PolicyDocumentError(f"Policy file not found: {path}")

    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        else:
            data = read_json(path)
    except (ValueError, yaml.YAMLError) as e:
        raise PolicyDocumentError(f"Could not parse policy file {path}: {e}") from e
    except OSError as e:
        raise PolicyDocumentError(f"Could not read policy file {path}: {e}") from e

    if not isinstance(data, dict):
        raise PolicyDocumentError(f"Policy file {path} must contain an object at the top level")

    if default_indirect_account is None or indirect_description is None:
        policy_config = get_config().policy
        default_indirect_account = default_indirect_account or policy_config.indirect_account
        indirect_description = indirect_description or policy_config.indirect_description

    policy = normalize_policy(data, default_indirect_account, indirect_description)
    logger.info(
        "Loaded policy from %s: rate %s, F&A account %s, %d eligible accounts, %d ranges",
        path,
        policy.indirect_rate,
        policy.indirect_account,
        len(policy.eligible_accounts),
        len(policy.eligible_ranges),
    )
    return policy


def normalize_policy(
    data: dict[str, Any],
    default_indirect_account: str = "58960",
    indirect_description: str = "F&A",
) -> PolicyRateDocument:
    """
    Map any supported policy shape onto a PolicyRateDocument.

    Raises:
        PolicyDocumentError: If no rate is present or the rate is outside [0, 1]
    """
    rate = _parse_rate(_find_rate(data))

    account_numbers = data.get("wrs_account_numbers") or {}
    indirect_account = str(
        data.get("indirect_account") or account_numbers.get("indirect_costs") or default_indirect_account
    ).strip()

    eligible_raw = data.get("eligible_accounts", data.get("mtdc_eligible_accounts")) or []
    excluded_raw = data.get("excluded_accounts", data.get("mtdc_excluded_accounts")) or []

    accounts, ranges = _split_accounts(eligible_raw)
    excluded, excluded_ranges = _split_accounts(excluded_raw)
    if excluded_ranges:
        raise PolicyDocumentError("Excluded accounts must be individual account numbers, not ranges")

    return PolicyRateDocument(
        indirect_rate=rate,
        indirect_account=indirect_account,
        eligible_accounts=frozenset(accounts),
        eligible_ranges=tuple(ranges),
        excluded_accounts=frozenset(excluded),
        indirect_description=indirect_description,
    )


def _find_rate(data: dict[str, Any]) -> Any:
    """Locate the F&A rate value across the known shapes."""
    if "indirect_rate" in data:
        return data["indirect_rate"]

    fa_rate = data.get("fa_rate")
    if isinstance(fa_rate, dict) and "rate" in fa_rate:
        return fa_rate["rate"]
    if fa_rate is not None and not isinstance(fa_rate, dict):
        return fa_rate

    fa_rates = data.get("fa_rates")
    if isinstance(fa_rates, dict):
        # Off-campus research is the default for USDA-NIFA projects
        for campus, category in (("off_campus", "research_with_library"), ("on_campus", "research")):
            entry = (fa_rates.get(campus) or {}).get(category)
            if isinstance(entry, dict) and "rate" in entry:
                logger.debug("Using %s/%s F&A rate", campus, category)
                return entry["rate"]

    raise PolicyDocumentError("Policy document has no F&A rate (fa_rate.rate, fa_rates or indirect_rate)")


def _parse_rate(value: Any) -> Decimal:
    try:
        rate = Decimal(str(value).strip())
    except InvalidOperation:
        raise PolicyDocumentError(f"F&A rate is not a number: {value!r}") from None
    if not rate.is_finite() or rate < 0 or rate > 1:
        raise PolicyDocumentError(f"F&A rate must be a fraction between 0 and 1, got {value!r}")
    return rate


def _split_accounts(entries: Any) -> tuple[list[str], list[AccountRange]]:
    """Separate single account numbers from NNNNN-NNNNN ranges."""
    if isinstance(entries, str):
        entries = [entries]

    accounts: list[str] = []
    ranges: list[AccountRange] = []
    for entry in entries:
        text = str(entry).strip()
        if not text:
            continue
        match = _RANGE.match(text)
        if match:
            low, high = int(match.group(1)), int(match.group(2))
            if low > high:
                raise PolicyDocumentError(f"Account range {text} is reversed")
            ranges.append(AccountRange(low=low, high=high))
        else:
            accounts.append(text)
    return accounts, ranges


def default_policy_template() -> dict[str, Any]:
    """Comprehensive rates template for new projects."""
    return {
        "metadata": {
            "project": "USDA-NIFA Template (Comprehensive Rates)",
            "updated": date.today().isoformat(),
            "version": "2.0",
        },
        "fa_rates": {
            "off_campus": {
                "research_with_library": {
                    "rate": 0.276,
                    "percentage": 27.6,
                    "type": "MTDC",
                    "description": "Research (using Library) - Off-Campus",
                },
            },
            "on_campus": {
                "research": {
                    "rate": 0.52,
                    "percentage": 52.0,
                    "type": "MTDC",
                    "description": "Research - On-Campus",
                },
            },
        },
        "wrs_account_numbers": {
            "postdoc_salary": "51000-51199",
            "graduate_wages": "51400-51499",
            "staff_benefits": "51800-51899",
            "supplies": "52000-52999",
            "travel_domestic": "53100-53199",
            "current_services": "53000-53999",
            "indirect_costs": "58960",
        },
        "mtdc_eligible_accounts": [
            "51000-51199",
            "51400-51499",
            "51800-51899",
            "52000-52999",
            "53100-53199",
        ],
        "mtdc_excluded_accounts": ["56575", "56961", "56581"],
    }
