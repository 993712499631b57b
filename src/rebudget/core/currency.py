#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

Lossless conversion between decimal dollar amounts (as entered in budget files
and displayed to users) and integer cents (used for all budget arithmetic).

Key Principles:
- Never use floating-point arithmetic for currency calculations
- Parse integer and fractional parts separately; never round the fraction
- Convert at the boundary only; everything downstream works in cents
"""

import math
import re
from collections.abc import Iterable
from decimal import Decimal
from typing import Union

# Anything other than digits, the decimal point and a minus sign is decoration
# ("$", ",", spaces, currency codes) and is discarded before parsing.
_DECORATION = re.compile(r"[^0-9.\-]")
_AMOUNT = re.compile(r"^(-?)(\d*)(?:\.(\d*))?$")

CurrencyInput = Union[str, int, float, Decimal, None]


def to_cents(value: CurrencyInput) -> int:
    """
    Convert a dollar amount to integer cents.

    Accepts numbers or decimal-formatted strings with optional decoration
    (leading sign, "$", thousands separators). The fractional part is
    truncated or right-padded to exactly two digits, and the sign applies to
    the whole value.

    Args:
        value: Dollar amount like "$1,234.56", "-0.5", 12, or 12.34

    Returns:
        Amount in cents; 0 for empty or unparseable input

    Examples:
        to_cents("$1,234.56") -> 123456
        to_cents("12.5") -> 1250
        to_cents("12.349") -> 1234
        to_cents("-0.50") -> -50
        to_cents("n/a") -> 0
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value * 100
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        # Floats are fixed to two places first, the same way they display
        text = f"{value:.2f}"
    elif isinstance(value, Decimal):
        if not value.is_finite():
            return 0
        text = format(value, "f")
    else:
        text = str(value)

    clean = _DECORATION.sub("", text)
    match = _AMOUNT.match(clean)
    if not match:
        return 0

    sign, whole, fraction = match.groups()
    if not whole and not fraction:
        return 0

    cents = int(whole or "0") * 100 + int((fraction or "").ljust(2, "0")[:2])
    return -cents if sign else cents


def from_cents(cents: int) -> str:
    """
    Convert cents to a plain decimal string using pure integer arithmetic.

    Exactly two fractional digits; a sign only when negative.

    Example:
        from_cents(4599) -> "45.99"
        from_cents(-5) -> "-0.05"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    dollars = abs_cents // 100
    remainder = abs_cents % 100

    if is_negative:
        return f"-{dollars}.{remainder:02d}"
    return f"{dollars}.{remainder:02d}"


def format_cents(cents: int) -> str:
    """Format cents for display, e.g. 123456 -> "$1,234.56", -100 -> "-$1.00"."""
    abs_cents = abs(int(cents))
    text = f"${abs_cents // 100:,}.{abs_cents % 100:02d}"
    return f"-{text}" if cents < 0 else text


def sum_cents(amounts: Iterable[int]) -> int:
    """Sum integer cent amounts."""
    return sum(amounts, 0)

