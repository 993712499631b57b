#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer cents internally.
Prevents floating-point errors and provides type-safe currency operations.
"""

from dataclasses import dataclass

from .currency import CurrencyInput, format_cents, from_cents, to_cents


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents (USD).

    Budget amounts are normally non-negative, but changes (proposed minus
    current) are signed, so both signs are supported.

    Examples:
        >>> budget = Money.from_dollars("$20,000.00")
        >>> str(budget)
        '$20,000.00'

        >>> change = Money.from_cents(-1276000)
        >>> str(change)
        '-$12,760.00'
        >>> change.to_decimal_str()
        '-12760.00'

        >>> (budget + change).to_cents()
        724000
    """

    cents: int

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def from_dollars(cls, dollars: CurrencyInput) -> "Money":
        """
        Parse from a dollar amount like '$123.45', 12, or 12.5.

        Unparseable input becomes zero, matching to_cents.
        """
        return cls(cents=to_cents(dollars))

    @classmethod
    def zero(cls) -> "Money":
        return cls(cents=0)

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_decimal_str(self) -> str:
        """Get plain two-decimal string, e.g. '1234.56'."""
        return from_cents(self.cents)

    def is_negative(self) -> bool:
        return self.cents < 0

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(cents=self.cents - other.cents)

    def __lt__(self, other: "Money") -> bool:
        """Less than comparison."""
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        """Less than or equal comparison."""
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        """Greater than comparison."""
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        """Greater than or equal comparison."""
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as dollar string."""
        return format_cents(self.cents)

    def __repr__(self) -> str:
        """Repr format."""
        return f"Money(cents={self.cents})"
