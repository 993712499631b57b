#!/usr/bin/env python3
"""
Rebudget Error Types

Every rejected transfer raises one of these; nothing is corrected silently.
"""


class RebudgetError(Exception):
    """Base class for all rebudget errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        # Filled in by the projector when the error aborts a batch
        self.transfer_id: str | None = None
        self.position: int | None = None


class TransferError(RebudgetError):
    """A requested transfer was rejected by validation."""

    pass


class InvalidAmount(TransferError):
    """Requested amount is not a positive integer number of cents."""

    def __init__(self, amount: object) -> None:
        super().__init__(f"Amount must be a positive whole number of cents, got {amount!r}")
        self.amount = amount


class ForbiddenIndirectTransfer(TransferError):
    """Transfer names the indirect-cost account directly."""

    def __init__(self, account: str) -> None:
        super().__init__(
            f"Direct transfers to or from the F&A account {account} are not allowed; "
            "it is credited automatically"
        )
        self.account = account


class UnknownAccount(TransferError):
    """Source or destination is not a line item in the working budget."""

    def __init__(self, account: str, role: str) -> None:
        super().__init__(f"Unknown {role} account {account}")
        self.account = account
        self.role = role


class IdenticalAccounts(TransferError):
    """Source and destination are the same account."""

    def __init__(self, account: str) -> None:
        super().__init__(f"From and To must differ (both are {account})")
        self.account = account


class EncumbranceBreach(TransferError):
    """Source balance would fall below its encumbered amount."""

    def __init__(self, account: str, balance_cents: int, encumbrance_cents: int) -> None:
        super().__init__(
            f"Transfer would breach encumbrance on {account}: "
            f"balance after transfer {balance_cents} cents < encumbered {encumbrance_cents} cents"
        )
        self.account = account
        self.balance_cents = balance_cents
        self.encumbrance_cents = encumbrance_cents


class NegativeBalance(TransferError):
    """Source balance would go negative."""

    def __init__(self, account: str, balance_cents: int) -> None:
        super().__init__(f"Transfer would make {account} negative ({balance_cents} cents)")
        self.account = account
        self.balance_cents = balance_cents


class ReconciliationFailure(RebudgetError):
    """Conservation of the baseline total was violated. This is a defect, not a user error."""

    def __init__(self, before_cents: int, after_cents: int) -> None:
        super().__init__(
            f"Totals do not reconcile after transfer: baseline {before_cents} cents before, "
            f"{after_cents} cents after"
        )
        self.before_cents = before_cents
        self.after_cents = after_cents
