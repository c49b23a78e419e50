"""Settlement errors."""

from decimal import Decimal


class SettlementError(Exception):
    """Base class for settlement errors."""


class InvalidWagerError(SettlementError):
    """The wager amounts are malformed or negative."""


class InsufficientBalanceError(SettlementError):
    """Business rejection: the loss exceeds the current balance. Nothing was written."""

    def __init__(self, balance: Decimal, required: Decimal) -> None:
        super().__init__(f"insufficient balance: have {balance}, need {required}")
        self.balance = balance
        self.required = required
