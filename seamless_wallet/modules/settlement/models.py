"""Transient settlement values; nothing here is persisted."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from seamless_wallet.core.money import to_decimal

from .exceptions import InvalidWagerError

# 16 integer digits; keeps any balance well inside a 64-bit count of cents
MAX_WAGER_AMOUNT = Decimal("9999999999999999.99")


@dataclass(slots=True)
class WagerSettlement:
    username: str
    wager_id: str
    bet_amount: Decimal
    payout_amount: Decimal

    def __post_init__(self) -> None:
        try:
            self.bet_amount = to_decimal(self.bet_amount, strict=True)
            self.payout_amount = to_decimal(self.payout_amount, strict=True)
        except ValueError as exc:
            raise InvalidWagerError(str(exc)) from exc
        if self.bet_amount < 0 or self.payout_amount < 0:
            raise InvalidWagerError("bet and payout amounts must not be negative")
        if max(self.bet_amount, self.payout_amount) > MAX_WAGER_AMOUNT:
            raise InvalidWagerError(f"bet and payout amounts must not exceed {MAX_WAGER_AMOUNT}")

    @property
    def net(self) -> Decimal:
        return self.payout_amount - self.bet_amount


@dataclass(slots=True, frozen=True)
class SettlementResult:
    balance_before: Decimal
    balance_after: Decimal
    currency: str
    replayed: bool = False
