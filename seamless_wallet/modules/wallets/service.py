"""Wallet service: player-initiated deposits and withdrawals."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal

from seamless_wallet.core.money import to_decimal
from seamless_wallet.modules.accounts import Account, LedgerStore
from seamless_wallet.modules.settlement import InsufficientBalanceError

from .exceptions import InvalidAmountError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class WalletService:
    store: LedgerStore

    async def deposit(self, account_id: str, amount: Decimal | str) -> Account:
        value = self._positive(amount)
        account = await self.store.update(account_id, lambda current: replace(current, balance=current.balance + value))
        logger.info("Deposited %s to %s, balance %s", value, account.username, account.balance)
        return account

    async def withdraw(self, account_id: str, amount: Decimal | str) -> Account:
        value = self._positive(amount)

        def _subtract(current: Account) -> Account:
            if current.balance < value:
                raise InsufficientBalanceError(current.balance, value)
            return replace(current, balance=current.balance - value)

        account = await self.store.update(account_id, _subtract)
        logger.info("Withdrew %s from %s, balance %s", value, account.username, account.balance)
        return account

    @staticmethod
    def _positive(amount: Decimal | str) -> Decimal:
        try:
            value = to_decimal(amount)
        except ValueError as exc:
            raise InvalidAmountError(str(exc)) from exc
        if value <= 0:
            raise InvalidAmountError("amount must be greater than zero")
        return value
