"""Settlement engine: applies a wager's net outcome to the ledger exactly once."""

from __future__ import annotations

import logging
from dataclasses import replace

from seamless_wallet.modules.accounts import Account, AccountNotFoundError, LedgerStore, WagerReceipt

from .exceptions import InsufficientBalanceError
from .models import SettlementResult, WagerSettlement

logger = logging.getLogger(__name__)


class SettlementService:
    def __init__(self, store: LedgerStore) -> None:
        self._store = store

    async def settle(self, account: Account, wager: WagerSettlement) -> SettlementResult:
        net = wager.net
        if net == 0:
            current = await self._store.get_by_id(account.id)
            if current is None:
                raise AccountNotFoundError(account.id)
            return SettlementResult(current.balance, current.balance, current.currency)

        async with self._store.transaction(account.id) as tx:
            current = tx.account
            if wager.wager_id:
                receipt = await tx.find_receipt(wager.wager_id)
                if receipt is not None:
                    logger.info("Wager %s for %s already settled, replaying result", wager.wager_id, current.username)
                    return SettlementResult(receipt.balance_before, receipt.balance_after, current.currency, replayed=True)

            before = current.balance
            if net < 0 and before < -net:
                logger.info(
                    "Rejected wager %s for %s: balance %s below loss %s",
                    wager.wager_id,
                    current.username,
                    before,
                    -net,
                )
                raise InsufficientBalanceError(before, -net)

            after = before + net
            tx.save(replace(current, balance=after))
            if wager.wager_id:
                tx.add_receipt(
                    WagerReceipt(
                        account_id=current.id,
                        wager_id=wager.wager_id,
                        balance_before=before,
                        balance_after=after,
                    )
                )

        logger.info("Settled wager %s for %s: %s -> %s", wager.wager_id, current.username, before, after)
        return SettlementResult(before, after, current.currency)
