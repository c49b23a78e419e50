"""Ledger store protocol: the only owner of account records."""

from __future__ import annotations

from decimal import Decimal
from typing import AsyncContextManager, Callable, Protocol

from .models import Account, WagerReceipt


class LedgerTransaction(Protocol):
    """Unit of work over one account, valid while its lock is held."""

    @property
    def account(self) -> Account:
        ...

    def save(self, account: Account) -> None:
        ...

    async def find_receipt(self, wager_id: str) -> WagerReceipt | None:
        ...

    def add_receipt(self, receipt: WagerReceipt) -> None:
        ...


class LedgerStore(Protocol):
    async def get_by_id(self, account_id: str) -> Account | None:
        ...

    async def get_by_username(self, username: str) -> Account | None:
        ...

    async def create_account(
        self,
        *,
        agent_id: str,
        username: str,
        password_hash: str,
        balance: Decimal,
        currency: str,
    ) -> Account:
        ...

    def transaction(self, account_id: str) -> AsyncContextManager[LedgerTransaction]:
        ...

    async def update(self, account_id: str, mutate: Callable[[Account], Account]) -> Account:
        ...

    async def set_session_token(self, account_id: str, token: str | None) -> Account:
        ...
