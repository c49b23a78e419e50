"""SQLAlchemy implementation of the ledger store.

Every read-modify-write of an account runs inside ``transaction()``, which
holds the account's process-wide lock and a single database transaction for
its whole duration. Rows are selected ``FOR UPDATE`` so dialects with row
locking serialise writers across processes as well.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from decimal import Decimal
from typing import Callable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from seamless_wallet.core.money import from_cents, to_cents
from seamless_wallet.db.models import Account as AccountModel, WagerReceipt as WagerReceiptModel
from seamless_wallet.modules.accounts.exceptions import AccountAlreadyExistsError, AccountNotFoundError
from seamless_wallet.modules.accounts.models import Account, WagerReceipt
from seamless_wallet.modules.accounts.repository import LedgerStore

logger = logging.getLogger(__name__)


class AccountLocks:
    """One ``asyncio.Lock`` per account id, created on first use.

    Entries are weak: a lock lives while some caller holds or awaits it.
    """

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    def for_account(self, account_id: str) -> asyncio.Lock:
        lock = self._locks.get(account_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[account_id] = lock
        return lock

    def __len__(self) -> int:
        return len(self._locks)


class SqlLedgerTransaction:
    def __init__(self, session: AsyncSession, model: AccountModel) -> None:
        self._session = session
        self._model = model

    @property
    def account(self) -> Account:
        return SqlLedgerStore.to_domain(self._model)

    def save(self, account: Account) -> None:
        balance_cents = to_cents(account.balance)
        if balance_cents < 0:
            raise ValueError(f"balance of account {account.id} cannot go negative")
        self._model.balance_cents = balance_cents
        self._model.currency = account.currency
        self._model.session_token = account.session_token

    async def find_receipt(self, wager_id: str) -> WagerReceipt | None:
        stmt = select(WagerReceiptModel).where(
            WagerReceiptModel.account_id == self._model.id,
            WagerReceiptModel.wager_id == wager_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return WagerReceipt(
            account_id=model.account_id,
            wager_id=model.wager_id,
            balance_before=from_cents(model.balance_before_cents),
            balance_after=from_cents(model.balance_after_cents),
            created_at=model.created_at,
        )

    def add_receipt(self, receipt: WagerReceipt) -> None:
        self._session.add(
            WagerReceiptModel(
                account_id=receipt.account_id,
                wager_id=receipt.wager_id,
                balance_before_cents=to_cents(receipt.balance_before),
                balance_after_cents=to_cents(receipt.balance_after),
            )
        )


class SqlLedgerStore(LedgerStore):
    """Ledger store backed by SQLAlchemy models, one session per operation."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        locks: AccountLocks | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._locks = locks or AccountLocks()

    @property
    def locks(self) -> AccountLocks:
        return self._locks

    async def get_by_id(self, account_id: str) -> Account | None:
        async with self._session_factory() as session:
            stmt = select(AccountModel).where(AccountModel.id == account_id)
            result = await session.execute(stmt)
            model = result.scalar_one_or_none()
            return self.to_domain(model) if model else None

    async def get_by_username(self, username: str) -> Account | None:
        async with self._session_factory() as session:
            stmt = select(AccountModel).where(AccountModel.username == username)
            result = await session.execute(stmt)
            model = result.scalar_one_or_none()
            return self.to_domain(model) if model else None

    async def create_account(
        self,
        *,
        agent_id: str,
        username: str,
        password_hash: str,
        balance: Decimal,
        currency: str,
    ) -> Account:
        balance_cents = to_cents(balance)
        if balance_cents < 0:
            raise ValueError("initial balance cannot be negative")
        model = AccountModel(
            agent_id=agent_id,
            username=username,
            password_hash=password_hash,
            balance_cents=balance_cents,
            currency=currency,
        )
        async with self._session_factory() as session:
            session.add(model)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise AccountAlreadyExistsError(f"username already exists: {username}") from exc
            await session.refresh(model)
            return self.to_domain(model)

    @asynccontextmanager
    async def transaction(self, account_id: str) -> AsyncIterator[SqlLedgerTransaction]:
        async with self._locks.for_account(account_id):
            async with self._session_factory() as session:
                async with session.begin():
                    stmt = select(AccountModel).where(AccountModel.id == account_id).with_for_update()
                    result = await session.execute(stmt)
                    model = result.scalar_one_or_none()
                    if model is None:
                        raise AccountNotFoundError(account_id)
                    yield SqlLedgerTransaction(session, model)

    async def update(self, account_id: str, mutate: Callable[[Account], Account]) -> Account:
        async with self.transaction(account_id) as tx:
            updated = mutate(tx.account)
            tx.save(updated)
        return updated

    async def set_session_token(self, account_id: str, token: str | None) -> Account:
        return await self.update(account_id, lambda account: replace(account, session_token=token))

    @staticmethod
    def to_domain(model: AccountModel) -> Account:
        return Account(
            id=str(model.id),
            agent_id=model.agent_id,
            username=model.username,
            balance=from_cents(model.balance_cents or 0),
            currency=model.currency,
            session_token=model.session_token,
            password_hash=model.password_hash,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
