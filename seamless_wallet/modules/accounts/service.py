"""Domain services for account management."""

from __future__ import annotations

import logging

from seamless_wallet.core.config import WalletSettings
from seamless_wallet.core.crypto import hash_password, verify_password
from seamless_wallet.core.money import to_decimal

from .exceptions import AccountAlreadyExistsError
from .models import Account, AccountCreateInput
from .repository import LedgerStore

logger = logging.getLogger(__name__)


class AccountService:
    """Registration and lookup; balances are only touched by settlement and wallet flows."""

    def __init__(self, store: LedgerStore, wallet_settings: WalletSettings) -> None:
        self._store = store
        self._wallet_settings = wallet_settings

    async def get_by_id(self, account_id: str) -> Account | None:
        return await self._store.get_by_id(account_id)

    async def get_by_username(self, username: str) -> Account | None:
        return await self._store.get_by_username(username)

    async def authenticate(self, username: str, password: str) -> Account | None:
        account = await self._store.get_by_username(username)
        if account is None:
            return None
        if not verify_password(password, account.password_hash):
            return None
        return account

    async def register(self, payload: AccountCreateInput) -> Account:
        existing = await self._store.get_by_username(payload.username)
        if existing is not None:
            raise AccountAlreadyExistsError(f"username already exists: {payload.username}")

        balance = payload.balance if payload.balance is not None else self._wallet_settings.default_balance
        account = await self._store.create_account(
            agent_id=payload.agent_id or self._wallet_settings.default_agent_id,
            username=payload.username,
            password_hash=hash_password(payload.password),
            balance=to_decimal(balance),
            currency=payload.currency or self._wallet_settings.currency,
        )
        logger.info("Registered account %s with balance %s %s", account.username, account.balance, account.currency)
        return account
