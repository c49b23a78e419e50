"""Session manager: decides when a token is (re)issued and who is authoritative.

The local token is a cache of the upstream one. It is trusted until an
explicit refresh; ``None`` is the only signal that a mint is needed. Upstream
wins whenever it answers. Methods update the ``Account`` they are given so
callers keep working with the current token.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from seamless_wallet.core.crypto import generate_placeholder_token, mask_token
from seamless_wallet.infrastructure.upstream import UpstreamError, UpstreamGateway
from seamless_wallet.modules.accounts import Account, LedgerStore

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class SessionState:
    token: str
    # False when the token is a local placeholder upstream never confirmed
    authenticated: bool


class SessionManager:
    def __init__(self, store: LedgerStore, gateway: UpstreamGateway) -> None:
        self._store = store
        self._gateway = gateway

    async def ensure_session(self, account: Account, game_code: str | None = None) -> SessionState:
        if account.session_token:
            return SessionState(token=account.session_token, authenticated=True)

        placeholder = generate_placeholder_token()
        await self._store.set_session_token(account.id, placeholder)
        account.session_token = placeholder
        logger.info("Issued placeholder session %s for %s", mask_token(placeholder), account.username)
        return await self._mint(account, game_code)

    async def refresh_session(self, account: Account, game_code: str | None = None) -> SessionState:
        """Force a new mint, keeping the current token if upstream does not answer."""
        if not account.session_token:
            return await self.ensure_session(account, game_code)
        return await self._mint(account, game_code)

    async def reset_session(self, account: Account) -> None:
        """Drop the stored token so the next launch mints a fresh one."""
        if account.session_token is None:
            return
        await self._store.set_session_token(account.id, None)
        account.session_token = None
        logger.info("Cleared session for %s", account.username)

    async def adopt_token(self, account: Account, token: str) -> None:
        if token == account.session_token:
            return
        await self._store.set_session_token(account.id, token)
        account.session_token = token
        logger.info("Adopted upstream session %s for %s", mask_token(token), account.username)

    async def _mint(self, account: Account, game_code: str | None) -> SessionState:
        try:
            if game_code:
                token = await self._gateway.mint_session(account.username, game_code)
            else:
                token = await self._gateway.create_session(account.username)
        except UpstreamError as exc:
            logger.warning("Session mint for %s failed, keeping local token: %s", account.username, exc)
            assert account.session_token is not None
            return SessionState(token=account.session_token, authenticated=False)

        await self.adopt_token(account, token)
        return SessionState(token=token, authenticated=True)
