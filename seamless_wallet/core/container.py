"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from seamless_wallet.core.config import Settings, get_settings
from seamless_wallet.infrastructure.database.repositories import SqlLedgerStore
from seamless_wallet.infrastructure.database.session import get_session_factory
from seamless_wallet.infrastructure.upstream import UpstreamGateway, build_async_client
from seamless_wallet.modules.accounts import AccountService
from seamless_wallet.modules.games import GameCatalogService
from seamless_wallet.modules.history import HistoryService
from seamless_wallet.modules.launch import GameUrlResolver, ProviderRegistry
from seamless_wallet.modules.sessions import SessionManager
from seamless_wallet.modules.settlement import SettlementService
from seamless_wallet.modules.wallets import WalletService


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    ledger: SqlLedgerStore
    gateway: UpstreamGateway
    providers: ProviderRegistry
    accounts: AccountService
    sessions: SessionManager
    resolver: GameUrlResolver
    settlement: SettlementService
    history: HistoryService
    games: GameCatalogService
    wallets: WalletService

    @classmethod
    def build(
        cls,
        settings: Settings,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "ApplicationContainer":
        ledger = SqlLedgerStore(session_factory)
        gateway = UpstreamGateway(build_async_client(settings.upstream, transport=transport), settings.upstream)
        providers = ProviderRegistry.from_settings(settings.launch)
        sessions = SessionManager(ledger, gateway)
        return cls(
            settings=settings,
            ledger=ledger,
            gateway=gateway,
            providers=providers,
            accounts=AccountService(ledger, settings.wallet),
            sessions=sessions,
            resolver=GameUrlResolver(providers, sessions, gateway, settings.launch),
            settlement=SettlementService(ledger),
            history=HistoryService(gateway),
            games=GameCatalogService(gateway, providers),
            wallets=WalletService(ledger),
        )

    async def aclose(self) -> None:
        await self.gateway.aclose()


@lru_cache()
def get_container() -> ApplicationContainer:
    return ApplicationContainer.build(get_settings(), get_session_factory())


__all__ = ["ApplicationContainer", "get_container"]
