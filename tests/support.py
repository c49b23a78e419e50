"""Shared fixtures: a temp-file SQLite ledger and a scripted fake aggregator."""

from __future__ import annotations

import tempfile
import unittest
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Union

import httpx
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from seamless_wallet.core.config import AgentSettings, Settings, UpstreamSettings
from seamless_wallet.core.crypto import hash_password
from seamless_wallet.infrastructure.database import build_session_factory, init_db
from seamless_wallet.infrastructure.database.repositories import SqlLedgerStore
from seamless_wallet.infrastructure.upstream import UpstreamGateway, build_async_client
from seamless_wallet.modules.accounts import Account

UPSTREAM_URL = "https://aggregator.test"
OUTBOUND_KEY = "outbound-api-key"
AGENT_API_KEY = "partner-api-key"
AGENT_SECRET = "partner-secret-key"

Handler = Callable[[httpx.Request], httpx.Response]
Route = Union[httpx.Response, Handler]


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "environment": "test",
        "upstream": UpstreamSettings(endpoint=UPSTREAM_URL, api_key=OUTBOUND_KEY),
        "agents": [AgentSettings(id="agent-001", name="main", api_key=AGENT_API_KEY, secret=AGENT_SECRET)],
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_engine(directory: str) -> AsyncEngine:
    url = f"sqlite+aiosqlite:///{Path(directory) / 'ledger.db'}"
    return create_async_engine(url, poolclass=NullPool)


class FakeAggregator:
    """``httpx.MockTransport`` backend answering scripted routes; unknown routes 404."""

    def __init__(self, *, offline: bool = False) -> None:
        self.offline = offline
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Route] = {}

    def on(self, method: str, path: str, route: Route) -> "FakeAggregator":
        self._routes[(method.upper(), path)] = route
        return self

    def on_json(self, method: str, path: str, payload: Any, status_code: int = 200) -> "FakeAggregator":
        return self.on(method, path, httpx.Response(status_code, json=payload))

    def fail(self, method: str, path: str, error: type[httpx.TransportError]) -> "FakeAggregator":
        def _raise(request: httpx.Request) -> httpx.Response:
            raise error(f"scripted {error.__name__}", request=request)

        return self.on(method, path, _raise)

    def calls(self, path: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.path == path]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.offline:
            raise httpx.ConnectError("connection refused", request=request)
        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "not found"})
        if isinstance(route, httpx.Response):
            return route
        return route(request)


def make_gateway(aggregator: FakeAggregator, settings: UpstreamSettings | None = None) -> UpstreamGateway:
    settings = settings or UpstreamSettings(endpoint=UPSTREAM_URL, api_key=OUTBOUND_KEY)
    return UpstreamGateway(build_async_client(settings, transport=aggregator.transport()), settings)


class LedgerTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.engine = make_engine(self._tmpdir.name)
        await init_db(self.engine)
        self.session_factory = build_session_factory(self.engine)
        self.store = SqlLedgerStore(self.session_factory)

    async def asyncTearDown(self) -> None:
        await self.engine.dispose()
        self._tmpdir.cleanup()

    async def create_account(
        self,
        username: str = "demo-01-player",
        balance: str = "100.00",
        token: str | None = None,
    ) -> Account:
        account = await self.store.create_account(
            agent_id="agent-001",
            username=username,
            password_hash=hash_password("secret123"),
            balance=Decimal(balance),
            currency="THB",
        )
        if token is not None:
            account = await self.store.set_session_token(account.id, token)
        return account

    async def balance_of(self, account_id: str) -> Decimal:
        account = await self.store.get_by_id(account_id)
        assert account is not None
        return account.balance
