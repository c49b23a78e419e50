"""Upstream connectivity checks for partner operators."""
from __future__ import annotations

from typing import Any, Awaitable

from fastapi import APIRouter, Depends, HTTPException, status

from seamless_wallet.core.config import AgentSettings
from seamless_wallet.core.container import ApplicationContainer
from seamless_wallet.infrastructure.upstream import UpstreamError
from seamless_wallet.interfaces.http.deps import get_agent_by_api_key, get_app_container
from seamless_wallet.schemas import DiagnosticLoginRequest, UpstreamDiagnosticsResponse

router = APIRouter()


def _require_agent(agent: AgentSettings | None) -> None:
    if agent is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API Key")


async def _call_upstream(call: Awaitable[Any]) -> UpstreamDiagnosticsResponse:
    try:
        data = await call
    except UpstreamError as exc:
        return UpstreamDiagnosticsResponse(reachable=False, kind=exc.kind.value, detail=exc.detail)
    return UpstreamDiagnosticsResponse(reachable=True, data=data)


@router.get("/upstream", response_model=UpstreamDiagnosticsResponse, summary="Check the aggregator health endpoint")
async def upstream_health(
    agent: AgentSettings | None = Depends(get_agent_by_api_key),
    container: ApplicationContainer = Depends(get_app_container),
) -> UpstreamDiagnosticsResponse:
    _require_agent(agent)
    return await _call_upstream(container.gateway.check_health())


@router.get(
    "/upstream/balance/{username}",
    response_model=UpstreamDiagnosticsResponse,
    summary="Player balance as the aggregator sees it",
)
async def upstream_balance(
    username: str,
    agent: AgentSettings | None = Depends(get_agent_by_api_key),
    container: ApplicationContainer = Depends(get_app_container),
) -> UpstreamDiagnosticsResponse:
    _require_agent(agent)
    return await _call_upstream(container.gateway.fetch_balance(username))


@router.post(
    "/upstream/login",
    response_model=UpstreamDiagnosticsResponse,
    summary="Try the legacy aggregator login for a local player",
)
async def upstream_login(
    payload: DiagnosticLoginRequest,
    agent: AgentSettings | None = Depends(get_agent_by_api_key),
    container: ApplicationContainer = Depends(get_app_container),
) -> UpstreamDiagnosticsResponse:
    _require_agent(agent)
    account = await container.accounts.get_by_username(payload.username)
    if account is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    session = await container.sessions.ensure_session(account, payload.game_code)
    try:
        issued = await container.gateway.login(account.username, payload.game_code, session.token)
    except UpstreamError as exc:
        return UpstreamDiagnosticsResponse(reachable=False, kind=exc.kind.value, detail=exc.detail)
    return UpstreamDiagnosticsResponse(
        reachable=True,
        data={"url": issued.url, "sessionToken": issued.session_token},
    )
