"""Partner agent authentication by the ``x-api-key`` header.

Balance and settlement callbacks present the agent's secret; history and
diagnostics present the agent's API key. Both are exact, constant-time
matches against configured agents and neither is the outbound API key.
"""

from __future__ import annotations

from typing import Iterable, Literal, Optional

from fastapi import Depends, Header

from seamless_wallet.core.config import AgentSettings
from seamless_wallet.core.container import ApplicationContainer
from seamless_wallet.core.crypto import secrets_match

from .container import get_app_container


def find_agent(
    agents: Iterable[AgentSettings],
    provided: str | None,
    field: Literal["secret", "api_key"],
) -> AgentSettings | None:
    for agent in agents:
        if secrets_match(provided, getattr(agent, field)):
            return agent
    return None


def get_agent_by_secret(
    x_api_key: Optional[str] = Header(default=None, alias="x-api-key"),
    container: ApplicationContainer = Depends(get_app_container),
) -> AgentSettings | None:
    return find_agent(container.settings.agents, x_api_key, "secret")


def get_agent_by_api_key(
    x_api_key: Optional[str] = Header(default=None, alias="x-api-key"),
    container: ApplicationContainer = Depends(get_app_container),
) -> AgentSettings | None:
    return find_agent(container.settings.agents, x_api_key, "api_key")


__all__ = ["find_agent", "get_agent_by_api_key", "get_agent_by_secret"]
