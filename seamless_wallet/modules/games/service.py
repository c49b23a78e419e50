"""Game catalog lookups."""

from __future__ import annotations

import logging
from typing import Any

from seamless_wallet.infrastructure.upstream import UpstreamError, UpstreamGateway
from seamless_wallet.modules.launch import Provider, ProviderRegistry

logger = logging.getLogger(__name__)


class GameCatalogService:
    def __init__(self, gateway: UpstreamGateway, registry: ProviderRegistry) -> None:
        self._gateway = gateway
        self._registry = registry

    async def list_games(self, provider: Provider | str) -> list[dict[str, Any]]:
        """Provider's catalog; an unavailable catalog reads as empty."""
        descriptor = self._registry.get(provider)
        try:
            return await self._gateway.list_games(descriptor.code.value)
        except UpstreamError as exc:
            logger.warning("Game list for %s unavailable: %s", descriptor.code.value, exc)
            return []

    async def find_game(self, provider: Provider | str, game_code: str) -> dict[str, Any] | None:
        """Match ``game_code`` against the catalog's code or id.

        ``None`` means the catalog answered without the game. ``UpstreamError``
        propagates so callers can tell an unknown game from an unreachable
        catalog.
        """
        descriptor = self._registry.get(provider)
        for game in await self._gateway.list_games(descriptor.code.value):
            keys = {str(value) for value in (game.get("game_code"), game.get("game_id")) if value is not None}
            if game_code in keys:
                return game
        return None
