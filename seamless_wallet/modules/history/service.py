"""History service: the aggregator is the system of record; page failures degrade to empty."""

from __future__ import annotations

import logging
from typing import Any

from seamless_wallet.infrastructure.upstream import HistoryFilters, HistoryPage, UpstreamError, UpstreamGateway

logger = logging.getLogger(__name__)

DEGRADED_MESSAGE = "Cannot connect to upstream"
MAX_PAGE_SIZE = 200


class HistoryService:
    def __init__(self, gateway: UpstreamGateway) -> None:
        self._gateway = gateway

    async def fetch(
        self,
        username: str,
        filters: HistoryFilters | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> HistoryPage:
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_PAGE_SIZE)
        try:
            result = await self._gateway.fetch_history(username, filters, page, limit)
        except UpstreamError as exc:
            logger.warning("History for %s unavailable: %s", username, exc)
            return HistoryPage(data=[], total=0, page=page, limit=limit, degraded=True, message=DEGRADED_MESSAGE)
        logger.debug("Loaded %d history rows for %s", len(result.data), username)
        return result

    async def get_transaction(self, transaction_id: str) -> dict[str, Any]:
        """Single transaction detail. Unlike pages, failures propagate as ``UpstreamError``."""
        try:
            return await self._gateway.fetch_transaction(transaction_id)
        except UpstreamError as exc:
            logger.warning("Transaction %s unavailable: %s", transaction_id, exc)
            raise
