"""Builder for the shared ``httpx.AsyncClient`` talking to the aggregator."""

from __future__ import annotations

import httpx

from seamless_wallet import __version__
from seamless_wallet.core.config import UpstreamSettings


def build_async_client(
    settings: UpstreamSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the client every gateway call goes through.

    Timeouts are supplied per request; the client default is the longest
    configured one so a forgotten override never waits forever.
    """

    headers: dict[str, str] = {
        "x-api-key": settings.api_key,
        "Accept": "application/json",
        "User-Agent": f"seamless-wallet/{__version__}",
    }
    return httpx.AsyncClient(
        base_url=settings.endpoint.rstrip("/"),
        headers=headers,
        timeout=httpx.Timeout(settings.history_timeout),
        verify=settings.verify_tls,
        transport=transport,
    )


__all__ = ["build_async_client"]
