"""HTTP client wrapper around the game aggregator.

Each method performs exactly one logical request (the legacy login allows
one deterministic fallback) and either returns a typed payload or raises
``UpstreamError`` with a classified kind. No method touches the ledger.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from seamless_wallet.core.config import UpstreamSettings

from .errors import UpstreamError, UpstreamErrorKind, classify_status
from .models import HistoryFilters, HistoryPage, UpstreamGameUrl

logger = logging.getLogger(__name__)

_BODY_SNIPPET = 200


def _snippet(response: httpx.Response) -> str:
    text = response.text or ""
    return text[:_BODY_SNIPPET]


def _non_empty_str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class UpstreamGateway:
    def __init__(self, client: httpx.AsyncClient, settings: UpstreamSettings) -> None:
        self._client = client
        self._settings = settings

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        url: str,
        *,
        timeout: float,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        allow_text: bool = False,
    ) -> Any:
        try:
            response = await self._client.request(method, url, json=json, params=params, timeout=timeout)
        except httpx.TimeoutException as exc:
            raise UpstreamError(UpstreamErrorKind.TIMEOUT, f"{method} {url} timed out after {timeout}s") from exc
        except httpx.TransportError as exc:
            raise UpstreamError(UpstreamErrorKind.UNREACHABLE, f"{method} {url} failed: {exc}") from exc

        if not response.is_success:
            kind = classify_status(response.status_code)
            raise UpstreamError(
                kind,
                f"{method} {url} returned {response.status_code}: {_snippet(response)}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            if allow_text and response.text.strip():
                return response.text.strip()
            raise UpstreamError(
                UpstreamErrorKind.INVALID_RESPONSE,
                f"{method} {url} returned a non-JSON body",
                status_code=response.status_code,
            ) from exc

    async def mint_session(self, username: str, game_code: str) -> str:
        """Register the player's game setting upstream; the body is the new token."""
        payload = {
            "username": username,
            "gameCode": game_code,
            "isPlayerSetting": True,
            "setting": [],
            "buyFeatureSetting": [],
        }
        result = await self._request(
            "POST",
            "/api/setGameSetting",
            json=payload,
            timeout=self._settings.session_timeout,
            allow_text=True,
        )
        token = _non_empty_str(result)
        if token is None:
            raise UpstreamError(
                UpstreamErrorKind.INVALID_RESPONSE,
                f"setGameSetting returned {type(result).__name__}, expected a bare token string",
            )
        return token

    async def create_session(self, username: str) -> str:
        result = await self._request(
            "POST",
            "/api/createSession",
            json={"username": username},
            timeout=self._settings.session_timeout,
            allow_text=True,
        )
        token = _non_empty_str(result)
        if token is None and isinstance(result, dict):
            token = _non_empty_str(result.get("sessionToken")) or _non_empty_str(result.get("token"))
        if token is None:
            raise UpstreamError(UpstreamErrorKind.INVALID_RESPONSE, "createSession returned no session token")
        return token

    async def get_game_url(self, username: str, game_code: str, provider: str, game_id: str | None) -> UpstreamGameUrl:
        payload = {
            "username": username,
            "gameCode": game_code,
            "provider": provider,
            "gameId": game_id or game_code,
            "isPlayerSetting": True,
            "setting": [],
            "buyFeatureSetting": [],
        }
        result = await self._request(
            "POST",
            "/api/getGameUrl",
            json=payload,
            timeout=self._settings.game_url_timeout,
        )
        return self._parse_game_url(result, "getGameUrl")

    async def fetch_history(
        self,
        username: str,
        filters: HistoryFilters | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> HistoryPage:
        filters = filters or HistoryFilters()
        payload = {
            "username": username,
            "startDate": filters.start_date,
            "endDate": filters.end_date,
            "type": filters.type,
            "page": page,
            "limit": limit,
        }
        result = await self._request(
            "POST",
            "/api/history",
            json=payload,
            timeout=self._settings.history_timeout,
        )
        if isinstance(result, list):
            return HistoryPage(data=result, total=len(result), page=page, limit=limit)
        if not isinstance(result, dict):
            raise UpstreamError(UpstreamErrorKind.INVALID_RESPONSE, "history returned an unexpected payload")
        data = result.get("data") or []
        if not isinstance(data, list):
            raise UpstreamError(UpstreamErrorKind.INVALID_RESPONSE, "history data is not a list")
        try:
            total = int(result.get("total", len(data)))
        except (TypeError, ValueError) as exc:
            raise UpstreamError(UpstreamErrorKind.INVALID_RESPONSE, "history total is not a number") from exc
        return HistoryPage(data=data, total=total, page=page, limit=limit)

    async def fetch_transaction(self, transaction_id: str) -> dict[str, Any]:
        result = await self._request(
            "GET",
            f"/api/transaction/{quote(transaction_id, safe='')}",
            timeout=self._settings.transaction_timeout,
        )
        if not isinstance(result, dict):
            raise UpstreamError(UpstreamErrorKind.INVALID_RESPONSE, "transaction response is not an object")
        return result

    async def list_games(self, provider: str) -> list[dict[str, Any]]:
        base = (self._settings.catalog_endpoint or self._settings.endpoint).rstrip("/")
        result = await self._request(
            "GET",
            f"{base}/api/gamelist",
            params={"provider": provider},
            timeout=self._settings.catalog_timeout,
        )
        games = result.get("games") if isinstance(result, dict) else None
        if not isinstance(games, list):
            raise UpstreamError(UpstreamErrorKind.INVALID_RESPONSE, "gamelist response has no games list")
        return games

    async def fetch_balance(self, username: str) -> dict[str, Any]:
        result = await self._request(
            "GET",
            f"/api/balance/{quote(username, safe='')}",
            timeout=self._settings.balance_timeout,
        )
        if not isinstance(result, dict):
            raise UpstreamError(UpstreamErrorKind.INVALID_RESPONSE, "balance response is not an object")
        return result

    async def check_health(self) -> Any:
        return await self._request(
            "GET",
            "/health",
            timeout=self._settings.session_timeout,
            allow_text=True,
        )

    async def login(self, username: str, game_code: str, session_token: str) -> UpstreamGameUrl:
        """Legacy diagnostic login.

        The exact payload the aggregator expects is unconfirmed; one shape is
        sent, and the bare player id (text after the last ``-``) is tried once
        when the first attempt cannot find the player.
        """
        try:
            return await self._login_once(username, game_code, session_token)
        except UpstreamError as exc:
            bare = username.rsplit("-", 1)[-1]
            if bare == username or exc.kind not in {UpstreamErrorKind.NOT_FOUND, UpstreamErrorKind.INVALID_RESPONSE}:
                raise
            logger.warning("Upstream login for %s failed (%s); retrying as %s", username, exc.kind.value, bare)
            return await self._login_once(bare, game_code, session_token)

    async def _login_once(self, username: str, game_code: str, session_token: str) -> UpstreamGameUrl:
        payload = {
            "username": username,
            "gameCode": game_code,
            "language": self._settings.language,
            "token": session_token,
        }
        result = await self._request(
            "POST",
            "/api/login",
            json=payload,
            timeout=self._settings.login_timeout,
        )
        return self._parse_game_url(result, "login")

    @staticmethod
    def _parse_game_url(result: Any, endpoint: str) -> UpstreamGameUrl:
        if not isinstance(result, dict):
            raise UpstreamError(UpstreamErrorKind.INVALID_RESPONSE, f"{endpoint} returned a non-object payload")
        if result.get("success") is False:
            raise UpstreamError(
                UpstreamErrorKind.INVALID_RESPONSE,
                f"{endpoint} reported failure: {result.get('message') or result.get('error') or 'unknown'}",
            )
        url = _non_empty_str(result.get("gameUrl")) or _non_empty_str(result.get("url"))
        if url is None:
            raise UpstreamError(UpstreamErrorKind.INVALID_RESPONSE, f"{endpoint} response has no url")
        return UpstreamGameUrl(url=url, session_token=_non_empty_str(result.get("sessionToken")))


__all__ = ["UpstreamGateway"]
