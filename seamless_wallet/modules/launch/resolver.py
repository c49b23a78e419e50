"""Game URL resolver: upstream-issued URL first, local template on failure."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from seamless_wallet.core.config import LaunchSettings
from seamless_wallet.infrastructure.upstream import UpstreamError, UpstreamErrorKind, UpstreamGateway
from seamless_wallet.modules.accounts import Account
from seamless_wallet.modules.sessions import SessionManager

from .exceptions import UrlConstructionFailedError
from .providers import Provider, ProviderDescriptor, ProviderRegistry
from .templates import is_launch_url, render_fallback_url

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ResolvedUrl:
    url: str
    used_fallback: bool
    session_token: str


class GameUrlResolver:
    def __init__(
        self,
        registry: ProviderRegistry,
        sessions: SessionManager,
        gateway: UpstreamGateway,
        settings: LaunchSettings,
    ) -> None:
        self._registry = registry
        self._sessions = sessions
        self._gateway = gateway
        self._settings = settings

    async def resolve_url(
        self,
        provider: Provider | str,
        game_code: str,
        game_id: str | None,
        account: Account,
    ) -> ResolvedUrl:
        descriptor = self._registry.get(provider)
        if not game_code:
            raise UrlConstructionFailedError("game code is required")

        await self._sessions.ensure_session(account, game_code)
        try:
            issued = await self._gateway.get_game_url(account.username, game_code, descriptor.code.value, game_id)
            if not is_launch_url(issued.url):
                raise UpstreamError(UpstreamErrorKind.INVALID_RESPONSE, f"getGameUrl returned {issued.url!r}")
        except UpstreamError as exc:
            logger.warning(
                "Upstream URL for %s/%s unavailable (%s), using fallback template",
                descriptor.code.value,
                game_code,
                exc,
            )
            if exc.kind is UpstreamErrorKind.UNAUTHORIZED:
                await self._sessions.refresh_session(account, game_code)
            url = self.build_fallback_url(descriptor, game_code, game_id, account)
            return ResolvedUrl(url=url, used_fallback=True, session_token=account.session_token or "")

        if issued.session_token:
            await self._sessions.adopt_token(account, issued.session_token)
        return ResolvedUrl(url=issued.url, used_fallback=False, session_token=account.session_token or "")

    def build_fallback_url(
        self,
        descriptor: ProviderDescriptor,
        game_code: str,
        game_id: str | None,
        account: Account,
    ) -> str:
        overrides = self._settings.game_id_overrides.get(descriptor.code.value, {})
        resolved_id = overrides.get(game_code) or game_id or game_code
        return render_fallback_url(
            descriptor,
            game_code=game_code,
            game_id=resolved_id,
            session_token=account.session_token or "",
            operator_token=self._settings.operator_token,
            language=self._settings.language,
        )
