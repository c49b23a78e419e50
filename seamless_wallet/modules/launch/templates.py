"""Pure construction of fallback launch URLs from provider templates."""

from __future__ import annotations

from urllib.parse import quote, urlsplit

from .exceptions import UrlConstructionFailedError
from .providers import ProviderDescriptor, TemplateKind


def is_launch_url(url: str) -> bool:
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme in {"http", "https"} and bool(parts.netloc)


def render_fallback_url(
    descriptor: ProviderDescriptor,
    *,
    game_code: str,
    game_id: str,
    session_token: str,
    operator_token: str,
    language: str,
) -> str:
    if not descriptor.template:
        raise UrlConstructionFailedError(f"no launch template configured for {descriptor.code.value}")
    if not game_code or not session_token:
        raise UrlConstructionFailedError("game code and session token are required")

    values = {
        "game_code": quote(game_code, safe=""),
        "game_id": quote(game_id or game_code, safe=""),
        "session_token": quote(session_token, safe=""),
        "operator_token": quote(operator_token, safe=""),
        "language": quote(language, safe=""),
    }
    try:
        url = descriptor.template.format_map(values)
    except (KeyError, IndexError, ValueError, AttributeError) as exc:
        raise UrlConstructionFailedError(
            f"launch template for {descriptor.code.value} is invalid: {exc!r}"
        ) from exc

    if not is_launch_url(url):
        raise UrlConstructionFailedError(f"launch template for {descriptor.code.value} produced {url!r}")
    parts = urlsplit(url)
    if descriptor.url_template_kind is TemplateKind.PATH and parts.path in {"", "/"}:
        raise UrlConstructionFailedError(f"path template for {descriptor.code.value} produced an empty path")
    if descriptor.url_template_kind is TemplateKind.QUERY and not parts.query:
        raise UrlConstructionFailedError(f"query template for {descriptor.code.value} produced an empty query")
    return url
