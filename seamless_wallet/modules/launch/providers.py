"""Supported slot providers and their launch descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from seamless_wallet.core.config import LaunchSettings

from .exceptions import UnsupportedProviderError


class Provider(str, Enum):
    PG = "PG"
    JILI = "JILI"
    PP = "PP"
    JOKER = "JOKER"

    @classmethod
    def parse(cls, value: "Provider | str") -> "Provider":
        if isinstance(value, Provider):
            return value
        if not isinstance(value, str):
            raise UnsupportedProviderError(value)
        try:
            return cls(value.strip().upper())
        except ValueError as exc:
            raise UnsupportedProviderError(value) from exc


class TemplateKind(str, Enum):
    # game identifiers live in the URL path
    PATH = "path"
    # game identifiers live in the query string
    QUERY = "query"


@dataclass(slots=True, frozen=True)
class ProviderDescriptor:
    code: Provider
    display_name: str
    url_template_kind: TemplateKind
    template: str | None = None


class ProviderRegistry:
    """Immutable provider table built once from configuration."""

    def __init__(self, descriptors: dict[Provider, ProviderDescriptor]) -> None:
        self._descriptors = dict(descriptors)

    @classmethod
    def from_settings(cls, settings: LaunchSettings) -> "ProviderRegistry":
        configured = {code.upper(): value for code, value in settings.providers.items()}
        descriptors: dict[Provider, ProviderDescriptor] = {}
        for provider in Provider:
            entry = configured.get(provider.value)
            if entry is None:
                descriptors[provider] = ProviderDescriptor(provider, provider.value, TemplateKind.QUERY)
                continue
            descriptors[provider] = ProviderDescriptor(
                code=provider,
                display_name=entry.display_name,
                url_template_kind=TemplateKind(entry.template_kind),
                template=entry.template,
            )
        return cls(descriptors)

    def get(self, provider: Provider | str) -> ProviderDescriptor:
        return self._descriptors[Provider.parse(provider)]
