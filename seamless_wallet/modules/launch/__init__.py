"""Game launch URL resolution."""

from .exceptions import LaunchError, UnsupportedProviderError, UrlConstructionFailedError
from .providers import Provider, ProviderDescriptor, ProviderRegistry, TemplateKind
from .resolver import GameUrlResolver, ResolvedUrl
from .templates import is_launch_url, render_fallback_url

__all__ = [
    "GameUrlResolver",
    "LaunchError",
    "Provider",
    "ProviderDescriptor",
    "ProviderRegistry",
    "ResolvedUrl",
    "TemplateKind",
    "UnsupportedProviderError",
    "UrlConstructionFailedError",
    "is_launch_url",
    "render_fallback_url",
]
