"""Game launch errors."""


class LaunchError(Exception):
    """Base class for game launch errors."""


class UnsupportedProviderError(LaunchError):
    """The provider is not one of the supported slot providers."""

    def __init__(self, provider: object) -> None:
        super().__init__(f"unsupported provider: {provider!r}")
        self.provider = provider


class UrlConstructionFailedError(LaunchError):
    """No well-formed launch URL could be produced."""
