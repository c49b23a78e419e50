"""Client-side contract with the game aggregator."""

from .client import build_async_client
from .errors import UpstreamError, UpstreamErrorKind
from .gateway import UpstreamGateway
from .models import HistoryFilters, HistoryPage, UpstreamGameUrl

__all__ = [
    "HistoryFilters",
    "HistoryPage",
    "UpstreamError",
    "UpstreamErrorKind",
    "UpstreamGameUrl",
    "UpstreamGateway",
    "build_async_client",
]
