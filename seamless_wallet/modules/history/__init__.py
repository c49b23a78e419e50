"""Best-effort transaction history proxied from upstream."""

from .service import HistoryService

__all__ = ["HistoryService"]
