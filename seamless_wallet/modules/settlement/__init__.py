"""Wager settlement against the local balance ledger."""

from .exceptions import InsufficientBalanceError, InvalidWagerError, SettlementError
from .models import SettlementResult, WagerSettlement
from .service import SettlementService

__all__ = [
    "InsufficientBalanceError",
    "InvalidWagerError",
    "SettlementError",
    "SettlementResult",
    "SettlementService",
    "WagerSettlement",
]
