"""Wallet domain exports"""

from .exceptions import InvalidAmountError, WalletError
from .service import WalletService

__all__ = ["InvalidAmountError", "WalletError", "WalletService"]
