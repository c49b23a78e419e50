"""Wallet errors."""


class WalletError(Exception):
    """Base class for wallet errors."""


class InvalidAmountError(WalletError):
    """Deposit or withdrawal amount is not a positive number."""
