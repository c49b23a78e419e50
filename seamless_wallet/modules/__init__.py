"""Feature modules of the seamless wallet."""

from . import accounts, games, history, launch, sessions, settlement, wallets

__all__ = [
    "accounts",
    "games",
    "history",
    "launch",
    "sessions",
    "settlement",
    "wallets",
]
