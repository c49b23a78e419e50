"""Session token ownership between the local ledger and upstream."""

from .service import SessionManager, SessionState

__all__ = ["SessionManager", "SessionState"]
