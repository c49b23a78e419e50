"""SQLAlchemy repository implementations."""

from .ledger_store import AccountLocks, SqlLedgerStore, SqlLedgerTransaction

__all__ = ["AccountLocks", "SqlLedgerStore", "SqlLedgerTransaction"]
