"""Account domain exports"""

from .exceptions import AccountAlreadyExistsError, AccountError, AccountNotFoundError
from .models import Account, AccountCreateInput, WagerReceipt
from .repository import LedgerStore, LedgerTransaction
from .service import AccountService

__all__ = [
    "Account",
    "AccountAlreadyExistsError",
    "AccountCreateInput",
    "AccountError",
    "AccountNotFoundError",
    "AccountService",
    "LedgerStore",
    "LedgerTransaction",
    "WagerReceipt",
]
