"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(slots=True)
class Account:
    id: str
    agent_id: str
    username: str
    balance: Decimal
    currency: str
    session_token: Optional[str] = field(default=None, repr=False)
    password_hash: str = field(default="", repr=False)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class AccountCreateInput:
    username: str
    password: str
    agent_id: Optional[str] = None
    balance: Optional[Decimal] = None
    currency: Optional[str] = None


@dataclass(slots=True, frozen=True)
class WagerReceipt:
    account_id: str
    wager_id: str
    balance_before: Decimal
    balance_after: Decimal
    created_at: Optional[datetime] = None
