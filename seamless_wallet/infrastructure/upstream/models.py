"""Typed payloads returned by the upstream gateway."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(slots=True, frozen=True)
class UpstreamGameUrl:
    url: str
    session_token: Optional[str] = None


@dataclass(slots=True)
class HistoryFilters:
    start_date: str = ""
    end_date: str = ""
    type: str = ""


@dataclass(slots=True)
class HistoryPage:
    data: list[dict[str, Any]] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 50
    degraded: bool = False
    message: Optional[str] = None
