"""Classified failures of aggregator calls."""

from __future__ import annotations

from enum import Enum


class UpstreamErrorKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    INVALID_RESPONSE = "invalid_response"
    TIMEOUT = "timeout"
    UNREACHABLE = "unreachable"


class UpstreamError(Exception):
    """Raised by every gateway call that does not yield a valid payload."""

    def __init__(self, kind: UpstreamErrorKind, detail: str, *, status_code: int | None = None) -> None:
        super().__init__(f"{kind.value}: {detail}")
        self.kind = kind
        self.detail = detail
        self.status_code = status_code

    @property
    def is_network(self) -> bool:
        return self.kind in {UpstreamErrorKind.TIMEOUT, UpstreamErrorKind.UNREACHABLE}


def classify_status(status_code: int) -> UpstreamErrorKind:
    if status_code in (401, 403):
        return UpstreamErrorKind.UNAUTHORIZED
    if status_code == 404:
        return UpstreamErrorKind.NOT_FOUND
    if status_code >= 500:
        return UpstreamErrorKind.UNREACHABLE
    return UpstreamErrorKind.INVALID_RESPONSE


__all__ = ["UpstreamError", "UpstreamErrorKind", "classify_status"]
