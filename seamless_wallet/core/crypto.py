"""Password hashing, opaque token helpers and secret comparison."""

from __future__ import annotations

import hmac
import uuid

import bcrypt


def hash_password(password: str) -> str:
    """Hash plain text password using bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def generate_placeholder_token() -> str:
    """Locally unique session token used until upstream mints one."""
    return str(uuid.uuid4())


def secrets_match(provided: str | None, expected: str) -> bool:
    if not provided or not expected:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def mask_token(token: str | None) -> str:
    if not token:
        return "<none>"
    if len(token) <= 8:
        return "***"
    return f"{token[:4]}...{token[-4:]}"


__all__ = [
    "hash_password",
    "verify_password",
    "generate_placeholder_token",
    "secrets_match",
    "mask_token",
]
