"""Reusable FastAPI dependencies."""

from .agent import find_agent, get_agent_by_api_key, get_agent_by_secret
from .container import get_app_container

__all__ = [
    "find_agent",
    "get_agent_by_api_key",
    "get_agent_by_secret",
    "get_app_container",
]
