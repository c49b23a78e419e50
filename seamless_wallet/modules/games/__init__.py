"""Upstream game catalog lookups."""

from .service import GameCatalogService

__all__ = ["GameCatalogService"]
