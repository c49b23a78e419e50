"""Seamless wallet service: session, launch and settlement orchestration."""

__version__ = "0.1.0"
