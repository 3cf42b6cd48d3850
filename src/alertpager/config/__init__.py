"""
alertpager configuration.

Pydantic-based settings read from ALERTPAGER_* environment variables
and an optional .env file.
"""

from alertpager.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
