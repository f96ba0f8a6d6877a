"""
Application configuration using Pydantic settings.

Re-exports the unified core.config module for the API package:
    from core.config import get_settings, Settings
"""

from core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
