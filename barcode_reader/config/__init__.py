"""
==============================================================================
Configuration Package
==============================================================================

Environment-based settings using Pydantic Settings.

Usage:
------
    from barcode_reader.config import get_settings

    settings = get_settings()
    print(settings.engine_backend)

==============================================================================
"""

from .settings import SUPPORTED_BACKENDS, Settings, get_settings

__all__ = [
    "SUPPORTED_BACKENDS",
    "Settings",
    "get_settings",
]
