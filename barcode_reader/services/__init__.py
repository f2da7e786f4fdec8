"""
==============================================================================
Services Package
==============================================================================

Shared-reader service used by the HTTP API.

==============================================================================
"""

from .decode_service import DecodeService, load_base64_image

__all__ = [
    "DecodeService",
    "load_base64_image",
]
