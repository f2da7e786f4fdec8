"""
==============================================================================
Schemas Package
==============================================================================

Pydantic models for API request and response validation.

==============================================================================
"""

from .decode import DecodeRequest, DecodeResponse, FormatsResponse, RegionResponse

__all__ = [
    "DecodeRequest",
    "DecodeResponse",
    "FormatsResponse",
    "RegionResponse",
]
