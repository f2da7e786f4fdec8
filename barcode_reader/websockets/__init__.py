"""
==============================================================================
WebSockets Package
==============================================================================

Streaming scan endpoint:
- /ws/scan: Per-session reader, frame-by-frame decoding

==============================================================================
"""

from .scanner import router as scanner_router

__all__ = ["scanner_router"]
