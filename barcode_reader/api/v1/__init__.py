"""
==============================================================================
API Version 1
==============================================================================

Routes:
-------
- health: Health, readiness and liveness probes
- decode: Image decoding and format listing

==============================================================================
"""

from . import decode, health

__all__ = ["decode", "health"]
