"""
==============================================================================
Scanner Package - Decode Request Lifecycle
==============================================================================

Region calculation, the decode engine boundary, and the Reader that owns
an engine for its whole lifetime.

Classes:
--------
- Reader: Configured reader with decode() and idempotent release()
- ReadResult: Matched format and decoded text
- ScanRegion: Centered scan window
- ImageView: Read-only image adapter over numpy arrays
- DecodeEngine / EngineHandle: Engine contract and owned handle

==============================================================================
"""

from .region import ScanRegion, compute_scan_region
from .image import ImageView
from .engine import DecodeEngine, EngineFactory, EngineHandle, EngineMatch
from .reader import ReadResult, Reader

__all__ = [
    "DecodeEngine",
    "EngineFactory",
    "EngineHandle",
    "EngineMatch",
    "ImageView",
    "ReadResult",
    "Reader",
    "ScanRegion",
    "compute_scan_region",
]
