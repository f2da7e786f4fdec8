"""
==============================================================================
Barcode Reader
==============================================================================

Decode at most one barcode inside a centered region of an image.

Usage:
------
    from barcode_reader import BarcodeFormat, Reader

    with Reader([BarcodeFormat.QR_CODE, BarcodeFormat.EAN_13]) as reader:
        result = reader.decode(frame, crop_width=400, crop_height=400)
        if result is not None:
            print(result.format, result.text)

==============================================================================
"""

from .core.exceptions import (
    InvalidFormatError,
    InvalidMessageError,
    InvalidImageError,
    ReaderException,
    ResourceAllocationError,
    ResourceError,
    UseAfterReleaseError,
)
from .formats import BarcodeFormat, FormatSet
from .scanner import ImageView, ReadResult, Reader, ScanRegion, compute_scan_region

__version__ = "1.0.0"

__all__ = [
    "BarcodeFormat",
    "FormatSet",
    "ImageView",
    "InvalidFormatError",
    "InvalidMessageError",
    "InvalidImageError",
    "ReadResult",
    "Reader",
    "ReaderException",
    "ResourceAllocationError",
    "ResourceError",
    "ScanRegion",
    "UseAfterReleaseError",
    "compute_scan_region",
]
