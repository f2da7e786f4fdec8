"""
==============================================================================
Core Package
==============================================================================

Error types shared by the reader library, the API and the CLI.

Usage:
------
    from barcode_reader.core import ResourceAllocationError, UseAfterReleaseError

    # Or use exception factory functions via module
    from barcode_reader.core import exceptions
    raise exceptions.invalid_image("empty image data")

==============================================================================
"""

from .exceptions import (
    InvalidFormatError,
    InvalidMessageError,
    InvalidImageError,
    ReaderException,
    ResourceAllocationError,
    ResourceError,
    UseAfterReleaseError,
    register_exception_handlers,
)

__all__ = [
    "InvalidFormatError",
    "InvalidMessageError",
    "InvalidImageError",
    "ReaderException",
    "ResourceAllocationError",
    "ResourceError",
    "UseAfterReleaseError",
    "register_exception_handlers",
]
