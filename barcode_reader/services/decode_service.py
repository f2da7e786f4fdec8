"""
==============================================================================
Decode Service Module
==============================================================================

Process-wide reader shared by HTTP request handlers.

Readers are not reentrant, and FastAPI runs sync endpoints on a thread
pool, so every call into the shared reader goes through one lock. The
service owns the reader and releases it on shutdown.

==============================================================================
"""

from __future__ import annotations

import base64
import binascii
import logging
import threading
from typing import Optional, Tuple, Union

from barcode_reader.config import Settings, get_settings
from barcode_reader.core import exceptions
from barcode_reader.formats import FormatSet
from barcode_reader.scanner import ImageView, ReadResult, Reader, ScanRegion
from barcode_reader.scanner.engine import EngineFactory


# Module logger
logger = logging.getLogger(__name__)


def load_base64_image(data: str, max_bytes: int) -> ImageView:
    """
    Decode a base64 string (optionally a data URL) into an image.

    Args:
        data: Base64 payload, e.g. from a browser canvas
        max_bytes: Largest accepted decoded size

    Raises:
        InvalidImageError: If the payload is not valid base64, too large,
            or not a readable image
    """
    if not isinstance(data, str):
        raise exceptions.invalid_image(f"expected base64 string, got {type(data).__name__}")
    if not data:
        raise exceptions.invalid_image("empty image data")

    # Strip "data:image/png;base64," prefixes
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]

    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise exceptions.invalid_image(f"not valid base64 ({e})") from e

    if len(raw) > max_bytes:
        raise exceptions.invalid_image(f"image exceeds {max_bytes} bytes")

    return ImageView.from_bytes(raw)


class DecodeService:
    """
    Serialized access to one shared Reader.

    Attributes:
        formats: FormatSet of the shared reader
        backend: Engine backend of the shared reader

    Example:
        >>> service = DecodeService(FormatSet.parse("QR_CODE"))
        >>> result, region = service.decode_base64(payload, 400, 400)
        >>> service.close()
    """

    def __init__(
        self,
        formats: FormatSet,
        engine_factory: Optional[Union[EngineFactory, str]] = None,
        max_image_bytes: Optional[int] = None
    ) -> None:
        settings = get_settings()
        self._reader = Reader(formats, engine_factory or settings.engine_backend)
        self._max_image_bytes = max_image_bytes or settings.max_image_bytes
        self._lock = threading.Lock()

        logger.info(
            f"Decode service ready (backend={self._reader.backend}, "
            f"formats=[{formats or 'all'}])"
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "DecodeService":
        """Build the service from configuration."""
        settings = settings or get_settings()
        return cls(
            FormatSet.parse(settings.enabled_formats),
            engine_factory=settings.engine_backend,
            max_image_bytes=settings.max_image_bytes,
        )

    @property
    def formats(self) -> FormatSet:
        return self._reader.formats

    @property
    def backend(self) -> str:
        return self._reader.backend

    @property
    def released(self) -> bool:
        return self._reader.released

    def decode(
        self,
        image: ImageView,
        crop_width: int = 0,
        crop_height: int = 0
    ) -> Tuple[Optional[ReadResult], ScanRegion]:
        """
        Decode one image with the shared reader.

        Returns:
            Tuple of (result or None, scanned region)
        """
        with self._lock:
            region = self._reader.scan_region(image, crop_width, crop_height)
            result = self._reader.decode(image, crop_width, crop_height)

        if result is not None:
            logger.debug(f"Decoded {result.format.name}: {result.text!r}")
        return result, region

    def decode_base64(
        self,
        data: str,
        crop_width: int = 0,
        crop_height: int = 0
    ) -> Tuple[Optional[ReadResult], ScanRegion]:
        """Decode a base64-encoded image with the shared reader."""
        image = load_base64_image(data, self._max_image_bytes)
        return self.decode(image, crop_width, crop_height)

    def close(self) -> None:
        """Release the shared reader."""
        with self._lock:
            self._reader.release()
        logger.info("Decode service closed")
