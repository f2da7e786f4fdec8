"""
==============================================================================
Barcode Reader Module
==============================================================================

Client-facing reader: one configured decode engine, many decode calls,
exactly one release.

Lifecycle:
----------
1. Reader(formats) allocates the engine (fails fast on bad configuration)
2. decode(image, crop_width, crop_height) any number of times
3. release() - explicitly, or by leaving a ``with`` block

If a reader is dropped without being released, a finalizer frees the engine
when the reader is garbage collected. When that happens is up to the
interpreter, so scarce engines should always be released explicitly.

Threading:
----------
A reader is not reentrant and takes no locks. Use one reader per thread, or
serialize calls externally (see services.DecodeService).

==============================================================================
"""

from __future__ import annotations

import logging
import weakref
from typing import Iterable, Optional, Union

import numpy as np
from pydantic import BaseModel, ConfigDict

from barcode_reader.core.exceptions import use_after_release
from barcode_reader.engines import get_engine_factory
from barcode_reader.formats import BarcodeFormat, FormatSet
from barcode_reader.scanner.engine import EngineFactory, EngineHandle
from barcode_reader.scanner.image import ImageView
from barcode_reader.scanner.region import ScanRegion, compute_scan_region


# Module logger
logger = logging.getLogger(__name__)


class ReadResult(BaseModel):
    """Decoded barcode: the matched symbology and its text."""

    model_config = ConfigDict(frozen=True)

    format: BarcodeFormat
    text: str


class Reader:
    """
    Barcode reader bound to a fixed set of formats.

    Attributes:
        formats: FormatSet the engine was configured with
        backend: Name of the decode engine in use
        released: True once release() has run

    Example:
        >>> with Reader([BarcodeFormat.QR_CODE, BarcodeFormat.EAN_13]) as reader:
        ...     result = reader.decode(frame, 400, 400)
        ...     if result:
        ...         print(result.format, result.text)
    """

    def __init__(
        self,
        formats: Union[FormatSet, Iterable[Union[BarcodeFormat, str]], str, None] = (),
        engine_factory: Optional[Union[EngineFactory, str]] = None
    ) -> None:
        """
        Create the reader and allocate its decode engine.

        Args:
            formats: Formats to enable (empty = engine default, all formats)
            engine_factory: Engine class/callable, backend name, or None for
                the configured backend

        Raises:
            ResourceAllocationError: If the engine cannot be created
        """
        self._formats = FormatSet.coerce(formats)

        if engine_factory is None or isinstance(engine_factory, str):
            engine_factory = get_engine_factory(engine_factory)

        engine = engine_factory(self._formats)
        self._backend = engine.name
        self._handle = EngineHandle(engine)
        self._finalizer = weakref.finalize(self, self._handle.destroy)

        logger.debug(f"Reader created (backend={self._backend}, formats=[{self._formats}])")

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def formats(self) -> FormatSet:
        return self._formats

    @property
    def backend(self) -> str:
        return self._backend

    @property
    def released(self) -> bool:
        return not self._finalizer.alive

    # =========================================================================
    # DECODING
    # =========================================================================

    def scan_region(
        self,
        image: Union[ImageView, np.ndarray],
        crop_width: int = 0,
        crop_height: int = 0
    ) -> ScanRegion:
        """Region decode() would scan for this image and crop request."""
        view = ImageView.of(image)
        return compute_scan_region(view.width, view.height, crop_width, crop_height)

    def decode(
        self,
        image: Union[ImageView, np.ndarray],
        crop_width: int = 0,
        crop_height: int = 0
    ) -> Optional[ReadResult]:
        """
        Decode at most one barcode inside the centered crop window.

        Args:
            image: ImageView or OpenCV image (numpy array)
            crop_width: Scan window width (<= 0 for full width)
            crop_height: Scan window height (<= 0 for full height)

        Returns:
            ReadResult, or None if no barcode was found

        Raises:
            UseAfterReleaseError: If the reader was released
        """
        if self.released:
            raise use_after_release()

        view = ImageView.of(image)
        region = compute_scan_region(view.width, view.height, crop_width, crop_height)

        match = self._handle.engine.decode(view, region)
        if match is None:
            return None

        return ReadResult(format=match.format, text=match.text)

    # =========================================================================
    # RELEASE
    # =========================================================================

    def release(self) -> None:
        """Free the decode engine. Safe to call any number of times."""
        if self._finalizer.detach() is None:
            return
        self._handle.destroy()
        logger.debug(f"Reader released (backend={self._backend})")

    def __enter__(self) -> "Reader":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self.released else "live"
        return f"Reader(backend={self._backend!r}, formats={self._formats!r}, {state})"
