"""
==============================================================================
ZXing-C++ Decode Engine
==============================================================================

DecodeEngine backed by the zxing-cpp Python bindings.

Enabled formats are combined into one zxingcpp.BarcodeFormat flag; results
that fail validation are skipped.

==============================================================================
"""

from __future__ import annotations

import functools
import logging
import operator
from typing import Any, Dict, Optional

from barcode_reader.core.exceptions import engine_unavailable, unsupported_formats
from barcode_reader.formats import ZXINGCPP_SYMBOLS, FormatSet
from barcode_reader.scanner.engine import DecodeEngine, EngineMatch
from barcode_reader.scanner.image import ImageView
from barcode_reader.scanner.region import ScanRegion


# Module logger
logger = logging.getLogger(__name__)


class ZxingCppEngine(DecodeEngine):
    """ZXing-C++ decode engine via the zxing-cpp Python bindings."""

    name = "zxingcpp"

    def __init__(self, formats: FormatSet) -> None:
        super().__init__(formats)

        names, unsupported = ZXINGCPP_SYMBOLS.translate(formats)
        if unsupported:
            raise unsupported_formats(self.name, [f.name for f in unsupported])

        try:
            import zxingcpp
        except ImportError as e:
            raise engine_unavailable(self.name, str(e)) from e

        try:
            native = [getattr(zxingcpp.BarcodeFormat, n) for n in names]
        except AttributeError as e:
            raise engine_unavailable(self.name, f"installed zxing-cpp lacks {e}") from e

        self._zxing = zxingcpp
        self._kwargs: Dict[str, Any] = {}
        if native:
            self._kwargs["formats"] = functools.reduce(operator.or_, native)

        logger.debug(f"ZXing-C++ engine ready ({len(native) or 'all'} symbologies)")

    def decode(self, image: ImageView, region: ScanRegion) -> Optional[EngineMatch]:
        if region.is_empty():
            return None

        gray = image.gray(region)
        for barcode in self._zxing.read_barcodes(gray, **self._kwargs):
            if not getattr(barcode, "valid", True):
                continue
            fmt = ZXINGCPP_SYMBOLS.to_format(barcode.format.name)
            if fmt is None:
                logger.debug(f"Ignoring unmapped ZXing format {barcode.format.name}")
                continue
            return EngineMatch(fmt, barcode.text)

        return None

    def destroy(self) -> None:
        self._zxing = None
        self._kwargs = {}
