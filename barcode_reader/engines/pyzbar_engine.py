"""
==============================================================================
ZBar Decode Engine
==============================================================================

DecodeEngine backed by pyzbar (libzbar).

Supports 1-D codes, QR Code, PDF417 and DataBar. Aztec, Data Matrix and
MaxiCode are not available in ZBar.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional

from barcode_reader.core.exceptions import engine_unavailable, unsupported_formats
from barcode_reader.formats import PYZBAR_SYMBOLS, FormatSet
from barcode_reader.scanner.engine import DecodeEngine, EngineMatch
from barcode_reader.scanner.image import ImageView
from barcode_reader.scanner.region import ScanRegion


# Module logger
logger = logging.getLogger(__name__)


class PyzbarEngine(DecodeEngine):
    """
    ZBar decode engine via pyzbar.

    ZBar cannot read Aztec, Data Matrix or MaxiCode; enabling any of them
    fails at construction.
    """

    name = "pyzbar"

    def __init__(self, formats: FormatSet) -> None:
        super().__init__(formats)

        names, unsupported = PYZBAR_SYMBOLS.translate(formats)
        if unsupported:
            raise unsupported_formats(self.name, [f.name for f in unsupported])

        # pyzbar loads the zbar shared library at import time
        try:
            from pyzbar.pyzbar import ZBarSymbol, decode as zbar_decode
        except ImportError as e:
            raise engine_unavailable(self.name, str(e)) from e

        self._zbar_decode = zbar_decode
        # Empty list: zbar keeps every symbology enabled
        self._symbols = [ZBarSymbol[n] for n in names]

        logger.debug(f"ZBar engine ready ({len(self._symbols) or 'all'} symbologies)")

    def decode(self, image: ImageView, region: ScanRegion) -> Optional[EngineMatch]:
        if region.is_empty():
            return None

        gray = image.gray(region)
        decoded = self._zbar_decode(gray, symbols=self._symbols or None)

        for symbol in decoded:
            fmt = PYZBAR_SYMBOLS.to_format(symbol.type)
            if fmt is None:
                logger.debug(f"Ignoring unmapped ZBar symbol type {symbol.type}")
                continue
            text = symbol.data.decode("utf-8", errors="replace")
            return EngineMatch(fmt, text)

        return None

    def destroy(self) -> None:
        # zbar image scanners are created per call by pyzbar
        self._zbar_decode = None
