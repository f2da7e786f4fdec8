"""
==============================================================================
Engine Symbol Tables
==============================================================================

Explicit two-way mapping between BarcodeFormat and each engine's own
symbology names. Tables are checked when this module is imported, so a
format added to the enumeration without a table entry fails loudly instead
of silently misaligning.

An entry of ``None`` means the engine cannot read that symbology.

==============================================================================
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Tuple

from .barcode_format import BarcodeFormat
from .format_set import FormatSet


class SymbolTable:
    """
    Bidirectional BarcodeFormat <-> engine symbol name table.

    Attributes:
        engine: Engine name the table belongs to
    """

    def __init__(self, engine: str, entries: Mapping[BarcodeFormat, Optional[str]]) -> None:
        self.engine = engine
        self._forward: Dict[BarcodeFormat, Optional[str]] = dict(entries)
        self._reverse: Dict[str, BarcodeFormat] = {}
        self._validate()

    def _validate(self) -> None:
        missing = [f.name for f in BarcodeFormat if f not in self._forward]
        if missing:
            raise RuntimeError(
                f"Symbol table '{self.engine}' has no entry for: {', '.join(missing)}"
            )

        for fmt, symbol in self._forward.items():
            if symbol is None:
                continue
            if symbol in self._reverse:
                raise RuntimeError(
                    f"Symbol table '{self.engine}' maps '{symbol}' to both "
                    f"{self._reverse[symbol].name} and {fmt.name}"
                )
            self._reverse[symbol] = fmt

    def supports(self, fmt: BarcodeFormat) -> bool:
        return self._forward.get(fmt) is not None

    def to_symbol(self, fmt: BarcodeFormat) -> Optional[str]:
        return self._forward[fmt]

    def to_format(self, symbol: str) -> Optional[BarcodeFormat]:
        """Map an engine symbol back, or None for symbols outside the table."""
        return self._reverse.get(symbol)

    def translate(self, formats: FormatSet) -> Tuple[Tuple[str, ...], Tuple[BarcodeFormat, ...]]:
        """
        Translate a FormatSet into engine symbols, keeping caller order.

        Returns:
            Tuple of (symbols, unsupported formats)
        """
        symbols = []
        unsupported = []
        for fmt in formats:
            symbol = self._forward[fmt]
            if symbol is None:
                unsupported.append(fmt)
            else:
                symbols.append(symbol)
        return tuple(symbols), tuple(unsupported)

    def supported_formats(self) -> Tuple[BarcodeFormat, ...]:
        return tuple(f for f in BarcodeFormat if self.supports(f))


# =============================================================================
# ZBAR (pyzbar.ZBarSymbol member names)
# =============================================================================

PYZBAR_SYMBOLS = SymbolTable(
    "pyzbar",
    {
        BarcodeFormat.AZTEC: None,
        BarcodeFormat.CODABAR: "CODABAR",
        BarcodeFormat.CODE_39: "CODE39",
        BarcodeFormat.CODE_93: "CODE93",
        BarcodeFormat.CODE_128: "CODE128",
        BarcodeFormat.DATA_MATRIX: None,
        BarcodeFormat.EAN_8: "EAN8",
        BarcodeFormat.EAN_13: "EAN13",
        BarcodeFormat.ITF: "I25",
        BarcodeFormat.MAXICODE: None,
        BarcodeFormat.PDF_417: "PDF417",
        BarcodeFormat.QR_CODE: "QRCODE",
        BarcodeFormat.RSS_14: "DATABAR",
        BarcodeFormat.RSS_EXPANDED: "DATABAR_EXP",
        BarcodeFormat.UPC_A: "UPCA",
        BarcodeFormat.UPC_E: "UPCE",
        BarcodeFormat.UPC_EAN_EXTENSION: "EAN5",
    },
)


# =============================================================================
# ZXING-CPP (zxingcpp.BarcodeFormat member names)
# =============================================================================

ZXINGCPP_SYMBOLS = SymbolTable(
    "zxingcpp",
    {
        BarcodeFormat.AZTEC: "Aztec",
        BarcodeFormat.CODABAR: "Codabar",
        BarcodeFormat.CODE_39: "Code39",
        BarcodeFormat.CODE_93: "Code93",
        BarcodeFormat.CODE_128: "Code128",
        BarcodeFormat.DATA_MATRIX: "DataMatrix",
        BarcodeFormat.EAN_8: "EAN8",
        BarcodeFormat.EAN_13: "EAN13",
        BarcodeFormat.ITF: "ITF",
        BarcodeFormat.MAXICODE: "MaxiCode",
        BarcodeFormat.PDF_417: "PDF417",
        BarcodeFormat.QR_CODE: "QRCode",
        BarcodeFormat.RSS_14: "DataBar",
        BarcodeFormat.RSS_EXPANDED: "DataBarExpanded",
        BarcodeFormat.UPC_A: "UPCA",
        BarcodeFormat.UPC_E: "UPCE",
        # add-on symbols are reported as part of the EAN/UPC text
        BarcodeFormat.UPC_EAN_EXTENSION: None,
    },
)


SYMBOL_TABLES = {
    PYZBAR_SYMBOLS.engine: PYZBAR_SYMBOLS,
    ZXINGCPP_SYMBOLS.engine: ZXINGCPP_SYMBOLS,
}
