"""
==============================================================================
Formats Package
==============================================================================

Symbology identifiers and per-reader format sets.

Classes:
--------
- BarcodeFormat: Closed enumeration of symbologies
- FormatSet: Ordered, verbatim collection of enabled formats
- SymbolTable: Format <-> engine symbol mapping

==============================================================================
"""

from .barcode_format import BarcodeFormat
from .format_set import FormatSet
from .symbols import PYZBAR_SYMBOLS, SYMBOL_TABLES, ZXINGCPP_SYMBOLS, SymbolTable

__all__ = [
    "BarcodeFormat",
    "FormatSet",
    "SymbolTable",
    "PYZBAR_SYMBOLS",
    "SYMBOL_TABLES",
    "ZXINGCPP_SYMBOLS",
]
