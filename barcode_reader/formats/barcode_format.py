"""
==============================================================================
Barcode Format Module
==============================================================================

Closed enumeration of the symbologies a reader can be configured for.

Member order is significant: the ordinal of each member is the index used
when a format set is handed across the engine boundary, and it is mapped
back to the very same member when a result is reported.

==============================================================================
"""

from __future__ import annotations

from enum import Enum


# Characters ignored when matching a format name ("QR-Code" == "qrcode")
_NAME_SEPARATORS = " -_/"


def _normalize_name(name: str) -> str:
    """Lowercase a format name and strip separator characters."""
    return "".join(ch for ch in name.lower() if ch not in _NAME_SEPARATORS)


class BarcodeFormat(Enum):
    """
    Supported barcode symbologies.

    Values are display names; use ``ordinal`` for the positional index.

    Example:
        >>> BarcodeFormat.from_str("qrcode")
        <BarcodeFormat.QR_CODE: 'QRCode'>
        >>> BarcodeFormat.from_ordinal(BarcodeFormat.EAN_13.ordinal)
        <BarcodeFormat.EAN_13: 'EAN-13'>
    """

    AZTEC = "Aztec"
    CODABAR = "Codabar"
    CODE_39 = "Code39"
    CODE_93 = "Code93"
    CODE_128 = "Code128"
    DATA_MATRIX = "DataMatrix"
    EAN_8 = "EAN-8"
    EAN_13 = "EAN-13"
    ITF = "ITF"
    MAXICODE = "MaxiCode"
    PDF_417 = "PDF417"
    QR_CODE = "QRCode"
    RSS_14 = "RSS-14"
    RSS_EXPANDED = "RSS-Expanded"
    UPC_A = "UPC-A"
    UPC_E = "UPC-E"
    UPC_EAN_EXTENSION = "UPC/EAN-Extension"

    @property
    def ordinal(self) -> int:
        """Zero-based position of this member in declaration order."""
        return _ORDINALS[self]

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "BarcodeFormat":
        """
        Look up a format by its ordinal.

        Raises:
            ValueError: If ordinal is outside the enumeration
        """
        if not 0 <= ordinal < len(_MEMBERS):
            raise ValueError(f"Invalid barcode format ordinal: {ordinal}")
        return _MEMBERS[ordinal]

    @classmethod
    def from_str(cls, name: str) -> "BarcodeFormat":
        """
        Parse a format name.

        Matching ignores case and the characters ' ', '-', '_' and '/', and
        accepts both the member name (``QR_CODE``) and the display name
        (``QRCode``).

        Raises:
            ValueError: If the name matches no format
        """
        key = _normalize_name(name or "")
        member = _BY_NAME.get(key)
        if member is None:
            raise ValueError(f"This is not a valid barcode format: '{name}'")
        return member

    def __str__(self) -> str:
        return self.value


_MEMBERS = tuple(BarcodeFormat)
_ORDINALS = {member: index for index, member in enumerate(_MEMBERS)}

_BY_NAME = {}
for _member in _MEMBERS:
    _BY_NAME[_normalize_name(_member.name)] = _member
    _BY_NAME[_normalize_name(_member.value)] = _member
