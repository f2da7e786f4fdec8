"""
==============================================================================
Format Set Module
==============================================================================

Ordered collection of enabled symbologies for a single reader.

The caller's sequence is kept exactly as given: no sorting, no
deduplication, and an empty set is allowed (engines read it as "no
restriction"). Validation beyond name parsing is left to the engine.

==============================================================================
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Tuple, Union

from .barcode_format import BarcodeFormat


FormatLike = Union[BarcodeFormat, str]

# Separators accepted between names in a format string
_TOKEN_SPLIT = re.compile(r"[,|]")


def _coerce(item: FormatLike) -> BarcodeFormat:
    if isinstance(item, BarcodeFormat):
        return item
    if isinstance(item, str):
        return BarcodeFormat.from_str(item.strip())
    raise TypeError(f"Expected BarcodeFormat or str, got {type(item).__name__}")


class FormatSet:
    """
    Immutable, ordered sequence of BarcodeFormat values.

    Attributes:
        formats: The formats, verbatim and in caller order
        ordinals: Index list for the engine boundary, computed once

    Example:
        >>> fs = FormatSet([BarcodeFormat.QR_CODE, "ean-13"])
        >>> fs.ordinals
        (11, 7)
        >>> FormatSet.parse("QRCode | itf").formats
        (<BarcodeFormat.QR_CODE: 'QRCode'>, <BarcodeFormat.ITF: 'ITF'>)
    """

    __slots__ = ("_formats", "_ordinals")

    def __init__(self, formats: Iterable[FormatLike] = ()) -> None:
        self._formats: Tuple[BarcodeFormat, ...] = tuple(_coerce(f) for f in formats)
        self._ordinals: Tuple[int, ...] = tuple(f.ordinal for f in self._formats)

    @classmethod
    def parse(cls, text: str) -> "FormatSet":
        """
        Parse a format string such as ``"QR_CODE, ean-13 | itf"``.

        Names are separated by ',' and/or '|'; empty tokens are skipped,
        so an empty or blank string yields an empty set.

        Raises:
            ValueError: If any token is not a known format
        """
        tokens = [t.strip() for t in _TOKEN_SPLIT.split((text or "").strip(" []"))]
        return cls(t for t in tokens if t)

    @classmethod
    def coerce(cls, value: Union["FormatSet", Iterable[FormatLike], str, None]) -> "FormatSet":
        """Return value as a FormatSet, parsing strings and wrapping iterables."""
        if isinstance(value, FormatSet):
            return value
        if value is None:
            return cls()
        if isinstance(value, str):
            return cls.parse(value)
        return cls(value)

    @property
    def formats(self) -> Tuple[BarcodeFormat, ...]:
        return self._formats

    @property
    def ordinals(self) -> Tuple[int, ...]:
        return self._ordinals

    def is_empty(self) -> bool:
        return not self._formats

    def names(self) -> list:
        """Member names, for JSON responses and logs."""
        return [f.name for f in self._formats]

    def __iter__(self) -> Iterator[BarcodeFormat]:
        return iter(self._formats)

    def __len__(self) -> int:
        return len(self._formats)

    def __contains__(self, item: object) -> bool:
        return item in self._formats

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FormatSet):
            return self._formats == other._formats
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._formats)

    def __str__(self) -> str:
        return ", ".join(str(f) for f in self._formats)

    def __repr__(self) -> str:
        return f"FormatSet([{', '.join(self.names())}])"
