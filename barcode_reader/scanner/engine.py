"""
==============================================================================
Decode Engine Boundary
==============================================================================

Contract between a Reader and the library that actually finds and decodes
barcodes, plus the owned handle a Reader keeps on its engine.

Engine contract:
----------------
- Construction allocates the engine for a FormatSet, or raises
  ResourceAllocationError
- decode(image, region) returns an EngineMatch or None (no barcode)
- destroy() frees the engine; it is issued at most once by EngineHandle

==============================================================================
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, NamedTuple, Optional

from barcode_reader.core.exceptions import use_after_release
from barcode_reader.formats import BarcodeFormat, FormatSet
from barcode_reader.scanner.image import ImageView
from barcode_reader.scanner.region import ScanRegion


# Module logger
logger = logging.getLogger(__name__)


class EngineMatch(NamedTuple):
    """Single decoded symbol reported by an engine."""

    format: BarcodeFormat
    text: str


class DecodeEngine(ABC):
    """
    Interface for barcode decode engines.

    Engines must:
    - Translate the FormatSet into their own representation once, in __init__
    - Read only the pixels inside the given region
    - Report at most one match per call
    - Let their own failures propagate (None means "nothing found" only)
    """

    name: str = "engine"

    def __init__(self, formats: FormatSet) -> None:
        self._formats = formats

    @property
    def formats(self) -> FormatSet:
        return self._formats

    @abstractmethod
    def decode(self, image: ImageView, region: ScanRegion) -> Optional[EngineMatch]:
        raise NotImplementedError

    def destroy(self) -> None:
        """Free engine resources. Engines holding nothing native may keep the default."""


EngineFactory = Callable[[FormatSet], DecodeEngine]


class EngineHandle:
    """
    Exclusive, non-copyable ownership of one live DecodeEngine.

    A handle is either live or empty. destroy() empties it and calls the
    engine's destroy() exactly once; every later access raises
    UseAfterReleaseError.
    """

    __slots__ = ("_engine",)

    def __init__(self, engine: DecodeEngine) -> None:
        self._engine: Optional[DecodeEngine] = engine

    @property
    def live(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> DecodeEngine:
        if self._engine is None:
            raise use_after_release()
        return self._engine

    def destroy(self) -> None:
        engine, self._engine = self._engine, None
        if engine is None:
            return
        logger.debug(f"Destroying decode engine '{engine.name}'")
        engine.destroy()

    def __copy__(self):
        raise TypeError("EngineHandle cannot be copied; ownership is exclusive")

    def __deepcopy__(self, memo):
        raise TypeError("EngineHandle cannot be copied; ownership is exclusive")

    def __reduce__(self):
        raise TypeError("EngineHandle cannot be pickled")

    def __repr__(self) -> str:
        state = self._engine.name if self._engine is not None else "released"
        return f"EngineHandle({state})"
