"""
==============================================================================
Engines Package - Decode Engine Backends
==============================================================================

Adapters from the DecodeEngine contract to real decoding libraries.

Backends:
---------
- pyzbar: ZBar (1-D codes, QR Code, PDF417, DataBar)
- zxingcpp: ZXing-C++ (adds Aztec, Data Matrix, MaxiCode)

Backend libraries are imported when an engine is created, so a missing
native library surfaces as ResourceAllocationError at Reader construction.

==============================================================================
"""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import ValidationError

from barcode_reader.core.exceptions import engine_unavailable, unknown_backend
from barcode_reader.scanner.engine import EngineFactory

from .pyzbar_engine import PyzbarEngine
from .zxingcpp_engine import ZxingCppEngine


ENGINE_BACKENDS: Dict[str, EngineFactory] = {
    PyzbarEngine.name: PyzbarEngine,
    ZxingCppEngine.name: ZxingCppEngine,
}


def _configured_backend() -> str:
    """
    Read ENGINE_BACKEND from settings.

    Raises:
        ResourceAllocationError: If the settings do not validate
    """
    from barcode_reader.config import get_settings

    try:
        return get_settings().engine_backend
    except ValidationError as e:
        for error in e.errors():
            if "engine_backend" in error.get("loc", ()):
                raise unknown_backend(str(error.get("input"))) from e
        raise engine_unavailable("default", f"invalid settings ({e.error_count()} errors)") from e


def get_engine_factory(name: Optional[str] = None) -> EngineFactory:
    """
    Resolve an engine backend by name.

    Args:
        name: Backend name; None selects the configured ENGINE_BACKEND

    Raises:
        ResourceAllocationError: If the backend name is unknown
    """
    if name is None:
        name = _configured_backend()

    factory = ENGINE_BACKENDS.get(name.strip().lower())
    if factory is None:
        raise unknown_backend(name)
    return factory


__all__ = [
    "ENGINE_BACKENDS",
    "PyzbarEngine",
    "ZxingCppEngine",
    "get_engine_factory",
]
