"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides a recording decode engine, reader, image and client fixtures.

The recording engine stands in for a native library so tests run without
libzbar or zxing-cpp installed.

==============================================================================
"""

import base64
from typing import Generator, List, Optional, Tuple

import cv2
import numpy as np
import pytest
from fastapi.testclient import TestClient

from barcode_reader.formats import BarcodeFormat, FormatSet
from barcode_reader.main import create_app
from barcode_reader.scanner import DecodeEngine, EngineMatch, ImageView, Reader, ScanRegion
from barcode_reader.services import DecodeService


# ============================================================================
# ENGINE DOUBLE
# ============================================================================

class RecordingEngine(DecodeEngine):
    """
    Decode engine that records every call.

    Class attributes configure the next engines created:
    - match: EngineMatch returned by decode() (None = nothing found)
    - error: Exception raised by decode()
    - created: Every engine instance, in creation order
    """

    name = "recording"

    match: Optional[EngineMatch] = None
    error: Optional[Exception] = None
    created: List["RecordingEngine"] = []

    def __init__(self, formats: FormatSet) -> None:
        super().__init__(formats)
        self.calls: List[Tuple[Tuple[int, int], ScanRegion]] = []
        self.destroy_count = 0
        RecordingEngine.created.append(self)

    def decode(self, image: ImageView, region: ScanRegion) -> Optional[EngineMatch]:
        self.calls.append(((image.width, image.height), region))
        if self.error is not None:
            raise self.error
        return self.match

    def destroy(self) -> None:
        self.destroy_count += 1


@pytest.fixture(autouse=True)
def reset_recording_engine() -> Generator[None, None, None]:
    """Reset engine configuration between tests."""
    RecordingEngine.match = None
    RecordingEngine.error = None
    RecordingEngine.created = []
    yield
    RecordingEngine.match = None
    RecordingEngine.error = None
    RecordingEngine.created = []


@pytest.fixture
def engine_match():
    """Set the match returned by the next decode calls."""
    def _set(fmt: BarcodeFormat, text: str) -> EngineMatch:
        RecordingEngine.match = EngineMatch(fmt, text)
        return RecordingEngine.match
    return _set


# ============================================================================
# READER FIXTURES
# ============================================================================

@pytest.fixture
def reader() -> Generator[Reader, None, None]:
    """Reader for QR Code and EAN-13 backed by the recording engine."""
    r = Reader([BarcodeFormat.QR_CODE, BarcodeFormat.EAN_13], RecordingEngine)
    yield r
    r.release()


@pytest.fixture
def frame() -> np.ndarray:
    """Blank 640x480 BGR frame."""
    return np.zeros((480, 640, 3), dtype=np.uint8)


def encode_png(array: np.ndarray) -> str:
    """Base64-encode an array as PNG."""
    ok, buffer = cv2.imencode(".png", array)
    assert ok
    return base64.b64encode(buffer.tobytes()).decode("ascii")


@pytest.fixture
def png_base64(frame: np.ndarray) -> str:
    """Blank 640x480 frame as base64 PNG."""
    return encode_png(frame)


# ============================================================================
# CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def app():
    """Application wired to the recording engine."""
    return create_app(
        service_factory=lambda: DecodeService(
            FormatSet([BarcodeFormat.QR_CODE, BarcodeFormat.EAN_13]),
            engine_factory=RecordingEngine,
        ),
        engine_factory=RecordingEngine,
    )


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Test client with lifespan events (startup allocates the shared reader)."""
    with TestClient(app) as test_client:
        yield test_client
