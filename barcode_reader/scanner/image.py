"""
==============================================================================
Image Adapter Module
==============================================================================

Read-only view over an OpenCV image (numpy array).

Accepts 2-D grayscale or 3-D BGR / BGRA arrays. The wrapped array is never
written to; crops are numpy views and grayscale conversion allocates a new
array.

==============================================================================
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import cv2
import numpy as np

from barcode_reader.core.exceptions import invalid_image
from barcode_reader.scanner.region import ScanRegion


# Module logger
logger = logging.getLogger(__name__)


class ImageView:
    """
    Image collaborator exposing dimensions and pixel access.

    Attributes:
        array: The underlying numpy array (height x width [x channels])

    Example:
        >>> view = ImageView(np.zeros((480, 640), np.uint8))
        >>> view.width, view.height
        (640, 480)
    """

    __slots__ = ("_array",)

    def __init__(self, array: np.ndarray) -> None:
        if not isinstance(array, np.ndarray):
            raise invalid_image(f"expected numpy.ndarray, got {type(array).__name__}")
        if array.ndim not in (2, 3):
            raise invalid_image(f"unsupported array shape {array.shape}")
        if array.ndim == 3 and array.shape[2] not in (1, 3, 4):
            raise invalid_image(f"unsupported channel count {array.shape[2]}")
        self._array = array

    # =========================================================================
    # CONSTRUCTORS
    # =========================================================================

    @classmethod
    def of(cls, image: Union["ImageView", np.ndarray]) -> "ImageView":
        """Wrap an array, or return an existing view unchanged."""
        if isinstance(image, ImageView):
            return image
        return cls(image)

    @classmethod
    def from_bytes(cls, data: bytes) -> "ImageView":
        """
        Decode an encoded image (PNG, JPEG, ...) from memory.

        Raises:
            InvalidImageError: If the bytes are empty or not a readable image
        """
        if not data:
            raise invalid_image("empty image data")

        buffer = np.frombuffer(data, np.uint8)
        frame = cv2.imdecode(buffer, cv2.IMREAD_UNCHANGED)

        if frame is None:
            raise invalid_image("could not decode image data")

        return cls(frame)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ImageView":
        """
        Read an image file from disk.

        Raises:
            InvalidImageError: If the file is missing or unreadable
        """
        path = Path(path)
        if not path.exists():
            raise invalid_image(f"file not found: {path}")

        frame = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
        if frame is None:
            raise invalid_image(f"could not read image: {path}")

        logger.debug(f"Loaded {path} ({frame.shape[1]}x{frame.shape[0]})")
        return cls(frame)

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    @property
    def array(self) -> np.ndarray:
        return self._array

    @property
    def width(self) -> int:
        return int(self._array.shape[1])

    @property
    def height(self) -> int:
        return int(self._array.shape[0])

    def crop(self, region: ScanRegion) -> np.ndarray:
        """Return the pixels inside region as a view (no copy)."""
        return self._array[region.top:region.bottom, region.left:region.right]

    def gray(self, region: ScanRegion) -> np.ndarray:
        """Return the pixels inside region as a single-channel uint8 array."""
        pixels = self.crop(region)

        if pixels.ndim == 3:
            channels = pixels.shape[2]
            if channels == 1:
                pixels = pixels[:, :, 0]
            elif channels == 3:
                pixels = cv2.cvtColor(pixels, cv2.COLOR_BGR2GRAY)
            else:
                pixels = cv2.cvtColor(pixels, cv2.COLOR_BGRA2GRAY)

        # 16-bit PNGs are scaled down, never clipped at 255
        if pixels.dtype == np.uint16:
            pixels = cv2.convertScaleAbs(pixels, alpha=255.0 / 65535)
        elif pixels.dtype != np.uint8:
            pixels = cv2.normalize(pixels, None, 0, 255, cv2.NORM_MINMAX, cv2.CV_8U)

        return np.ascontiguousarray(pixels)

    def __repr__(self) -> str:
        return f"ImageView({self.width}x{self.height}, dtype={self._array.dtype})"
