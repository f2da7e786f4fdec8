"""
==============================================================================
Scan Region Module
==============================================================================

Centered region-of-interest calculation for a decode request.

Rules:
------
- A crop dimension <= 0 means "use the full image dimension"
- A crop dimension larger than the image is clamped to the image
- The resulting window is centered: left = (W - w) // 2, top = (H - h) // 2

==============================================================================
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ScanRegion(BaseModel):
    """
    Rectangle of the image handed to the decode engine.

    Invariant: left + width <= image width and top + height <= image height.
    """

    model_config = ConfigDict(frozen=True)

    left: int = Field(..., ge=0)
    top: int = Field(..., ge=0)
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0


def _effective(image_extent: int, requested: int) -> int:
    if requested <= 0:
        return image_extent
    return min(image_extent, requested)


def compute_scan_region(
    image_width: int,
    image_height: int,
    requested_width: int = 0,
    requested_height: int = 0
) -> ScanRegion:
    """
    Compute the centered scan window for an image.

    Args:
        image_width: Image width in pixels
        image_height: Image height in pixels
        requested_width: Crop width (<= 0 for full width)
        requested_height: Crop height (<= 0 for full height)

    Returns:
        ScanRegion clamped to the image bounds

    Raises:
        ValueError: If the image reports a negative dimension

    Example:
        >>> compute_scan_region(1000, 1000, 400, 400)
        ScanRegion(left=300, top=300, width=400, height=400)
    """
    if image_width < 0 or image_height < 0:
        raise ValueError(
            f"Image dimensions must be non-negative, got {image_width}x{image_height}"
        )

    width = _effective(image_width, requested_width)
    height = _effective(image_height, requested_height)

    return ScanRegion(
        left=(image_width - width) // 2,
        top=(image_height - height) // 2,
        width=width,
        height=height,
    )
