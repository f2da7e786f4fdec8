"""
==============================================================================
Decode Schemas Module
==============================================================================

Request and response models for the decode endpoints.

==============================================================================
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from barcode_reader.scanner import ReadResult, ScanRegion


class DecodeRequest(BaseModel):
    """Base64 image plus optional centered crop."""
    image: str = Field(..., min_length=1, description="Base64 encoded PNG/JPEG (data URLs accepted)")
    crop_width: int = Field(default=0, description="Scan window width; <= 0 for full width")
    crop_height: int = Field(default=0, description="Scan window height; <= 0 for full height")


class RegionResponse(BaseModel):
    """Scan window that was searched."""
    left: int
    top: int
    width: int
    height: int

    @classmethod
    def from_region(cls, region: ScanRegion) -> "RegionResponse":
        return cls(left=region.left, top=region.top, width=region.width, height=region.height)


class DecodeResponse(BaseModel):
    """Decode outcome. found=False is a normal result, not an error."""
    success: bool = Field(default=True)
    found: bool
    format: Optional[str] = None
    text: Optional[str] = None
    region: RegionResponse

    @classmethod
    def create(cls, result: Optional[ReadResult], region: ScanRegion) -> "DecodeResponse":
        """Build response from a reader result."""
        region_response = RegionResponse.from_region(region)
        if result is None:
            return cls(found=False, region=region_response)
        return cls(
            found=True,
            format=result.format.name,
            text=result.text,
            region=region_response,
        )


class FormatsResponse(BaseModel):
    """Formats enabled on the service reader and all known formats."""
    success: bool = Field(default=True)
    backend: str
    enabled: List[str]
    available: List[str]
