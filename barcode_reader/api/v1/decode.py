"""
==============================================================================
Decode Endpoints
==============================================================================

Single-image decoding with the application's shared reader.

==============================================================================
"""

from fastapi import APIRouter, Depends

from barcode_reader.core.dependencies import get_decode_service
from barcode_reader.formats import SYMBOL_TABLES, BarcodeFormat
from barcode_reader.schemas import DecodeRequest, DecodeResponse, FormatsResponse
from barcode_reader.services import DecodeService


router = APIRouter(tags=["Decode"])


class DecodeController:
    """Controller for decode operations."""

    def __init__(self, service: DecodeService):
        self._service = service

    def decode(self, body: DecodeRequest) -> DecodeResponse:
        """Decode the posted image inside the requested crop."""
        result, region = self._service.decode_base64(
            body.image,
            body.crop_width,
            body.crop_height
        )
        return DecodeResponse.create(result, region)

    def formats(self) -> FormatsResponse:
        """List enabled and available formats."""
        table = SYMBOL_TABLES.get(self._service.backend)
        available = table.supported_formats() if table else tuple(BarcodeFormat)

        return FormatsResponse(
            backend=self._service.backend,
            enabled=self._service.formats.names(),
            available=[f.name for f in available]
        )


@router.post("/decode", response_model=DecodeResponse)
def decode_image(
    body: DecodeRequest,
    service: DecodeService = Depends(get_decode_service)
):
    """
    Decode at most one barcode from a base64 image.

    A missing barcode returns found=false with HTTP 200.
    """
    return DecodeController(service).decode(body)


@router.get("/formats", response_model=FormatsResponse)
def list_formats(service: DecodeService = Depends(get_decode_service)):
    """Formats enabled on the shared reader and formats the backend supports."""
    return DecodeController(service).formats()
