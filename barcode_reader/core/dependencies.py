"""
FastAPI dependencies.

The decode service lives on ``app.state`` for the lifetime of the
application; endpoints receive it through get_decode_service so tests can
swap it with dependency_overrides.
"""

from fastapi import Request

from barcode_reader.core.exceptions import ReaderException
from barcode_reader.services import DecodeService


def get_decode_service(request: Request) -> DecodeService:
    """Return the application's decode service."""
    service = getattr(request.app.state, "decode_service", None)
    if service is None:
        raise ReaderException("Decode service not started", "SERVICE_UNAVAILABLE", 503)
    return service
