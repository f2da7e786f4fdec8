"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

from typing import Optional

from fastapi import APIRouter, Request

from barcode_reader.services import DecodeService


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, service: Optional[DecodeService]):
        self._service = service

    def check_reader(self) -> str:
        """Check the shared reader is allocated and not released."""
        if self._service is None:
            return "not_started"
        if self._service.released:
            return "released"
        return "healthy"

    def get_health(self) -> dict:
        """Get full health status."""
        reader_status = self.check_reader()
        overall = "healthy" if reader_status == "healthy" else "degraded"

        details = {}
        if self._service is not None:
            details = {
                "backend": self._service.backend,
                "formats": self._service.formats.names(),
            }

        return {
            "status": overall,
            "components": {
                "api": "healthy",
                "reader": reader_status
            },
            "details": details
        }


@router.get("")
async def health_check(request: Request):
    """
    Health check endpoint.

    Returns API and reader status.
    """
    controller = HealthController(getattr(request.app.state, "decode_service", None))
    return controller.get_health()


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe for container orchestration."""
    service = getattr(request.app.state, "decode_service", None)
    return {"ready": service is not None and not service.released}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
