"""
Reader Exception Handling

ReaderException hierarchy for all reader errors, with FastAPI integration.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class ReaderException(Exception):
    """
    Base exception for all reader error scenarios.

    Provides consistent error response format across the library and API.

    Usage:
        raise ReaderException("Image could not be decoded", "INVALID_IMAGE", 400)

    Error Codes:
        Resource:
            - RESOURCE_ALLOCATION_FAILED (500)
            - USE_AFTER_RELEASE (409)

        Input:
            - INVALID_IMAGE (400)
            - INVALID_FORMAT (400)
            - INVALID_MESSAGE (400)
    """

    default_code = "READER_ERROR"
    default_status = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize reader exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (defaults per subclass)
            status_code: HTTP status code (defaults per subclass)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code or self.default_code
        self.status_code = status_code or self.default_status
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


class ResourceError(ReaderException):
    """Failure concerning the decode engine resource owned by a reader."""


class ResourceAllocationError(ResourceError):
    """Engine could not be created for the requested configuration."""

    default_code = "RESOURCE_ALLOCATION_FAILED"
    default_status = 500


class UseAfterReleaseError(ResourceError):
    """Reader or engine handle used after it was released."""

    default_code = "USE_AFTER_RELEASE"
    default_status = 409


class InvalidImageError(ReaderException):
    """Input could not be turned into an image."""

    default_code = "INVALID_IMAGE"
    default_status = 400


class InvalidFormatError(ReaderException):
    """Unknown barcode format name."""

    default_code = "INVALID_FORMAT"
    default_status = 400


class InvalidMessageError(ReaderException):
    """Malformed WebSocket message."""

    default_code = "INVALID_MESSAGE"
    default_status = 400


async def reader_exception_handler(request: Request, exc: ReaderException) -> JSONResponse:
    """
    FastAPI exception handler for ReaderException.

    Converts ReaderException to consistent JSON error response.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(ReaderException, reader_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def use_after_release() -> UseAfterReleaseError:
    """Create use-after-release exception."""
    return UseAfterReleaseError("Reader used after release")


def engine_unavailable(backend: str, reason: str) -> ResourceAllocationError:
    """Create exception for a backend library that cannot be loaded."""
    return ResourceAllocationError(
        f"Decode engine '{backend}' is not available: {reason}",
        details={"backend": backend}
    )


def unknown_backend(backend: str) -> ResourceAllocationError:
    """Create unknown engine backend exception."""
    return ResourceAllocationError(
        f"Unknown decode engine backend: '{backend}'",
        details={"backend": backend}
    )


def unsupported_formats(backend: str, formats: list) -> ResourceAllocationError:
    """Create exception for formats the backend cannot read."""
    return ResourceAllocationError(
        f"Decode engine '{backend}' does not support: {', '.join(formats)}",
        details={"backend": backend, "unsupported": formats}
    )


def invalid_image(reason: str) -> InvalidImageError:
    """Create invalid image exception."""
    return InvalidImageError(f"Invalid image: {reason}", details={"reason": reason})


def invalid_format(message: str) -> InvalidFormatError:
    """Create invalid format exception."""
    return InvalidFormatError(message)


def invalid_message(reason: str) -> InvalidMessageError:
    """Create malformed message exception."""
    return InvalidMessageError(f"Invalid message: {reason}", details={"reason": reason})
