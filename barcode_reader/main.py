"""
==============================================================================
Barcode Reader Service - Application Entry Point
==============================================================================

FastAPI application with:
- REST decode endpoint backed by one shared, lock-guarded reader
- WebSocket streaming scan with a reader per session
- Reader allocation on startup and release on shutdown

Usage:
------
    # Development
    uvicorn barcode_reader.main:app --reload

    # Production
    uvicorn barcode_reader.main:app --host 0.0.0.0 --port 8000

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from barcode_reader import __version__
from barcode_reader.api import api_router
from barcode_reader.config import get_settings
from barcode_reader.core.exceptions import register_exception_handlers
from barcode_reader.scanner.engine import EngineFactory
from barcode_reader.services import DecodeService
from barcode_reader.websockets import scanner_router


# ============================================================================
# LOGGING SETUP
# ============================================================================

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

logger = logging.getLogger(__name__)


ServiceFactory = Callable[[], DecodeService]


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

class Application:
    """
    FastAPI application factory and manager.

    Handles application lifecycle including:
    - Shared reader allocation and release
    - Middleware configuration
    - Router registration
    - Exception handler setup
    """

    def __init__(
        self,
        service_factory: Optional[ServiceFactory] = None,
        engine_factory: Optional[EngineFactory] = None
    ):
        """
        Initialize the application.

        Args:
            service_factory: Builds the shared DecodeService (default: from settings)
            engine_factory: Engine used by WebSocket sessions (default: configured backend)
        """
        self._settings = get_settings()
        self._service_factory = service_factory or DecodeService.from_settings
        self._engine_factory = engine_factory
        self._app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""
        app = FastAPI(
            title=self._settings.app_name,
            version=__version__,
            description="Single-barcode decoding inside a centered region of interest",
            lifespan=self._lifespan,
            docs_url="/docs",
            redoc_url="/redoc",
        )
        app.state.engine_factory = self._engine_factory

        self._configure_middleware(app)
        register_exception_handlers(app)
        self._register_routers(app)

        return app

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        """Application lifespan manager."""
        self._startup(app)
        try:
            yield
        finally:
            self._shutdown(app)

    def _startup(self, app: FastAPI) -> None:
        """Allocate the shared reader."""
        logger.info(f"🚀 Starting {self._settings.app_name}")
        app.state.decode_service = self._service_factory()
        logger.info(f"✅ {self._settings.app_name} ready")

    def _shutdown(self, app: FastAPI) -> None:
        """Release the shared reader."""
        logger.info("🛑 Shutting down...")
        service = getattr(app.state, "decode_service", None)
        if service is not None:
            service.close()
            app.state.decode_service = None
        logger.info("✅ Shutdown complete")

    def _configure_middleware(self, app: FastAPI) -> None:
        """Configure application middleware."""
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._settings.cors_origins_list,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _register_routers(self, app: FastAPI) -> None:
        """Register API and WebSocket routers."""
        app.include_router(api_router)
        app.include_router(scanner_router)

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self._app


def create_app(
    service_factory: Optional[ServiceFactory] = None,
    engine_factory: Optional[EngineFactory] = None
) -> FastAPI:
    """Build a new application instance (used by tests and embedders)."""
    return Application(service_factory, engine_factory).app


# ============================================================================
# APPLICATION INSTANCE
# ============================================================================

application = Application()
app = application.app


# ============================================================================
# ENTRY POINT
# ============================================================================

def run() -> None:
    """Run the service with uvicorn."""
    import uvicorn

    uvicorn.run(
        "barcode_reader.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )


if __name__ == "__main__":
    run()
