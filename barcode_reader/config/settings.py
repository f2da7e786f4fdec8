"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management using Pydantic Settings.

A single cached Settings instance is shared by the reader library, the
HTTP service and the CLI.

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

==============================================================================
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


# Backend names known to barcode_reader.engines
SUPPORTED_BACKENDS = ("pyzbar", "zxingcpp")


class Settings(BaseSettings):
    """
    Settings loaded from environment variables.

    Attributes:
        app_name: Display name for the service
        app_env: Environment mode (development/staging/production)
        debug: Enable debug logging
        host: Server bind address
        port: Server port number
        engine_backend: Decode engine used when none is given explicitly
        enabled_formats: Format string for the service reader ("" = all)
        max_image_bytes: Largest accepted encoded image
        cors_origins: Allowed CORS origins (JSON array string)

    Example:
        >>> settings = Settings(engine_backend="zxingcpp")
        >>> settings.engine_backend
        'zxingcpp'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Barcode Reader",
        description="Display name for the service"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug logging"
    )

    # =========================================================================
    # SERVER SETTINGS
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Server bind address"
    )

    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Server port number"
    )

    # =========================================================================
    # READER SETTINGS
    # =========================================================================
    engine_backend: str = Field(
        default="pyzbar",
        description="Decode engine backend: pyzbar or zxingcpp"
    )

    enabled_formats: str = Field(
        default="",
        description="Formats enabled for the service reader, e.g. 'QR_CODE,EAN_13'"
    )

    max_image_bytes: int = Field(
        default=10 * 1024 * 1024,
        ge=1024,
        description="Largest accepted encoded image in bytes"
    )

    # =========================================================================
    # CORS SETTINGS
    # =========================================================================
    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """Normalize environment name, defaulting unknown values to development."""
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("engine_backend")
    @classmethod
    def validate_engine_backend(cls, value: str) -> str:
        """
        Validate the decode engine backend name.

        Raises:
            ValueError: If the backend is not supported
        """
        normalized = value.lower().strip()

        if normalized not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"Unsupported engine backend: {value}. "
                f"Supported: {', '.join(SUPPORTED_BACKENDS)}"
            )

        return normalized

    @field_validator("enabled_formats")
    @classmethod
    def validate_enabled_formats(cls, value: str) -> str:
        """Reject format strings that do not parse."""
        from barcode_reader.formats import FormatSet

        FormatSet.parse(value)
        return value.strip()

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from JSON string to list."""
        try:
            origins = json.loads(self.cors_origins)
            if isinstance(origins, list):
                return origins
            return ["*"]
        except json.JSONDecodeError:
            logger.warning(
                f"Invalid CORS origins JSON: {self.cors_origins}, "
                "defaulting to ['*']"
            )
            return ["*"]

    def __repr__(self) -> str:
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"engine_backend={self.engine_backend!r}, "
            f"enabled_formats={self.enabled_formats!r}, "
            f"debug={self.debug})"
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance.

    Cached so every caller sees the same configuration.
    """
    settings = Settings()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
