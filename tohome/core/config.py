"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
Supports two storage modes for the client-side cart:
    - MEMORY: Volatile dict-backed storage (development and tests)
    - FILE: Durable JSON snapshot on local disk

The ENV_MODE variable controls the default behaviour of service factories,
while CART_STORAGE_BACKEND overrides the storage choice explicitly.

Usage:
    from tohome.core.config import get_settings

    settings = get_settings()
    print(settings.timezone)  # "Europe/Rome"

Author: ToHome Team
Version: 1.0.0
"""

import logging
import sys
from enum import Enum
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Local testing, volatile cart storage by default
        PRODUCTION: Live environment with durable cart storage
        STAGING: Pre-production environment with durable cart storage
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class StorageBackend(str, Enum):
    """Available cart storage backends."""
    MEMORY = "memory"
    FILE = "file"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging

        # Availability
        timezone: Civil timezone in which opening hours are expressed

        # Cart persistence
        cart_storage_backend: Storage backend (memory/file), None = by env_mode
        cart_storage_key: Key under which the cart snapshot is persisted
        data_directory: Directory for file-backed snapshots
        storage_lock_timeout: Seconds to wait for the snapshot file lock

        # Presentation
        currency_symbol: Symbol used when formatting cent amounts
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    env_mode: EnvironmentMode = Field(
        default=EnvironmentMode.DEVELOPMENT,
        description="Application environment mode"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    app_name: str = Field(
        default="ToHome Ordering Core",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )

    # ==========================================================================
    # AVAILABILITY
    # ==========================================================================

    timezone: str = Field(
        default="Europe/Rome",
        description="IANA timezone of the restaurants' opening hours"
    )

    # ==========================================================================
    # CART PERSISTENCE
    # ==========================================================================

    cart_storage_backend: Optional[StorageBackend] = Field(
        default=None,
        description="Cart storage backend; derived from env_mode when unset"
    )
    cart_storage_key: str = Field(
        default="tohome_cart",
        min_length=1,
        description="Storage key holding the serialized cart"
    )
    data_directory: str = Field(
        default="data",
        description="Directory for data files"
    )
    storage_lock_timeout: int = Field(
        default=10,
        ge=0,
        description="Seconds to wait for the snapshot file lock"
    )

    # ==========================================================================
    # PRESENTATION
    # ==========================================================================

    currency_symbol: str = Field(
        default="€",
        description="Currency symbol used in formatted amounts"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v: str) -> EnvironmentMode:
        """Convert string to EnvironmentMode enum."""
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(v.lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject timezone names unknown to the tz database."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {v!r}")
        return v

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env_mode == EnvironmentMode.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env_mode == EnvironmentMode.PRODUCTION

    @property
    def tzinfo(self) -> ZoneInfo:
        """Civil timezone as a tzinfo object."""
        return ZoneInfo(self.timezone)

    @property
    def effective_storage_backend(self) -> StorageBackend:
        """Storage backend after applying the env_mode default."""
        if self.cart_storage_backend is not None:
            return self.cart_storage_backend
        if self.is_development:
            return StorageBackend.MEMORY
        return StorageBackend.FILE


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are loaded only once and stay
    consistent across the application lifecycle.

    Returns:
        Settings: Configured application settings

    Example:
        >>> settings = get_settings()
        >>> print(settings.env_mode)
        EnvironmentMode.DEVELOPMENT
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured package logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("filelock").setLevel(logging.WARNING)

    return logging.getLogger("tohome")


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
