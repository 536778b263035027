"""
Centralized configuration management for the Vite asset bridge.

Provides environment-specific configuration with validation, type safety,
and settings management using Pydantic.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings

from vite_bridge.domain.models import ViteMode

DEFAULT_DEV_SERVER_HOST = "http://localhost:5173"
DEFAULT_HEART_BEAT_RETRIES = 5
DEFAULT_HEART_BEAT_TIMEOUT = 10.0


class ViteConfig(BaseSettings):
    """
    Vite integration settings.

    Everything a `Vite` session needs to pick its mode and resolve tags.
    Leaving `entrypoints` unset makes every manifest chunk flagged
    `isEntry` an entrypoint; leaving `force_mode` unset runs mode discovery.

    Example:
        >>> config = ViteConfig(
        ...     manifest_path="dist/.vite/manifest.json",
        ...     entrypoints=["src/main.ts"],
        ...     force_mode=ViteMode.MANIFEST,
        ... )
        >>> print(config.server_host)
        >>> # http://localhost:5173
    """

    manifest_path: str | None = Field(None, description="Path to the build's manifest.json")
    entrypoints: list[str] | None = Field(None, description="Manifest keys to render")
    force_mode: ViteMode | None = Field(None, description="Skip mode discovery")

    use_heart_beat_check: bool = Field(True, description="Check the dev server on startup")
    enable_dev_server: bool = Field(True, description="Consider the dev server at all")
    server_host: str = Field(DEFAULT_DEV_SERVER_HOST, description="Vite dev server URL")
    heart_beat_retries_limit: int = Field(
        DEFAULT_HEART_BEAT_RETRIES, ge=0, description="Extra heartbeat attempts on failure"
    )
    heart_beat_timeout: float = Field(
        DEFAULT_HEART_BEAT_TIMEOUT, gt=0, description="Per-attempt heartbeat timeout (seconds)"
    )

    prefix: str | None = Field(None, description="Path prefix inserted before built files")
    app_url: str | None = Field(None, description="Base URL for built files (falls back to APP_URL)")

    model_config = {"env_prefix": "VITE_", "case_sensitive": False}

    @field_validator("server_host")
    def validate_server_host(cls, v):
        """Require an absolute URL and drop the trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("server_host must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("manifest_path")
    def validate_manifest_path(cls, v):
        if v is not None and not v.strip():
            return None
        return v


class LoggingConfig(BaseSettings):
    """
    Logging configuration settings.

    Manages logging levels, output formats, and file destinations
    with environment-specific defaults.

    Example:
        >>> log_config = LoggingConfig(level="DEBUG", file_path="./logs/vite.log")
        >>> print(log_config.level)
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Minimum logging level"
    )
    file_path: str | None = Field(None, description="Log file path")
    max_bytes: int = Field(10 * 1024 * 1024, ge=1024, description="Max log file size in bytes")
    backup_count: int = Field(5, ge=1, description="Number of backup log files")
    structured: bool = Field(True, description="Use structured JSON logging")
    console_enabled: bool = Field(True, description="Enable console output")

    model_config = {"env_prefix": "LOG_", "case_sensitive": False}

    @field_validator("file_path")
    def validate_log_path(cls, v):
        """Ensure log directory exists."""
        if v:
            Path(v).parent.mkdir(parents=True, exist_ok=True)
        return v


class ApplicationConfig(BaseSettings):
    """
    Main application configuration for the embedding web app.

    Example:
        >>> config = get_settings()
        >>> print(config.app.environment)
    """

    environment: Literal["development", "testing", "production"] = Field(
        "development", description="Application environment"
    )
    debug: bool = Field(False, description="Enable debug mode")
    title: str = Field("Vite Bridge", description="Application title")
    version: str = Field("0.1.0", description="Application version")

    model_config = {"env_prefix": "APP_", "case_sensitive": False}

    @model_validator(mode="after")
    def debug_implies_development(self):
        """Ensure debug mode is only enabled in development."""
        if self.debug and self.environment == "production":
            raise ValueError("Debug mode cannot be enabled in production")
        return self


class Settings:
    """
    Complete settings container.

    Provides structured access to all configuration sections
    with lazy loading and caching.

    Example:
        >>> settings = get_settings()
        >>> print(settings.vite.manifest_path)
        >>> print(settings.logging.level)
    """

    def __init__(self):
        self._app: ApplicationConfig | None = None
        self._vite: ViteConfig | None = None
        self._logging: LoggingConfig | None = None

    @property
    def app(self) -> ApplicationConfig:
        """Get application configuration."""
        if self._app is None:
            self._app = ApplicationConfig()
        return self._app

    @property
    def vite(self) -> ViteConfig:
        """Get Vite configuration."""
        if self._vite is None:
            self._vite = ViteConfig()
        return self._vite

    @property
    def logging(self) -> LoggingConfig:
        """Get logging configuration."""
        if self._logging is None:
            overrides: dict[str, Any] = {}
            if not any(name.upper() == "LOG_LEVEL" for name in os.environ):
                level = "DEBUG" if self.app.debug else "INFO"
                if self.app.environment == "production":
                    level = "WARNING"
                overrides["level"] = level
            self._logging = LoggingConfig(**overrides)
        return self._logging


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get settings instance (cached).

    Returns:
        Settings instance with all configuration loaded
    """
    return Settings()


def reset_settings() -> None:
    """Reset settings cache to reload from environment."""
    get_settings.cache_clear()
