"""
Configuration management for the TIOBE index service.

Loads configuration from YAML with ZERO defaults.
Every value must be explicitly specified or startup fails.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class ServiceConfig(BaseModel):
    """Service identity configuration."""

    model_config = ConfigDict(extra="forbid")

    name: str
    version: str


class ServerConfig(BaseModel):
    """HTTP listener configuration."""

    model_config = ConfigDict(extra="forbid")

    host: str
    port: int = Field(ge=1, le=65535)
    cors_origins: list[str]

    @field_validator("host")
    @classmethod
    def host_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("host must not be empty")
        return value


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")

    level: str
    format: Literal["json"]
    """Output format; only one JSON object per line is supported."""


class RetryConfig(BaseModel):
    """Retry policy for transient upstream failures."""

    model_config = ConfigDict(extra="forbid")

    max_attempts: int = Field(ge=1)
    initial_backoff_seconds: float = Field(ge=0)
    max_backoff_seconds: float = Field(ge=0)
    jitter_seconds: float = Field(ge=0)


class CircuitBreakerConfig(BaseModel):
    """Circuit breaker policy for the upstream page."""

    model_config = ConfigDict(extra="forbid")

    failure_threshold: int = Field(ge=1)
    recovery_timeout_seconds: float = Field(ge=0)


class SourceConfig(BaseModel):
    """Where ranking data is scraped from."""

    model_config = ConfigDict(extra="forbid")

    index_url: str
    user_agent: str
    timeout_seconds: float = Field(gt=0)
    retry: RetryConfig
    circuit_breaker: CircuitBreakerConfig


class CacheConfig(BaseModel):
    """In-memory snapshot cache."""

    model_config = ConfigDict(extra="forbid")

    ttl_seconds: float = Field(ge=0)
    max_entries: int = Field(ge=1)


class StaticConfig(BaseModel):
    """Static front-end files."""

    model_config = ConfigDict(extra="forbid")

    directory: str


class Settings(BaseModel):
    """
    Root configuration container.

    All fields are REQUIRED. No defaults exist.
    Missing fields cause immediate startup failure.

    Usage:
        from tiobe_service.config import get_settings
        settings = get_settings()
    """

    model_config = ConfigDict(extra="forbid")

    service: ServiceConfig
    server: ServerConfig
    logging: LoggingConfig
    source: SourceConfig
    cache: CacheConfig
    static: StaticConfig


class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing."""

    pass


def load_yaml_config(config_path: Path) -> dict[str, Any]:
    """
    Load and parse YAML configuration file.

    Args:
        config_path: Path to config.yaml

    Returns:
        Parsed configuration dictionary

    Raises:
        ConfigurationError: If file is missing, empty, or invalid
    """
    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}\n"
            f"Expected location: {config_path.absolute()}\n"
            f"Create the file or set CONFIG_PATH environment variable."
        )

    try:
        with config_path.open(encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if config is None:
        raise ConfigurationError(
            f"Configuration file is empty: {config_path}\n"
            f"All configuration values must be explicitly specified."
        )

    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Configuration must be a YAML mapping, got {type(config).__name__}"
        )

    return config


def get_config_path() -> Path:
    """
    Determine configuration file path.

    Uses CONFIG_PATH environment variable if set, otherwise defaults
    to ./config.yaml relative to working directory.
    """
    config_path_str = os.environ.get("CONFIG_PATH")
    if config_path_str is None:
        config_path_str = "config.yaml"
    return Path(config_path_str)


@lru_cache
def get_settings() -> Settings:
    """
    Load and validate configuration.

    Cached so the whole process shares one instance.
    Called once at startup - fails fast on invalid config.

    Raises:
        ConfigurationError: Config file missing, malformed or failing validation
    """
    config_path = get_config_path()
    yaml_config = load_yaml_config(config_path)

    try:
        return Settings(**yaml_config)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed: {e}\n"
            f"All configuration values must be explicitly specified.\n"
            f"No default values are allowed."
        ) from e


def clear_settings_cache() -> None:
    """Clear the settings cache. Used in testing."""
    get_settings.cache_clear()
