"""
Pydantic request/response models for the TIOBE index service API.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# === Domain Models ===


class Language(BaseModel):
    """One row of the TIOBE index."""

    model_config = ConfigDict(extra="forbid")

    rank: int
    """Current position in the index."""

    prev_rank: int
    """Position one year earlier (0 when unknown)."""

    name: str
    """Language name as published."""

    rating: str
    """Share of the index, e.g. "23.64%"."""

    change: str
    """Year-over-year change, e.g. "+1.01%", or "N/A"."""


class LanguageDetail(BaseModel):
    """A ranking entry enriched with catalog information."""

    model_config = ConfigDict(extra="forbid")

    name: str
    rank: int
    rating: str
    description: str
    use_cases: list[str]
    frameworks: list[str]


class Period(BaseModel):
    """Optional historical period selector."""

    model_config = ConfigDict(extra="forbid")

    year: int | None = Field(default=None, ge=1)
    month: int | None = Field(default=None, ge=1, le=12)

    @property
    def cache_key(self) -> str:
        if self.year is not None and self.month is not None:
            return f"{self.year:04d}-{self.month:02d}"
        return "current"


# === Response Models ===


class HealthResponse(BaseModel):
    """Response model for GET /health endpoint."""

    status: Literal["healthy", "degraded", "unhealthy"]
    """Service health status."""

    phase: Literal["starting", "serving", "stopping"]
    """Lifecycle phase of the listener."""

    upstream: str | None = None
    """TIOBE page status (if check_upstream=true)."""

    uptime_seconds: float
    """Uptime in seconds since service start."""

    uptime: str
    """Human-readable uptime."""

    system_time: str
    """Current system time in yyyy-mm-dd hh:mm format (UTC)."""


class UpstreamInfo(BaseModel):
    """Upstream page details for /info endpoint."""

    url: str
    status: str
    circuit_state: str


class CacheInfo(BaseModel):
    """Snapshot cache details for /info endpoint."""

    ttl_seconds: float
    max_entries: int
    entries: list[str]
    """Cached period keys, oldest first."""


class InfoResponse(BaseModel):
    """Response model for GET /info endpoint."""

    service: str
    """Service name."""

    version: str
    """Service version."""

    config: dict[str, Any]
    """Active configuration as loaded from config.yaml."""

    upstream: UpstreamInfo
    """TIOBE page status."""

    cache: CacheInfo
    """Snapshot cache status."""


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
    """Machine-readable error code."""

    message: str
    """Human-readable error description."""

    details: dict[str, Any]
    """Additional error context."""
