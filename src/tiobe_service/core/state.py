"""
Application state management.

Tracks the lifecycle phase and uptime, and holds the upstream client and
ranking service created at startup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from tiobe_service.clients import TiobeClient
    from tiobe_service.services.rankings import RankingService

Phase = Literal["starting", "serving", "stopping"]


@dataclass
class AppState:
    """
    Runtime application state.

    Attributes:
        start_time: When the application started (UTC)
        phase: Lifecycle phase, "starting" until the lifespan hands over
        _tiobe_client: HTTP client for the TIOBE index page (internal)
        _ranking_service: Snapshot orchestration (internal)
    """

    start_time: datetime = field(default_factory=lambda: datetime.now(UTC))
    phase: Phase = "starting"
    _tiobe_client: TiobeClient | None = field(default=None, repr=False)
    _ranking_service: RankingService | None = field(default=None, repr=False)

    @property
    def tiobe_client(self) -> TiobeClient:
        """Get the TIOBE client. Raises RuntimeError if not initialized."""
        if self._tiobe_client is None:
            raise RuntimeError("TIOBE client not initialized")
        return self._tiobe_client

    @tiobe_client.setter
    def tiobe_client(self, value: TiobeClient) -> None:
        self._tiobe_client = value

    @property
    def ranking_service(self) -> RankingService:
        """Get the ranking service. Raises RuntimeError if not initialized."""
        if self._ranking_service is None:
            raise RuntimeError("Ranking service not initialized")
        return self._ranking_service

    @ranking_service.setter
    def ranking_service(self, value: RankingService) -> None:
        self._ranking_service = value

    @property
    def uptime_seconds(self) -> float:
        """Calculate uptime in seconds."""
        now = datetime.now(UTC)
        delta = now - self.start_time
        return delta.total_seconds()

    @property
    def uptime_formatted(self) -> str:
        """
        Format uptime as human-readable string.

        Returns:
            String like "2d 3h 15m 42s" or "15m 42s"
        """
        seconds = int(self.uptime_seconds)
        days, remainder = divmod(seconds, 86400)
        hours, remainder = divmod(remainder, 3600)
        minutes, secs = divmod(remainder, 60)

        parts = []
        if days > 0:
            parts.append(f"{days}d")
        if hours > 0:
            parts.append(f"{hours}h")
        if minutes > 0:
            parts.append(f"{minutes}m")
        parts.append(f"{secs}s")

        return " ".join(parts)


# Initialized in lifespan context
_app_state: AppState | None = None


def get_app_state() -> AppState:
    """
    Get the current application state.

    Raises:
        RuntimeError: If called before app startup
    """
    if _app_state is None:
        raise RuntimeError("Application state not initialized")
    return _app_state


def init_app_state() -> AppState:
    """Initialize application state. Called during startup."""
    global _app_state  # noqa: PLW0603 - process-wide singleton
    _app_state = AppState()
    return _app_state


def reset_app_state() -> None:
    """Reset application state. Used in testing."""
    global _app_state  # noqa: PLW0603 - process-wide singleton
    _app_state = None
