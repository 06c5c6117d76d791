"""
Application lifecycle management.

Handles startup (client and service initialization) and shutdown (cleanup).
The listener moves from "starting" to "serving" once startup completes.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from tiobe_service.clients import TiobeClient
from tiobe_service.config import get_settings
from tiobe_service.core.state import init_app_state
from tiobe_service.logging import get_logger, setup_logging
from tiobe_service.services.rankings import RankingService

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

    from tiobe_service.config import Settings


def create_tiobe_client(settings: Settings) -> TiobeClient:
    """Build the upstream client from the source section of the configuration."""
    source = settings.source
    return TiobeClient(
        base_url=source.index_url,
        timeout=source.timeout_seconds,
        source_name="tiobe",
        user_agent=source.user_agent,
        retry_max_attempts=source.retry.max_attempts,
        retry_initial_backoff_seconds=source.retry.initial_backoff_seconds,
        retry_max_backoff_seconds=source.retry.max_backoff_seconds,
        retry_jitter_seconds=source.retry.jitter_seconds,
        circuit_breaker_failure_threshold=source.circuit_breaker.failure_threshold,
        circuit_breaker_recovery_timeout_seconds=source.circuit_breaker.recovery_timeout_seconds,
    )


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """
    Manage application lifecycle.

    Startup:
    - Initialize logging
    - Initialize application state
    - Create the TIOBE client and ranking service
    - Switch phase to "serving"

    Shutdown:
    - Switch phase to "stopping" and log uptime
    - Close the HTTP client
    """
    # === STARTUP ===
    settings = get_settings()

    setup_logging(settings.logging.level, settings.service.name)
    logger = get_logger(__name__)

    state = init_app_state()

    logger.info(
        "Service starting",
        extra={
            "service": settings.service.name,
            "version": settings.service.version,
            "host": settings.server.host,
            "port": settings.server.port,
        },
    )

    state.tiobe_client = create_tiobe_client(settings)
    state.ranking_service = RankingService(
        client=state.tiobe_client,
        ttl_seconds=settings.cache.ttl_seconds,
        max_entries=settings.cache.max_entries,
    )

    logger.info(
        "Upstream client initialized",
        extra={
            "index_url": settings.source.index_url,
            "timeout": settings.source.timeout_seconds,
            "cache_ttl_seconds": settings.cache.ttl_seconds,
        },
    )

    state.phase = "serving"
    logger.info("Service ready to accept requests")

    yield  # Application runs here

    # === SHUTDOWN ===
    state.phase = "stopping"
    logger.info(
        "Service shutting down",
        extra={
            "uptime_seconds": state.uptime_seconds,
            "uptime": state.uptime_formatted,
        },
    )

    await state.tiobe_client.close()

    logger.info("Service shutdown complete")
