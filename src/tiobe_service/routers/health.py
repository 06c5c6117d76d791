"""
Health check endpoint.

Used by the process supervisor and the reverse proxy to confirm the
listener is up and serving.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal

from fastapi import APIRouter, Query

from tiobe_service.core.state import get_app_state
from tiobe_service.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(
    check_upstream: bool = Query(
        default=False,
        description="Whether to probe the TIOBE index page",
    ),
) -> HealthResponse:
    """
    Check service health.

    Health semantics:
    - healthy: listener is serving (and the upstream page answers, if probed)
    - degraded: listener is serving but the upstream page does not answer;
      rankings come from the built-in snapshot
    - unhealthy: listener has not finished starting or is shutting down

    Returns:
        Health status with lifecycle phase and uptime
    """
    state = get_app_state()
    system_time = datetime.now(UTC).strftime("%Y-%m-%d %H:%M")

    upstream: str | None = None
    status: Literal["healthy", "degraded", "unhealthy"] = "healthy"

    if state.phase != "serving":
        status = "unhealthy"
    elif check_upstream:
        upstream = await state.tiobe_client.health_check()
        if upstream != "healthy":
            status = "degraded"

    return HealthResponse(
        status=status,
        phase=state.phase,
        upstream=upstream,
        uptime_seconds=state.uptime_seconds,
        uptime=state.uptime_formatted,
        system_time=system_time,
    )
