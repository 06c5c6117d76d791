"""
Service information endpoint.

Exposes the active configuration, upstream status and cache contents.
The configuration holds no credentials and is returned as loaded.
"""

from __future__ import annotations

from fastapi import APIRouter

from tiobe_service.config import get_settings
from tiobe_service.core.state import get_app_state
from tiobe_service.schemas import CacheInfo, InfoResponse, UpstreamInfo

router = APIRouter()


@router.get("/info", response_model=InfoResponse)
async def get_info() -> InfoResponse:
    """Get service information and configuration."""
    settings = get_settings()
    state = get_app_state()

    client = state.tiobe_client
    upstream_status = await client.health_check()

    return InfoResponse(
        service=settings.service.name,
        version=settings.service.version,
        config=settings.model_dump(),
        upstream=UpstreamInfo(
            url=settings.source.index_url,
            status=upstream_status,
            circuit_state=client.circuit_state,
        ),
        cache=CacheInfo(
            ttl_seconds=settings.cache.ttl_seconds,
            max_entries=settings.cache.max_entries,
            entries=state.ranking_service.cached_periods,
        ),
    )
