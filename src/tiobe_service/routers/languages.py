"""
Ranking endpoints.

Serve the TIOBE index and per-language details. Both endpoints degrade
to the built-in snapshot instead of failing when live data is unavailable.
"""

from __future__ import annotations

from fastapi import APIRouter, Query, Request, Response

from tiobe_service.core.state import get_app_state
from tiobe_service.logging import get_logger
from tiobe_service.schemas import ErrorResponse, Language, LanguageDetail, Period

router = APIRouter(prefix="/api")

DATA_SOURCE_HEADER = "X-Data-Source"


def client_address(request: Request) -> str | None:
    """Client IP, preferring the X-Real-IP header set by the reverse proxy."""
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client is not None:
        return request.client.host
    return None


def resolve_period(year: int | None, month: int | None) -> Period:
    # A lone year or month selects the current index
    if year is None or month is None:
        return Period()
    return Period(year=year, month=month)


@router.get(
    "/languages",
    response_model=list[Language],
    responses={500: {"model": ErrorResponse}},
)
async def get_languages(
    request: Request,
    response: Response,
    year: int | None = Query(default=None, ge=1, description="Historical year"),
    month: int | None = Query(default=None, ge=1, le=12, description="Historical month (1-12)"),
) -> list[Language]:
    """
    List the index for the current month, or for year/month when both are given.
    """
    period = resolve_period(year, month)
    state = get_app_state()

    snapshot = await state.ranking_service.get_snapshot(period)
    response.headers[DATA_SOURCE_HEADER] = snapshot.source

    get_logger(__name__).info(
        "Languages served",
        extra={
            "client": client_address(request),
            "period": snapshot.period,
            "source": snapshot.source,
            "count": len(snapshot.languages),
        },
    )
    return snapshot.languages


@router.get(
    "/language/{name:path}",
    response_model=LanguageDetail,
    responses={500: {"model": ErrorResponse}},
)
async def get_language_info(
    name: str,
    request: Request,
    year: int | None = Query(default=None, ge=1, description="Historical year"),
    month: int | None = Query(default=None, ge=1, le=12, description="Historical month (1-12)"),
) -> LanguageDetail:
    """
    Describe one language with its rank and rating for the period.

    Names are matched case-insensitively. A language outside the index is
    still described, with rank 0 and rating "N/A".
    """
    period = resolve_period(year, month)
    state = get_app_state()

    detail = await state.ranking_service.get_language_detail(name, period)

    get_logger(__name__).info(
        "Language detail served",
        extra={
            "client": client_address(request),
            "language": name,
            "period": period.cache_key,
            "rank": detail.rank,
        },
    )
    return detail
