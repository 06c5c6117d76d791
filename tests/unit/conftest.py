"""
Shared fixtures for unit tests.

The upstream client and ranking service are mocked so router tests run
without network access.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from tests.factories import create_language
from tiobe_service.services.catalog import describe
from tiobe_service.services.rankings import Snapshot

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Generator
    from pathlib import Path

    from fastapi import FastAPI


@pytest.fixture
def live_snapshot() -> Snapshot:
    """A two-entry live snapshot for the current period."""
    return Snapshot(
        period="current",
        languages=[
            create_language(rank=1, name="Python", rating="25.35%"),
            create_language(rank=2, name="C++", rating="10.45%", prev_rank=3, change="-0.22%"),
        ],
        source="live",
    )


@pytest.fixture
def mock_tiobe_client() -> AsyncMock:
    """Create a mock TIOBE client."""
    client = AsyncMock()
    client.health_check.return_value = "healthy"
    client.circuit_state = "closed"
    client.close = AsyncMock()
    return client


@pytest.fixture
def mock_ranking_service(live_snapshot: Snapshot) -> MagicMock:
    """Create a mock ranking service serving the live snapshot."""
    service = MagicMock()
    service.get_snapshot = AsyncMock(return_value=live_snapshot)

    async def detail(name: str, _period: object) -> object:
        language = live_snapshot.find(name)
        if language is None:
            language = create_language(rank=0, name=name, rating="N/A", prev_rank=0, change="N/A")
        return describe(name, language)

    service.get_language_detail = AsyncMock(side_effect=detail)
    service.cached_periods = ["current"]
    return service


@pytest.fixture
def mock_app_state(
    mock_tiobe_client: AsyncMock,
    mock_ranking_service: MagicMock,
) -> MagicMock:
    """Create mock app state in the serving phase."""
    mock_state = MagicMock()
    mock_state.phase = "serving"
    mock_state.tiobe_client = mock_tiobe_client
    mock_state.ranking_service = mock_ranking_service
    mock_state.uptime_seconds = 123.45
    mock_state.uptime_formatted = "2m 3s"
    return mock_state


@pytest.fixture
def test_client(
    test_config_file: Path,  # noqa: ARG001 - fixture needed for side effects
    mock_app_state: MagicMock,
) -> Generator[TestClient, None, None]:
    """Create a test client with the real app minus its lifespan."""
    from tiobe_service.app import create_app  # noqa: PLC0415

    @asynccontextmanager
    async def mock_lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield

    app = create_app()
    app.router.lifespan_context = mock_lifespan

    with (
        patch("tiobe_service.routers.health.get_app_state", return_value=mock_app_state),
        patch("tiobe_service.routers.info.get_app_state", return_value=mock_app_state),
        patch("tiobe_service.routers.languages.get_app_state", return_value=mock_app_state),
        TestClient(app) as client,
    ):
        yield client
