"""Fixtures for client unit tests."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock

import httpx
import pytest

from tests.factories import make_client_kwargs

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from tiobe_service.clients import TiobeClient, UpstreamClient


@pytest.fixture
def mock_httpx_client() -> AsyncMock:
    """Create a mock httpx.AsyncClient for testing client methods."""
    return AsyncMock(spec=httpx.AsyncClient)


@pytest.fixture
async def upstream_client(mock_httpx_client: AsyncMock) -> AsyncGenerator[UpstreamClient, None]:
    """Create a generic UpstreamClient with a mocked httpx client."""
    from tiobe_service.clients import UpstreamClient  # noqa: PLC0415

    client = UpstreamClient(**make_client_kwargs())
    # Replace the internal httpx client with our mock
    await client.client.aclose()
    client.client = mock_httpx_client
    yield client


@pytest.fixture
async def tiobe_client(mock_httpx_client: AsyncMock) -> AsyncGenerator[TiobeClient, None]:
    """Create a TiobeClient with a mocked httpx client."""
    from tiobe_service.clients import TiobeClient  # noqa: PLC0415

    client = TiobeClient(**make_client_kwargs())
    await client.client.aclose()
    client.client = mock_httpx_client
    yield client
