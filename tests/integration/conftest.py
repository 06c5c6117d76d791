"""
Shared fixtures for integration tests.

Integration tests use the real application, including its lifespan, with
HTTP-level mocking of the TIOBE index page. They verify the full
request -> fetch -> parse -> response cycle without network access.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from tests.factories import INDEX_URL, SAMPLE_ROWS, create_index_html

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

HISTORICAL_ROWS: list[tuple[str, str, str, str, str | None]] = [
    ("1", "1", "Java", "17.78%", "+0.93%"),
    ("2", "2", "C", "16.27%", "+2.60%"),
    ("3", "3", "Python", "10.11%", "+1.15%"),
]


def tiobe_page(request: httpx.Request) -> httpx.Response:
    """Serve the current index, or a smaller index for any historical month."""
    if request.url.params.get("page") == "index":
        return httpx.Response(200, text=create_index_html(HISTORICAL_ROWS))
    return httpx.Response(200, text=create_index_html(SAMPLE_ROWS))


@pytest.fixture
def tiobe_mock() -> Iterator[respx.MockRouter]:
    """Mock the TIOBE index page as reachable."""
    with respx.mock(assert_all_called=False) as router:
        router.route(method="HEAD", url=INDEX_URL, name="index_head").mock(return_value=httpx.Response(200))
        router.route(method="GET", url__startswith=INDEX_URL, name="index_get").mock(side_effect=tiobe_page)
        yield router


@pytest.fixture
def client(
    test_config_file: Path,  # noqa: ARG001 - fixture needed for side effects
    tiobe_mock: respx.MockRouter,  # noqa: ARG001 - mock must be active first
) -> Iterator[TestClient]:
    """
    Create test client with the real application.

    Uses context manager to trigger lifespan events (client initialization).
    """
    from tiobe_service.app import create_app  # noqa: PLC0415

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
