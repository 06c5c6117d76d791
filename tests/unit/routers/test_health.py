"""
Unit tests for the health endpoint.

Uses mocked application state.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from unittest.mock import AsyncMock, MagicMock

    from fastapi.testclient import TestClient


@pytest.mark.unit
class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_healthy_when_serving(self, test_client: TestClient) -> None:
        response = test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["phase"] == "serving"
        assert data["upstream"] is None
        assert data["uptime_seconds"] == 123.45
        assert data["uptime"] == "2m 3s"

    def test_system_time_format(self, test_client: TestClient) -> None:
        data = test_client.get("/health").json()

        assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}", data["system_time"])

    def test_upstream_not_probed_by_default(
        self,
        test_client: TestClient,
        mock_tiobe_client: AsyncMock,
    ) -> None:
        test_client.get("/health")

        mock_tiobe_client.health_check.assert_not_called()

    def test_upstream_probe_healthy(self, test_client: TestClient) -> None:
        data = test_client.get("/health", params={"check_upstream": "true"}).json()

        assert data["status"] == "healthy"
        assert data["upstream"] == "healthy"

    def test_degraded_when_upstream_unavailable(
        self,
        test_client: TestClient,
        mock_tiobe_client: AsyncMock,
    ) -> None:
        mock_tiobe_client.health_check.return_value = "unavailable"

        data = test_client.get("/health", params={"check_upstream": "true"}).json()

        assert data["status"] == "degraded"
        assert data["upstream"] == "unavailable"

    @pytest.mark.parametrize("phase", ["starting", "stopping"])
    def test_unhealthy_outside_serving_phase(
        self,
        test_client: TestClient,
        mock_app_state: MagicMock,
        phase: str,
    ) -> None:
        mock_app_state.phase = phase

        data = test_client.get("/health").json()

        assert data["status"] == "unhealthy"
        assert data["phase"] == phase
