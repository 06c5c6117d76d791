"""
Shared test configuration and fixtures.

Every test runs against a temporary config file pointed to by CONFIG_PATH,
so loggers and settings resolve without touching the working directory.
Test-type-specific fixtures are defined in:
- tests/unit/conftest.py - Mock fixtures for unit tests
- tests/integration/conftest.py - Real app fixtures for integration tests
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.factories import INDEX_URL
from tiobe_service.config import clear_settings_cache
from tiobe_service.core.state import reset_app_state

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


CONFIG_TEMPLATE = """
service:
  name: "tiobe-index"
  version: "0.1.0"

server:
  host: "127.0.0.1"
  port: 3000
  cors_origins:
    - "*"

logging:
  level: "DEBUG"
  format: "json"

source:
  index_url: "{index_url}"
  user_agent: "tiobe-index-tests/1.0"
  timeout_seconds: 5.0
  retry:
    max_attempts: 3
    initial_backoff_seconds: 0.0
    max_backoff_seconds: 0.0
    jitter_seconds: 0.0
  circuit_breaker:
    failure_threshold: 5
    recovery_timeout_seconds: 30.0

cache:
  ttl_seconds: 300.0
  max_entries: 4

static:
  directory: "{static_dir}"
"""


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """Static directory holding a minimal front-end page."""
    directory = tmp_path / "static"
    directory.mkdir()
    (directory / "index.html").write_text("<html><body>TIOBE Index</body></html>")
    return directory


@pytest.fixture(autouse=True)
def test_config_file(
    tmp_path: Path,
    static_dir: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Iterator[Path]:
    """Write a complete config file and point CONFIG_PATH at it."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        CONFIG_TEMPLATE.format(index_url=INDEX_URL, static_dir=static_dir.as_posix())
    )
    monkeypatch.setenv("CONFIG_PATH", str(config_path))

    clear_settings_cache()
    yield config_path
    clear_settings_cache()
    reset_app_state()
