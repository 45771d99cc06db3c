# This file provides shared helpers for API endpoint tests.
# It exists so every test gets a fresh app, with its own in-memory admin status, built from a known config.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from fastapi.testclient import TestClient

from exchangeapi.api.api_config import ApiConfig
from exchangeapi.api.app import create_app


def build_test_config(*, admin_status_message: str = "Exchange server operating normally") -> ApiConfig:
    """Create deterministic API config for tests."""

    return ApiConfig(
        api_name="Test Exchange API",
        api_version_path="/api/v1",
        schema_version="1.0.0",
        host="0.0.0.0",
        port=8000,
        environment="test",
        app_version="0.1.0",
        allowed_origins=[],
        admin_status_message=admin_status_message,
    )


@contextmanager
def api_test_client(*, config: ApiConfig | None = None) -> Iterator[TestClient]:
    """Yield a TestClient bound to a freshly created app."""

    app = create_app(config or build_test_config())
    with TestClient(app) as client:
        yield client
