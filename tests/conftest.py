"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from codeshield.gateway.client import AIGateway
from codeshield.notifications import NotificationBus


@pytest.fixture(autouse=True)
def _mock_settings(monkeypatch):
    """Provide default settings for all tests."""
    monkeypatch.setenv("CODESHIELD_GATEWAY_URL", "http://mock-gateway:3400")
    monkeypatch.setenv("CODESHIELD_LOG_JSON", "false")
    monkeypatch.setenv("CODESHIELD_LOG_LEVEL", "debug")

    # Reset cached module state
    import codeshield.api.deps as deps
    import codeshield.config.loader as loader
    import codeshield.gateway.client as gateway_client
    loader._settings = None
    gateway_client._gateway = None
    deps.reset_session_store()
    yield
    loader._settings = None
    gateway_client._gateway = None
    deps.reset_session_store()


@pytest.fixture
def gateway():
    """AIGateway double; every coroutine method is an AsyncMock."""
    mock = AsyncMock(spec=AIGateway)
    mock.ping.return_value = True
    return mock


@pytest.fixture
def notifications():
    return NotificationBus(limit=5, ttl_seconds=8.0)


@pytest.fixture
def client(gateway):
    """FastAPI test client wired to the gateway double."""
    with (
        patch("codeshield.main.init_gateway", return_value=gateway),
        patch("codeshield.main.close_gateway", new_callable=AsyncMock),
        patch("codeshield.api.deps.get_gateway", return_value=gateway),
        patch("codeshield.health.get_gateway", return_value=gateway),
    ):
        from codeshield.main import app
        with TestClient(app, raise_server_exceptions=False) as c:
            yield c
