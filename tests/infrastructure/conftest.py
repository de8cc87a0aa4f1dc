"""Integration test fixtures — settings overrides and a recording httpx transport."""

import httpx
import pytest

from pvs_api.config import get_settings


@pytest.fixture
def configure(monkeypatch):
    """Set environment-backed settings for one test; cache cleared both ways."""
    def _configure(**values):
        for key, value in values.items():
            monkeypatch.setenv(key.upper(), str(value))
        get_settings.cache_clear()

    yield _configure
    get_settings.cache_clear()


@pytest.fixture
def mock_http():
    """Build an AsyncClient over MockTransport; requests land in .sent."""
    clients = []

    def _build(status_code=200, json=None, text=None):
        sent: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=json if json is not None else {})

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client.sent = sent
        clients.append(client)
        return client

    return _build
