"""
Unit Tests for Rate Limiting

Tests per-family limits, client identification and the 429 envelope.
Limits are read from settings on every request, so tests shrink them
through the environment.
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from hotel_search.application.app import create_app
from hotel_search.application.services import HotelSearchService
from hotel_search.core.config.settings import reload_settings
from hotel_search.rate_limiting import get_client_identifier, get_rate_limit_manager
from tests.test_fixtures import CacheTestFactory, UpstreamTestFactory

BASE = "/api/v1/booking"


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("RATE_LIMIT_DETAILS", "2/minute")
    monkeypatch.setenv("RATE_LIMIT_SEARCH", "1/minute")
    reload_settings()

    manager = CacheTestFactory.manager()
    app = create_app()
    app.state.cache_manager = manager
    app.state.search_service = HotelSearchService(manager, UpstreamTestFactory.full_stub().client())
    return TestClient(app)


@pytest.mark.unit
class TestRateLimits:
    def test_limit_exceeded_returns_429_envelope(self, client):
        assert client.get(f"{BASE}/hotels/1001").status_code == 200
        assert client.get(f"{BASE}/hotels/1001").status_code == 200

        response = client.get(f"{BASE}/hotels/1001")

        assert response.status_code == 429
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Too many requests, please try again later."
        assert body["retry_after"] == 60
        assert response.headers["Retry-After"] == "60"

    def test_families_are_limited_separately(self, client):
        assert client.get(f"{BASE}/locations", params={"query": "London"}).status_code == 200
        assert client.get(f"{BASE}/locations", params={"query": "London"}).status_code == 429

        assert client.get(f"{BASE}/hotels/1001").status_code == 200

    def test_api_keys_have_separate_buckets(self, client):
        first = {"X-API-Key": "partner-a"}
        second = {"X-API-Key": "partner-b"}

        assert client.get(f"{BASE}/locations", params={"query": "Paris"}, headers=first).status_code == 200
        assert client.get(f"{BASE}/locations", params={"query": "Paris"}, headers=first).status_code == 429
        assert client.get(f"{BASE}/locations", params={"query": "Paris"}, headers=second).status_code == 200

    def test_rejected_requests_do_not_reach_upstream(self, client):
        client.get(f"{BASE}/locations", params={"query": "Rome"})
        client.get(f"{BASE}/locations", params={"query": "Rome"})

        stats = client.app.state.search_service.cache_statistics()
        assert stats.misses == 1

    def test_disabled_limiter(self, monkeypatch):
        monkeypatch.setenv("RATE_LIMIT_SEARCH", "1/minute")
        monkeypatch.setenv("RATE_LIMIT_ENABLED", "false")
        reload_settings()
        manager = CacheTestFactory.manager()
        app = create_app()
        app.state.search_service = HotelSearchService(manager, UpstreamTestFactory.full_stub().client())
        client = TestClient(app)

        try:
            for _ in range(3):
                assert client.get(f"{BASE}/locations", params={"query": "Oslo"}).status_code == 200
        finally:
            get_rate_limit_manager().limiter.enabled = True


@pytest.mark.unit
class TestClientIdentifier:
    def test_api_key_preferred(self):
        request = MagicMock()
        request.headers = {"X-API-Key": "partner-a"}

        assert get_client_identifier(request) == "key:partner-a"

    def test_falls_back_to_ip(self):
        request = MagicMock()
        request.headers = {}
        request.client.host = "203.0.113.7"

        assert get_client_identifier(request) == "ip:203.0.113.7"
