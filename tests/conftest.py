"""
Pytest Configuration and Shared Test Fixtures

This module provides pytest configuration and reusable fixtures for all tests.
All fixtures defined here are automatically available to all test files.
"""

import os

import pytest

os.environ.setdefault("ENVIRONMENT", "test")

from hotel_search.core.config.settings import reload_settings  # noqa: E402
from hotel_search.core.interfaces.cache import InMemoryDistributedCache  # noqa: E402
from hotel_search.infrastructure.cache.options import CacheTTLPolicy  # noqa: E402
from hotel_search.rate_limiting import get_rate_limit_manager  # noqa: E402
from tests.test_fixtures import (  # noqa: E402
    CacheTestFactory,
    ManualClock,
    RecordingReporter,
    UpstreamTestFactory,
)


# ============================================================================
# Global State Isolation
# ============================================================================


@pytest.fixture(autouse=True)
def isolate_global_state():
    """
    Fresh settings and empty rate limit counters for every test.

    Settings and the rate limiter are process-wide; a test that patches
    the environment or burns through a limit must not leak into the next.
    """
    reload_settings()
    get_rate_limit_manager().reset()
    yield
    reload_settings()
    get_rate_limit_manager().reset()


# ============================================================================
# Cache Fixtures
# ============================================================================


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def tier2(clock):
    """Connected in-memory tier 2 sharing the test clock."""
    return InMemoryDistributedCache(clock=clock)


@pytest.fixture
async def cache_manager(tier2, clock, reporter):
    """CacheManager over a real MemoryTier and the in-memory tier 2."""
    manager = CacheTestFactory.manager(distributed_tier=tier2, clock=clock, reporter=reporter)
    await manager.initialize()
    yield manager
    await manager.shutdown()


@pytest.fixture
def ttl_policy():
    return CacheTTLPolicy()


# ============================================================================
# Upstream Fixtures
# ============================================================================


@pytest.fixture
def upstream():
    """Fake Booking.com API answering every known endpoint."""
    return UpstreamTestFactory.full_stub()


@pytest.fixture
async def booking_client(upstream):
    client = upstream.client()
    yield client
    await client.aclose()


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def london_search_params():
    """A valid hotel search: London, four nights."""
    return {
        "destId": "-2601889",
        "checkIn": "2024-05-01",
        "checkOut": "2024-05-05",
        "adults": "2",
        "rooms": "1",
    }
