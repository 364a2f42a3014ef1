"""
Test Fixtures Package

Shared test utilities and helpers for consistent testing across all modules.
"""

from .cache_factory import (
    CacheTestFactory,
    FailingDistributedCache,
    ManualClock,
    RecordingReporter,
)
from .upstream_factory import UpstreamStub, UpstreamTestFactory, raising

__all__ = [
    "CacheTestFactory",
    "FailingDistributedCache",
    "ManualClock",
    "RecordingReporter",
    "UpstreamStub",
    "UpstreamTestFactory",
    "raising",
]
