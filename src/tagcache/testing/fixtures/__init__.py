"""Testing fixtures – pytest fixtures for tagcache.

Import them into a ``conftest.py`` to enable them.
"""
import pytest

from tagcache.application.cache import InMemoryTaggedCacheBackend
from tagcache.testing.fakes import FakeClock, make_mock_collection


@pytest.fixture
def fake_clock():
    """Returns a FrozenClock pinned to 2026-01-01 12:00 UTC."""
    return FakeClock()


@pytest.fixture
def mock_collection():
    """Returns a MagicMock shaped like a motor collection."""
    return make_mock_collection()


@pytest.fixture
def memory_backend(fake_clock):
    """Returns an InMemoryTaggedCacheBackend driven by ``fake_clock``."""
    return InMemoryTaggedCacheBackend(clock=fake_clock)


__all__ = ["fake_clock", "memory_backend", "mock_collection"]
