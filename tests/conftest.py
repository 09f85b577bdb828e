"""Shared pytest fixtures."""

from tagcache.testing.fixtures import fake_clock, memory_backend, mock_collection  # noqa: F401
