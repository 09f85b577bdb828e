"""Testing – fakes and pytest fixtures for code that uses tagcache."""
from tagcache.testing.fakes import FAKE_NOW, AsyncCursor, FakeClock, make_mock_collection

__all__ = ["AsyncCursor", "FAKE_NOW", "FakeClock", "make_mock_collection"]
