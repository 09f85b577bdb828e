"""Testing fakes – clock and collection doubles."""
from tagcache.testing.fakes.clock import FAKE_NOW, FakeClock
from tagcache.testing.fakes.collection import AsyncCursor, make_mock_collection

__all__ = ["AsyncCursor", "FAKE_NOW", "FakeClock", "make_mock_collection"]
