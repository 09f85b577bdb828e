"""Unit tests for the backend-neutral cache contract and the in-memory backend."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import pytest

from tagcache.application.cache import (
    CacheCapabilities,
    CacheMetadata,
    CleaningMode,
    InMemoryTaggedCacheBackend,
    TaggedCacheBackend,
    Timestamp,
    normalize_tags,
    resolve_lifetime,
)
from tagcache.config.validation import InvalidCleaningModeError
from tagcache.kernel.errors import InvalidLifetimeError
from tagcache.kernel.time import FrozenClock

# ids -> tags; every combination the tag queries must tell apart
PARTITION_FIXTURE: dict[str, list[str]] = {
    "none": [],
    "only-a": ["a"],
    "only-b": ["b"],
    "a-and-b": ["a", "b"],
    "only-c": ["c"],
}


async def _populate(backend: InMemoryTaggedCacheBackend) -> None:
    for id, tags in PARTITION_FIXTURE.items():
        await backend.save(id.encode(), id, tags=tags)


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


class TestTimestamp:
    def test_from_aware_datetime(self) -> None:
        ts = Timestamp.from_datetime(datetime(1970, 1, 2, 0, 0, 1, 250, tzinfo=UTC))
        assert ts == Timestamp(86_401, 250)

    def test_naive_datetime_is_utc(self) -> None:
        naive = datetime(2026, 1, 1, 12, 0)
        aware = naive.replace(tzinfo=UTC)
        assert Timestamp.from_datetime(naive) == Timestamp.from_datetime(aware)

    def test_to_datetime_keeps_microseconds(self) -> None:
        value = datetime(2026, 3, 4, 5, 6, 7, 891_011, tzinfo=UTC)
        assert Timestamp.from_datetime(value).to_datetime() == value

    def test_ordering(self) -> None:
        assert Timestamp(10, 5) < Timestamp(10, 6) < Timestamp(11, 0)

    def test_plus_keeps_microseconds(self) -> None:
        assert Timestamp(10, 7).plus(5) == Timestamp(15, 7)

    def test_float(self) -> None:
        assert float(Timestamp(3, 500_000)) == 3.5

    def test_rejects_out_of_range_microseconds(self) -> None:
        with pytest.raises(ValueError):
            Timestamp(1, 1_000_000)


class TestResolveLifetime:
    def test_zero_is_infinite(self) -> None:
        assert resolve_lifetime(0) is None

    def test_none_uses_default(self) -> None:
        assert resolve_lifetime(None, default=60) == 60

    def test_none_with_zero_default_is_infinite(self) -> None:
        assert resolve_lifetime(None) is None

    def test_explicit_value(self) -> None:
        assert resolve_lifetime(30, default=60) == 30

    @pytest.mark.parametrize("bad", [-1, 1.5, "10", True])
    def test_rejects_invalid(self, bad: object) -> None:
        with pytest.raises(InvalidLifetimeError):
            resolve_lifetime(bad)  # type: ignore[arg-type]


class TestNormalizeTags:
    def test_none(self) -> None:
        assert normalize_tags(None) == []

    def test_single_string(self) -> None:
        assert normalize_tags("news") == ["news"]

    def test_iterable(self) -> None:
        assert normalize_tags(("a", "b")) == ["a", "b"]


class TestCleaningMode:
    @pytest.mark.parametrize(
        ("raw", "mode"),
        [
            ("all", CleaningMode.ALL),
            ("old", CleaningMode.OLD),
            ("matchingTag", CleaningMode.MATCHING_TAG),
            ("notMatchingTag", CleaningMode.NOT_MATCHING_TAG),
            ("matchingAnyTag", CleaningMode.MATCHING_ANY_TAG),
        ],
    )
    def test_parse_strings(self, raw: str, mode: CleaningMode) -> None:
        assert CleaningMode.parse(raw) is mode

    def test_parse_member(self) -> None:
        assert CleaningMode.parse(CleaningMode.OLD) is CleaningMode.OLD

    def test_unknown_mode_is_config_error(self) -> None:
        with pytest.raises(InvalidCleaningModeError):
            CleaningMode.parse("everything")


class TestCapabilities:
    def test_defaults(self) -> None:
        assert CacheCapabilities().to_dict() == {
            "automatic_cleaning": True,
            "tags": True,
            "expired_read": True,
            "priority": False,
            "infinite_lifetime": True,
            "get_list": True,
        }


# ---------------------------------------------------------------------------
# InMemoryTaggedCacheBackend
# ---------------------------------------------------------------------------


class TestInMemoryBackendBasics:
    def test_satisfies_protocol(self, memory_backend: InMemoryTaggedCacheBackend) -> None:
        assert isinstance(memory_backend, TaggedCacheBackend)

    def test_unknown_id_is_not_found(self, memory_backend: InMemoryTaggedCacheBackend) -> None:
        async def run() -> None:
            assert await memory_backend.load("ghost") is None
            assert await memory_backend.test("ghost") is None
            assert await memory_backend.get_metadatas("ghost") is None

        asyncio.run(run())

    def test_round_trip(self, memory_backend: InMemoryTaggedCacheBackend) -> None:
        payload = bytes(range(256))

        async def run() -> bytes | None:
            assert await memory_backend.save(payload, "blob", tags=["bin"], lifetime=60)
            return await memory_backend.load("blob")

        assert asyncio.run(run()) == payload

    def test_test_returns_creation_time(
        self, memory_backend: InMemoryTaggedCacheBackend, fake_clock: FrozenClock
    ) -> None:
        async def run() -> Timestamp | None:
            await memory_backend.save(b"x", "k")
            return await memory_backend.test("k")

        assert asyncio.run(run()) == Timestamp.from_datetime(fake_clock.now())

    def test_infinite_lifetime_survives_time(
        self, memory_backend: InMemoryTaggedCacheBackend, fake_clock: FrozenClock
    ) -> None:
        async def run() -> bytes | None:
            await memory_backend.save(b"forever", "k", lifetime=0)
            fake_clock.advance(days=3650)
            await memory_backend.sweep_expired()
            return await memory_backend.load("k")

        assert asyncio.run(run()) == b"forever"

    def test_expired_entry_is_a_miss_unless_validity_skipped(
        self, memory_backend: InMemoryTaggedCacheBackend, fake_clock: FrozenClock
    ) -> None:
        async def run() -> tuple[bytes | None, bytes | None]:
            await memory_backend.save(b"short", "k", lifetime=1)
            fake_clock.advance(seconds=2)
            return await memory_backend.load("k"), await memory_backend.load("k", skip_validity=True)

        assert asyncio.run(run()) == (None, b"short")

    def test_entry_valid_at_exact_expiry(
        self, memory_backend: InMemoryTaggedCacheBackend, fake_clock: FrozenClock
    ) -> None:
        async def run() -> bytes | None:
            await memory_backend.save(b"edge", "k", lifetime=5)
            fake_clock.advance(seconds=5)
            return await memory_backend.load("k")

        assert asyncio.run(run()) == b"edge"

    def test_default_lifetime(self, fake_clock: FrozenClock) -> None:
        backend = InMemoryTaggedCacheBackend(clock=fake_clock, default_lifetime=30)

        async def run() -> CacheMetadata | None:
            await backend.save(b"x", "k")
            return await backend.get_metadatas("k")

        meta = asyncio.run(run())
        assert meta is not None
        assert meta.expire == meta.mtime.plus(30)

    def test_negative_lifetime_rejected(self, memory_backend: InMemoryTaggedCacheBackend) -> None:
        with pytest.raises(InvalidLifetimeError):
            asyncio.run(memory_backend.save(b"x", "k", lifetime=-1))

    def test_resave_replaces_tags_and_resets_hits(self, fake_clock: FrozenClock) -> None:
        backend = InMemoryTaggedCacheBackend(clock=fake_clock, increment_hit_counter=True)

        async def run() -> tuple[int, CacheMetadata | None]:
            await backend.save(b"v1", "k", tags=["old", "shared"])
            await backend.load("k")
            await backend.load("k")
            before = await backend.get_metadatas("k")
            await backend.save(b"v2", "k", tags=["new"])
            return before.hits if before else -1, await backend.get_metadatas("k")

        hits_before, after = asyncio.run(run())
        assert hits_before == 2
        assert after is not None
        assert after.hits == 0
        assert after.tags == ["new"]

    def test_remove(self, memory_backend: InMemoryTaggedCacheBackend) -> None:
        async def run() -> bytes | None:
            await memory_backend.save(b"x", "k")
            assert await memory_backend.remove("k") is True
            return await memory_backend.load("k")

        assert asyncio.run(run()) is None

    def test_metadata(
        self, memory_backend: InMemoryTaggedCacheBackend, fake_clock: FrozenClock
    ) -> None:
        async def run() -> CacheMetadata | None:
            await memory_backend.save(b"x", "k", tags=["a", "b"], lifetime=100)
            return await memory_backend.get_metadatas("k")

        meta = asyncio.run(run())
        now = Timestamp.from_datetime(fake_clock.now())
        assert meta == CacheMetadata(expire=now.plus(100), tags=["a", "b"], mtime=now)

    def test_static_reports(self, memory_backend: InMemoryTaggedCacheBackend) -> None:
        assert memory_backend.get_filling_percentage() == 1
        assert memory_backend.get_capabilities().automatic_cleaning is False


class TestInMemoryBackendTags:
    def _ids(self, memory_backend: InMemoryTaggedCacheBackend, method: str, tags: list[str]) -> set[str]:
        async def run() -> list[str]:
            await _populate(memory_backend)
            return await getattr(memory_backend, method)(tags)

        return set(asyncio.run(run()))

    def test_matching_all(self, memory_backend: InMemoryTaggedCacheBackend) -> None:
        assert self._ids(memory_backend, "get_ids_matching_tags", ["a", "b"]) == {"a-and-b"}

    def test_matching_any(self, memory_backend: InMemoryTaggedCacheBackend) -> None:
        assert self._ids(memory_backend, "get_ids_matching_any_tags", ["a", "b"]) == {
            "only-a",
            "only-b",
            "a-and-b",
        }

    def test_not_matching(self, memory_backend: InMemoryTaggedCacheBackend) -> None:
        assert self._ids(memory_backend, "get_ids_not_matching_tags", ["a", "b"]) == {"none", "only-c"}

    def test_any_and_not_partition_all_ids(self, memory_backend: InMemoryTaggedCacheBackend) -> None:
        async def run() -> tuple[list[str], list[str], list[str]]:
            await _populate(memory_backend)
            return (
                await memory_backend.get_ids(),
                await memory_backend.get_ids_matching_any_tags(["a", "b"]),
                await memory_backend.get_ids_not_matching_tags(["a", "b"]),
            )

        all_ids, any_ids, not_ids = asyncio.run(run())
        assert set(any_ids).isdisjoint(not_ids)
        assert set(any_ids) | set(not_ids) == set(all_ids) == set(PARTITION_FIXTURE)

    def test_empty_tag_list(self, memory_backend: InMemoryTaggedCacheBackend) -> None:
        assert self._ids(memory_backend, "get_ids_matching_tags", []) == set()
        assert self._ids(memory_backend, "get_ids_not_matching_tags", []) == set(PARTITION_FIXTURE)

    def test_single_string_tag(self, memory_backend: InMemoryTaggedCacheBackend) -> None:
        async def run() -> list[str]:
            await _populate(memory_backend)
            return await memory_backend.get_ids_matching_tags("c")

        assert asyncio.run(run()) == ["only-c"]

    def test_get_tags_distinct(self, memory_backend: InMemoryTaggedCacheBackend) -> None:
        async def run() -> list[str]:
            await memory_backend.save(b"1", "one", tags=["a", "b"])
            await memory_backend.save(b"2", "two", tags=["b", "c", "c"])
            return await memory_backend.get_tags()

        assert asyncio.run(run()) == ["a", "b", "c"]


class TestInMemoryBackendClean:
    @pytest.mark.parametrize(
        ("mode", "tags", "survivors"),
        [
            (CleaningMode.ALL, [], set()),
            (CleaningMode.MATCHING_TAG, ["a", "b"], set(PARTITION_FIXTURE) - {"a-and-b"}),
            (CleaningMode.NOT_MATCHING_TAG, ["a", "b"], {"only-a", "only-b", "a-and-b"}),
            (CleaningMode.MATCHING_ANY_TAG, ["a", "b"], {"none", "only-c"}),
        ],
    )
    def test_tag_modes(
        self,
        memory_backend: InMemoryTaggedCacheBackend,
        mode: CleaningMode,
        tags: list[str],
        survivors: set[str],
    ) -> None:
        async def run() -> list[str]:
            await _populate(memory_backend)
            assert await memory_backend.clean(mode, tags) is True
            return await memory_backend.get_ids()

        assert set(asyncio.run(run())) == survivors

    def test_old_removes_only_past_records(
        self, memory_backend: InMemoryTaggedCacheBackend, fake_clock: FrozenClock
    ) -> None:
        async def run() -> list[str]:
            await memory_backend.save(b"x", "expired", lifetime=10)
            await memory_backend.save(b"x", "future", lifetime=1000)
            await memory_backend.save(b"x", "infinite", lifetime=0)
            fake_clock.advance(seconds=11)
            await memory_backend.clean("old")
            return await memory_backend.get_ids()

        assert set(asyncio.run(run())) == {"future", "infinite"}

    def test_invalid_mode(self, memory_backend: InMemoryTaggedCacheBackend) -> None:
        with pytest.raises(InvalidCleaningModeError):
            asyncio.run(memory_backend.clean("bogus"))

    def test_sweep_expired_counts(
        self, memory_backend: InMemoryTaggedCacheBackend, fake_clock: FrozenClock
    ) -> None:
        async def run() -> int:
            await memory_backend.save(b"x", "a", lifetime=1)
            await memory_backend.save(b"x", "b", lifetime=1)
            await memory_backend.save(b"x", "c", lifetime=0)
            fake_clock.advance(seconds=2)
            return await memory_backend.sweep_expired()

        assert asyncio.run(run()) == 2


class TestInMemoryBackendTouch:
    def test_extends_from_current_expiry(
        self, memory_backend: InMemoryTaggedCacheBackend, fake_clock: FrozenClock
    ) -> None:
        async def run() -> tuple[CacheMetadata | None, CacheMetadata | None]:
            await memory_backend.save(b"x", "k", tags=["t"], lifetime=100)
            before = await memory_backend.get_metadatas("k")
            fake_clock.advance(seconds=40)
            assert await memory_backend.touch("k", 50) is True
            return before, await memory_backend.get_metadatas("k")

        before, after = asyncio.run(run())
        assert before is not None and after is not None
        assert after.expire == before.expire.plus(50)  # type: ignore[union-attr]
        assert after.tags == ["t"]

    def test_infinite_record_not_touched(self, memory_backend: InMemoryTaggedCacheBackend) -> None:
        async def run() -> bool:
            await memory_backend.save(b"x", "k", lifetime=0)
            return await memory_backend.touch("k", 10)

        assert asyncio.run(run()) is False

    def test_expired_record_not_touched(
        self, memory_backend: InMemoryTaggedCacheBackend, fake_clock: FrozenClock
    ) -> None:
        async def run() -> bool:
            await memory_backend.save(b"x", "k", lifetime=5)
            fake_clock.advance(seconds=5)
            return await memory_backend.touch("k", 10)

        assert asyncio.run(run()) is False

    def test_absent_record_not_touched(self, memory_backend: InMemoryTaggedCacheBackend) -> None:
        assert asyncio.run(memory_backend.touch("ghost", 10)) is False

    def test_expire_helper(self, memory_backend: InMemoryTaggedCacheBackend) -> None:
        async def run() -> tuple[bytes | None, bytes | None]:
            await memory_backend.save(b"x", "k", lifetime=0)
            await memory_backend.expire("k")
            return await memory_backend.load("k"), await memory_backend.load("k", skip_validity=True)

        assert asyncio.run(run()) == (None, b"x")

    def test_drop(self, memory_backend: InMemoryTaggedCacheBackend) -> None:
        async def run() -> list[str]:
            await _populate(memory_backend)
            await memory_backend.drop()
            return await memory_backend.get_ids()

        assert asyncio.run(run()) == []
