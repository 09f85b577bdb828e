"""Application cache – InMemoryTaggedCacheBackend."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from tagcache.application.cache.model import (
    CacheCapabilities,
    CacheMetadata,
    Timestamp,
    normalize_tags,
    resolve_lifetime,
)
from tagcache.application.cache.modes import CleaningMode
from tagcache.kernel.errors import InvalidLifetimeError
from tagcache.kernel.time import Clock, SystemClock

__all__ = ["InMemoryTaggedCacheBackend"]


@dataclass
class _Entry:
    data: bytes
    created_at: Timestamp
    expires_at: Timestamp | None
    tags: list[str] = field(default_factory=list)
    hits: int = 0


class InMemoryTaggedCacheBackend:
    """Process-local backend with the same semantics as the MongoDB one.

    There is no background expiry here: expired entries stay readable with
    ``skip_validity=True`` until :meth:`sweep_expired` (or ``clean(OLD)``)
    removes them. Intended for unit tests and single-process tools.
    """

    def __init__(
        self,
        *,
        clock: Clock | None = None,
        default_lifetime: int = 0,
        increment_hit_counter: bool = False,
    ) -> None:
        self._clock = clock or SystemClock()
        self._default_lifetime = default_lifetime
        self._increment_hit_counter = increment_hit_counter
        self._entries: dict[str, _Entry] = {}

    def _now(self) -> Timestamp:
        return Timestamp.from_datetime(self._clock.now())

    def _select(self, mode: CleaningMode, tags: list[str]) -> list[str]:
        wanted = set(tags)
        now = self._now()
        ids: list[str] = []
        for id, entry in self._entries.items():
            have = set(entry.tags)
            if mode is CleaningMode.ALL:
                hit = True
            elif mode is CleaningMode.OLD:
                hit = entry.expires_at is not None and entry.expires_at < now
            elif mode is CleaningMode.MATCHING_TAG:
                hit = bool(wanted) and wanted <= have
            elif mode is CleaningMode.NOT_MATCHING_TAG:
                hit = not (wanted & have)
            else:
                hit = bool(wanted & have)
            if hit:
                ids.append(id)
        return ids

    async def load(self, id: str, skip_validity: bool = False) -> bytes | None:
        entry = self._entries.get(id)
        if entry is None:
            return None
        if self._increment_hit_counter:
            entry.hits += 1
        if skip_validity or entry.expires_at is None or entry.expires_at >= self._now():
            return entry.data
        return None

    async def test(self, id: str) -> Timestamp | None:
        entry = self._entries.get(id)
        return entry.created_at if entry is not None else None

    async def save(
        self,
        data: bytes,
        id: str,
        tags: Iterable[str] | None = None,
        lifetime: int | None = None,
    ) -> bool:
        seconds = resolve_lifetime(lifetime, self._default_lifetime)
        now = self._now()
        self._entries[id] = _Entry(
            data=data,
            created_at=now,
            expires_at=now.plus(seconds) if seconds else None,
            tags=normalize_tags(tags),
        )
        return True

    async def remove(self, id: str) -> bool:
        self._entries.pop(id, None)
        return True

    async def clean(
        self,
        mode: CleaningMode | str = CleaningMode.ALL,
        tags: Iterable[str] | str | None = None,
    ) -> bool:
        for id in self._select(CleaningMode.parse(mode), normalize_tags(tags)):
            del self._entries[id]
        return True

    async def sweep_expired(self) -> int:
        """Delete entries whose expiry has passed; returns how many went."""
        ids = self._select(CleaningMode.OLD, [])
        for id in ids:
            del self._entries[id]
        return len(ids)

    async def touch(self, id: str, extra_lifetime: int) -> bool:
        if extra_lifetime < 0:
            raise InvalidLifetimeError(extra_lifetime)
        entry = self._entries.get(id)
        now = self._now()
        if entry is None or entry.expires_at is None or not entry.expires_at > now:
            return False
        self._entries[id] = _Entry(
            data=entry.data,
            created_at=now,
            expires_at=entry.expires_at.plus(extra_lifetime),
            tags=list(entry.tags),
        )
        return True

    async def expire(self, id: str) -> None:
        entry = self._entries.get(id)
        if entry is not None:
            entry.expires_at = Timestamp(3600 * 24 * 7)

    async def drop(self) -> None:
        self._entries.clear()

    async def get_ids(self) -> list[str]:
        return list(self._entries)

    async def get_tags(self) -> list[str]:
        return sorted({tag for entry in self._entries.values() for tag in entry.tags})

    async def get_ids_matching_tags(self, tags: Iterable[str] | str | None = None) -> list[str]:
        return self._select(CleaningMode.MATCHING_TAG, normalize_tags(tags))

    async def get_ids_not_matching_tags(self, tags: Iterable[str] | str | None = None) -> list[str]:
        return self._select(CleaningMode.NOT_MATCHING_TAG, normalize_tags(tags))

    async def get_ids_matching_any_tags(self, tags: Iterable[str] | str | None = None) -> list[str]:
        return self._select(CleaningMode.MATCHING_ANY_TAG, normalize_tags(tags))

    async def get_metadatas(self, id: str) -> CacheMetadata | None:
        entry = self._entries.get(id)
        if entry is None:
            return None
        return CacheMetadata(
            expire=entry.expires_at,
            tags=list(entry.tags),
            mtime=entry.created_at,
            hits=entry.hits,
        )

    def get_filling_percentage(self) -> int:
        return 1

    def get_capabilities(self) -> CacheCapabilities:
        # Expiry needs sweep_expired() here, unlike the TTL-indexed store.
        return CacheCapabilities(automatic_cleaning=False)
