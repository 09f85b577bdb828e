"""Application cache – TaggedCacheBackend protocol."""
from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from tagcache.application.cache.model import CacheCapabilities, CacheMetadata, Timestamp
from tagcache.application.cache.modes import CleaningMode

__all__ = ["TaggedCacheBackend"]


@runtime_checkable
class TaggedCacheBackend(Protocol):
    """Storage contract consumed by a caching frontend.

    Payloads are opaque bytes, already serialised by the frontend. Read and
    save paths never raise on store faults: they report a miss or ``False``.
    Invalidation paths raise so that the caller can react.
    """

    async def load(self, id: str, skip_validity: bool = False) -> bytes | None: ...
    async def test(self, id: str) -> Timestamp | None: ...
    async def save(
        self,
        data: bytes,
        id: str,
        tags: Iterable[str] | None = None,
        lifetime: int | None = None,
    ) -> bool: ...
    async def remove(self, id: str) -> bool: ...
    async def clean(
        self,
        mode: CleaningMode | str = CleaningMode.ALL,
        tags: Iterable[str] | str | None = None,
    ) -> bool: ...
    async def touch(self, id: str, extra_lifetime: int) -> bool: ...
    async def get_ids(self) -> list[str]: ...
    async def get_tags(self) -> list[str]: ...
    async def get_ids_matching_tags(self, tags: Iterable[str] | str | None = None) -> list[str]: ...
    async def get_ids_not_matching_tags(self, tags: Iterable[str] | str | None = None) -> list[str]: ...
    async def get_ids_matching_any_tags(self, tags: Iterable[str] | str | None = None) -> list[str]: ...
    async def get_metadatas(self, id: str) -> CacheMetadata | None: ...
    def get_filling_percentage(self) -> int: ...
    def get_capabilities(self) -> CacheCapabilities: ...
