"""MongoDB adapter — MongoTaggedCacheBackend."""

from __future__ import annotations

from collections.abc import Awaitable, Iterable
from typing import Any, TypeVar

from pymongo.errors import PyMongoError

from tagcache.adapters.mongodb.client import open_collection
from tagcache.adapters.mongodb.codec import (
    FIELD_EXPIRES_AT,
    FIELD_HITS,
    FIELD_ID,
    FIELD_TAGS,
    CacheRecord,
    decode_record,
    encode_record,
)
from tagcache.adapters.mongodb.indexes import IndexManager
from tagcache.adapters.mongodb.query import clean_filter, tag_filter
from tagcache.application.cache import (
    CacheCapabilities,
    CacheMetadata,
    CleaningMode,
    Timestamp,
    normalize_tags,
    resolve_lifetime,
)
from tagcache.config import EnvSettingsLoader, MongoCacheSettings, SettingsLoader
from tagcache.kernel.errors import CacheStoreError, InvalidLifetimeError
from tagcache.kernel.time import Clock, SystemClock
from tagcache.kernel.types import Err, Ok, Result
from tagcache.observability.logging import get_logger

T = TypeVar("T")

_log = get_logger(__name__)

# A week after the epoch: far enough in the past for any validity check.
_DEEP_PAST = Timestamp(3600 * 24 * 7)


class MongoTaggedCacheBackend:
    """Tag-aware cache backend stored in a single MongoDB collection.

    Expiry is delegated to MongoDB's TTL monitor through an index on
    ``expires_at``; this class never sweeps. Between the moment a record
    expires and the moment the monitor deletes it, ``load`` reports a miss
    unless ``skip_validity`` is set.

    Error handling follows three rules:

    - ``load``, ``test``, ``save`` and ``remove`` log store faults and
      return ``None`` / ``False``.
    - ``clean``, ``touch``, ``expire``, ``drop``, the listing operations and
      ``get_metadatas`` log driver faults and raise :class:`CacheStoreError`.
    - An unknown cleaning mode or a negative lifetime raises before any
      store call.

    Usage::

        backend = MongoTaggedCacheBackend(settings=MongoCacheSettings(dbname="app"))
        await backend.save(b"payload", "user:42", tags=["user"], lifetime=300)
        await backend.clean(CleaningMode.MATCHING_TAG, ["user"])
    """

    def __init__(
        self,
        collection: Any = None,
        *,
        settings: MongoCacheSettings | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._settings = settings or MongoCacheSettings()
        self._col = collection if collection is not None else open_collection(self._settings)
        self._indexes = IndexManager(self._col)
        self._clock = clock or SystemClock()

    @classmethod
    def from_env(
        cls,
        collection: Any = None,
        *,
        loader: SettingsLoader | None = None,
        clock: Clock | None = None,
    ) -> "MongoTaggedCacheBackend":
        """Build a backend from ``TAGCACHE_*`` environment variables."""
        settings = (loader or EnvSettingsLoader()).load(MongoCacheSettings)
        return cls(collection, settings=settings, clock=clock)

    @property
    def collection(self) -> Any:
        return self._col

    @property
    def settings(self) -> MongoCacheSettings:
        return self._settings

    @property
    def indexes_ensured(self) -> bool:
        return self._indexes.ensured

    # ------------------------------------------------------------------
    # Fault handling
    # ------------------------------------------------------------------

    async def _attempt(self, operation: str, call: Awaitable[T], **context: Any) -> Result[T, Exception]:
        """Await *call*; any fault becomes ``Err`` and a warning line."""
        try:
            return Ok(await call)
        except Exception as exc:  # noqa: BLE001 – faults on this path are reported as misses
            _log.warning("cache.operation_failed", operation=operation, error=repr(exc), **context)
            return Err(exc)

    async def _call(self, operation: str, call: Awaitable[T], **context: Any) -> T:
        """Await *call*; driver faults are raised as :class:`CacheStoreError`."""
        try:
            return await call
        except PyMongoError as exc:
            _log.error("cache.operation_failed", operation=operation, error=repr(exc), **context)
            raise CacheStoreError(operation, detail=context, cause=exc) from exc

    # ------------------------------------------------------------------
    # Store primitives
    # ------------------------------------------------------------------

    def _now(self) -> Timestamp:
        return Timestamp.from_datetime(self._clock.now())

    async def _get(self, id: str, increment_hit_counter: bool = False) -> CacheRecord | None:
        if increment_hit_counter:
            doc = await self._col.find_one_and_update({FIELD_ID: id}, {"$inc": {FIELD_HITS: 1}})
        else:
            doc = await self._col.find_one({FIELD_ID: id})
        return decode_record(doc) if doc is not None else None

    async def _write(self, record: CacheRecord) -> bool:
        await self._indexes.ensure()
        result = await self._col.replace_one({FIELD_ID: record.id}, encode_record(record), upsert=True)
        return bool(result.acknowledged)

    async def _delete_one(self, id: str) -> bool:
        await self._indexes.ensure()
        result = await self._col.delete_one({FIELD_ID: id})
        return bool(result.acknowledged)

    async def _delete_many(self, query: dict[str, Any]) -> bool:
        await self._indexes.ensure()
        result = await self._col.delete_many(query)
        return bool(result.acknowledged)

    async def _ids(self, query: dict[str, Any]) -> list[str]:
        cursor = self._col.find(query, {FIELD_ID: 1})
        return [doc[FIELD_ID] async for doc in cursor]

    async def _distinct_tags(self) -> list[str]:
        # distinct() unwinds the array field, one value per tag.
        return sorted(await self._col.distinct(FIELD_TAGS))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def load(self, id: str, skip_validity: bool = False) -> bytes | None:
        """Return the payload for *id*, or ``None`` on miss, expiry or fault."""
        found = await self._attempt(
            "load",
            self._get(id, self._settings.increment_hit_counter),
            cache_id=id,
        )
        record = found.unwrap_or(None)
        if record is None:
            return None
        if skip_validity or record.is_valid_at(self._now()):
            return record.data
        return None

    async def test(self, id: str) -> Timestamp | None:
        """Creation time of *id* if a record exists, expired or not."""
        found = await self._attempt("test", self._get(id), cache_id=id)
        record = found.unwrap_or(None)
        return record.created_at if record is not None else None

    async def get_metadatas(self, id: str) -> CacheMetadata | None:
        record = await self._call("get_metadatas", self._get(id), cache_id=id)
        if record is None:
            return None
        return CacheMetadata(
            expire=record.expires_at,
            tags=list(record.tags),
            mtime=record.created_at,
            hits=record.hits,
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def save(
        self,
        data: bytes,
        id: str,
        tags: Iterable[str] | None = None,
        lifetime: int | None = None,
    ) -> bool:
        """Store *data* under *id*, replacing any previous record in full.

        ``lifetime`` is in seconds; ``None`` uses the configured default and
        ``0`` stores the record without expiry. The hit counter restarts at 0.
        """
        seconds = resolve_lifetime(lifetime, self._settings.default_lifetime)
        record = CacheRecord.create(id, data, normalize_tags(tags), seconds, self._now())
        written = await self._attempt("save", self._write(record), cache_id=id)
        return written.unwrap_or(False)

    async def remove(self, id: str) -> bool:
        removed = await self._attempt("remove", self._delete_one(id), cache_id=id)
        return removed.unwrap_or(False)

    async def clean(
        self,
        mode: CleaningMode | str = CleaningMode.ALL,
        tags: Iterable[str] | str | None = None,
    ) -> bool:
        """Bulk removal.

        ``ALL`` removes everything, ``OLD`` removes records already past
        their expiry, and the tag modes remove records whose tag set
        contains all (``MATCHING_TAG``), none (``NOT_MATCHING_TAG``) or at
        least one (``MATCHING_ANY_TAG``) of *tags*.
        """
        mode = CleaningMode.parse(mode)
        query = clean_filter(mode, normalize_tags(tags), self._clock.now())
        return await self._call("clean", self._delete_many(query), mode=mode.value)

    async def touch(self, id: str, extra_lifetime: int) -> bool:
        """Push the expiry of a live, finite record *extra_lifetime* seconds further.

        The new expiry is counted from the record's current expiry, not from
        now. Absent, infinite and already expired records are left alone and
        ``False`` is returned.
        """
        if extra_lifetime < 0:
            raise InvalidLifetimeError(extra_lifetime)
        record = await self._call("touch", self._get(id), cache_id=id)
        now = self._now()
        if record is None or record.expires_at is None or not record.expires_at > now:
            return False
        touched = CacheRecord(
            id=id,
            data=record.data,
            created_at=now,
            expires_at=record.expires_at.plus(extra_lifetime),
            tags=list(record.tags),
        )
        return await self._call("touch", self._write(touched), cache_id=id)

    async def expire(self, id: str) -> None:
        """Move the expiry of *id* into the distant past.

        The record stays readable with ``skip_validity`` until the TTL
        monitor picks it up. Mostly useful in tests.
        """
        await self._call(
            "expire",
            self._col.update_one({FIELD_ID: id}, {"$set": {FIELD_EXPIRES_AT: _DEEP_PAST.to_datetime()}}),
            cache_id=id,
        )

    async def drop(self) -> None:
        """Drop the whole collection, indexes included."""
        await self._call("drop", self._col.drop())

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    async def get_ids(self) -> list[str]:
        return await self._call("get_ids", self._ids({}))

    async def get_tags(self) -> list[str]:
        return await self._call("get_tags", self._distinct_tags())

    async def get_ids_matching_tags(self, tags: Iterable[str] | str | None = None) -> list[str]:
        """Ids whose tag set contains every tag in *tags*."""
        query = tag_filter(CleaningMode.MATCHING_TAG, normalize_tags(tags))
        return await self._call("get_ids_matching_tags", self._ids(query))

    async def get_ids_not_matching_tags(self, tags: Iterable[str] | str | None = None) -> list[str]:
        """Ids whose tag set contains none of *tags*."""
        query = tag_filter(CleaningMode.NOT_MATCHING_TAG, normalize_tags(tags))
        return await self._call("get_ids_not_matching_tags", self._ids(query))

    async def get_ids_matching_any_tags(self, tags: Iterable[str] | str | None = None) -> list[str]:
        """Ids whose tag set contains at least one of *tags*."""
        query = tag_filter(CleaningMode.MATCHING_ANY_TAG, normalize_tags(tags))
        return await self._call("get_ids_matching_any_tags", self._ids(query))

    # ------------------------------------------------------------------
    # Static reports
    # ------------------------------------------------------------------

    def get_filling_percentage(self) -> int:
        # MongoDB gives no cheap way to relate collection size to a quota.
        return 1

    def get_capabilities(self) -> CacheCapabilities:
        return CacheCapabilities()


__all__ = ["MongoTaggedCacheBackend"]
