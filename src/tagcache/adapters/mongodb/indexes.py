"""MongoDB adapter — lazy index creation for the cache collection."""

from __future__ import annotations

from typing import Any

from pymongo import ASCENDING

from tagcache.adapters.mongodb.codec import FIELD_EXPIRES_AT, FIELD_TAGS
from tagcache.observability.logging import get_logger

_log = get_logger(__name__)


class IndexManager:
    """Ensures the tag and TTL indexes exist, once per instance.

    Only write paths call :meth:`ensure`; reads never pay for index
    creation. The guard is process-local: several instances may each
    issue the same ``createIndexes`` request, which MongoDB treats as a
    no-op when the index already exists.

    Indexes:

    - ``t`` ascending, built in the background, for tag set queries.
    - ``expires_at`` ascending with ``expireAfterSeconds=0``: the TTL
      monitor deletes a record as soon as its ``expires_at`` is in the
      past. Records with a ``null`` expiry are never removed by it.
    """

    def __init__(self, collection: Any) -> None:
        self._col = collection
        self._ensured = False

    @property
    def ensured(self) -> bool:
        return self._ensured

    async def ensure(self) -> None:
        if self._ensured:
            return
        await self._col.create_index([(FIELD_TAGS, ASCENDING)], background=True)
        await self._col.create_index(
            [(FIELD_EXPIRES_AT, ASCENDING)],
            background=True,
            expireAfterSeconds=0,
        )
        self._ensured = True
        _log.info("cache.indexes_ensured", collection=getattr(self._col, "name", None))


__all__ = ["IndexManager"]
