"""MongoDB adapter — CacheRecord and its document codec.

Persisted shape::

    {_id: str, d: bytes, created_at: date, expires_at: date | null,
     t: [str, ...], hits: int}

``expires_at`` must be a BSON date for the TTL index to act on it; a
``null`` value exempts the record from automatic removal. BSON dates keep
millisecond precision, so microseconds below that are dropped on write.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tagcache.application.cache import Timestamp

FIELD_ID = "_id"
FIELD_DATA = "d"
FIELD_CREATED_AT = "created_at"
FIELD_EXPIRES_AT = "expires_at"
FIELD_TAGS = "t"
FIELD_HITS = "hits"


@dataclass(frozen=True)
class CacheRecord:
    """One cache entry as the backend sees it."""

    id: str
    data: bytes
    created_at: Timestamp
    expires_at: Timestamp | None
    tags: list[str] = field(default_factory=list)
    hits: int = 0

    @property
    def is_infinite(self) -> bool:
        return self.expires_at is None

    def is_valid_at(self, now: Timestamp) -> bool:
        return self.expires_at is None or self.expires_at >= now

    @classmethod
    def create(
        cls,
        id: str,
        data: bytes,
        tags: list[str],
        lifetime: int | None,
        now: Timestamp,
    ) -> "CacheRecord":
        """New record created at *now*; ``lifetime=None`` never expires."""
        return cls(
            id=id,
            data=data,
            created_at=now,
            expires_at=now.plus(lifetime) if lifetime else None,
            tags=list(tags),
        )


def encode_record(record: CacheRecord) -> dict[str, Any]:
    return {
        FIELD_ID: record.id,
        FIELD_DATA: record.data,
        FIELD_CREATED_AT: record.created_at.to_datetime(),
        FIELD_EXPIRES_AT: record.expires_at.to_datetime() if record.expires_at is not None else None,
        FIELD_TAGS: list(record.tags),
        FIELD_HITS: record.hits,
    }


def decode_record(doc: dict[str, Any]) -> CacheRecord:
    expires_at = doc.get(FIELD_EXPIRES_AT)
    return CacheRecord(
        id=doc[FIELD_ID],
        data=bytes(doc.get(FIELD_DATA, b"")),
        created_at=Timestamp.from_datetime(doc[FIELD_CREATED_AT]),
        expires_at=Timestamp.from_datetime(expires_at) if expires_at is not None else None,
        tags=list(doc.get(FIELD_TAGS) or []),
        hits=int(doc.get(FIELD_HITS, 0)),
    )


__all__ = [
    "FIELD_CREATED_AT",
    "FIELD_DATA",
    "FIELD_EXPIRES_AT",
    "FIELD_HITS",
    "FIELD_ID",
    "FIELD_TAGS",
    "CacheRecord",
    "decode_record",
    "encode_record",
]
