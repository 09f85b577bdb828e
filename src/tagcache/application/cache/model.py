"""Application cache – value types shared by every backend."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass
from datetime import UTC, datetime, timedelta

from tagcache.kernel.errors import InvalidLifetimeError

__all__ = [
    "CacheCapabilities",
    "CacheMetadata",
    "Timestamp",
    "normalize_tags",
    "resolve_lifetime",
]

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


@dataclass(frozen=True, order=True)
class Timestamp:
    """Instant as whole seconds since the epoch plus microseconds.

    Kept as two integers so that no precision is lost to float rounding
    when a record's timestamps are compared or extended.
    """

    sec: int
    usec: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.usec < 1_000_000:
            raise ValueError(f"usec must be in [0, 1000000), got {self.usec}")

    @classmethod
    def from_datetime(cls, value: datetime) -> "Timestamp":
        # BSON dates come back naive unless the client is tz-aware; they are UTC.
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        delta = value - _EPOCH
        return cls(delta.days * 86_400 + delta.seconds, delta.microseconds)

    def to_datetime(self) -> datetime:
        return _EPOCH + timedelta(seconds=self.sec, microseconds=self.usec)

    def plus(self, seconds: int) -> "Timestamp":
        return Timestamp(self.sec + seconds, self.usec)

    def __float__(self) -> float:
        return self.sec + self.usec / 1_000_000


@dataclass(frozen=True)
class CacheMetadata:
    """What a backend knows about one record besides its payload.

    ``expire`` is ``None`` for records with an infinite lifetime. ``hits``
    only moves when the backend counts reads.
    """

    expire: Timestamp | None
    tags: list[str]
    mtime: Timestamp
    hits: int = 0


@dataclass(frozen=True)
class CacheCapabilities:
    """Static feature report consumed by cache frontends."""

    automatic_cleaning: bool = True
    tags: bool = True
    expired_read: bool = True
    priority: bool = False
    infinite_lifetime: bool = True
    get_list: bool = True

    def to_dict(self) -> dict[str, bool]:
        return asdict(self)


def resolve_lifetime(lifetime: int | None, default: int = 0) -> int | None:
    """Turn a caller lifetime into seconds, or ``None`` for infinite.

    ``None`` selects *default*; ``0`` (explicit or via the default) means
    the record never expires.
    """
    if lifetime is None:
        lifetime = default
    if isinstance(lifetime, bool) or not isinstance(lifetime, int) or lifetime < 0:
        raise InvalidLifetimeError(lifetime)
    return lifetime or None


def normalize_tags(tags: Iterable[str] | str | None) -> list[str]:
    """A single string is one tag; ``None`` is the empty set."""
    if tags is None:
        return []
    if isinstance(tags, str):
        return [tags]
    return list(tags)
