"""Application cache – tagged cache backend contract."""
from tagcache.application.cache.backend import TaggedCacheBackend
from tagcache.application.cache.memory import InMemoryTaggedCacheBackend
from tagcache.application.cache.model import (
    CacheCapabilities,
    CacheMetadata,
    Timestamp,
    normalize_tags,
    resolve_lifetime,
)
from tagcache.application.cache.modes import CleaningMode

__all__ = [
    "CacheCapabilities",
    "CacheMetadata",
    "CleaningMode",
    "InMemoryTaggedCacheBackend",
    "TaggedCacheBackend",
    "Timestamp",
    "normalize_tags",
    "resolve_lifetime",
]
