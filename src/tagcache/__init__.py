"""
tagcache – tag-aware, TTL-expiring cache backend on a document store.

Import path convention::

    from tagcache.adapters.mongodb import MongoTaggedCacheBackend
    from tagcache.application.cache import CleaningMode, TaggedCacheBackend
    from tagcache.config import MongoCacheSettings
    from tagcache.kernel.errors import CacheStoreError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
