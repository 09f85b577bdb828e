"""MongoDB adapter — tagged TTL cache backend.

Requires the ``motor`` driver::

    pip install mongo-tagcache
"""

from tagcache.adapters.mongodb.backend import MongoTaggedCacheBackend
from tagcache.adapters.mongodb.client import open_collection
from tagcache.adapters.mongodb.codec import CacheRecord, decode_record, encode_record
from tagcache.adapters.mongodb.indexes import IndexManager

__all__ = [
    "CacheRecord",
    "IndexManager",
    "MongoTaggedCacheBackend",
    "decode_record",
    "encode_record",
    "open_collection",
]
