"""
Cache: TTL-bound snapshot of the ranked feed plus metadata.
Backends (memory, sql) share one get/set/delete contract; CacheStore holds the policy.
"""
from hotfeed.services.cache.backends import CacheBackend, MemoryBackend, SqlCacheBackend
from hotfeed.services.cache.registry import create_backend, list_backends
from hotfeed.services.cache.store import CacheStore

__all__ = [
    "CacheBackend",
    "CacheStore",
    "MemoryBackend",
    "SqlCacheBackend",
    "create_backend",
    "list_backends",
]
