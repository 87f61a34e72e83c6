"""
Offline asset cache for the portfolio site.

A cache-first worker with an install -> activate -> serve lifecycle, backed by
named cache generations so a deploy can bump the generation and purge the old
one on activation.
"""

from offline_cache.errors import (
    CacheReadError,
    CacheWriteError,
    InstallError,
    InvalidTransition,
    NetworkError,
    OfflineCacheError,
)
from offline_cache.models import CachedResponse, CacheRequest
from offline_cache.registration import CacheRegistration
from offline_cache.storage import (
    CacheStorage,
    InMemoryCacheStorage,
    SqliteCacheStorage,
)
from offline_cache.worker import OfflineCacheWorker, WorkerPhase

__all__ = [
    "CacheReadError",
    "CacheRegistration",
    "CacheRequest",
    "CacheStorage",
    "CacheWriteError",
    "CachedResponse",
    "InMemoryCacheStorage",
    "InstallError",
    "InvalidTransition",
    "NetworkError",
    "OfflineCacheError",
    "OfflineCacheWorker",
    "SqliteCacheStorage",
    "WorkerPhase",
]
