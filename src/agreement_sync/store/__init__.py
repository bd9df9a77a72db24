"""Persistence boundary for the sync cache record and run history."""

from agreement_sync.store.cache import CacheStore, InMemoryCacheStore, SyncCache
from agreement_sync.store.sqlite_store import RunRecord, SqliteCacheStore

__all__ = [
    "CacheStore",
    "InMemoryCacheStore",
    "RunRecord",
    "SqliteCacheStore",
    "SyncCache",
]
