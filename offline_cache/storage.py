"""
Named cache storage: an in-memory backend for tests/dev and a SQLite backend
for a persistent cache on disk.
"""

from __future__ import annotations

import json
import logging
import os
import sqlite3
import threading
import time
from typing import Iterable, Optional, Protocol

from offline_cache.errors import CacheReadError, CacheWriteError
from offline_cache.models import CachedResponse, CacheRequest

logger = logging.getLogger(__name__)


class NamedCache(Protocol):
    """One cache generation: request key -> stored response."""

    name: str

    def match(self, request: CacheRequest) -> Optional[CachedResponse]:
        ...

    def put(self, request: CacheRequest, response: CachedResponse) -> None:
        ...

    def put_all(
        self, entries: Iterable[tuple[CacheRequest, CachedResponse]]
    ) -> None:
        ...

    def keys(self) -> list[CacheRequest]:
        ...


class CacheStorage(Protocol):
    """The set of named caches visible to a worker."""

    def open(self, name: str) -> NamedCache:
        ...

    def has(self, name: str) -> bool:
        ...

    def keys(self) -> list[str]:
        ...

    def delete(self, name: str) -> bool:
        ...


def _check_cacheable(request: CacheRequest, response: CachedResponse) -> None:
    if request.method != "GET":
        raise CacheWriteError(
            f"cannot cache {request.method} {request.url}: only GET is cacheable"
        )
    if response.status == 206:
        raise CacheWriteError(f"cannot cache partial response for {request.url}")


class InMemoryCache:
    def __init__(self, name: str, lock: threading.Lock):
        self.name = name
        self._lock = lock
        self._entries: dict[tuple[str, str], CachedResponse] = {}

    def match(self, request: CacheRequest) -> Optional[CachedResponse]:
        with self._lock:
            stored = self._entries.get(request.key)
        return stored.clone() if stored else None

    def put(self, request: CacheRequest, response: CachedResponse) -> None:
        _check_cacheable(request, response)
        with self._lock:
            self._entries[request.key] = response.clone()

    def put_all(
        self, entries: Iterable[tuple[CacheRequest, CachedResponse]]
    ) -> None:
        staged = {}
        for request, response in entries:
            _check_cacheable(request, response)
            staged[request.key] = response.clone()
        with self._lock:
            self._entries.update(staged)

    def keys(self) -> list[CacheRequest]:
        with self._lock:
            return [CacheRequest(url=url, method=method) for method, url in self._entries]


class InMemoryCacheStorage:
    """Test double for the browser-managed cache storage."""

    def __init__(self):
        self._lock = threading.Lock()
        self._caches: dict[str, InMemoryCache] = {}

    def open(self, name: str) -> InMemoryCache:
        with self._lock:
            cache = self._caches.get(name)
            if cache is None:
                cache = InMemoryCache(name, threading.Lock())
                self._caches[name] = cache
            return cache

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._caches

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._caches)

    def delete(self, name: str) -> bool:
        with self._lock:
            return self._caches.pop(name, None) is not None


class SqliteCache:
    def __init__(self, storage: "SqliteCacheStorage", name: str):
        self.name = name
        self._storage = storage

    def match(self, request: CacheRequest) -> Optional[CachedResponse]:
        try:
            with self._storage._connect() as conn:
                row = conn.execute(
                    """
                    SELECT url, status, headers_json, body, response_type
                    FROM entries
                    WHERE cache_name = ? AND method = ? AND request_url = ?
                    """,
                    (self.name, request.method, request.url),
                ).fetchone()
        except sqlite3.Error as exc:
            raise CacheReadError(f"sqlite lookup in {self.name} failed: {exc}") from exc
        if row is None:
            return None
        return CachedResponse(
            url=row["url"],
            status=row["status"],
            headers=json.loads(row["headers_json"]),
            body=bytes(row["body"]),
            type=row["response_type"],
        )

    def put(self, request: CacheRequest, response: CachedResponse) -> None:
        self.put_all([(request, response)])

    def put_all(
        self, entries: Iterable[tuple[CacheRequest, CachedResponse]]
    ) -> None:
        rows = []
        now = time.time()
        for request, response in entries:
            _check_cacheable(request, response)
            rows.append(
                (
                    self.name,
                    request.method,
                    request.url,
                    response.url,
                    response.status,
                    json.dumps(response.headers),
                    sqlite3.Binary(response.body),
                    response.type,
                    now,
                )
            )
        try:
            with self._storage._connect() as conn:
                conn.execute(
                    "INSERT OR IGNORE INTO caches(name, created_at) VALUES (?, ?)",
                    (self.name, now),
                )
                conn.executemany(
                    """
                    INSERT OR REPLACE INTO entries(
                        cache_name, method, request_url, url, status,
                        headers_json, body, response_type, stored_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    rows,
                )
        except sqlite3.Error as exc:
            raise CacheWriteError(f"sqlite write to {self.name} failed: {exc}") from exc

    def keys(self) -> list[CacheRequest]:
        with self._storage._connect() as conn:
            rows = conn.execute(
                "SELECT method, request_url FROM entries WHERE cache_name = ? ORDER BY stored_at",
                (self.name,),
            ).fetchall()
        return [CacheRequest(url=row["request_url"], method=row["method"]) for row in rows]


class SqliteCacheStorage:
    """
    Persistent cache storage in a single SQLite file.

    Each put_all runs in one transaction, so a batch is either fully visible
    or not at all.
    """

    def __init__(self, db_path: str, timeout: float = 5.0):
        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self.db_path = db_path
        self.timeout = timeout
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, timeout=self.timeout)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS caches (
                    name TEXT PRIMARY KEY,
                    created_at REAL NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS entries (
                    cache_name TEXT NOT NULL REFERENCES caches(name) ON DELETE CASCADE,
                    method TEXT NOT NULL,
                    request_url TEXT NOT NULL,
                    url TEXT NOT NULL,
                    status INTEGER NOT NULL,
                    headers_json TEXT NOT NULL,
                    body BLOB NOT NULL,
                    response_type TEXT NOT NULL,
                    stored_at REAL NOT NULL,
                    PRIMARY KEY (cache_name, method, request_url)
                )
                """
            )

    def open(self, name: str) -> SqliteCache:
        # Opening an existing cache only reads, so lookups never wait on a writer.
        if not self.has(name):
            try:
                with self._connect() as conn:
                    conn.execute(
                        "INSERT OR IGNORE INTO caches(name, created_at) VALUES (?, ?)",
                        (name, time.time()),
                    )
            except sqlite3.Error as exc:
                raise CacheWriteError(f"sqlite create of {name} failed: {exc}") from exc
        return SqliteCache(self, name)

    def has(self, name: str) -> bool:
        with self._connect() as conn:
            row = conn.execute("SELECT 1 FROM caches WHERE name = ?", (name,)).fetchone()
        return row is not None

    def keys(self) -> list[str]:
        with self._connect() as conn:
            rows = conn.execute("SELECT name FROM caches ORDER BY created_at").fetchall()
        return [row["name"] for row in rows]

    def delete(self, name: str) -> bool:
        with self._connect() as conn:
            deleted = conn.execute("DELETE FROM caches WHERE name = ?", (name,)).rowcount
        if deleted:
            logger.debug("Deleted cache %s from %s", name, self.db_path)
        return bool(deleted)
