"""
Cache-first offline worker with an explicit lifecycle.

Phases move PARSED -> INSTALLING -> INSTALLED -> ACTIVATING -> ACTIVATED.
A failed install or a replacement by a newer worker ends in REDUNDANT.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum, auto
from typing import Iterable, Optional

from offline_cache.errors import (
    CacheReadError,
    CacheWriteError,
    InstallError,
    InvalidTransition,
    NetworkError,
)
from offline_cache.fetcher import Fetcher, resolve_url
from offline_cache.models import CachedResponse, CacheRequest
from offline_cache.storage import CacheStorage, NamedCache

logger = logging.getLogger(__name__)


class WorkerPhase(Enum):
    PARSED = auto()
    INSTALLING = auto()
    INSTALLED = auto()
    ACTIVATING = auto()
    ACTIVATED = auto()
    REDUNDANT = auto()


class OfflineCacheWorker:
    """One deployed version of the worker, bound to one cache generation."""

    def __init__(
        self,
        cache_name: str,
        precache_urls: Iterable[str],
        storage: CacheStorage,
        fetcher: Fetcher,
    ):
        self.cache_name = cache_name
        self.storage = storage
        self.fetcher = fetcher
        self.precache_urls = tuple(
            resolve_url(fetcher.origin, url) for url in precache_urls
        )
        self.phase = WorkerPhase.PARSED
        self._cache: Optional[NamedCache] = None
        self._phase_lock = threading.Lock()

    def __repr__(self) -> str:
        return f"OfflineCacheWorker({self.cache_name!r}, {self.phase.name})"

    def _transition(
        self, action: str, allowed: set[WorkerPhase], target: WorkerPhase
    ) -> None:
        with self._phase_lock:
            if self.phase not in allowed:
                raise InvalidTransition(action, self.phase)
            self.phase = target
        logger.debug("%r: %s", self, action)

    def _fail_install(self, url: str, reason: str) -> InstallError:
        self.phase = WorkerPhase.REDUNDANT
        logger.error("Install of %s failed at %s: %s", self.cache_name, url, reason)
        return InstallError(url, reason)

    def install(self) -> None:
        """
        Precache every allowlisted URL into this worker's generation.

        The batch is all-or-nothing: nothing is written unless every fetch
        succeeded, and a failure leaves the worker REDUNDANT.
        """
        self._transition("install", {WorkerPhase.PARSED}, WorkerPhase.INSTALLING)

        batch: list[tuple[CacheRequest, CachedResponse]] = []
        for url in self.precache_urls:
            request = CacheRequest(url=url)
            try:
                response = self.fetcher.fetch(request)
            except NetworkError as exc:
                raise self._fail_install(url, str(exc)) from exc
            if not response.ok:
                raise self._fail_install(url, f"HTTP {response.status}")
            batch.append((request, response))

        try:
            cache = self.storage.open(self.cache_name)
            cache.put_all(batch)
        except CacheWriteError as exc:
            raise self._fail_install(self.cache_name, str(exc)) from exc

        self._cache = cache
        self.phase = WorkerPhase.INSTALLED
        logger.info("Cache %s installed with %d entries", self.cache_name, len(batch))

    def activate(self) -> list[str]:
        """Take control and delete every cache generation but our own."""
        self._transition("activate", {WorkerPhase.INSTALLED}, WorkerPhase.ACTIVATING)
        deleted = []
        try:
            for name in self.storage.keys():
                if name != self.cache_name and self.storage.delete(name):
                    deleted.append(name)
        except Exception:
            self.phase = WorkerPhase.INSTALLED
            raise
        self.phase = WorkerPhase.ACTIVATED
        if deleted:
            logger.info("Cache %s activated, purged %s", self.cache_name, ", ".join(deleted))
        else:
            logger.info("Cache %s activated", self.cache_name)
        return deleted

    def make_redundant(self) -> None:
        with self._phase_lock:
            self.phase = WorkerPhase.REDUNDANT

    def handle_fetch(self, request: CacheRequest) -> CachedResponse:
        """
        Cache-first: return a stored response when one matches, else go to the
        network and write successful same-origin responses through.
        """
        if self.phase is not WorkerPhase.ACTIVATED:
            return self.fetcher.fetch(request)

        cache = self._cache
        try:
            cached = cache.match(request)
        except CacheReadError as exc:
            logger.warning("Cache lookup failed for %s %s: %s", request.method, request.url, exc)
            cached = None
        if cached is not None:
            return cached

        response = self.fetcher.fetch(request)
        if response.status != 200 or response.type != "basic":
            return response

        try:
            cache.put(request, response.clone())
        except CacheWriteError as exc:
            logger.warning("Could not cache %s %s: %s", request.method, request.url, exc)
        return response
