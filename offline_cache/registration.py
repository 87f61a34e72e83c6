"""
Tracks which worker controls the page and which one is waiting to.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from offline_cache.errors import InstallError
from offline_cache.fetcher import Fetcher
from offline_cache.models import CachedResponse, CacheRequest
from offline_cache.worker import OfflineCacheWorker, WorkerPhase

logger = logging.getLogger(__name__)


class CacheRegistration:
    """
    Holds the active worker and at most one installed-but-waiting worker.

    A new worker that fails to install never displaces the active one.
    """

    def __init__(self, fetcher: Fetcher):
        self.fetcher = fetcher
        self.active: Optional[OfflineCacheWorker] = None
        self.waiting: Optional[OfflineCacheWorker] = None
        self._lock = threading.Lock()

    def register(self, worker: OfflineCacheWorker) -> OfflineCacheWorker:
        with self._lock:
            try:
                worker.install()
            except InstallError:
                if self.active is not None:
                    logger.warning(
                        "Keeping %s in control after failed install of %s",
                        self.active.cache_name,
                        worker.cache_name,
                    )
                raise

            if self.waiting is not None:
                self.waiting.make_redundant()
            self.waiting = worker

            if self.active is None:
                self._promote_waiting()
            return worker

    def skip_waiting(self) -> Optional[OfflineCacheWorker]:
        """Hand control to the waiting worker, retiring the current one."""
        with self._lock:
            if self.waiting is None:
                return self.active
            self._promote_waiting()
            return self.active

    def _promote_waiting(self) -> None:
        incoming = self.waiting
        previous = self.active
        incoming.activate()
        if previous is not None and previous is not incoming:
            previous.make_redundant()
        self.active = incoming
        self.waiting = None

    def fetch(self, request: CacheRequest) -> CachedResponse:
        worker = self.active
        if worker is None or worker.phase is not WorkerPhase.ACTIVATED:
            return self.fetcher.fetch(request)
        return worker.handle_fetch(request)
