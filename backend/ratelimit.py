"""
Fixed-window rate limiting per client.

Supports an in-memory limiter for tests/single-process runs and a
Redis-backed implementation shared by every worker process.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Protocol

import redis
from redis import exceptions as redis_exceptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_after: float

    def headers(self) -> dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(int(self.reset_after)),
        }


class RateLimiter(Protocol):
    """Counts one hit for a client and says whether it is within the limit."""

    max_requests: int
    window_seconds: int

    def hit(self, client_id: str) -> RateLimitDecision:
        ...


@dataclass
class InMemoryRateLimiter:
    """
    Per-process counters, reset when a client's window elapses.

    Expired windows are swept at most once per window length, so clients that
    never come back do not stay in memory.
    """

    max_requests: int
    window_seconds: int
    clock: Callable[[], float] = time.monotonic
    windows: dict[str, tuple[float, int]] = field(default_factory=dict)

    def __post_init__(self):
        self._lock = threading.Lock()
        self._last_sweep = self.clock()

    def _sweep(self, now: float) -> None:
        expired = [
            client_id
            for client_id, (started, _) in self.windows.items()
            if now - started >= self.window_seconds
        ]
        for client_id in expired:
            del self.windows[client_id]
        self._last_sweep = now

    def hit(self, client_id: str) -> RateLimitDecision:
        now = self.clock()
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(now)
            started, count = self.windows.get(client_id, (now, 0))
            if now - started >= self.window_seconds:
                started, count = now, 0
            count += 1
            self.windows[client_id] = (started, count)
        return RateLimitDecision(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - count),
            reset_after=self.window_seconds - (now - started),
        )

    def reset(self) -> None:
        with self._lock:
            self.windows.clear()


@dataclass
class RedisRateLimiter:
    """Redis-backed counters using INCR with a window-length expiry."""

    url: str
    max_requests: int
    window_seconds: int
    key_prefix: str = "portfolio:ratelimit"

    def __post_init__(self):
        self.client = redis.Redis.from_url(self.url)

    def hit(self, client_id: str) -> RateLimitDecision:
        key = f"{self.key_prefix}:{client_id}"
        try:
            count = self.client.incr(key)
            if count == 1:
                self.client.expire(key, self.window_seconds)
            ttl = self.client.ttl(key)
        except redis_exceptions.ConnectionError:
            # Connection resets can happen on managed Redis. Let the request
            # through and reconnect for the next one.
            logger.warning("Rate limiter lost its Redis connection; allowing %s", client_id)
            self.client = redis.Redis.from_url(self.url)
            return RateLimitDecision(
                allowed=True,
                limit=self.max_requests,
                remaining=self.max_requests,
                reset_after=self.window_seconds,
            )
        return RateLimitDecision(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - count),
            reset_after=ttl if ttl and ttl > 0 else self.window_seconds,
        )
