"""
Exceptions raised by the offline cache.
"""

from __future__ import annotations


class OfflineCacheError(Exception):
    """Base class for offline cache failures."""


class InvalidTransition(OfflineCacheError):
    """A lifecycle step was requested from a phase that does not allow it."""

    def __init__(self, action: str, phase):
        super().__init__(f"cannot {action} while {phase.name}")
        self.action = action
        self.phase = phase


class InstallError(OfflineCacheError):
    """The install-time precache batch could not be fetched in full."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"precache of {url} failed: {reason}")
        self.url = url
        self.reason = reason


class CacheWriteError(OfflineCacheError):
    """A response could not be written into a cache."""


class CacheReadError(OfflineCacheError):
    """A cache lookup failed in the storage backend."""


class NetworkError(OfflineCacheError):
    """The network fetch itself failed (DNS, connection reset, timeout)."""
