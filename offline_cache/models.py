"""
Request and response records stored in the offline cache.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Literal

ResponseType = Literal["basic", "cors", "opaque", "error"]


@dataclass(frozen=True)
class CacheRequest:
    url: str
    method: str = "GET"

    def __post_init__(self):
        object.__setattr__(self, "method", self.method.upper())

    @property
    def key(self) -> tuple[str, str]:
        return (self.method, self.url)


@dataclass(frozen=True)
class CachedResponse:
    url: str
    status: int
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)
    type: ResponseType = "basic"

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def clone(self) -> "CachedResponse":
        return replace(self, headers=dict(self.headers))

    def as_dict(self) -> dict:
        return {
            "url": self.url,
            "status": self.status,
            "headers": dict(self.headers),
            "type": self.type,
            "size": len(self.body),
        }
