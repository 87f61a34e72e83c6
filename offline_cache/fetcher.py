"""
Network access for the offline cache worker.
"""

from __future__ import annotations

from typing import Optional, Protocol
from urllib.parse import urljoin, urlsplit

import requests

from offline_cache.errors import NetworkError
from offline_cache.models import CachedResponse, CacheRequest, ResponseType

REQUEST_TIMEOUT = 30  # seconds


class Fetcher(Protocol):
    """Performs the real network request for a cache miss."""

    origin: str

    def fetch(self, request: CacheRequest) -> CachedResponse:
        ...


def origin_of(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}".lower()


def resolve_url(origin: str, url: str) -> str:
    """Resolve an allowlist entry such as ``/index.html`` against the site origin."""
    return urljoin(origin.rstrip("/") + "/", url)


def classify_response(
    site_origin: str, url: str, headers: dict[str, str]
) -> ResponseType:
    """
    Same-origin responses are ``basic``. Cross-origin responses are ``cors``
    when the server opted in with Access-Control-Allow-Origin, else ``opaque``.
    """
    if origin_of(url) == origin_of(site_origin):
        return "basic"
    lowered = {k.lower(): v for k, v in headers.items()}
    if "access-control-allow-origin" in lowered:
        return "cors"
    return "opaque"


class HttpFetcher:
    """Fetcher backed by a requests session."""

    def __init__(
        self,
        origin: str,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.origin = origin
        self.timeout = timeout
        self._session = session or requests.Session()

    def fetch(self, request: CacheRequest) -> CachedResponse:
        try:
            response = self._session.request(
                request.method, request.url, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise NetworkError(f"{request.method} {request.url}: {exc}") from exc

        headers = dict(response.headers)
        response_type = classify_response(self.origin, response.url or request.url, headers)
        body = response.content
        if response_type == "opaque":
            # Opaque responses expose neither status nor body to the page.
            return CachedResponse(
                url=request.url, status=0, body=b"", headers={}, type="opaque"
            )
        return CachedResponse(
            url=response.url or request.url,
            status=response.status_code,
            body=body,
            headers=headers,
            type=response_type,
        )
