"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging

from fastapi import Request

from backend.config import Settings, get_settings
from backend.errors import RateLimitExceeded
from backend.github import GithubClient, RepositorySource
from backend.mailer import InMemoryMailer, Mailer, SmtpMailer
from backend.ratelimit import InMemoryRateLimiter, RateLimiter, RedisRateLimiter
from backend.storage import (
    CosUploadStorage,
    InMemoryUploadStorage,
    LocalUploadStorage,
    UploadStorage,
)

logger = logging.getLogger(__name__)

_mailer: Mailer | None = None
_upload_storage: UploadStorage | None = None
_repository_source: RepositorySource | None = None


def get_mailer() -> Mailer:
    """
    Return a singleton mailer. Without SMTP credentials, messages are kept in
    an in-memory outbox so local runs never fail on delivery.
    """
    global _mailer
    if _mailer:
        return _mailer

    settings = get_settings()
    if settings.use_in_memory_backends or not (settings.email_user and settings.email_pass):
        logger.warning("SMTP credentials not configured; contact messages stay in memory")
        _mailer = InMemoryMailer(recipient=settings.contact_recipient)
    else:
        _mailer = SmtpMailer(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.email_user,
            password=settings.email_pass,
            recipient=settings.contact_recipient,
        )
    return _mailer


def get_upload_storage() -> UploadStorage:
    global _upload_storage
    if _upload_storage:
        return _upload_storage

    settings = get_settings()
    if settings.use_in_memory_backends:
        _upload_storage = InMemoryUploadStorage()
    elif settings.cos_bucket:
        _upload_storage = CosUploadStorage(
            bucket=settings.cos_bucket,
            region=settings.cos_region or "",
            endpoint=settings.cos_endpoint or "",
            access_key_id=settings.aws_access_key_id or "",
            secret_access_key=settings.aws_secret_access_key or "",
        )
    else:
        _upload_storage = LocalUploadStorage(settings.upload_dir)
    return _upload_storage


def get_repository_source() -> RepositorySource:
    global _repository_source
    if _repository_source:
        return _repository_source

    settings = get_settings()
    _repository_source = GithubClient(
        username=settings.github_username, api_url=settings.github_api_url
    )
    return _repository_source


def build_rate_limiter(
    settings: Settings, *, scope: str, max_requests: int, window_seconds: int
) -> RateLimiter:
    """
    Build a limiter for one scope ("global", "contact"). Redis-backed when
    REDIS_URL is set so limits hold across worker processes.
    """
    if settings.redis_url and not settings.use_in_memory_backends:
        return RedisRateLimiter(
            url=settings.redis_url,
            max_requests=max_requests,
            window_seconds=window_seconds,
            key_prefix=f"{settings.redis_key_prefix}:{scope}",
        )
    return InMemoryRateLimiter(max_requests=max_requests, window_seconds=window_seconds)


def client_id(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def enforce_contact_limit(request: Request) -> None:
    limiter: RateLimiter = request.app.state.contact_limiter
    decision = limiter.hit(client_id(request))
    if not decision.allowed:
        logger.warning("Contact rate limit exceeded for %s", client_id(request))
        raise RateLimitExceeded(
            "Too many contact form submissions, please try again later."
        )
