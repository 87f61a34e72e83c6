"""
Error types surfaced by the API and their JSON shape.
"""

from __future__ import annotations


class ApiError(Exception):
    """An error with a status code and a message safe to show the caller."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def as_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(ApiError):
    """Missing or malformed input. Never retried."""

    status_code = 400


class UpstreamError(ApiError):
    """
    The mail provider or repository API failed. The message is a fixed
    public string; the cause is only logged.
    """

    status_code = 500


class RateLimitExceeded(ApiError):
    status_code = 429
