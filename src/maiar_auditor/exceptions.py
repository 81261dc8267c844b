"""Maiar auditor exception hierarchy.

All public exceptions inherit from AuditorError, giving callers a single
base class to catch when they want to handle any auditor-specific failure
without swallowing unrelated errors.

Failures of a single upstream request derive from ``RequestFailure`` so the
auditor can turn each one into exactly one issue string at its call site.
"""

from __future__ import annotations

from typing import Mapping


class AuditorError(Exception):
    """Base exception for all auditor errors."""


class ConfigError(AuditorError):
    """Raised when auditor configuration values are invalid."""


class RequestFailure(AuditorError):
    """Base class for a classified failure of one upstream request.

    Attributes:
        message: Human-readable description, also used as ``str(exc)``.
        url: The URL that was requested.
    """

    def __init__(self, message: str, *, url: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.url = url


class RateLimitExceededError(RequestFailure):
    """GitHub reported zero remaining requests for the current window.

    Raised before the response body is read. ``reset`` is the raw
    ``x-ratelimit-reset`` header value (unix seconds) when present.
    """

    def __init__(
        self,
        message: str,
        *,
        url: str = "",
        limit: str | None = None,
        remaining: str | None = None,
        reset: str | None = None,
    ) -> None:
        super().__init__(message, url=url)
        self.limit = limit
        self.remaining = remaining
        self.reset = reset


class UpstreamHTTPError(RequestFailure):
    """An upstream API answered with a 4xx or 5xx status.

    Covers not-found (404), forbidden (403), and every other error status.
    """

    def __init__(
        self,
        status: int,
        body: str,
        *,
        url: str = "",
        headers: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(f"HTTP {status}: {body}", url=url)
        self.status = status
        self.body = body
        self.headers = dict(headers or {})


class MalformedResponseError(RequestFailure):
    """A successful response whose body is not valid JSON."""

    def __init__(self, message: str, *, url: str = "", body: str = "") -> None:
        super().__init__(message, url=url)
        self.body = body


class NetworkError(RequestFailure):
    """Transport-level fault: DNS, connection reset, timeout, and the like."""
