"""Shared async HTTP client for the GitHub and npm lookups.

Provides a thin wrapper around ``httpx.AsyncClient`` with a configured
timeout, user-agent header, optional GitHub bearer credential and GitHub
rate-limit handling. Every registry client goes through this module so that
HTTP behaviour is consistent and testable.

Failures are raised as ``RequestFailure`` subclasses (see
``maiar_auditor.exceptions``); nothing is retried at this layer.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

import httpx

from maiar_auditor.config import AuditorConfig
from maiar_auditor.exceptions import (
    MalformedResponseError,
    NetworkError,
    RateLimitExceededError,
    UpstreamHTTPError,
)

logger = logging.getLogger(__name__)

GITHUB_V3_ACCEPT: str = "application/vnd.github.v3+json"


@dataclass(frozen=True)
class HttpResponse:
    """A successful response with its parsed JSON body.

    Attributes:
        data: Decoded JSON body (dict, list, or scalar).
        status: HTTP status code (always < 400).
        headers: Response headers with lower-cased names.
    """

    data: Any
    status: int
    headers: dict[str, str] = field(default_factory=dict)


def format_reset_time(reset: str | None) -> str:
    """Render an ``x-ratelimit-reset`` value (unix seconds) as local time.

    Returns ``"unknown"`` when the header is absent or not a number.
    """
    try:
        moment = datetime.fromtimestamp(int(reset)).astimezone()  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError, OSError):
        return "unknown"
    return moment.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


class HttpClient:
    """GET-only JSON client bound to one ``AuditorConfig``.

    Args:
        config: Auditor configuration (timeout, token, API hosts).
        transport: Optional httpx transport, used by tests to serve canned
            responses through ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: AuditorConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or AuditorConfig()
        self._transport = transport
        self._github_host = httpx.URL(self.config.github_api_url).host

    def is_github_api(self, url: str) -> bool:
        """True if *url* targets the configured GitHub API host."""
        return httpx.URL(url).host == self._github_host

    def build_headers(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> httpx.Headers:
        """Merge default, caller-supplied and credential headers for *url*.

        Header names are case-insensitive, so a caller's ``accept`` replaces
        the default ``Accept``.
        """
        merged = httpx.Headers({
            "User-Agent": self.config.user_agent,
            "Accept": GITHUB_V3_ACCEPT,
        })
        merged.update(headers or {})
        if self.config.has_token and self.is_github_api(url):
            merged["Authorization"] = f"Bearer {self.config.github_token}"
        return merged

    async def request(
        self, url: str, *, headers: Mapping[str, str] | None = None
    ) -> HttpResponse:
        """GET *url* and return its parsed JSON body.

        Args:
            url: Absolute URL to fetch.
            headers: Extra headers, merged over the defaults.

        Returns:
            HttpResponse with decoded data, status and headers.

        Raises:
            RateLimitExceededError: GitHub reported no remaining requests.
            UpstreamHTTPError: The response status was 400 or above.
            MalformedResponseError: The body was not valid JSON.
            NetworkError: Transport fault or timeout.
        """
        request_headers = self.build_headers(url, headers)
        logger.debug("GET %s", url)
        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                async with client.stream("GET", url, headers=request_headers) as resp:
                    response_headers = {k.lower(): v for k, v in resp.headers.items()}
                    if self.is_github_api(url):
                        _check_rate_limit(url, response_headers)
                    await resp.aread()
                    body = resp.text
                    status = resp.status_code
        except httpx.TimeoutException as exc:
            logger.warning("Timeout fetching %s", url)
            raise NetworkError(f"Network error: request timed out ({exc})", url=url) from exc
        except httpx.RequestError as exc:
            logger.warning("Request error for %s: %s", url, exc)
            raise NetworkError(f"Network error: {exc}", url=url) from exc

        if status >= 400:
            logger.warning("HTTP %d from %s", status, url)
            raise UpstreamHTTPError(status, body, url=url, headers=response_headers)

        try:
            data = json.loads(body)
        except ValueError as exc:
            logger.warning("Invalid JSON from %s: %s", url, exc)
            raise MalformedResponseError(
                f"Failed to parse JSON response: {exc}", url=url, body=body
            ) from exc

        return HttpResponse(data=data, status=status, headers=response_headers)


def _check_rate_limit(url: str, headers: Mapping[str, str]) -> None:
    """Raise before reading the body when the GitHub quota is exhausted."""
    remaining = headers.get("x-ratelimit-remaining")
    if remaining != "0":
        return
    reset = headers.get("x-ratelimit-reset")
    logger.warning("GitHub rate limit exhausted while fetching %s", url)
    raise RateLimitExceededError(
        f"GitHub API rate limit exceeded. Resets at {format_reset_time(reset)}",
        url=url,
        limit=headers.get("x-ratelimit-limit"),
        remaining=remaining,
        reset=reset,
    )
