"""Shared fixtures for maiar_auditor tests.

All HTTP is served by ``FakeUpstream`` through ``httpx.MockTransport``;
no test touches the network.
"""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from maiar_auditor.config import AuditorConfig
from maiar_auditor.core.audit import PluginAuditor, Submission
from maiar_auditor.registry.http_client import HttpClient


class FakeUpstream:
    """Canned responses keyed by URL, recording every request received.

    Unregistered URLs answer 404 like the real APIs do for unknown names.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        url: str,
        *,
        status: int = 200,
        json_body: Any = None,
        text: str | None = None,
        headers: dict[str, str] | None = None,
        exc: Exception | None = None,
    ) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if exc is not None:
                raise exc
            if text is not None:
                return httpx.Response(status, text=text, headers=headers)
            return httpx.Response(status, json=json_body, headers=headers)

        self.routes[str(httpx.URL(url))] = respond

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]

    def requests_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]


@pytest.fixture
def upstream() -> FakeUpstream:
    """Empty fake upstream; register routes with ``upstream.add``."""
    return FakeUpstream()


@pytest.fixture
def make_http(upstream: FakeUpstream) -> Callable[..., HttpClient]:
    """Factory for an HttpClient wired to the fake upstream."""

    def _make(config: AuditorConfig | None = None) -> HttpClient:
        return HttpClient(config or AuditorConfig(), transport=upstream.transport)

    return _make


@pytest.fixture
def make_auditor(make_http: Callable[..., HttpClient]) -> Callable[..., PluginAuditor]:
    """Factory for a PluginAuditor wired to the fake upstream."""

    def _make(config: AuditorConfig | None = None) -> PluginAuditor:
        return PluginAuditor(http=make_http(config))

    return _make


@pytest.fixture
def submission() -> Submission:
    """The reference submission used across audit tests."""
    return Submission(
        repo="plugin-terminal",
        owner="UraniumCorporation",
        npm_package_name="@maiar-ai/plugin-terminal",
    )


@pytest.fixture
def make_repo_payload() -> Callable[..., dict[str, Any]]:
    """Factory for a GitHub repository document; keyword overrides apply."""

    def _make(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": "plugin-terminal",
            "full_name": "UraniumCorporation/plugin-terminal",
            "owner": {"login": "UraniumCorporation"},
            "private": False,
            "description": "Terminal access plugin for the Maiar agent framework",
            "stargazers_count": 42,
            "topics": ["maiar", "plugin"],
            "updated_at": "2026-01-15T10:00:00Z",
        }
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture
def make_npm_payload() -> Callable[..., dict[str, Any]]:
    """Factory for an npm package document; keyword overrides apply."""

    def _make(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": "@maiar-ai/plugin-terminal",
            "dist-tags": {"latest": "0.4.2"},
            "time": {"modified": "2026-01-20T08:30:00.000Z"},
            "author": {
                "name": "Uranium Corporation",
                "email": "dev@uranium.example",
                "url": "https://uranium.example",
            },
            "maintainers": [{"name": "uranium", "email": "dev@uranium.example"}],
            "repository": {
                "type": "git",
                "url": "git+https://github.com/UraniumCorporation/plugin-terminal.git",
            },
        }
        payload.update(overrides)
        return payload

    return _make
