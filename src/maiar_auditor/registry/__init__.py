"""Upstream registry access for plugin audits.

Provides the shared HTTP adapter and thin clients for the two registries a
submission is checked against (GitHub and npm).

Public API::

    from maiar_auditor.registry import HttpClient, HttpResponse
    from maiar_auditor.registry.github_api import GitHubAPI
    from maiar_auditor.registry.npm_registry import NpmRegistry
"""

from __future__ import annotations

from maiar_auditor.registry.http_client import HttpClient, HttpResponse

__all__ = [
    "HttpClient",
    "HttpResponse",
]
