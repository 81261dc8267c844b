"""GitHub REST API lookups used by the auditor.

Two read-only endpoints are needed: the repository document and its topic
list. The topics endpoint still requires the ``mercy-preview`` media type.

Usage::

    github = GitHubAPI(HttpClient(config))
    repo = await github.fetch_repository("acme", "plugin-x")
    names = await github.fetch_topics("acme", "plugin-x")
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from maiar_auditor.exceptions import MalformedResponseError
from maiar_auditor.registry.http_client import HttpClient, HttpResponse

logger = logging.getLogger(__name__)

TOPICS_ACCEPT: str = "application/vnd.github.mercy-preview+json"


class GitHubAPI:
    """Client for the repository and topics endpoints."""

    def __init__(self, http: HttpClient) -> None:
        self.http = http
        self.base_url = http.config.github_api_url

    def repository_url(self, owner: str, repo: str) -> str:
        """API URL of the repository document."""
        return f"{self.base_url}/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"

    def topics_url(self, owner: str, repo: str) -> str:
        """API URL of the repository topic list."""
        return f"{self.repository_url(owner, repo)}/topics"

    async def fetch_repository(self, owner: str, repo: str) -> HttpResponse:
        """Fetch ``GET /repos/{owner}/{repo}``.

        The full response is returned so callers can read the rate-limit
        headers alongside the payload.

        Raises:
            MalformedResponseError: If the body is not a JSON object.
        """
        url = self.repository_url(owner, repo)
        response = await self.http.request(url)
        if not isinstance(response.data, dict):
            raise MalformedResponseError(
                "Failed to parse JSON response: expected a repository object",
                url=url,
            )
        return response

    async def fetch_topics(self, owner: str, repo: str) -> list[str]:
        """Fetch the topic names tagged on a repository.

        Raises:
            MalformedResponseError: If the body is not a JSON object.
        """
        url = self.topics_url(owner, repo)
        response = await self.http.request(url, headers={"Accept": TOPICS_ACCEPT})
        data: Any = response.data
        if not isinstance(data, dict):
            raise MalformedResponseError(
                "Failed to parse JSON response: expected an object with 'names'",
                url=url,
            )
        raw_names = data.get("names")
        names = [str(name) for name in raw_names] if isinstance(raw_names, list) else []
        logger.debug("Topics for %s/%s: %s", owner, repo, names)
        return names
