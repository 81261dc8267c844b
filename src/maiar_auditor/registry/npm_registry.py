"""npm registry lookup used by the auditor.

Fetches the full package document (the "packument") for a package name.
Scoped names such as ``@maiar-ai/plugin-terminal`` are encoded as a single
path segment, the way ``encodeURIComponent`` does it.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from maiar_auditor.exceptions import MalformedResponseError
from maiar_auditor.registry.http_client import HttpClient

# Characters encodeURIComponent leaves alone besides the unreserved set.
_URI_COMPONENT_SAFE = "!~*'()"


def encode_package_name(name: str) -> str:
    """Percent-encode a package name as one URL path segment."""
    return quote(name, safe=_URI_COMPONENT_SAFE)


class NpmRegistry:
    """Client for the npm package document endpoint."""

    def __init__(self, http: HttpClient) -> None:
        self.http = http
        self.base_url = http.config.npm_registry_url

    def package_url(self, name: str) -> str:
        """Registry URL of the package document."""
        return f"{self.base_url}/{encode_package_name(name)}"

    async def fetch_package(self, name: str) -> dict[str, Any]:
        """Fetch the package document for *name*.

        Raises:
            MalformedResponseError: If the body is not a JSON object.
        """
        url = self.package_url(name)
        response = await self.http.request(url)
        if not isinstance(response.data, dict):
            raise MalformedResponseError(
                "Failed to parse JSON response: expected a package document",
                url=url,
            )
        return response.data
