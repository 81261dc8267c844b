"""Auditor configuration.

``AuditorConfig`` is an immutable value handed to the auditor and the HTTP
client at construction time. Only ``from_env`` (and the CLI) reads the
process environment; library code never does.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from maiar_auditor import USER_AGENT
from maiar_auditor.exceptions import ConfigError

DEFAULT_TIMEOUT: float = 10.0
DEFAULT_GITHUB_API_URL: str = "https://api.github.com"
DEFAULT_NPM_REGISTRY_URL: str = "https://registry.npmjs.org"
DEFAULT_REQUIRED_TOPIC: str = "maiar"
DEFAULT_MIN_DESCRIPTION_LENGTH: int = 10


@dataclass(frozen=True)
class AuditorConfig:
    """Settings shared by every audit run.

    Attributes:
        github_token: Optional GitHub token, sent as a bearer credential to
            the GitHub API host only.
        timeout: Per-request timeout in seconds.
        github_api_url: Base URL of the GitHub REST API.
        npm_registry_url: Base URL of the npm registry.
        user_agent: User-Agent header sent with every request.
        required_topic: Topic the repository must be tagged with.
        min_description_length: Minimum trimmed length of the repository
            description.
    """

    github_token: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    github_api_url: str = DEFAULT_GITHUB_API_URL
    npm_registry_url: str = DEFAULT_NPM_REGISTRY_URL
    user_agent: str = USER_AGENT
    required_topic: str = DEFAULT_REQUIRED_TOPIC
    min_description_length: int = DEFAULT_MIN_DESCRIPTION_LENGTH

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout!r}")
        if self.min_description_length < 0:
            raise ConfigError(
                "min_description_length must not be negative, "
                f"got {self.min_description_length!r}"
            )
        # Joining paths onto the base URLs assumes no trailing slash.
        object.__setattr__(self, "github_api_url", self.github_api_url.rstrip("/"))
        object.__setattr__(self, "npm_registry_url", self.npm_registry_url.rstrip("/"))

    @property
    def has_token(self) -> bool:
        """True when a non-empty GitHub token is configured."""
        return bool(self.github_token)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AuditorConfig:
        """Build a config from environment variables.

        Reads ``GITHUB_TOKEN``, ``MAIAR_AUDIT_TIMEOUT``, ``GITHUB_API_URL``
        and ``NPM_REGISTRY_URL``; unset variables keep their defaults.

        Raises:
            ConfigError: If ``MAIAR_AUDIT_TIMEOUT`` is not a number.
        """
        env = os.environ if environ is None else environ
        timeout = DEFAULT_TIMEOUT
        raw_timeout = env.get("MAIAR_AUDIT_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ConfigError(
                    f"MAIAR_AUDIT_TIMEOUT must be a number, got {raw_timeout!r}"
                ) from exc
        return cls(
            github_token=env.get("GITHUB_TOKEN") or None,
            timeout=timeout,
            github_api_url=env.get("GITHUB_API_URL") or DEFAULT_GITHUB_API_URL,
            npm_registry_url=env.get("NPM_REGISTRY_URL") or DEFAULT_NPM_REGISTRY_URL,
        )
