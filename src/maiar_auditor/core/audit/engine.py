"""The plugin audit procedure.

``PluginAuditor.audit_plugin`` runs a fixed, sequential list of checks:

1. all three submission fields are present;
2. the GitHub repository exists, is public, has a description, and is
   tagged with the required topic;
3. the npm package exists, is public, and declares the same repository.

Each check is independent: a failed lookup becomes one issue and the audit
moves on to the next reachable check. Whatever was fetched is returned as
metadata even when the audit fails. ``audit_plugin`` never raises.
"""

from __future__ import annotations

import logging
from typing import Any

from maiar_auditor.config import AuditorConfig
from maiar_auditor.core.audit.models import (
    AuditMetadata,
    AuditResult,
    PackageMetadata,
    RepositoryMetadata,
    Submission,
    normalize_repository_url,
)
from maiar_auditor.exceptions import (
    RateLimitExceededError,
    RequestFailure,
    UpstreamHTTPError,
)
from maiar_auditor.registry.github_api import GitHubAPI
from maiar_auditor.registry.http_client import HttpClient, HttpResponse, format_reset_time
from maiar_auditor.registry.npm_registry import NpmRegistry

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Issue messages
# ---------------------------------------------------------------------------

MISSING_FIELDS = "Missing required fields in submission"
REPO_NOT_FOUND = "GitHub repository not found"
REPO_FORBIDDEN = "GitHub API access forbidden: {message}"
REPO_ERROR = "Error accessing GitHub repository: {message}"
REPO_PRIVATE = "Repository must be public"
REPO_DESCRIPTION = (
    "Repository must have a clear, descriptive description "
    "(minimum {length} characters)"
)
REPO_TOPIC_MISSING = 'Repository must have the "{topic}" topic tagged'
REPO_TOPICS_ERROR = "Error checking repository topics: {message}"
NPM_NOT_FOUND = "npm package not found"
NPM_ERROR = "Error accessing npm package: {message}"
NPM_PRIVATE = "npm package must be public"
NPM_REPOSITORY_MISMATCH = "npm package repository URL must match GitHub repository"
UNEXPECTED_ERROR = "Unexpected error during audit: {message}"


class PluginAuditor:
    """Audits plugin submissions against GitHub and the npm registry.

    The instance holds only its configuration (including the optional
    GitHub token) and is safe to reuse for any number of audits.

    Args:
        config: Auditor settings; defaults to ``AuditorConfig()``.
        http: HTTP adapter; built from *config* when omitted.
    """

    def __init__(
        self,
        config: AuditorConfig | None = None,
        *,
        http: HttpClient | None = None,
    ) -> None:
        self.config = config or (http.config if http else AuditorConfig())
        self.http = http or HttpClient(self.config)
        self.github = GitHubAPI(self.http)
        self.npm = NpmRegistry(self.http)

    async def audit_plugin(self, submission: Submission | dict[str, Any]) -> AuditResult:
        """Audit one submission.

        Args:
            submission: A ``Submission`` or its decoded JSON form.

        Returns:
            AuditResult with ordered issues and best-effort metadata.
        """
        issues: list[str] = []
        repo_data: dict[str, Any] | None = None
        npm_data: dict[str, Any] | None = None
        if not isinstance(submission, Submission):
            submission = Submission.from_dict(submission)

        try:
            if not submission.is_complete:
                issues.append(MISSING_FIELDS)
                return AuditResult(issues=issues)

            repo_data = await self._fetch_repository(submission, issues)
            if repo_data is not None:
                await self._check_repository(submission, repo_data, issues)

            npm_data = await self._fetch_package(submission, issues)
            if npm_data is not None:
                self._check_package(submission, npm_data, repo_data, issues)
        except Exception as exc:
            logger.exception("Audit of %r failed unexpectedly", submission)
            issues.append(UNEXPECTED_ERROR.format(message=exc))

        return AuditResult(
            issues=issues,
            metadata=_build_metadata(submission, repo_data, npm_data),
        )

    # ------------------------------------------------------------------
    # GitHub
    # ------------------------------------------------------------------

    async def _fetch_repository(
        self, submission: Submission, issues: list[str]
    ) -> dict[str, Any] | None:
        try:
            response = await self.github.fetch_repository(submission.owner, submission.repo)
        except RateLimitExceededError as exc:
            issues.append(exc.message)
            return None
        except UpstreamHTTPError as exc:
            if exc.status == 404:
                issues.append(REPO_NOT_FOUND)
            elif exc.status == 403:
                issues.append(REPO_FORBIDDEN.format(message=exc))
            else:
                issues.append(REPO_ERROR.format(message=exc))
                logger.warning("GitHub API response: %s", exc.body)
            return None
        except RequestFailure as exc:
            issues.append(REPO_ERROR.format(message=exc))
            return None

        _log_rate_limit(response)
        return response.data

    async def _check_repository(
        self, submission: Submission, repo_data: dict[str, Any], issues: list[str]
    ) -> None:
        if repo_data.get("private"):
            issues.append(REPO_PRIVATE)

        description = repo_data.get("description")
        min_length = self.config.min_description_length
        if not description or len(str(description).strip()) < min_length:
            issues.append(REPO_DESCRIPTION.format(length=min_length))

        topic = self.config.required_topic
        try:
            topics = await self.github.fetch_topics(submission.owner, submission.repo)
        except RequestFailure as exc:
            issues.append(REPO_TOPICS_ERROR.format(message=exc))
            return
        if topic not in topics:
            issues.append(REPO_TOPIC_MISSING.format(topic=topic))

    # ------------------------------------------------------------------
    # npm
    # ------------------------------------------------------------------

    async def _fetch_package(
        self, submission: Submission, issues: list[str]
    ) -> dict[str, Any] | None:
        try:
            return await self.npm.fetch_package(submission.npm_package_name)
        except UpstreamHTTPError as exc:
            if exc.status == 404:
                issues.append(NPM_NOT_FOUND)
            else:
                issues.append(NPM_ERROR.format(message=exc))
        except RequestFailure as exc:
            issues.append(NPM_ERROR.format(message=exc))
        return None

    def _check_package(
        self,
        submission: Submission,
        npm_data: dict[str, Any],
        repo_data: dict[str, Any] | None,
        issues: list[str],
    ) -> None:
        if npm_data.get("private"):
            issues.append(NPM_PRIVATE)

        # Cross-reference only makes sense once the repository is known to exist.
        if repo_data is None:
            return
        declared = normalize_repository_url(npm_data.get("repository"))
        if submission.slug not in declared:
            issues.append(NPM_REPOSITORY_MISMATCH)


def _log_rate_limit(response: HttpResponse) -> None:
    headers = response.headers
    if "x-ratelimit-remaining" not in headers:
        return
    logger.info(
        "GitHub API rate limit: %s of %s remaining, resets at %s",
        headers.get("x-ratelimit-remaining"),
        headers.get("x-ratelimit-limit"),
        format_reset_time(headers.get("x-ratelimit-reset")),
    )


def _build_metadata(
    submission: Submission,
    repo_data: dict[str, Any] | None,
    npm_data: dict[str, Any] | None,
) -> AuditMetadata:
    github = (
        RepositoryMetadata.from_payload(repo_data, submission)
        if repo_data is not None
        else None
    )
    npm = (
        PackageMetadata.from_payload(npm_data, submission)
        if npm_data is not None
        else None
    )
    return AuditMetadata(github=github, npm=npm)
