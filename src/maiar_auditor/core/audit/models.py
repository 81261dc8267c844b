"""Data models for plugin audits: Submission, metadata records, AuditResult.

These are the types produced and consumed by the audit procedure. They are
decoupled from the engine so the CLI formatters can import them without
pulling in the HTTP layer.

The npm ``author`` and ``repository`` fields arrive either as a string or as
an object; ``normalize_author`` and ``normalize_repository_url`` reduce them
to one shape before any comparison runs.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

GITHUB_REPO_PAGE: str = "https://github.com/{owner}/{repo}"
NPM_PACKAGE_PAGE: str = "https://www.npmjs.com/package/{package}"


# ---------------------------------------------------------------------------
# Submission
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Submission:
    """The identifying triple of a candidate plugin.

    Attributes:
        repo: GitHub repository name.
        owner: GitHub user or organization login.
        npm_package_name: Published npm package name (may be scoped).
    """

    repo: str = ""
    owner: str = ""
    npm_package_name: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Submission:
        """Build a submission from decoded JSON.

        Anything that is not an object yields an empty submission, which the
        field-presence check then rejects.
        """
        if not isinstance(data, dict):
            return cls()
        return cls(
            repo=_as_text(data.get("repo")),
            owner=_as_text(data.get("owner")),
            npm_package_name=_as_text(data.get("npm_package_name")),
        )

    @property
    def is_complete(self) -> bool:
        """True when all three fields are non-empty."""
        return bool(self.repo and self.owner and self.npm_package_name)

    @property
    def slug(self) -> str:
        """``owner/repo``, the fragment an npm repository URL must contain."""
        return f"{self.owner}/{self.repo}"

    @property
    def github_url(self) -> str:
        return GITHUB_REPO_PAGE.format(owner=self.owner, repo=self.repo)

    @property
    def npm_url(self) -> str:
        return NPM_PACKAGE_PAGE.format(package=self.npm_package_name)

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def _as_text(value: Any) -> str:
    if not value:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else []


# ---------------------------------------------------------------------------
# Normalization of string-or-object npm fields
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Author:
    """Structured npm author. Every part may be missing."""

    name: str | None = None
    email: str | None = None
    url: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return asdict(self)


def normalize_author(author: Any) -> Author:
    """Reduce an npm ``author`` field to an ``Author``.

    An object keeps its ``name``/``email``/``url`` keys, a bare string
    becomes the name, and a missing author gives an empty ``Author``.
    """
    if isinstance(author, Author):
        return author
    if isinstance(author, dict):
        return Author(
            name=author.get("name"),
            email=author.get("email"),
            url=author.get("url"),
        )
    if author is None:
        return Author()
    return Author(name=str(author))


def normalize_repository_url(repository: Any) -> str:
    """Reduce an npm ``repository`` field to a plain string.

    Strings pass through, objects contribute their ``url``, anything else
    (including a missing field) becomes ``""``.
    """
    if not repository:
        return ""
    if isinstance(repository, str):
        return repository
    if isinstance(repository, dict) and repository.get("url"):
        return str(repository["url"])
    return ""


# ---------------------------------------------------------------------------
# Fetched metadata
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RepositoryMetadata:
    """Summary of the GitHub repository document.

    Attributes:
        name: Repository name as reported by GitHub.
        owner: Owner login.
        full_name: ``owner/name``.
        stars: Stargazer count.
        description: Repository description, if any.
        topics: Topics listed on the repository document.
        last_updated: ISO-8601 ``updated_at`` timestamp.
        is_public: False when GitHub reports the repository as private.
        url: Canonical github.com page built from the submission.
    """

    name: str | None
    owner: str | None
    full_name: str | None
    stars: int
    description: str | None
    topics: list[str]
    last_updated: str | None
    is_public: bool
    url: str

    @classmethod
    def from_payload(
        cls, payload: dict[str, Any], submission: Submission
    ) -> RepositoryMetadata:
        owner = payload.get("owner")
        return cls(
            name=payload.get("name"),
            owner=owner.get("login") if isinstance(owner, dict) else None,
            full_name=payload.get("full_name"),
            stars=payload.get("stargazers_count") or 0,
            description=payload.get("description"),
            topics=_as_list(payload.get("topics")),
            last_updated=payload.get("updated_at"),
            is_public=not payload.get("private"),
            url=submission.github_url,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PackageMetadata:
    """Summary of the npm package document.

    Attributes:
        name: Package name, taken from the submission.
        version: ``dist-tags.latest``.
        last_published: ``time.modified`` timestamp.
        author: Normalized author.
        maintainers: Maintainer entries as published (``[]`` when absent).
        is_public: False when the document is flagged ``private``.
        repository: Declared repository reference, normalized to a string.
        url: Canonical npmjs.com page built from the submission.
    """

    name: str
    version: str | None
    last_published: str | None
    author: Author
    maintainers: list[Any]
    is_public: bool
    repository: str
    url: str

    @classmethod
    def from_payload(
        cls, payload: dict[str, Any], submission: Submission
    ) -> PackageMetadata:
        dist_tags = payload.get("dist-tags")
        times = payload.get("time")
        return cls(
            name=submission.npm_package_name,
            version=dist_tags.get("latest") if isinstance(dist_tags, dict) else None,
            last_published=times.get("modified") if isinstance(times, dict) else None,
            author=normalize_author(payload.get("author")),
            maintainers=_as_list(payload.get("maintainers")),
            is_public=not payload.get("private"),
            repository=normalize_repository_url(payload.get("repository")),
            url=submission.npm_url,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# AuditResult
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AuditMetadata:
    """Whatever was fetched successfully; ``None`` marks a failed lookup."""

    github: RepositoryMetadata | None = None
    npm: PackageMetadata | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "github": self.github.to_dict() if self.github else None,
            "npm": self.npm.to_dict() if self.npm else None,
        }


@dataclass
class AuditResult:
    """The outcome of auditing one submission.

    Attributes:
        issues: Ordered, human-readable reasons the submission fails.
        metadata: Partial or full metadata, present even on failure.
    """

    issues: list[str] = field(default_factory=list)
    metadata: AuditMetadata = field(default_factory=AuditMetadata)

    @property
    def passed(self) -> bool:
        """The verdict: True iff no issue was recorded."""
        return not self.issues

    def to_dict(self) -> dict[str, Any]:
        return {
            "passed": self.passed,
            "issues": list(self.issues),
            "metadata": self.metadata.to_dict(),
        }
