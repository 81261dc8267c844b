"""Plugin submission audit.

Given a ``Submission`` (repository owner, repository name, npm package
name), ``PluginAuditor`` checks the GitHub repository and the npm package
and returns an ``AuditResult`` with an ordered list of issues and whatever
metadata could be fetched.

Submodules
----------
- ``models``: Data types (Submission, Author, RepositoryMetadata,
  PackageMetadata, AuditMetadata, AuditResult) and field normalization.
- ``engine``: The PluginAuditor class and the issue messages.

All public names are re-exported here::

    from maiar_auditor.core.audit import PluginAuditor, AuditResult, Submission
"""

from maiar_auditor.core.audit.models import (
    AuditMetadata,
    AuditResult,
    Author,
    PackageMetadata,
    RepositoryMetadata,
    Submission,
    normalize_author,
    normalize_repository_url,
)
from maiar_auditor.core.audit.engine import PluginAuditor

__all__ = [
    "AuditMetadata",
    "AuditResult",
    "Author",
    "PackageMetadata",
    "PluginAuditor",
    "RepositoryMetadata",
    "Submission",
    "normalize_author",
    "normalize_repository_url",
]
