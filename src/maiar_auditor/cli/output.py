"""Rich output formatting helpers for the audit CLI.

Renders the plugin summary, the verdict with its issue list, and the
"Detailed Metadata" block. The detailed block always has the same shape:
absent values are replaced by ``"N/A"``, ``0`` or ``[]`` so downstream
readers never have to guess which checks failed.
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from maiar_auditor.core.audit import AuditResult, Submission

NA = "N/A"
UNKNOWN = "Unknown"

console = Console()


def _or_na(value: Any) -> Any:
    return value if value else NA


def detailed_metadata(submission: Submission, result: AuditResult) -> dict[str, Any]:
    """Build the sentinel-filled metadata report for one audit.

    Args:
        submission: The audited submission (echoed back in the report).
        result: The audit outcome.

    Returns:
        JSON-serializable dict with ``submission``, ``github`` and ``npm``
        blocks whose keys are present whether or not the lookups succeeded.
    """
    github = result.metadata.github
    npm = result.metadata.npm

    if github is not None:
        github_block: dict[str, Any] = {
            "name": _or_na(github.name),
            "owner": _or_na(github.owner),
            "full_name": _or_na(github.full_name),
            "stars": github.stars or 0,
            "description": _or_na(github.description),
            "topics": github.topics or [],
            "last_updated": _or_na(github.last_updated),
            "is_public": github.is_public,
            "url": submission.github_url,
        }
    else:
        github_block = {
            "name": NA,
            "owner": NA,
            "full_name": NA,
            "stars": 0,
            "description": NA,
            "topics": [],
            "last_updated": NA,
            "is_public": UNKNOWN,
            "url": submission.github_url,
        }

    if npm is not None:
        npm_block: dict[str, Any] = {
            "name": _or_na(npm.name),
            "version": _or_na(npm.version),
            "last_published": _or_na(npm.last_published),
            "author": {
                "name": _or_na(npm.author.name),
                "email": _or_na(npm.author.email),
                "url": _or_na(npm.author.url),
            },
            "maintainers": npm.maintainers or [],
            "url": submission.npm_url,
        }
    else:
        npm_block = {
            "name": NA,
            "version": NA,
            "last_published": NA,
            "author": {"name": NA, "email": NA, "url": NA},
            "maintainers": [],
            "url": submission.npm_url,
        }

    return {
        "submission": {
            "repo": _or_na(submission.repo),
            "owner": _or_na(submission.owner),
            "npm_package_name": _or_na(submission.npm_package_name),
        },
        "github": github_block,
        "npm": npm_block,
    }


def print_plugin_information(result: AuditResult) -> None:
    """Print the short repository / package summary."""
    console.print("\n[bold]Plugin Information[/bold]")
    github = result.metadata.github
    if github is not None:
        console.print(f"Repository: {github.full_name or NA}", markup=False, highlight=False)
        console.print(f"Owner: {github.owner or NA}", markup=False, highlight=False)
    else:
        console.print("[dim]GitHub repository information not available[/dim]")

    npm = result.metadata.npm
    if npm is not None:
        console.print(f"NPM Package: {npm.name}", markup=False, highlight=False)
        console.print(f"Author: {npm.author.name or UNKNOWN}", markup=False, highlight=False)
    else:
        console.print("[dim]NPM package information not available[/dim]")


def print_audit_results(result: AuditResult) -> None:
    """Print the PASSED / FAILED banner followed by the issue list."""
    if result.passed:
        verdict = Text("PASSED", style="bold green")
    else:
        verdict = Text("FAILED", style="bold red")
    console.print(Panel(Text.assemble(("Status: ", "bold"), verdict), title="Audit Results"))

    if result.issues:
        console.print("\n[bold]Issues Found:[/bold]")
        for issue in result.issues:
            console.print(f"- {issue}", markup=False, highlight=False, soft_wrap=True)


def print_detailed_metadata(submission: Submission, result: AuditResult) -> None:
    """Print the sentinel-filled metadata block as indented JSON."""
    console.print("\n[bold]Detailed Metadata:[/bold]")
    console.print(
        json.dumps(detailed_metadata(submission, result), indent=2),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def print_report(submission: Submission, result: AuditResult) -> None:
    """Print the full human-readable audit report."""
    print_plugin_information(result)
    print_audit_results(result)
    print_detailed_metadata(submission, result)
