"""``maiar-audit audit <submission-json>`` — Audit one plugin submission.

Checks the submission's GitHub repository and npm package, then prints the
plugin summary, the verdict with any issues, and the detailed metadata.

Usage::

    maiar-audit audit '{"repo": "plugin-terminal", "owner": "UraniumCorporation",
                        "npm_package_name": "@maiar-ai/plugin-terminal"}'
    GITHUB_TOKEN=... maiar-audit audit '...' --format json

Exit Codes:
    0 — The audit completed (the verdict itself is in the output).
    1 — Missing or unparseable submission, invalid settings, or an
        unexpected failure.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from dataclasses import replace

import click

from maiar_auditor.config import DEFAULT_TIMEOUT, AuditorConfig
from maiar_auditor.core.audit import AuditResult, PluginAuditor, Submission
from maiar_auditor.exceptions import ConfigError

logger = logging.getLogger(__name__)

USAGE_EXAMPLE = (
    "Usage: maiar-audit audit <submission-json>\n"
    "Example: maiar-audit audit "
    '\'{"repo": "my-plugin", "owner": "username", "npm_package_name": "my-package"}\''
)


def _run_async(coro: object) -> object:
    """Run an async coroutine in a synchronous context."""
    return asyncio.run(coro)  # type: ignore[arg-type]


def _configure_logging(verbose: bool) -> None:
    """Send library logs to stderr through rich when ``--verbose`` is set."""
    if not verbose:
        return
    from rich.console import Console
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _parse_submission(raw: str) -> Submission:
    """Decode the submission argument.

    Raises:
        click.ClickException: If *raw* is not valid JSON.
    """
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise click.ClickException(f"Submission is not valid JSON: {exc}") from exc
    return Submission.from_dict(data)


def _format_json_output(submission: Submission, result: AuditResult) -> None:
    from maiar_auditor.cli.output import detailed_metadata

    output = result.to_dict()
    output["report"] = detailed_metadata(submission, result)
    click.echo(json.dumps(output, indent=2))


@click.command("audit")
@click.argument("submission_json", required=False)
@click.option(
    "--github-token",
    envvar="GITHUB_TOKEN",
    default=None,
    help="GitHub token (default: $GITHUB_TOKEN). Optional, raises rate limits.",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help=f"Per-request timeout in seconds (default: $MAIAR_AUDIT_TIMEOUT or {DEFAULT_TIMEOUT:g}).",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.option("--verbose", "-v", is_flag=True, help="Log HTTP activity to stderr.")
def audit_command(
    submission_json: str | None,
    github_token: str | None,
    timeout: float | None,
    output_format: str,
    verbose: bool,
) -> None:
    """Audit a plugin submission against GitHub and the npm registry.

    SUBMISSION_JSON is an object with "repo", "owner" and "npm_package_name".

    Examples:

        maiar-audit audit '{"repo": "plugin-x", "owner": "acme", "npm_package_name": "plugin-x"}'

        maiar-audit audit '...' --format json
    """
    if not submission_json:
        click.echo(USAGE_EXAMPLE)
        sys.exit(1)

    _configure_logging(verbose)

    try:
        submission = _parse_submission(submission_json)
        config = replace(AuditorConfig.from_env(), github_token=github_token or None)
        if timeout is not None:
            config = replace(config, timeout=timeout)
    except click.ClickException as exc:
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if output_format == "text":
        click.echo("\nRunning audit...")
        if not config.has_token:
            click.echo("Note: Running without GitHub token. Rate limits will be stricter.")

    try:
        auditor = PluginAuditor(config)
        result = _run_async(auditor.audit_plugin(submission))
        if output_format == "json":
            _format_json_output(submission, result)  # type: ignore[arg-type]
        else:
            from maiar_auditor.cli.output import print_report

            print_report(submission, result)  # type: ignore[arg-type]
    except Exception as exc:
        logger.debug("Audit command failed", exc_info=True)
        click.echo(f"Error running audit: {exc}", err=True)
        sys.exit(1)
