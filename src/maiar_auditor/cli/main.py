"""Maiar plugin auditor CLI.

Entry point for the ``maiar-audit`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    audit — Check a plugin submission against GitHub and the npm registry.

Usage::

    maiar-audit audit '{"repo": "plugin-x", "owner": "acme", "npm_package_name": "plugin-x"}'
    maiar-audit --version
"""

from __future__ import annotations

import click

from maiar_auditor import __version__
from maiar_auditor.cli.audit_cmd import audit_command


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Maiar Plugin Auditor: verify plugin submissions before listing.

    Checks that the plugin's GitHub repository is public, described and
    tagged "maiar", and that its npm package is public and points back to
    the same repository.
    """


cli.add_command(audit_command)
