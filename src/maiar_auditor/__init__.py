"""Maiar Plugin Auditor: submission checks against GitHub and the npm registry."""

from __future__ import annotations

import logging

__version__ = "0.1.0"
__license__ = "MIT"

# Identifies the auditor to upstream APIs; GitHub rejects requests without one.
USER_AGENT = "Maiar-Plugin-Auditor"

logging.getLogger(__name__).addHandler(logging.NullHandler())
