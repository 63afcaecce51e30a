"""Static-site generator assembling pages from JSON descriptors and components.

This package exposes the CLI entry points used by the ``siteforge`` console
script, plus the orchestrator for programmatic builds.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``BuildOrchestrator``: Runs a full build for a loaded site configuration.

Examples
--------
>>> from siteforge import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main
from .orchestrator import BuildOrchestrator

__all__ = ["BuildOrchestrator", "app", "main"]
