"""Cyclopts CLI entrypoint for building siteforge sites.

The ``siteforge`` console script wipes the output directory, copies assets and
collections, runs page generators, and builds every page descriptor found
under the pages root. Typical usage is ``siteforge build`` from the site root
locally or in CI.

Examples
--------
Build the site described by ``config.json`` in the current directory:

>>> from siteforge.cli import main
>>> main()  # doctest: +SKIP

Build a site that lives elsewhere:

>>> from siteforge.cli import app
>>> app.run(["build", "--config", "site/config.json"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_CONFIG_FILE
from .config import load_site_config
from .errors import NoPagesError, SiteConfigError
from .orchestrator import BuildOrchestrator

if typ.TYPE_CHECKING:
    from .orchestrator import BuildSummary

DEFAULT_CONFIG = Path(DEFAULT_CONFIG_FILE)
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = App(name="siteforge", config=cyclopts.config.Env("SITEFORGE_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def configure_logging(*, verbose: bool = False) -> None:
    """Send siteforge log records to stderr at INFO, or DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def report(summary: BuildSummary) -> None:
    """Print the written pages and a one-line summary to stdout."""
    for path in summary.written:
        print(f"wrote {_format_path(path)}")
    line = f"built {summary.built} page(s) into {_format_path(summary.output_dir)}"
    if summary.failed:
        line += f", {summary.failed} failed"
    print(f"{line} in {summary.elapsed:.2f}s")


@app.command(help="Build every page into the output directory.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to the site config", env_var="SITEFORGE_CONFIG")
    ] = DEFAULT_CONFIG,
    root: typ.Annotated[
        Path | None,
        Parameter(
            help="Site root (defaults to the config file's directory)",
            env_var="SITEFORGE_ROOT",
        ),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log debug detail", env_var="SITEFORGE_VERBOSE")
    ] = False,
) -> None:
    """Run a full rebuild of the site.

    Parameters
    ----------
    config : Path, optional
        Path to the configuration document; defaults to ``config.json`` and
        can be overridden via ``SITEFORGE_CONFIG``.
    root : Path or None, optional
        Directory containing ``components``, ``pages`` and ``assets``. When
        ``None`` (default) the configuration file's directory is used.
    verbose : bool, optional
        Emit DEBUG-level log records.

    Returns
    -------
    None
        Writes the site and prints the written paths and a summary.

    Raises
    ------
    SystemExit
        With status 1 when the configuration is missing or invalid, or when no
        page descriptors exist. Individual page failures do not change the
        exit status.
    """
    configure_logging(verbose=verbose)
    try:
        site = load_site_config(config, root=root)
        summary = BuildOrchestrator(site).run()
    except (FileNotFoundError, SiteConfigError, NoPagesError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    report(summary)


def main() -> None:
    """Invoke the Cyclopts application that powers the `siteforge` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
