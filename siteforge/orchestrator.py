"""Drive a full site build from an empty output directory.

The sequence is: wipe and recreate the output directory, copy assets and
collections, run page generators, discover every page descriptor under the
pages root, and build each page independently. A page that fails is logged and
skipped; generator and collection failures never abort the build. Only a
missing or malformed configuration (raised by the loader) and an empty page
set are fatal.

Example
-------
>>> from pathlib import Path
>>> from siteforge.config import load_site_config
>>> summary = BuildOrchestrator(load_site_config(Path("config.json"))).run()  # doctest: +SKIP
>>> summary.built  # doctest: +SKIP
4
"""

from __future__ import annotations

import dataclasses as dc
import logging
import shutil
import time
import typing as typ
from pathlib import Path

from siteforge.assets import AssetPipeline, CopyReport
from siteforge.config import load_page_descriptor
from siteforge.errors import NoPagesError, PageBuildError
from siteforge.page_builder import PageAssembler
from siteforge.page_generators import PageGeneratorRunner

if typ.TYPE_CHECKING:
    from siteforge.config import SiteConfig

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class PageFailure:
    """A descriptor that could not be built and the reason why."""

    source: Path
    error: str


@dc.dataclass(slots=True)
class BuildSummary:
    """Outcome of one build run."""

    output_dir: Path
    written: list[Path] = dc.field(default_factory=list)
    failures: list[PageFailure] = dc.field(default_factory=list)
    generated: list[Path] = dc.field(default_factory=list)
    assets: CopyReport = dc.field(default_factory=CopyReport)
    elapsed: float = 0.0

    @property
    def built(self) -> int:
        return len(self.written)

    @property
    def failed(self) -> int:
        return len(self.failures)


def discover_pages(pages_dir: Path) -> list[Path]:
    """Return every ``*.json`` descriptor under ``pages_dir`` in sorted order."""
    if not pages_dir.is_dir():
        return []
    return sorted(path for path in pages_dir.rglob("*.json") if path.is_file())


class BuildOrchestrator:
    """Run the whole build for one :class:`~siteforge.config.SiteConfig`."""

    def __init__(
        self,
        site: SiteConfig,
        *,
        assembler: PageAssembler | None = None,
        generators: PageGeneratorRunner | None = None,
    ) -> None:
        self.site = site
        self.assembler = assembler or PageAssembler(site)
        self.generators = generators or PageGeneratorRunner(site)

    def run(self) -> BuildSummary:
        """Build the site and return a :class:`BuildSummary`.

        Raises
        ------
        NoPagesError
            If no page descriptors exist after generators have run.
        """
        started = time.perf_counter()
        output_dir = self.site.paths.output
        summary = BuildSummary(output_dir=output_dir)

        self.clean_output()
        summary.assets = AssetPipeline(
            self.site, markdown=self.assembler.markdown
        ).run()
        summary.generated = self.generators.run()

        descriptors = discover_pages(self.site.paths.pages)
        if not descriptors:
            msg = f"No page descriptors found under '{self.site.paths.pages}'."
            raise NoPagesError(msg)
        logger.info("found %d page(s) to build", len(descriptors))

        for source in descriptors:
            try:
                written = self.build_one(source)
            except (PageBuildError, OSError, ValueError) as exc:
                logger.error("failed to build %s: %s", source, exc)
                summary.failures.append(PageFailure(source=source, error=str(exc)))
                continue
            except Exception as exc:  # noqa: BLE001
                logger.exception("unexpected error building %s", source)
                summary.failures.append(PageFailure(source=source, error=repr(exc)))
                continue
            summary.written.append(written)

        summary.elapsed = time.perf_counter() - started
        return summary

    def build_one(self, source: Path) -> Path:
        """Load and build the descriptor at ``source``; return the written file."""
        descriptor = load_page_descriptor(source)
        return self.assembler.write_page(descriptor)

    def clean_output(self) -> None:
        """Delete the output directory, if present, and recreate it empty."""
        output_dir = self.site.paths.output
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True)


__all__ = [
    "BuildOrchestrator",
    "BuildSummary",
    "PageFailure",
    "discover_pages",
]
