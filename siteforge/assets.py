"""Copy static assets, component and page styles/scripts, and collections.

The pipeline mirrors the conventions the page builder links against:

* ``assets/<dir>/`` (everything except ``css``) -> ``<output>/assets/<dir>/``
* ``assets/css/global.css`` -> ``<output>/assets/css/global.css``
* Pygments rules for Markdown code blocks -> ``<output>/assets/css/codehilite.css``
* ``components/<name>/style.css`` -> ``<output>/assets/css/<name>.css``
* ``components/<name>/script.js`` -> ``<output>/assets/js/<name>.js``
* ``pages/<dir>/style.css`` -> ``<output>/assets/css/pages/<dir>.css`` (a
  leading underscore is dropped, so ``_product-detail`` becomes
  ``product-detail``), and likewise for ``script.js``
* each declared collection -> ``<output>/<destination>/``
"""

from __future__ import annotations

import dataclasses as dc
import logging
import shutil
import typing as typ
from pathlib import Path

from siteforge._constants import (
    COMPONENT_SCRIPT,
    COMPONENT_STYLESHEET,
    DETAIL_PAGE_DIR,
    HIGHLIGHT_STYLESHEET,
)
from siteforge.templating import MarkdownRenderer

if typ.TYPE_CHECKING:
    from siteforge.config import BuildPaths, CollectionConfig, SiteConfig

logger = logging.getLogger(__name__)


def copy_tree(src: Path, dest: Path) -> int:
    """Copy ``src`` recursively into ``dest`` and return the file count.

    Directories are created as needed and existing files are overwritten;
    files already present in ``dest`` but absent from ``src`` are left alone.
    """
    shutil.copytree(src, dest, dirs_exist_ok=True)
    return sum(1 for path in src.rglob("*") if path.is_file())


def _copy_file(src: Path, dest: Path) -> int:
    if not src.is_file():
        return 0
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, dest)
    return 1


def page_asset_name(directory: Path) -> str:
    """Return the output basename for page assets found in ``directory``."""
    return directory.name.removeprefix("_")


@dc.dataclass(frozen=True, slots=True)
class PageAssetSource:
    """A page-level asset file and the name it is published under."""

    path: Path
    asset_name: str


def page_asset_candidates(
    paths: BuildPaths, page: str, *, catalog_prefix: str
) -> typ.Iterator[Path]:
    """Yield directories that may hold assets for ``page``, in priority order.

    The page's own folder comes first, then the generators folder, then (for
    catalog detail pages) the shared detail-template folder.
    """
    yield paths.pages / page
    yield paths.generators
    if catalog_prefix and page.startswith(catalog_prefix):
        yield paths.pages / DETAIL_PAGE_DIR


def find_page_asset(
    candidates: typ.Iterable[Path], filename: str
) -> PageAssetSource | None:
    """Return the first candidate directory containing ``filename``, if any."""
    for directory in candidates:
        path = directory / filename
        if path.is_file():
            return PageAssetSource(path=path, asset_name=page_asset_name(directory))
    return None


@dc.dataclass(slots=True)
class CopyReport:
    """Counts of what the asset pipeline copied."""

    files: int = 0
    collections: list[str] = dc.field(default_factory=list)
    skipped_collections: list[str] = dc.field(default_factory=list)


class AssetPipeline:
    """Populate ``<output>/assets`` and collections for a site build."""

    def __init__(
        self, site: SiteConfig, *, markdown: MarkdownRenderer | None = None
    ) -> None:
        self.site = site
        self.paths = site.paths
        self.markdown = markdown or MarkdownRenderer()
        self.css_dir = self.paths.output / "assets" / "css"
        self.js_dir = self.paths.output / "assets" / "js"

    def run(self) -> CopyReport:
        """Copy every asset group and return a :class:`CopyReport`."""
        report = CopyReport()
        report.files += self.copy_static_assets()
        report.files += self.write_highlight_stylesheet()
        report.files += self.copy_component_assets()
        report.files += self.copy_page_assets()
        self.copy_collections(report)
        return report

    def copy_static_assets(self) -> int:
        """Copy asset subdirectories other than ``css`` plus the global stylesheet."""
        assets = self.paths.assets
        if not assets.is_dir():
            logger.warning("assets directory not found: %s", assets)
            return 0
        copied = 0
        for entry in sorted(assets.iterdir()):
            if entry.is_dir() and entry.name != "css":
                copied += copy_tree(entry, self.paths.output / "assets" / entry.name)
        copied += _copy_file(assets / "css" / "global.css", self.css_dir / "global.css")
        logger.info("copied %d static asset file(s)", copied)
        return copied

    def write_highlight_stylesheet(self) -> int:
        """Write the Pygments rules for highlighted Markdown code blocks."""
        path = self.paths.output / HIGHLIGHT_STYLESHEET
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.markdown.stylesheet + "\n", encoding="utf-8")
        return 1

    def copy_component_assets(self) -> int:
        """Publish each component's stylesheet and script under its name."""
        components = self.paths.components
        if not components.is_dir():
            return 0
        copied = 0
        for entry in sorted(components.iterdir()):
            if not entry.is_dir():
                continue
            copied += _copy_file(
                entry / COMPONENT_STYLESHEET, self.css_dir / f"{entry.name}.css"
            )
            copied += _copy_file(entry / COMPONENT_SCRIPT, self.js_dir / f"{entry.name}.js")
        return copied

    def copy_page_assets(self) -> int:
        """Publish page-folder stylesheets and scripts under ``assets/*/pages``."""
        pages = self.paths.pages
        if not pages.is_dir():
            return 0
        copied = 0
        for entry in sorted(pages.iterdir()):
            if not entry.is_dir():
                continue
            name = page_asset_name(entry)
            copied += _copy_file(
                entry / COMPONENT_STYLESHEET, self.css_dir / "pages" / f"{name}.css"
            )
            copied += _copy_file(
                entry / COMPONENT_SCRIPT, self.js_dir / "pages" / f"{name}.js"
            )
        return copied

    def copy_collections(self, report: CopyReport | None = None) -> CopyReport:
        """Copy declared collections, skipping any whose source is missing."""
        report = report or CopyReport()
        for collection in self.site.collections:
            if not collection.source.is_dir():
                self._report_missing(collection)
                report.skipped_collections.append(collection.name)
                continue
            dest = self.paths.output / collection.destination
            report.files += copy_tree(collection.source, dest)
            report.collections.append(collection.name)
            logger.info("copied collection %s to %s", collection.name, dest)
        return report

    @staticmethod
    def _report_missing(collection: CollectionConfig) -> None:
        if collection.optional:
            logger.debug("optional collection %s not present", collection.name)
        else:
            logger.warning(
                "collection %s skipped: %s does not exist",
                collection.name,
                collection.source,
            )


__all__ = [
    "AssetPipeline",
    "CopyReport",
    "PageAssetSource",
    "copy_tree",
    "find_page_asset",
    "page_asset_candidates",
    "page_asset_name",
]
