"""Dynamic page generation run before page discovery.

Generators synthesize page descriptor files inside ``pages/_generators`` so
the main build discovers them like hand-written pages. Two kinds run:

* the built-in :class:`CatalogDetailGenerator`, which writes one detail page
  per catalog item when the detail template exists;
* site scripts matching ``pages/_generators/*.build.py`` that export
  ``generate_pages(context)``.

Each generator is isolated: an exception is logged with the generator's name
and the remaining generators, and the page build, still run.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json

from siteforge._constants import (
    DEFAULT_LAYOUT,
    GENERATED_PAGE_GLOB,
    GENERATED_PAGE_TEMPLATE,
    GENERATOR_SCRIPT_GLOB,
)
from siteforge.catalog import CatalogItem, discover_catalog_items, render_carousel
from siteforge.errors import PageDescriptorError
from siteforge.templating import load_script, substitute

if typ.TYPE_CHECKING:
    from siteforge.config import CatalogConfig, SiteConfig

logger = logging.getLogger(__name__)

GENERATOR_FUNCTION = "generate_pages"


@dc.dataclass(frozen=True, slots=True)
class GeneratorContext:
    """Everything a generator script needs to write page descriptors."""

    site: SiteConfig

    @property
    def pages_dir(self) -> Path:
        return self.site.paths.pages

    @property
    def generators_dir(self) -> Path:
        return self.site.paths.generators

    @property
    def output_dir(self) -> Path:
        return self.site.paths.output

    def write_descriptor(self, payload: typ.Mapping[str, typ.Any]) -> Path:
        """Write ``payload`` as a generated descriptor named after its page.

        Raises
        ------
        PageDescriptorError
            If the page name is empty or contains a path separator.
        """
        page = str(payload.get("page") or "")
        if not page or "/" in page or "\\" in page:
            msg = f"Generated page name {page!r} must be a plain file name."
            raise PageDescriptorError(msg)
        path = self.generators_dir / GENERATED_PAGE_TEMPLATE.format(page=page)
        path.parent.mkdir(parents=True, exist_ok=True)
        encoded = msgspec_json.format(msgspec_json.encode(payload), indent=2)
        path.write_bytes(encoded + b"\n")
        return path


class CatalogDetailGenerator:
    """Write one detail-page descriptor per catalog item."""

    name = "catalog-detail"
    carousel_id = "productCarousel"

    def __init__(self, catalog: CatalogConfig) -> None:
        self.catalog = catalog

    def generate(self, context: GeneratorContext) -> list[Path]:
        """Return the descriptor paths written for every valid catalog item."""
        template_path = self.catalog.detail_template
        if not template_path.is_file():
            logger.debug("detail template %s not found, skipping", template_path)
            return []
        if not self.catalog.source.is_dir():
            logger.info("no catalog at %s, skipping detail pages", self.catalog.source)
            return []

        template = template_path.read_text(encoding="utf-8")
        written: list[Path] = []
        for item in discover_catalog_items(
            self.catalog.source, self.catalog.metadata_file
        ):
            try:
                payload = self.descriptor_for(item, template)
                written.append(context.write_descriptor(payload))
            except (OSError, ValueError, TypeError) as exc:
                logger.error("failed to generate page for %s: %s", item.key, exc)
                continue
            logger.debug("generated detail page for %s", item.key)
        logger.info("generated %d catalog detail page(s)", len(written))
        return written

    def descriptor_for(self, item: CatalogItem, template: str) -> dict[str, typ.Any]:
        """Return the page descriptor mapping for ``item``."""
        name = item.text("name", "Untitled Product")
        description = item.text("description")
        carousel = render_carousel(
            item.image_urls(self.catalog.url_prefix),
            carousel_id=self.carousel_id,
            alt=item.name or "Product",
            with_thumbnails=True,
        )
        content = substitute(
            template,
            {
                "CAROUSEL_SLIDES": carousel.slides,
                "CAROUSEL_CONTROLS": carousel.controls,
                "THUMBNAIL_IMAGES": carousel.thumbnails,
                "PRODUCT_NAME": name,
                "PRODUCT_PRICE": item.text("price", "Price not available"),
                "PRODUCT_DESCRIPTION": description or "No description available",
                "PRODUCT_DETAILS": item.text("details")
                or description
                or "No additional details available",
            },
        )
        return {
            "page": f"{self.catalog.page_prefix}{item.key}",
            "title": item.name or "Product",
            "description": description,
            "layout": DEFAULT_LAYOUT,
            "header_theme": "dark",
            "components": [{"name": "contactIcons"}],
            "content": content,
        }


class ScriptGenerator:
    """A site generator script loaded fresh from disk when run."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.name = path.name

    def generate(self, context: GeneratorContext) -> list[Path]:
        module = load_script(self.path)
        function = getattr(module, GENERATOR_FUNCTION, None)
        if not callable(function):
            logger.debug("%s has no %s(), skipping", self.name, GENERATOR_FUNCTION)
            return []
        result = function(context)
        return [Path(path) for path in result or ()]


class PageGenerator(typ.Protocol):
    name: str

    def generate(self, context: GeneratorContext) -> list[Path]: ...


class PageGeneratorRunner:
    """Run every page generator for a site, isolating failures."""

    def __init__(
        self,
        site: SiteConfig,
        *,
        extra: typ.Sequence[PageGenerator] = (),
    ) -> None:
        self.site = site
        self.context = GeneratorContext(site)
        self.extra = list(extra)

    def generators(self) -> list[PageGenerator]:
        """Return the built-in catalog generator, extras, and site scripts."""
        found: list[PageGenerator] = []
        if self.site.catalog is not None:
            found.append(CatalogDetailGenerator(self.site.catalog))
        found.extend(self.extra)
        scripts_dir = self.site.paths.generators
        if scripts_dir.is_dir():
            found.extend(
                ScriptGenerator(path)
                for path in sorted(scripts_dir.glob(GENERATOR_SCRIPT_GLOB))
            )
        return found

    def clear_generated(self) -> int:
        """Delete descriptors written by a previous run; return the count."""
        scripts_dir = self.site.paths.generators
        if not scripts_dir.is_dir():
            return 0
        stale = sorted(scripts_dir.glob(GENERATED_PAGE_GLOB))
        for path in stale:
            path.unlink()
        return len(stale)

    def run(self) -> list[Path]:
        """Run every generator and return all descriptor paths written."""
        removed = self.clear_generated()
        if removed:
            logger.debug("removed %d stale generated descriptor(s)", removed)
        written: list[Path] = []
        for generator in self.generators():
            try:
                written.extend(generator.generate(self.context))
            except Exception:  # noqa: BLE001
                logger.exception("page generator %s failed", generator.name)
        return written


__all__ = [
    "CatalogDetailGenerator",
    "GeneratorContext",
    "PageGenerator",
    "PageGeneratorRunner",
    "ScriptGenerator",
]
