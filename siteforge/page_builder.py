"""Assemble a single page from its descriptor.

:class:`PageAssembler` turns a :class:`~siteforge.config.PageDescriptor` into
final HTML: it resolves the layout, builds the header, footer, and declared
components, places components into the body content, computes the page's
stylesheet and script links, and substitutes the final variable set into the
layout.

Example
-------
>>> from pathlib import Path
>>> from siteforge.config import load_page_descriptor, load_site_config
>>> site = load_site_config(Path("config.json"))  # doctest: +SKIP
>>> assembler = PageAssembler(site)  # doctest: +SKIP
>>> assembler.write_page(load_page_descriptor(Path("pages/index.json")))  # doctest: +SKIP
PosixPath('build/index.html')
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as typ
from html import escape
from pathlib import Path

from siteforge._constants import (
    COMPONENT_SCRIPT,
    COMPONENT_STYLESHEET,
    GLOBAL_SCRIPT,
    GLOBAL_STYLESHEET,
    HIGHLIGHT_STYLESHEET,
)
from siteforge.assets import find_page_asset, page_asset_candidates
from siteforge.errors import ContentNotFoundError
from siteforge.templating import (
    COMPONENT_PLACEHOLDER_PATTERN,
    ComponentBuilder,
    MarkdownRenderer,
    substitute,
)

if typ.TYPE_CHECKING:
    from siteforge.config import PageDescriptor, SiteConfig

logger = logging.getLogger(__name__)

FIXED_COMPONENTS = ("header", "footer")
CONTENT_SUFFIXES = (".html", ".md")


@dc.dataclass(slots=True)
class PageAssets:
    """Stylesheet and script URLs linked from one page, in link order."""

    stylesheets: list[str] = dc.field(default_factory=list)
    scripts: list[str] = dc.field(default_factory=list)

    def head_markup(self) -> str:
        """Return ``<link>`` tags for the stylesheets."""
        return "\n".join(
            f'  <link href="{escape(href, quote=True)}" rel="stylesheet">'
            for href in self.stylesheets
        )

    def body_markup(self) -> str:
        """Return ``<script>`` tags for the scripts."""
        return "\n".join(
            f'  <script src="{escape(src, quote=True)}"></script>' for src in self.scripts
        )


def place_components(content: str, built: typ.Mapping[str, str]) -> str:
    """Insert built components into ``content``.

    The first ``{{COMPONENT:name}}`` token for each built component receives
    its HTML and repeated tokens for it are dropped; tokens naming components
    that were not built are left verbatim. Components without a token are
    prepended in declaration order, so each appears exactly once.

    Examples
    --------
    >>> place_components("<p>{{COMPONENT:foo}}</p>", {"foo": "F", "bar": "B"})
    'B\\n<p>F</p>'
    """
    placed: set[str] = set()

    def _repl(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in built:
            return match.group(0)
        if name in placed:
            return ""
        placed.add(name)
        return built[name]

    body = COMPONENT_PLACEHOLDER_PATTERN.sub(_repl, content)
    leading = "".join(
        f"{html}\n" for name, html in built.items() if name not in placed
    )
    return leading + body


class PageAssembler:
    """Build pages for one site configuration."""

    def __init__(
        self,
        site: SiteConfig,
        *,
        components: ComponentBuilder | None = None,
        markdown: MarkdownRenderer | None = None,
    ) -> None:
        self.site = site
        self.components = components or ComponentBuilder(site)
        self.markdown = markdown or MarkdownRenderer()

    def build_page(self, descriptor: PageDescriptor) -> str:
        """Return the final HTML for ``descriptor``.

        Raises
        ------
        ComponentNotFoundError
            If the layout, header, footer, or a declared component is missing.
        ContentNotFoundError
            If ``content_file`` names a file that does not exist.
        HookError
            If a component build script is invalid.
        """
        layout = self.components.resolver.resolve(descriptor.layout)
        theme = descriptor.header_theme
        site_vars = self.site.variables
        header_html = self.components.build(
            "header", {"HEADER_THEME": theme, "HEADER_MODE": theme}
        )
        footer_html = self.components.build("footer")

        built: dict[str, str] = {}
        if descriptor.components:
            logger.debug(
                "building %d component(s) for %s",
                len(descriptor.components),
                descriptor.page,
            )
        for ref in descriptor.components:
            built[ref.name] = self.components.build(ref.name, ref.vars)

        body = place_components(self.load_content(descriptor), built)
        assets = self.collect_assets(descriptor)

        page_vars: dict[str, typ.Any] = dict(site_vars)
        page_vars.update(
            {
                "PAGE_TITLE": descriptor.title or site_vars.get("SITE_NAME", ""),
                "PAGE_DESCRIPTION": descriptor.description
                or site_vars.get("SITE_DESCRIPTION", ""),
                "HEADER": header_html,
                "CONTENT": body,
                "FOOTER": footer_html,
                "HEADER_MODE": theme,
                "HEADER_THEME": theme,
                "HEAD_EXTRA": assets.head_markup(),
                "BODY_EXTRA": assets.body_markup(),
            }
        )
        return substitute(layout, page_vars)

    def write_page(self, descriptor: PageDescriptor) -> Path:
        """Build ``descriptor`` and write ``<output>/<page>.html``.

        Nothing is written when building fails.
        """
        html = self.build_page(descriptor)
        output_path = self.site.paths.output / f"{descriptor.page}.html"
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        logger.info('built %s - "%s"', output_path.name, descriptor.title or "")
        return output_path

    def load_content(self, descriptor: PageDescriptor) -> str:
        """Return the body content for ``descriptor``.

        Inline ``content`` wins, then ``content_file`` (relative to the
        descriptor), then a sibling file sharing the descriptor's base name.
        Markdown files are rendered to HTML.
        """
        if descriptor.content is not None:
            return descriptor.content
        directory = descriptor.directory or self.site.paths.pages
        if descriptor.content_file:
            path = directory / descriptor.content_file
            if not path.is_file():
                msg = f"Content file '{path}' not found for page '{descriptor.page}'."
                raise ContentNotFoundError(msg)
            logger.debug("loaded content from %s", path)
            return self._read_content(path)
        if descriptor.source is not None:
            for suffix in CONTENT_SUFFIXES:
                sibling = descriptor.source.with_suffix(suffix)
                if sibling.is_file():
                    logger.debug("auto-detected content %s", sibling)
                    return self._read_content(sibling)
        return ""

    def _read_content(self, path: Path) -> str:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".md":
            return self.markdown.render(text)
        return text

    def collect_assets(self, descriptor: PageDescriptor) -> PageAssets:
        """Return the stylesheet and script links ``descriptor`` depends on."""
        paths = self.site.paths
        assets = PageAssets(
            stylesheets=[
                GLOBAL_STYLESHEET,
                "assets/css/header.css",
                "assets/css/footer.css",
                HIGHLIGHT_STYLESHEET,
            ],
            scripts=[GLOBAL_SCRIPT, "assets/js/header.js"],
        )
        seen = set(FIXED_COMPONENTS)
        for ref in descriptor.components:
            if ref.name in seen:
                continue
            seen.add(ref.name)
            folder = paths.components / ref.name
            if (folder / COMPONENT_STYLESHEET).is_file():
                assets.stylesheets.append(f"assets/css/{ref.name}.css")
            if (folder / COMPONENT_SCRIPT).is_file():
                assets.scripts.append(f"assets/js/{ref.name}.js")

        catalog_prefix = self.site.catalog.page_prefix if self.site.catalog else ""
        stylesheet = find_page_asset(
            page_asset_candidates(paths, descriptor.page, catalog_prefix=catalog_prefix),
            COMPONENT_STYLESHEET,
        )
        if stylesheet:
            assets.stylesheets.append(f"assets/css/pages/{stylesheet.asset_name}.css")
        script = find_page_asset(
            page_asset_candidates(paths, descriptor.page, catalog_prefix=catalog_prefix),
            COMPONENT_SCRIPT,
        )
        if script:
            assets.scripts.append(f"assets/js/pages/{script.asset_name}.js")
        return assets


__all__ = ["PageAssembler", "PageAssets", "place_components"]
