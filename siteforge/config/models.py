"""Typed dataclasses describing siteforge site configuration structures."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path
from types import MappingProxyType

from siteforge._constants import (
    ASSETS_DIR,
    CATALOG_DIR,
    CATALOG_METADATA_FILE,
    CATALOG_PAGE_PREFIX,
    COMPONENTS_DIR,
    DEFAULT_HEADER_THEME,
    DEFAULT_LAYOUT,
    DETAIL_PAGE_DIR,
    DETAIL_TEMPLATE_FILE,
    GENERATORS_DIR,
    OUTPUT_DIR,
    PAGES_DIR,
)


def _frozen_mapping(
    value: typ.Mapping[str, typ.Any] | None = None,
) -> typ.Mapping[str, typ.Any]:
    return MappingProxyType(dict(value or {}))


@dc.dataclass(frozen=True, slots=True)
class BuildPaths:
    """Directory layout of a site checkout, resolved against its root."""

    root: Path
    components: Path
    pages: Path
    output: Path
    assets: Path

    @classmethod
    def from_root(cls, root: Path) -> BuildPaths:
        """Return the conventional layout rooted at ``root``."""
        return cls(
            root=root,
            components=root / COMPONENTS_DIR,
            pages=root / PAGES_DIR,
            output=root / OUTPUT_DIR,
            assets=root / ASSETS_DIR,
        )

    @property
    def generators(self) -> Path:
        """Directory holding generator scripts and generated descriptors."""
        return self.pages / GENERATORS_DIR


@dc.dataclass(frozen=True, slots=True)
class CollectionConfig:
    """A directory copied wholesale into the output tree."""

    name: str
    source: Path
    destination: str
    optional: bool = False


@dc.dataclass(frozen=True, slots=True)
class CatalogConfig:
    """Where catalog items live and how their detail pages are named."""

    source: Path
    detail_template: Path
    page_prefix: str = CATALOG_PAGE_PREFIX
    metadata_file: str = CATALOG_METADATA_FILE
    url_prefix: str = CATALOG_DIR

    @classmethod
    def from_paths(cls, paths: BuildPaths) -> CatalogConfig:
        """Return the default catalog layout for ``paths``."""
        return cls(
            source=paths.root / CATALOG_DIR,
            detail_template=paths.pages / DETAIL_PAGE_DIR / DETAIL_TEMPLATE_FILE,
        )


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Immutable build-wide configuration passed into every build step.

    Attributes
    ----------
    raw : Mapping[str, Any]
        The decoded configuration document.
    variables : Mapping[str, Any]
        Flattened upper-case variables plus convenience aliases; the default
        variable source for every substitution.
    paths : BuildPaths
        Resolved source and output directories.
    collections : tuple[CollectionConfig, ...]
        Directories copied into the output tree.
    catalog : CatalogConfig
        Catalog layout used by the products hook and detail generator.
    """

    raw: typ.Mapping[str, typ.Any]
    variables: typ.Mapping[str, typ.Any]
    paths: BuildPaths
    collections: tuple[CollectionConfig, ...] = ()
    catalog: CatalogConfig | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw", _frozen_mapping(self.raw))
        object.__setattr__(self, "variables", _frozen_mapping(self.variables))
        if self.catalog is None:
            object.__setattr__(self, "catalog", CatalogConfig.from_paths(self.paths))


@dc.dataclass(frozen=True, slots=True)
class ComponentRef:
    """A component requested by a page together with its local variables."""

    name: str
    vars: typ.Mapping[str, typ.Any] = dc.field(default_factory=_frozen_mapping)

    def __post_init__(self) -> None:
        object.__setattr__(self, "vars", _frozen_mapping(self.vars))


@dc.dataclass(frozen=True, slots=True)
class PageDescriptor:
    """A fully parsed page descriptor."""

    page: str
    title: str | None = None
    description: str | None = None
    layout: str = DEFAULT_LAYOUT
    header_theme: str = DEFAULT_HEADER_THEME
    content: str | None = None
    content_file: str | None = None
    components: tuple[ComponentRef, ...] = ()
    source: Path | None = None

    @property
    def directory(self) -> Path | None:
        """Directory that relative content paths are resolved against."""
        return self.source.parent if self.source else None


__all__ = [
    "BuildPaths",
    "CatalogConfig",
    "CollectionConfig",
    "ComponentRef",
    "PageDescriptor",
    "SiteConfig",
]
