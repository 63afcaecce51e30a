"""Discover catalog items and render their image carousels.

A catalog is a directory of item folders. Each folder holds a metadata file
(``product.json`` by default) and one or more images. Both the ``products``
component hook and the catalog detail page generator read items through
:func:`discover_catalog_items` so they agree on which items are valid.

Examples
--------
>>> from pathlib import Path
>>> items = discover_catalog_items(Path("products"))  # doctest: +SKIP
>>> [item.key for item in items]  # doctest: +SKIP
['armchair', 'desk']
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

import msgspec
import msgspec.json as msgspec_json

from siteforge._constants import CATALOG_METADATA_FILE, IMAGE_EXTENSIONS
from siteforge.templating.markup import render_markup

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class CatalogItem:
    """One catalog entry with its decoded metadata and image file names."""

    key: str
    path: Path
    metadata: typ.Mapping[str, typ.Any]
    images: tuple[str, ...]

    @property
    def name(self) -> str | None:
        value = self.metadata.get("name")
        return str(value) if value else None

    def text(self, key: str, default: str = "") -> str:
        """Return metadata ``key`` as text, or ``default`` when empty."""
        value = self.metadata.get(key)
        return str(value) if value else default

    def image_urls(self, url_prefix: str) -> list[str]:
        """Return site-relative image URLs under ``url_prefix``."""
        prefix = url_prefix.strip("/")
        base = f"{prefix}/{self.key}" if prefix else self.key
        return [f"{base}/{image}" for image in self.images]


def find_images(folder: Path) -> tuple[str, ...]:
    """Return image file names in ``folder`` sorted by name."""
    return tuple(
        sorted(
            entry.name
            for entry in folder.iterdir()
            if entry.is_file() and entry.suffix.lower() in IMAGE_EXTENSIONS
        )
    )


def discover_catalog_items(
    source: Path, metadata_file: str = CATALOG_METADATA_FILE
) -> list[CatalogItem]:
    """Return every valid item under ``source`` in folder-name order.

    Folders without a metadata file, with undecodable metadata, or without
    images are logged and skipped. A missing ``source`` yields an empty list.
    """
    if not source.is_dir():
        logger.info("catalog directory not found: %s", source)
        return []

    items: list[CatalogItem] = []
    for folder in sorted(entry for entry in source.iterdir() if entry.is_dir()):
        metadata_path = folder / metadata_file
        if not metadata_path.is_file():
            logger.warning("no %s in %s", metadata_file, folder)
            continue
        try:
            metadata = msgspec_json.decode(metadata_path.read_bytes())
        except msgspec.DecodeError as exc:
            logger.error("failed to read %s: %s", metadata_path, exc)
            continue
        if not isinstance(metadata, dict):
            logger.error("metadata in %s must be a mapping", metadata_path)
            continue
        images = find_images(folder)
        if not images:
            logger.warning("no images found in %s", folder)
            continue
        items.append(
            CatalogItem(key=folder.name, path=folder, metadata=metadata, images=images)
        )
    return items


@dc.dataclass(frozen=True, slots=True)
class CarouselMarkup:
    """Rendered carousel fragments for one catalog item."""

    slides: str
    controls: str
    thumbnails: str


def render_carousel(
    image_urls: typ.Sequence[str],
    *,
    carousel_id: str,
    alt: str,
    image_class: str = "d-block w-100",
    with_thumbnails: bool = False,
) -> CarouselMarkup:
    """Render slides plus, for more than one image, controls and thumbnails.

    The first slide is marked ``active``. Controls hold previous/next buttons
    and one indicator per image.
    """
    slides = render_markup(
        "carousel_slides.jinja", images=image_urls, image_class=image_class, alt=alt
    )
    if len(image_urls) < 2:
        return CarouselMarkup(slides=slides, controls="", thumbnails="")
    controls = render_markup(
        "carousel_controls.jinja", images=image_urls, carousel_id=carousel_id
    )
    thumbnails = ""
    if with_thumbnails:
        thumbnails = render_markup(
            "thumbnails.jinja", images=image_urls, carousel_id=carousel_id, alt=alt
        )
    return CarouselMarkup(slides=slides, controls=controls, thumbnails=thumbnails)


__all__ = [
    "CarouselMarkup",
    "CatalogItem",
    "discover_catalog_items",
    "find_images",
    "render_carousel",
]
