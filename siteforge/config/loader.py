"""Load site configuration and page descriptors into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from siteforge._constants import CATALOG_DIR, DEFAULT_HEADER_THEME, DEFAULT_LAYOUT
from siteforge.errors import PageDescriptorError, SiteConfigError

from .helpers import (
    _apply_aliases,
    _build_catalog,
    _build_collections,
    _build_paths,
    _read_document,
    flatten_config,
)
from .models import CollectionConfig, ComponentRef, PageDescriptor, SiteConfig

HEADER_THEMES = frozenset({"light", "dark"})


def load_site_config(path: Path, *, root: Path | None = None) -> SiteConfig:
    """Load the configuration document that drives a site build.

    Parameters
    ----------
    path : Path
        Filesystem path to the configuration document (``config.json`` by
        default; ``.yaml``/``.yml`` files are read as YAML 1.2).
    root : Path, optional
        Site root that component, page, asset, and output directories are
        resolved against. Defaults to the directory containing ``path``.

    Returns
    -------
    SiteConfig
        Immutable configuration holding the raw document, the flattened
        variables with aliases, build paths, collections, and catalog layout.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the document cannot be decoded, is not a mapping, or declares
        invalid collections.

    Examples
    --------
    >>> from pathlib import Path
    >>> site = load_site_config(Path("config.json"))  # doctest: +SKIP
    >>> site.variables["SITE_NAME"]  # doctest: +SKIP
    'Acme Furniture'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loaded = _read_document(path)
    if not isinstance(loaded, dict):
        msg = "Top-level configuration structure must be a mapping."
        raise SiteConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    site_root = root if root is not None else path.resolve().parent
    build_raw = raw.get("build") or {}
    if not isinstance(build_raw, dict):
        msg = "The 'build' section must be a mapping."
        raise SiteConfigError(msg)

    paths = _build_paths(site_root, build_raw)
    collections = _load_collections(site_root, build_raw)
    catalog = _build_catalog(paths, raw.get("catalog"))
    variables = _apply_aliases(flatten_config(raw), raw)

    return SiteConfig(
        raw=raw,
        variables=variables,
        paths=paths,
        collections=collections,
        catalog=catalog,
    )


def _load_collections(
    root: Path, build_raw: typ.Mapping[str, typ.Any]
) -> tuple[CollectionConfig, ...]:
    """Return declared collections, falling back to the implied catalog copy."""
    collections = _build_collections(root, build_raw.get("collections"))
    collections_file = build_raw.get("collections_file")
    if collections_file:
        document_path = root / collections_file
        if not document_path.exists():
            msg = f"Collections file '{document_path}' not found."
            raise SiteConfigError(msg)
        document = _read_document(document_path)
        if isinstance(document, dict) and "collections" in document:
            document = document["collections"]
        from_file = _build_collections(root, document) or ()
        collections = (collections or ()) + from_file
    if collections is None:
        return (
            CollectionConfig(
                name=CATALOG_DIR,
                source=root / CATALOG_DIR,
                destination=CATALOG_DIR,
                optional=True,
            ),
        )
    return collections


def load_page_descriptor(path: Path) -> PageDescriptor:
    """Read a page descriptor JSON file.

    Raises
    ------
    PageDescriptorError
        If the file cannot be decoded or lacks the required ``page`` field.
    """
    try:
        payload = _read_document(path)
    except SiteConfigError as exc:
        raise PageDescriptorError(str(exc)) from exc
    if not isinstance(payload, dict):
        msg = f"Page descriptor '{path}' must be a mapping."
        raise PageDescriptorError(msg)
    return page_descriptor_from_mapping(payload, source=path)


def page_descriptor_from_mapping(
    payload: typ.Mapping[str, typ.Any], *, source: Path | None = None
) -> PageDescriptor:
    """Build a :class:`PageDescriptor` from a decoded mapping."""
    location = f" in '{source}'" if source else ""
    page = payload.get("page")
    if not page or not isinstance(page, str):
        msg = f"Page descriptor is missing 'page'{location}."
        raise PageDescriptorError(msg)

    layout = payload.get("layout") or DEFAULT_LAYOUT
    if not isinstance(layout, str):
        msg = f"'layout' must be a component name{location}."
        raise PageDescriptorError(msg)

    header_theme = payload.get("header_theme") or DEFAULT_HEADER_THEME
    if not isinstance(header_theme, str) or header_theme not in HEADER_THEMES:
        msg = f"Unknown header_theme {header_theme!r}{location}."
        raise PageDescriptorError(msg)

    return PageDescriptor(
        page=page,
        title=_optional_text(payload.get("title")),
        description=_optional_text(payload.get("description")),
        layout=layout,
        header_theme=header_theme,
        content=_optional_text(payload.get("content")),
        content_file=_optional_text(payload.get("content_file")),
        components=_build_component_refs(payload.get("components"), location),
        source=source,
    )


def _build_component_refs(entries: typ.Any, location: str) -> tuple[ComponentRef, ...]:
    match entries:
        case None:
            return ()
        case list() as items:
            pass
        case _:
            msg = f"'components' must be a list{location}."
            raise PageDescriptorError(msg)

    refs: list[ComponentRef] = []
    for entry in items:
        match entry:
            case str() as name:
                refs.append(ComponentRef(name=name))
            case {"name": str() as name, **rest}:
                local = rest.get("vars") or {}
                if not isinstance(local, dict):
                    msg = f"Component '{name}' vars must be a mapping{location}."
                    raise PageDescriptorError(msg)
                refs.append(ComponentRef(name=name, vars=local))
            case _:
                msg = f"Component entry {entry!r} has no 'name'{location}."
                raise PageDescriptorError(msg)
    return tuple(refs)


def _optional_text(value: object | None) -> str | None:
    if value is None:
        return None
    return str(value)


__all__ = [
    "HEADER_THEMES",
    "load_page_descriptor",
    "load_site_config",
    "page_descriptor_from_mapping",
]
