"""Utility helpers shared by the siteforge configuration loader."""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

import msgspec
import msgspec.json as msgspec_json
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from siteforge.errors import SiteConfigError

from .models import BuildPaths, CatalogConfig, CollectionConfig

YAML_SUFFIXES = (".yaml", ".yml")


def _read_document(path: Path) -> typ.Any:
    """Decode ``path`` as JSON, or as YAML 1.2 when it has a YAML suffix."""
    if path.suffix.lower() in YAML_SUFFIXES:
        loader = YAML(typ="safe")
        loader.version = (1, 2)
        with path.open("r", encoding="utf-8") as handle:
            try:
                return loader.load(handle)
            except YAMLError as exc:
                msg = f"Could not parse '{path}': {exc}"
                raise SiteConfigError(msg) from exc
    try:
        return msgspec_json.decode(path.read_bytes())
    except msgspec.DecodeError as exc:
        msg = f"Could not parse '{path}': {exc}"
        raise SiteConfigError(msg) from exc


def flatten_config(
    document: typ.Mapping[str, typ.Any], prefix: str = ""
) -> dict[str, typ.Any]:
    """Flatten nested mappings into upper-case, underscore-joined keys.

    Arrays are stored as-is under their own key so specialized component hooks
    can expand them; the generic substitution pass skips them.

    Examples
    --------
    >>> flatten_config({"a": {"b": 1, "c": {"d": 2}}})
    {'A_B': 1, 'A_C_D': 2}
    >>> flatten_config({"faq": {"items": [1, 2]}})
    {'FAQ_ITEMS': [1, 2]}
    """
    flattened: dict[str, typ.Any] = {}
    for key, value in document.items():
        match value:
            case dict():
                flattened.update(flatten_config(value, f"{prefix}{key}_"))
            case _:
                flattened[f"{prefix}{key}".upper()] = value
    return flattened


def _nested(document: typ.Mapping[str, typ.Any], *keys: str) -> typ.Any:
    """Return the value at ``keys`` within nested mappings, or ``None``."""
    current: typ.Any = document
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _apply_aliases(
    flat: dict[str, typ.Any],
    document: typ.Mapping[str, typ.Any],
    *,
    today: dt.date | None = None,
) -> dict[str, typ.Any]:
    """Add the convenience aliases every site template may rely on."""
    year = (today or dt.datetime.now(dt.UTC).date()).year
    flat["SITE_NAME"] = (
        flat.get("SITE_NAME") or _nested(document, "site", "name") or "My Website"
    )
    flat["SITE_DESCRIPTION"] = (
        flat.get("SITE_DESCRIPTION") or _nested(document, "site", "description") or ""
    )
    flat["SITE_URL"] = flat.get("SITE_URL") or _nested(document, "site", "url") or ""
    flat["CONTACT_EMAIL"] = (
        flat.get("CONTACT_EMAIL")
        or _nested(document, "site", "contact", "email")
        or ""
    )
    flat["CONTACT_PHONE"] = (
        flat.get("CONTACT_PHONE")
        or _nested(document, "site", "contact", "phone")
        or ""
    )
    flat["YEAR"] = flat.get("YEAR") or str(year)
    flat["COMPANY_NAME"] = flat.get("COMPANY_NAME") or flat["SITE_NAME"]
    return flat


def _build_paths(root: Path, payload: typ.Mapping[str, typ.Any] | None) -> BuildPaths:
    """Resolve the build directory layout from the optional ``build`` section."""
    defaults = BuildPaths.from_root(root)
    if not payload:
        return defaults
    return BuildPaths(
        root=root,
        components=root / payload.get("components", defaults.components.name),
        pages=root / payload.get("pages", defaults.pages.name),
        output=root / payload.get("output", defaults.output.name),
        assets=root / payload.get("assets", defaults.assets.name),
    )


def _build_collections(
    root: Path, payload: typ.Any
) -> tuple[CollectionConfig, ...] | None:
    """Parse collection declarations given as a list or a name-keyed mapping.

    Returns ``None`` when nothing is declared so callers can apply defaults.
    """
    match payload:
        case None:
            return None
        case dict():
            entries = [
                {"name": name, **_collection_entry(name, spec)}
                for name, spec in payload.items()
            ]
        case list():
            entries = list(payload)
        case _:
            msg = "Collections must be declared as a list or a mapping."
            raise SiteConfigError(msg)

    collections: list[CollectionConfig] = []
    for entry in entries:
        if not isinstance(entry, dict):
            msg = f"Collection entry must be a mapping, got {entry!r}."
            raise SiteConfigError(msg)
        source = entry.get("source") or entry.get("src")
        name = entry.get("name") or source
        if not source:
            msg = f"Collection '{name}' is missing 'source'."
            raise SiteConfigError(msg)
        destination = entry.get("destination") or entry.get("dest") or source
        collections.append(
            CollectionConfig(
                name=str(name),
                source=root / str(source),
                destination=str(destination).strip("/"),
            )
        )
    return tuple(collections)


def _collection_entry(name: str, spec: typ.Any) -> dict[str, typ.Any]:
    match spec:
        case str():
            return {"source": spec}
        case dict():
            return dict(spec)
        case _:
            msg = f"Collection '{name}' must be a path or a mapping."
            raise SiteConfigError(msg)


def _build_catalog(
    paths: BuildPaths, payload: typ.Mapping[str, typ.Any] | None
) -> CatalogConfig:
    """Merge the optional ``catalog`` section over the default catalog layout."""
    base = CatalogConfig.from_paths(paths)
    if not payload:
        return base
    source = payload.get("source")
    template = payload.get("detail_template")
    return CatalogConfig(
        source=paths.root / source if source else base.source,
        detail_template=paths.root / template if template else base.detail_template,
        page_prefix=payload.get("page_prefix", base.page_prefix),
        metadata_file=payload.get("metadata_file", base.metadata_file),
        url_prefix=str(payload.get("url_prefix", source or base.url_prefix)).strip("/"),
    )


__all__ = [
    "YAML_SUFFIXES",
    "_apply_aliases",
    "_build_catalog",
    "_build_collections",
    "_build_paths",
    "_nested",
    "_read_document",
    "flatten_config",
]
