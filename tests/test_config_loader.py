"""Unit tests for configuration loading, flattening, and page descriptors.

These tests cover :func:`siteforge.config.flatten_config`, the convenience
aliases added by :func:`siteforge.config.load_site_config`, build directory
and collection resolution, and descriptor parsing errors.

Usage
-----
Run ``pytest tests/test_config_loader.py -v``. Only pytest's built-in
``tmp_path`` plus the ``site_root`` fixture from ``conftest.py`` are needed.
"""

from __future__ import annotations

import datetime as dt
from pathlib import Path

import pytest
from conftest import write_json, write_text

from siteforge.config import (
    flatten_config,
    load_page_descriptor,
    load_site_config,
    page_descriptor_from_mapping,
)
from siteforge.errors import PageDescriptorError, SiteConfigError


def test_flatten_joins_nested_keys() -> None:
    """Nested mappings flatten into upper-case underscore-joined keys."""
    assert flatten_config({"a": {"b": 1, "c": {"d": 2}}}) == {"A_B": 1, "A_C_D": 2}


def test_flatten_preserves_arrays() -> None:
    """Array leaves stay arrays under their own key."""
    items = [{"question": "q"}]
    flat = flatten_config({"faq": {"items": items}, "tags": ["x", "y"]})
    assert flat == {"FAQ_ITEMS": items, "TAGS": ["x", "y"]}


def test_site_config_aliases(site_root: Path) -> None:
    """Aliases are derived from the nested ``site`` section."""
    site = load_site_config(site_root / "config.json")
    variables = site.variables
    assert variables["SITE_NAME"] == "Acme Furniture"
    assert variables["SITE_DESCRIPTION"] == "Handmade furniture"
    assert variables["SITE_URL"] == "https://acme.example"
    assert variables["CONTACT_EMAIL"] == "hello@acme.example"
    assert variables["CONTACT_PHONE"] == "+1 555 0100"
    assert variables["COMPANY_NAME"] == "Acme Furniture"
    assert variables["YEAR"] == str(dt.datetime.now(dt.UTC).year)
    assert variables["SITE_CONTACT_EMAIL"] == "hello@acme.example"


def test_alias_defaults_when_site_section_missing(tmp_path: Path) -> None:
    """A bare config still yields the fallback aliases."""
    config = write_json(tmp_path / "config.json", {"company": {"name": "Globex"}})
    variables = load_site_config(config).variables
    assert variables["SITE_NAME"] == "My Website"
    assert variables["SITE_DESCRIPTION"] == ""
    assert variables["CONTACT_EMAIL"] == ""
    assert variables["COMPANY_NAME"] == "Globex"


def test_variables_are_read_only(site_root: Path) -> None:
    """The flattened mapping cannot be mutated by build steps."""
    site = load_site_config(site_root / "config.json")
    with pytest.raises(TypeError):
        site.variables["SITE_NAME"] = "changed"  # type: ignore[index]


def test_missing_config_is_fatal(tmp_path: Path) -> None:
    """A missing configuration file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_site_config(tmp_path / "config.json")


def test_malformed_config_is_fatal(tmp_path: Path) -> None:
    """Invalid JSON raises SiteConfigError."""
    config = write_text(tmp_path / "config.json", "{not json")
    with pytest.raises(SiteConfigError):
        load_site_config(config)


def test_non_mapping_config_is_rejected(tmp_path: Path) -> None:
    """The top-level document must be a mapping."""
    config = write_json(tmp_path / "config.json", ["site"])
    with pytest.raises(SiteConfigError):
        load_site_config(config)


def test_yaml_config_is_supported(tmp_path: Path) -> None:
    """YAML documents load through the same flattening rules."""
    config = write_text(
        tmp_path / "config.yaml",
        "site:\n  name: Yaml Works\n  contact:\n    email: y@example.com\n",
    )
    variables = load_site_config(config).variables
    assert variables["SITE_NAME"] == "Yaml Works"
    assert variables["CONTACT_EMAIL"] == "y@example.com"


def test_build_section_overrides_directories(tmp_path: Path) -> None:
    """The optional ``build`` section renames the conventional directories."""
    config = write_json(
        tmp_path / "config.json",
        {"build": {"components": "parts", "output": "dist", "pages": "content"}},
    )
    paths = load_site_config(config).paths
    assert paths.root == tmp_path.resolve()
    assert paths.components == tmp_path.resolve() / "parts"
    assert paths.output == tmp_path.resolve() / "dist"
    assert paths.pages == tmp_path.resolve() / "content"
    assert paths.assets == tmp_path.resolve() / "assets"
    assert paths.generators == tmp_path.resolve() / "content" / "_generators"


def test_default_collection_is_optional_catalog(tmp_path: Path) -> None:
    """Without declarations the product catalog is copied if present."""
    config = write_json(tmp_path / "config.json", {})
    (collection,) = load_site_config(config, root=tmp_path).collections
    assert collection.name == "products"
    assert collection.source == tmp_path / "products"
    assert collection.destination == "products"
    assert collection.optional


def test_collections_from_separate_document(tmp_path: Path) -> None:
    """Collections may be declared inline and in a collections file."""
    write_json(
        tmp_path / "collections.json",
        {"collections": {"custom": {"source": "custom", "destination": "custom"}}},
    )
    config = write_json(
        tmp_path / "config.json",
        {
            "build": {
                "collections": [{"name": "docs", "source": "docs", "dest": "files/docs"}],
                "collections_file": "collections.json",
            }
        },
    )
    collections = load_site_config(config, root=tmp_path).collections
    assert [c.name for c in collections] == ["docs", "custom"]
    assert collections[0].destination == "files/docs"
    assert not collections[0].optional


def test_collection_without_source_is_rejected(tmp_path: Path) -> None:
    config = write_json(
        tmp_path / "config.json", {"build": {"collections": [{"name": "x"}]}}
    )
    with pytest.raises(SiteConfigError, match="missing 'source'"):
        load_site_config(config)


def test_catalog_section_overrides_defaults(tmp_path: Path) -> None:
    config = write_json(
        tmp_path / "config.json",
        {"catalog": {"source": "custom", "page_prefix": "item-"}},
    )
    catalog = load_site_config(config, root=tmp_path).catalog
    assert catalog is not None
    assert catalog.source == tmp_path / "custom"
    assert catalog.page_prefix == "item-"
    assert catalog.url_prefix == "custom"


def test_load_page_descriptor(site_root: Path) -> None:
    """Descriptor fields and defaults are parsed from JSON."""
    descriptor = load_page_descriptor(site_root / "pages" / "index.json")
    assert descriptor.page == "index"
    assert descriptor.layout == "_layout"
    assert descriptor.header_theme == "light"
    assert [ref.name for ref in descriptor.components] == ["hero", "faq", "products"]
    assert descriptor.components[0].vars == {"HERO_TITLE": "Built to last"}
    assert descriptor.directory == site_root / "pages"


def test_descriptor_requires_page() -> None:
    with pytest.raises(PageDescriptorError, match="missing 'page'"):
        page_descriptor_from_mapping({"title": "Nameless"})


def test_descriptor_rejects_unknown_theme() -> None:
    with pytest.raises(PageDescriptorError, match="header_theme"):
        page_descriptor_from_mapping({"page": "x", "header_theme": "neon"})


def test_malformed_descriptor_is_page_error(tmp_path: Path) -> None:
    """Bad descriptor JSON is a per-page error, not a fatal config error."""
    path = write_text(tmp_path / "broken.json", '{"page": ')
    with pytest.raises(PageDescriptorError):
        load_page_descriptor(path)


def test_component_entries_accept_bare_names() -> None:
    descriptor = page_descriptor_from_mapping(
        {"page": "x", "components": ["banner", {"name": "hero"}]}
    )
    assert [ref.name for ref in descriptor.components] == ["banner", "hero"]
    assert dict(descriptor.components[1].vars) == {}
