"""Tests for the full build sequence and per-page fault isolation."""

from __future__ import annotations

import typing as typ

import pytest
from conftest import write_json, write_text

from siteforge.config import load_site_config
from siteforge.errors import NoPagesError
from siteforge.orchestrator import BuildOrchestrator, discover_pages

if typ.TYPE_CHECKING:
    from pathlib import Path

    from siteforge.config import SiteConfig


def _snapshot(root: Path) -> dict[str, bytes]:
    return {
        str(path.relative_to(root)): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


def test_full_build_writes_every_page(site: SiteConfig) -> None:
    summary = BuildOrchestrator(site).run()
    output = site.paths.output
    assert sorted(path.name for path in summary.written) == [
        "about.html",
        "index.html",
        "product-chair.html",
        "product-lamp.html",
    ]
    assert summary.failed == 0
    assert len(summary.generated) == 2
    assert (output / "products" / "chair" / "02.jpg").exists()
    detail = (output / "product-chair.html").read_text(encoding="utf-8")
    assert "assets/css/pages/product-detail.css" in detail
    assert 'aria-label="Telegram"' in detail


def test_rebuild_is_byte_identical(site: SiteConfig) -> None:
    BuildOrchestrator(site).run()
    first = _snapshot(site.paths.output)
    BuildOrchestrator(site).run()
    assert _snapshot(site.paths.output) == first


def test_output_directory_is_wiped(site: SiteConfig) -> None:
    leftover = write_text(site.paths.output / "old.html", "stale")
    BuildOrchestrator(site).run()
    assert not leftover.exists()


def test_failed_page_is_skipped(site: SiteConfig) -> None:
    broken = write_json(
        site.paths.pages / "broken.json",
        {"page": "broken", "components": [{"name": "ghost"}]},
    )
    write_text(site.paths.pages / "garbled.json", "{ nope")
    summary = BuildOrchestrator(site).run()

    assert summary.built == 4
    assert sorted(failure.source.name for failure in summary.failures) == [
        "broken.json",
        "garbled.json",
    ]
    failure = next(f for f in summary.failures if f.source == broken)
    assert failure.error == "Component not found: ghost"
    assert not (site.paths.output / "broken.html").exists()
    assert (site.paths.output / "index.html").exists()


def test_no_pages_is_fatal(tmp_path: Path) -> None:
    site = load_site_config(write_json(tmp_path / "config.json", {}))
    with pytest.raises(NoPagesError):
        BuildOrchestrator(site).run()


def test_discover_pages_is_sorted_and_recursive(site_root: Path) -> None:
    pages = discover_pages(site_root / "pages")
    relative = [path.relative_to(site_root / "pages").as_posix() for path in pages]
    assert relative == sorted(relative)
    assert "about/about.json" in relative
    assert "index.json" in relative


def test_discover_pages_missing_directory(tmp_path: Path) -> None:
    assert discover_pages(tmp_path / "pages") == []


@pytest.mark.parametrize(
    "script",
    [
        "def build(vars, resolve, substitute):\n    return vars['NOPE']\n",
        "raise RuntimeError('broken at import')\n",
    ],
    ids=["raises-in-build", "raises-on-load"],
)
def test_raising_build_hook_fails_only_its_page(site: SiteConfig, script: str) -> None:
    write_text(site.paths.components / "broken" / "broken.build.py", script)
    write_json(
        site.paths.pages / "zz.json", {"page": "zz", "components": ["broken"]}
    )
    summary = BuildOrchestrator(site).run()

    assert summary.failed == 1
    assert summary.failures[0].source.name == "zz.json"
    assert "broken" in summary.failures[0].error
    assert summary.built == 4
    assert (site.paths.output / "index.html").exists()
    assert not (site.paths.output / "zz.html").exists()


@pytest.mark.parametrize(
    "payload",
    [
        {"page": "zz", "layout": 5},
        {"page": "zz", "header_theme": ["dark"]},
    ],
    ids=["layout-not-string", "theme-not-string"],
)
def test_mistyped_descriptor_fails_only_its_page(
    site: SiteConfig, payload: dict[str, typ.Any]
) -> None:
    write_json(site.paths.pages / "zz.json", payload)
    summary = BuildOrchestrator(site).run()

    assert summary.failed == 1
    assert summary.failures[0].source.name == "zz.json"
    assert (site.paths.output / "index.html").exists()


def test_unexpected_page_error_is_recorded(
    site: SiteConfig, monkeypatch: pytest.MonkeyPatch
) -> None:
    orchestrator = BuildOrchestrator(site)
    original = orchestrator.build_one

    def flaky(source: Path) -> Path:
        if source.name == "about.json":
            raise KeyError("missing")
        return original(source)

    monkeypatch.setattr(orchestrator, "build_one", flaky)
    summary = orchestrator.run()
    assert [f.source.name for f in summary.failures] == ["about.json"]
    assert summary.failures[0].error == "KeyError('missing')"
    assert summary.built == 3


def test_highlight_stylesheet_is_published_and_linked(site: SiteConfig) -> None:
    BuildOrchestrator(site).run()
    output = site.paths.output
    assert (output / "assets" / "css" / "codehilite.css").is_file()
    index = (output / "index.html").read_text(encoding="utf-8")
    assert '<link href="assets/css/codehilite.css" rel="stylesheet">' in index
