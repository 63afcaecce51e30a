"""Jinja2 rendering of the structural markup built-in hooks generate.

Carousel slides, carousel controls, thumbnails, and social icon links are
rendered from the templates under ``siteforge/templates`` with autoescape
enabled, so catalog metadata and configured URLs are escaped before they are
spliced into site templates.
"""

from __future__ import annotations

import functools
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


@functools.cache
def markup_environment(templates_dir: Path = TEMPLATES_DIR) -> Environment:
    """Return the shared Jinja environment for ``templates_dir``."""
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml", "jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
    )


def render_markup(template_name: str, **context: typ.Any) -> str:
    """Render ``template_name`` with ``context`` and strip surrounding blanks."""
    template = markup_environment().get_template(template_name)
    return template.render(**context).strip()


__all__ = ["TEMPLATES_DIR", "markup_environment", "render_markup"]
