"""Locate component templates on disk."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from siteforge._constants import SUB_COMPONENT_ALIASES
from siteforge.errors import ComponentNotFoundError


class ComponentResolver:
    """Resolve component names to template text under a components root.

    Lookup order for ``name``:

    1. a known sub-component alias, read from its parent's folder
       (``components/faq/faqItem.html``);
    2. ``components/<name>/<name>.html``;
    3. a flat ``components/<name>.html``, used for shared layouts.
    """

    def __init__(
        self,
        components_dir: Path,
        *,
        aliases: typ.Mapping[str, str] | None = None,
    ) -> None:
        self.components_dir = components_dir
        self.aliases = dict(SUB_COMPONENT_ALIASES)
        if aliases:
            self.aliases.update(aliases)

    def candidates(self, name: str) -> typ.Iterator[Path]:
        """Yield template paths for ``name`` in lookup order."""
        parent = self.aliases.get(name)
        if parent:
            yield self.components_dir / parent / f"{name}.html"
        else:
            yield self.components_dir / name / f"{name}.html"
        yield self.components_dir / f"{name}.html"

    def find(self, name: str) -> Path:
        """Return the first existing template path for ``name``.

        Raises
        ------
        ComponentNotFoundError
            If no candidate exists.
        """
        for candidate in self.candidates(name):
            if candidate.is_file():
                return candidate
        raise ComponentNotFoundError(name)

    def resolve(self, name: str) -> str:
        """Return the template text for ``name``."""
        return self.find(name).read_text(encoding="utf-8")


__all__ = ["ComponentResolver"]
