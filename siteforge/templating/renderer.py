"""Render Markdown page content into HTML fragments."""

from __future__ import annotations

import re
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

FENCE_PATTERN = re.compile(r"^[ ]{0,3}[`~]{3,}([A-Za-z0-9_+#.-]+)?", re.MULTILINE)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')


class MarkdownRenderer:
    """Convert Markdown content files with Pygments-highlighted code blocks."""

    def __init__(self, pygments_style: str = "default") -> None:
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS rules for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render(self, text: str) -> str:
        """Return HTML for ``text``; blank input yields an empty string."""
        if not text.strip():
            return ""
        md = Markdown(
            extensions=["fenced_code", "codehilite", "tables", "sane_lists"],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return self._tag_languages(md.convert(text), text)

    @staticmethod
    def _tag_languages(html: str, source: str) -> str:
        """Attach ``data-language`` to highlighted blocks in source order."""
        # Every fenced block has an opening and a closing fence line.
        fences = [match.group(1) for match in FENCE_PATTERN.finditer(source)]
        languages = [lang or "text" for lang in fences[::2]]
        if not languages:
            return html
        remaining = iter(languages)

        def _repl(_match: re.Match[str]) -> str:
            lang = escape(next(remaining, "text"), quote=True)
            return f'<div class="codehilite" data-language="{lang}">'

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))


__all__ = ["MarkdownRenderer"]
