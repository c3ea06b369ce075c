"""Markdown to HTML conversion with Pygments-highlighted code blocks."""

from __future__ import annotations

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

MARKDOWN_EXTENSIONS = ("fenced_code", "codehilite", "tables", "sane_lists")


class HtmlContentRenderer:
    """Render Markdown documents into HTML fragments with consistent styling.

    Raw HTML embedded in the Markdown is passed through untouched so that
    ``<video>``/``<audio>`` tags and hand-written anchors reach the page
    renderer.
    """

    def __init__(self, pygments_style: str = "default") -> None:
        """Initialize a renderer with the Pygments style used by ``codehilite``."""
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Render ``text`` into an HTML fragment.

        Parameters
        ----------
        text : str
            Raw Markdown source. Whitespace-only input renders to ``""``.

        Returns
        -------
        str
            HTML fragment; fenced code blocks are wrapped in
            ``<div class="codehilite">``.
        """
        if not text.strip():
            return ""
        md = Markdown(
            extensions=list(MARKDOWN_EXTENSIONS),
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return md.convert(text)


__all__ = ["MARKDOWN_EXTENSIONS", "HtmlContentRenderer"]
