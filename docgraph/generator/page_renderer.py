"""Turn one Markdown source into an HTML body with resolved links and anchors.

The :class:`PageRenderer` converts Markdown through :class:`HtmlContentRenderer`
and then walks the resulting DOM with BeautifulSoup:

* every ``<a href>`` goes through the page's link translator;
* every local ``img``/``audio``/``video`` source is copied into the output
  tree (see :mod:`docgraph.generator.media`);
* every ``h1``/``h2``/``h3`` receives a collision-free ``id`` which is both
  returned as one of the page's anchors and listed in its table of contents.

Example
-------
>>> from pathlib import Path
>>> renderer = PageRenderer(
...     input_file=Path("/docs/a.md"),
...     output_file=Path("/out/a.html"),
...     output_root=Path("/out"),
...     link_translator=lambda link: None,
... )
>>> page = renderer.render("# Example\\n\\n# Example")
>>> page.anchors
('example', 'example_(1)')
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from html import escape

from bs4 import BeautifulSoup

from .anchors import AnchorNameGenerator
from .media import MEDIA_TAGS, copy_media_asset, is_local_media
from .renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .link_rewriter import LinkTranslator

HEADING_TAGS = ("h1", "h2", "h3")
_TOC_INDENT = "    "
_MARKDOWN_SPECIALS = re.compile(r"([\\`*_\[\]])")


@dc.dataclass(slots=True, frozen=True)
class TocEntry:
    """One heading listed in a page's table of contents."""

    level: int
    label: str
    anchor: str


@dc.dataclass(slots=True, frozen=True)
class RenderedPage:
    """HTML body of a page together with the anchors it defines.

    Attributes
    ----------
    html : str
        Rendered body fragment with rewritten links and heading ids.
    anchors : tuple[str, ...]
        Every anchor generated for the page, in document order.
    toc : tuple[TocEntry, ...]
        Table-of-contents entries, one per ``h1``/``h2``/``h3``.
    """

    html: str
    anchors: tuple[str, ...]
    toc: tuple[TocEntry, ...]

    @property
    def toc_markdown(self) -> str:
        """Return the table of contents as a nested Markdown list.

        ``h1`` entries sit flush, ``h2`` one level deeper and ``h3`` two levels
        deeper. A heading never nests deeper than one level below the previous
        entry so pages starting with an ``h2`` still produce a valid list.
        Labels are escaped for both Markdown and HTML so they render verbatim.
        """
        lines: list[str] = []
        open_levels: list[int] = []
        for entry in self.toc:
            while open_levels and open_levels[-1] >= entry.level:
                open_levels.pop()
            indent = _TOC_INDENT * len(open_levels)
            open_levels.append(entry.level)
            label = _escape_link_label(entry.label)
            lines.append(f"{indent}- [{label}](#{entry.anchor})")
        return "\n".join(lines)

    @property
    def has_toc(self) -> bool:
        """Return ``True`` when the table of contents is worth displaying."""
        return len(self.toc) > 1


class PageRenderer:
    """Render a single documentation page body."""

    def __init__(
        self,
        *,
        input_file: Path,
        output_file: Path,
        output_root: Path,
        link_translator: LinkTranslator | None,
        content_renderer: HtmlContentRenderer | None = None,
    ) -> None:
        self.input_file = input_file
        self.output_file = output_file
        self.output_root = output_root
        self.link_translator = link_translator
        self.content_renderer = content_renderer or HtmlContentRenderer()

    def render(self, source: str) -> RenderedPage:
        """Convert ``source`` and post-process links, media and headings.

        Raises
        ------
        MediaAssetError
            If a referenced media asset escapes the output root or cannot be
            copied.
        """
        soup = BeautifulSoup(self.content_renderer.markdown(source), "html.parser")
        self._rewrite_links(soup)
        self._copy_media(soup)
        anchors, toc = self._anchor_headings(soup)
        return RenderedPage(html=str(soup), anchors=anchors, toc=toc)

    def _rewrite_links(self, soup: BeautifulSoup) -> None:
        if self.link_translator is None:
            return
        for link in soup.find_all("a", href=True):
            rewritten = self.link_translator(link["href"])
            if rewritten is not None:
                link["href"] = rewritten

    def _copy_media(self, soup: BeautifulSoup) -> None:
        for element in soup.find_all(list(MEDIA_TAGS)):
            src = element.get("src")
            if is_local_media(src):
                copy_media_asset(
                    src,
                    input_dir=self.input_file.parent,
                    output_dir=self.output_file.parent,
                    output_root=self.output_root,
                )

    @staticmethod
    def _anchor_headings(
        soup: BeautifulSoup,
    ) -> tuple[tuple[str, ...], tuple[TocEntry, ...]]:
        names = AnchorNameGenerator()
        anchors: list[str] = []
        toc: list[TocEntry] = []
        for heading in soup.find_all(list(HEADING_TAGS)):
            label = heading.get_text()
            anchor = names.next_for(label)
            heading["id"] = anchor
            anchors.append(anchor)
            level = int(heading.name[1])
            toc.append(TocEntry(level=level, label=label.strip(), anchor=anchor))
        return tuple(anchors), tuple(toc)


def _escape_link_label(label: str) -> str:
    """Make ``label`` render as literal text inside a Markdown link label."""
    return escape(_MARKDOWN_SPECIALS.sub(r"\\\1", label), quote=False)


__all__ = ["HEADING_TAGS", "PageRenderer", "RenderedPage", "TocEntry"]
