"""Extract hierarchy-aware search records from a rendered page body."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from bs4 import BeautifulSoup, Tag

_LEVELS = {"h1": 1, "h2": 2, "h3": 3}


@dc.dataclass(slots=True, frozen=True)
class SearchRecord:
    """Body text scoped under the deepest heading active when it was read.

    Attributes
    ----------
    h1, h2, h3 : str | None
        Heading texts currently open at each level.
    body : str
        Text of every non-heading element following the heading, joined with
        single spaces.
    anchor_h1, anchor_h2, anchor_h3 : str | None
        Anchor ids of the corresponding headings.
    """

    h1: str | None
    body: str
    anchor_h1: str | None = None
    h2: str | None = None
    anchor_h2: str | None = None
    h3: str | None = None
    anchor_h3: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Return the JSON form used in ``searchIndex.json``, omitting unset keys."""
        payload = {
            "h1": self.h1,
            "h2": self.h2,
            "h3": self.h3,
            "body": self.body,
            "anchorH1": self.anchor_h1,
            "anchorH2": self.anchor_h2,
            "anchorH3": self.anchor_h3,
        }
        return {key: value for key, value in payload.items() if value is not None}


class _ScopeTracker:
    """Running heading state while scanning a page top to bottom."""

    def __init__(self) -> None:
        self.titles: list[str | None] = [None, None, None]
        self.anchors: list[str | None] = [None, None, None]
        self.level = 0
        self.body: list[str] = []
        self.records: list[SearchRecord] = []

    def open(self, level: int, title: str, anchor: str | None) -> None:
        self.flush()
        for idx in range(level - 1, 3):
            self.titles[idx] = None
            self.anchors[idx] = None
        self.titles[level - 1] = title
        self.anchors[level - 1] = anchor
        self.level = level

    def add_text(self, text: str) -> None:
        if text:
            self.body.append(text)

    def flush(self) -> None:
        if self.level:
            depth = self.level
            self.records.append(
                SearchRecord(
                    h1=self.titles[0],
                    anchor_h1=self.anchors[0],
                    h2=self.titles[1] if depth >= 2 else None,
                    anchor_h2=self.anchors[1] if depth >= 2 else None,
                    h3=self.titles[2] if depth >= 3 else None,
                    anchor_h3=self.anchors[2] if depth >= 3 else None,
                    body=" ".join(self.body),
                )
            )
        self.body = []


def extract_search_records(html: str) -> list[SearchRecord]:
    """Split a rendered page into search records, one per heading scope.

    Parameters
    ----------
    html : str
        Rendered page body (a fragment or a complete document).

    Returns
    -------
    list[SearchRecord]
        Records in document order. Content preceding the first heading is not
        indexed.

    Examples
    --------
    >>> records = extract_search_records(
    ...     "<h1>T1</h1><p>hello</p><h2>T2</h2><p>world</p>"
    ... )
    >>> [(r.h1, r.h2, r.body) for r in records]
    [('T1', None, 'hello'), ('T1', 'T2', 'world')]
    """
    soup = BeautifulSoup(html, "html.parser")
    container = soup.body or soup
    tracker = _ScopeTracker()
    for child in container.children:
        if not isinstance(child, Tag):
            continue
        level = _LEVELS.get(child.name.lower())
        if level is not None:
            tracker.open(level, child.get_text(), _heading_anchor(child))
        elif not _is_anchor_marker(child):
            tracker.add_text(child.get_text().replace("\n", " "))
    tracker.flush()
    return tracker.records


def _heading_anchor(heading: Tag) -> str | None:
    anchor = heading.get("id")
    return anchor if isinstance(anchor, str) and anchor else None


def _is_anchor_marker(element: Tag) -> bool:
    """Return ``True`` for empty ``<a name=...>`` placeholders."""
    return element.name.lower() == "a" and not element.get_text(strip=True)


def serialize_records(records: typ.Iterable[SearchRecord]) -> list[dict[str, str]]:
    """Return the JSON-ready form of ``records``."""
    return [record.to_dict() for record in records]


__all__ = ["SearchRecord", "extract_search_records", "serialize_records"]
