"""Accumulate and persist the site-wide search index and sitemap.

One :class:`SiteArtifacts` instance is created per build and fed by the site
builder as pages finish rendering. Serialization happens once, after the whole
tree has been processed; write failures are logged and never abort the build
because the generated HTML pages remain usable on their own.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import json
import logging
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from docgraph._constants import SEARCH_INDEX_FILENAME, SITEMAP_FILENAME

from .search_index import SearchRecord, serialize_records

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


@dc.dataclass(slots=True, frozen=True)
class SiteMapEntry:
    """A single ``<url>`` element of the sitemap."""

    loc: str
    lastmod: str


@dc.dataclass(slots=True, frozen=True)
class PageSearchIndex:
    """Search records of one page, keyed by its URL relative to the site root."""

    file: str
    index: tuple[SearchRecord, ...]


class SiteArtifacts:
    """Collect sitemap URLs and search records for the whole site."""

    def __init__(
        self,
        *,
        templates_dir: Path | None = None,
        today: typ.Callable[[], dt.date] | None = None,
    ) -> None:
        self._today = today or (lambda: dt.datetime.now(dt.UTC).date())
        self._sitemap: list[SiteMapEntry] = []
        self._search_index: list[PageSearchIndex] = []
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir or DEFAULT_TEMPLATES_DIR)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    @property
    def sitemap_entries(self) -> tuple[SiteMapEntry, ...]:
        """Return the sitemap entries in render order."""
        return tuple(self._sitemap)

    @property
    def search_index(self) -> tuple[PageSearchIndex, ...]:
        """Return the per-page search records in render order."""
        return tuple(self._search_index)

    def add_sitemap_url(self, absolute_url: str) -> None:
        """Append ``absolute_url`` dated with today's build date."""
        lastmod = self._today().isoformat()
        self._sitemap.append(SiteMapEntry(loc=absolute_url, lastmod=lastmod))

    def add_search_records(
        self, output_url: str, records: typ.Iterable[SearchRecord]
    ) -> None:
        """Append the records extracted from the page published at ``output_url``."""
        self._search_index.append(PageSearchIndex(file=output_url, index=tuple(records)))

    def serialize_sitemap(self) -> str:
        """Render the sitemap XML document."""
        template = self.env.get_template("sitemap.xml.jinja")
        xml = template.render(entries=self._sitemap)
        return xml if xml.endswith("\n") else f"{xml}\n"

    def serialize_search_index(self) -> str:
        """Return ``searchIndex.json`` content as compact JSON."""
        payload = [
            {"file": page.file, "index": serialize_records(page.index)}
            for page in self._search_index
        ]
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))

    def write(self, output_dir: Path, *, include_sitemap: bool) -> list[Path]:
        """Write the search index and, when requested, the sitemap.

        Returns
        -------
        list[Path]
            Files successfully written. Failures are logged as warnings.
        """
        written: list[Path] = []
        targets: list[tuple[str, str, typ.Callable[[], str]]] = []
        if include_sitemap:
            targets.append(("sitemap", SITEMAP_FILENAME, self.serialize_sitemap))
        targets.append(("search index", SEARCH_INDEX_FILENAME, self.serialize_search_index))
        for label, filename, serialize in targets:
            path = output_dir / filename
            try:
                path.write_text(serialize(), encoding="utf-8")
            except OSError as exc:
                logger.warning("Could not create %s file: %s", label, exc)
                continue
            written.append(path)
        return written


__all__ = ["PageSearchIndex", "SiteArtifacts", "SiteMapEntry"]
