"""Helpers for rewriting Markdown-relative links to generated HTML pages."""

from __future__ import annotations

import dataclasses as dc
import logging
import os
import re
import typing as typ
from pathlib import Path
from urllib.parse import quote, unquote

if typ.TYPE_CHECKING:
    from .anchors import AnchorRegistry

logger = logging.getLogger(__name__)

LinkTranslator = typ.Callable[[str], "str | None"]

_EXTERNAL_PREFIXES = ("mailto:", "tel:", "data:", "javascript:")
_SCHEME_PATTERN = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)


@dc.dataclass(slots=True, frozen=True)
class BrokenLink:
    """A local link whose target is not part of the page tree."""

    source_file: Path
    link: str


def relative_url(target: Path, from_dir: Path) -> str:
    """Return a percent-encoded posix URL pointing at ``target`` from ``from_dir``.

    >>> relative_url(Path("/out/api/client.html"), Path("/out/guide"))
    '../api/client.html'
    """
    relative = os.path.relpath(target, from_dir)
    return quote(Path(relative).as_posix())


def is_external_link(link: str) -> bool:
    """Return ``True`` for links that must never be rewritten."""
    lower = link.lower()
    return (
        bool(_SCHEME_PATTERN.match(link))
        or link.startswith("//")
        or lower.startswith(_EXTERNAL_PREFIXES)
    )


def make_link_translator(
    source_file: Path,
    output_dir: Path,
    file_map: typ.Mapping[Path, Path],
    registry: AnchorRegistry,
    *,
    broken_links: list[BrokenLink] | None = None,
) -> LinkTranslator:
    """Build the link translator for one page.

    Parameters
    ----------
    source_file : Path
        Absolute path of the Markdown page whose links are translated.
    output_dir : Path
        Directory of the HTML page generated from ``source_file``; rewritten
        URLs are relative to it.
    file_map : Mapping[Path, Path]
        Input to output mapping for every page of the tree.
    registry : AnchorRegistry
        Receives one queued reference per link carrying a fragment.
    broken_links : list[BrokenLink], optional
        Collects links whose target is missing from ``file_map``.

    Returns
    -------
    Callable[[str], str | None]
        Function returning the rewritten URL, or ``None`` when the link must
        be left untouched (external, fragment-only, or unresolvable).
    """
    source_dir = source_file.parent

    def translate(link: str) -> str | None:
        if not link or is_external_link(link):
            return None
        if link.startswith("#"):
            if len(link) > 1:
                registry.queue_reference(source_file, source_file, link[1:])
            return None

        path_part, sep, fragment = link.partition("#")
        path_part, query_sep, query = path_part.partition("?")
        # a leading "/" stays relative to the page directory
        joined = os.path.join(source_dir, unquote(path_part).lstrip("/"))
        target_input = Path(os.path.normpath(joined))
        target_output = file_map.get(target_input)
        if target_output is None:
            logger.warning(
                "A referenced link was not found.\n  File: %s\n  Link: %s",
                source_file,
                link,
            )
            if broken_links is not None:
                broken_links.append(BrokenLink(source_file=source_file, link=link))
            return None
        if fragment:
            registry.queue_reference(source_file, target_input, fragment)
        url = relative_url(target_output, output_dir)
        return url + query_sep + query + sep + fragment

    return translate


__all__ = [
    "BrokenLink",
    "LinkTranslator",
    "is_external_link",
    "make_link_translator",
    "relative_url",
]
