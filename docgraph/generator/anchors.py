"""Anchor naming and deferred cross-page anchor validation.

Anchors are generated per page while it renders, but links may cite an anchor
in a page that has not been rendered yet. :class:`AnchorRegistry` therefore
works in two phases: while pages render it only grows (recorded anchors and
queued references), and once every page is done :meth:`AnchorRegistry.resolve_all`
classifies every queued reference in a single pass.

Example
-------
>>> from pathlib import Path
>>> registry = AnchorRegistry()
>>> registry.queue_reference(Path("/a.md"), Path("/b.md"), "setup")
>>> registry.record_anchors(Path("/b.md"), ["setup"])
>>> registry.resolve_all()
[]
"""

from __future__ import annotations

import dataclasses as dc
import enum
import re
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

ANCHOR_BLACKLIST = re.compile(r"[^a-z0-9_-]")


class AnchorValidity(enum.Enum):
    """Outcome of checking one anchor reference."""

    FOUND = "found"
    FILE_NOT_FOUND = "file-not-found"
    ANCHOR_NOT_FOUND = "anchor-not-found"


@dc.dataclass(slots=True, frozen=True)
class AnchorReference:
    """A link from ``citing_file`` to ``anchor`` inside ``target_file``."""

    citing_file: Path
    target_file: Path
    anchor: str


@dc.dataclass(slots=True, frozen=True)
class AnchorErrorItem:
    """An anchor reference that did not resolve, with the reason why."""

    citing_file: Path
    target_file: Path
    anchor: str
    validity: AnchorValidity


class AnchorRegistry:
    """Store generated anchors per file and the references citing them."""

    def __init__(self) -> None:
        self._anchors: dict[Path, tuple[str, ...]] = {}
        self._references: list[AnchorReference] = []

    def record_anchors(self, file: Path, anchors: cabc.Iterable[str]) -> None:
        """Replace the set of anchors known for ``file``."""
        self._anchors[file] = tuple(anchors)

    def queue_reference(self, citing_file: Path, target_file: Path, anchor: str) -> None:
        """Remember that ``citing_file`` links to ``anchor`` in ``target_file``.

        No validation happens here: the target may not have been rendered yet.
        """
        self._references.append(AnchorReference(citing_file, target_file, anchor))

    @property
    def references(self) -> tuple[AnchorReference, ...]:
        """Return every queued reference in queue order."""
        return tuple(self._references)

    def anchors_for(self, file: Path) -> tuple[str, ...] | None:
        """Return the anchors recorded for ``file`` or ``None`` if never recorded."""
        return self._anchors.get(file)

    def resolve(self, target_file: Path, anchor: str) -> AnchorValidity:
        """Classify a single anchor against the anchors recorded so far."""
        anchors = self._anchors.get(target_file)
        if anchors is None:
            return AnchorValidity.FILE_NOT_FOUND
        if anchor not in anchors:
            return AnchorValidity.ANCHOR_NOT_FOUND
        return AnchorValidity.FOUND

    def resolve_all(self) -> list[AnchorErrorItem]:
        """Check every queued reference and return the ones that failed.

        Returns
        -------
        list[AnchorErrorItem]
            One item per unresolved reference, in queue order. Empty when every
            reference points at an anchor that exists.
        """
        failures: list[AnchorErrorItem] = []
        for ref in self._references:
            validity = self.resolve(ref.target_file, ref.anchor)
            if validity is not AnchorValidity.FOUND:
                failures.append(
                    AnchorErrorItem(
                        citing_file=ref.citing_file,
                        target_file=ref.target_file,
                        anchor=ref.anchor,
                        validity=validity,
                    )
                )
        return failures


def slugify_heading(text: str) -> str:
    """Convert heading text into the base form of an anchor id.

    >>> slugify_heading("  Getting Started! ")
    'getting-started'
    """
    return ANCHOR_BLACKLIST.sub("", text.strip().lower().replace(" ", "-"))


class AnchorNameGenerator:
    """Hand out anchor ids unique within one rendered page.

    Duplicates get ``_(N)`` appended, counting from 1:

    >>> names = AnchorNameGenerator()
    >>> names.next_for("Example"), names.next_for("Example")
    ('example', 'example_(1)')
    """

    def __init__(self) -> None:
        self._used: set[str] = set()

    def next_for(self, title: str) -> str:
        """Return a fresh anchor id for ``title`` and mark it as used."""
        base = slugify_heading(title)
        candidate = base
        suffix = 1
        while candidate in self._used:
            candidate = f"{base}_({suffix})"
            suffix += 1
        self._used.add(candidate)
        return candidate


__all__ = [
    "ANCHOR_BLACKLIST",
    "AnchorErrorItem",
    "AnchorNameGenerator",
    "AnchorReference",
    "AnchorRegistry",
    "AnchorValidity",
    "slugify_heading",
]
