"""Typed dataclasses describing the docgraph page tree and site settings."""

from __future__ import annotations

import dataclasses as dc
import types
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


class ConfigError(ValueError):
    """Raised when a ``.docConfig.json`` file is missing, malformed, or invalid."""


@dc.dataclass(slots=True, frozen=True)
class DocPage:
    """A single Markdown page and the HTML file it renders to.

    Attributes
    ----------
    input_file : Path
        Absolute, normalized path to the Markdown source.
    output_file : Path
        Absolute, normalized path to the generated HTML page.
    display_name : str
        Label used in navigation and as the HTML title.
    """

    input_file: Path
    output_file: Path
    display_name: str


@dc.dataclass(slots=True, frozen=True)
class PageGroup:
    """A named group of pages nested one level below a category."""

    display_name: str
    pages: tuple[DocPage, ...]
    default_open: bool = False


PageEntry = DocPage | PageGroup


@dc.dataclass(slots=True, frozen=True)
class LocalDocCategory:
    """Navigation category backed by a directory of Markdown pages."""

    display_name: str
    pages: tuple[PageEntry, ...]
    kind: typ.ClassVar[str] = "local-doc"

    @property
    def landing_page(self) -> DocPage | None:
        """Return the first page depth-first, entering a leading group."""
        for entry in self.pages:
            match entry:
                case DocPage():
                    return entry
                case PageGroup(pages=(first, *_)):
                    return first
                case _:
                    continue
        return None

    def iter_pages(self) -> cabc.Iterator[tuple[tuple[int, ...], DocPage]]:
        """Yield ``(indexes, page)`` pairs in tree order."""
        for idx, entry in enumerate(self.pages):
            if isinstance(entry, PageGroup):
                for sub_idx, page in enumerate(entry.pages):
                    yield (idx, sub_idx), page
            else:
                yield (idx,), entry


@dc.dataclass(slots=True, frozen=True)
class ExternalLinkCategory:
    """Navigation entry pointing at an arbitrary URL."""

    link: str
    display_name: str
    kind: typ.ClassVar[str] = "external-link"


@dc.dataclass(slots=True, frozen=True)
class GithubLinkCategory:
    """Navigation entry pointing at the project's repository."""

    link: str
    kind: typ.ClassVar[str] = "github-link"


@dc.dataclass(slots=True, frozen=True)
class SearchCategory:
    """Placeholder for the search box in the header bar."""

    kind: typ.ClassVar[str] = "search"


@dc.dataclass(slots=True, frozen=True)
class VersionCategory:
    """Placeholder for the project version in the header bar."""

    kind: typ.ClassVar[str] = "version"


Category = (
    LocalDocCategory
    | ExternalLinkCategory
    | GithubLinkCategory
    | SearchCategory
    | VersionCategory
)


@dc.dataclass(slots=True, frozen=True)
class PageLocation:
    """Position of a page inside the tree, used to build navigation."""

    category_index: int
    page_indexes: tuple[int, ...]
    page: DocPage


@dc.dataclass(slots=True, frozen=True)
class PageTree:
    """Ordered forest of categories driving navigation and rendering.

    Attributes
    ----------
    categories : tuple[Category, ...]
        Categories from ``linksLeft`` followed by ``linksRight``.
    links_right_index : int
        Index of the first ``linksRight`` category, or ``-1`` when the right
        side of the header is empty.
    """

    categories: tuple[Category, ...]
    links_right_index: int = -1

    def iter_pages(self) -> cabc.Iterator[PageLocation]:
        """Yield every local page in tree order."""
        for cat_idx, category in enumerate(self.categories):
            if not isinstance(category, LocalDocCategory):
                continue
            for indexes, page in category.iter_pages():
                yield PageLocation(cat_idx, indexes, page)

    def file_map(self) -> typ.Mapping[Path, Path]:
        """Return a read-only ``input file -> output file`` mapping."""
        mapping = {loc.page.input_file: loc.page.output_file for loc in self.iter_pages()}
        return types.MappingProxyType(mapping)


@dc.dataclass(slots=True, frozen=True)
class LogoConfig:
    """Logo image path (relative to the input root) and optional link."""

    src_path: str
    link: str | None = None


@dc.dataclass(slots=True, frozen=True)
class VersionInfo:
    """Project version shown in the header, with an optional link."""

    version: str
    link: str | None = None


@dc.dataclass(slots=True, frozen=True)
class SiteConfig:
    """Fully parsed documentation configuration."""

    input_dir: Path
    output_dir: Path
    tree: PageTree
    logo: LogoConfig | None = None
    favicon_path: str | None = None
    version_info: VersionInfo | None = None
    site_map_root: str | None = None


__all__ = [
    "Category",
    "ConfigError",
    "DocPage",
    "ExternalLinkCategory",
    "GithubLinkCategory",
    "LocalDocCategory",
    "LogoConfig",
    "PageEntry",
    "PageGroup",
    "PageLocation",
    "PageTree",
    "SearchCategory",
    "SiteConfig",
    "VersionCategory",
    "VersionInfo",
]
