"""Navigation data for the header bar, sidebar, page list and pager.

Everything here is pure: given the page tree and the page being rendered, the
helpers compute labels, relative URLs and active/open flags that the
``doc_page.jinja`` template turns into markup.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from docgraph.config import (
    DocPage,
    ExternalLinkCategory,
    GithubLinkCategory,
    LocalDocCategory,
    PageGroup,
    SearchCategory,
    VersionCategory,
)

from .link_rewriter import relative_url

if typ.TYPE_CHECKING:
    from pathlib import Path

    from docgraph.config import PageLocation, PageTree, VersionInfo


@dc.dataclass(slots=True, frozen=True)
class NavItem:
    """A navigation entry, possibly holding child entries.

    Attributes
    ----------
    kind : str
        ``"page"``, ``"group"``, ``"category"``, ``"external-link"``,
        ``"github-link"``, ``"search"`` or ``"version"``.
    label : str
        Text shown to the reader.
    href : str | None
        Relative or absolute URL; ``None`` for non-link entries.
    active : bool
        Whether the entry contains (or is) the current page.
    opened : bool
        Whether a group starts expanded.
    position : str
        ``"last-left"``/``"first-right"`` for header items bordering the
        right-hand side, otherwise empty.
    children : tuple[NavItem, ...]
        Nested entries for groups and categories.
    """

    kind: str
    label: str
    href: str | None = None
    active: bool = False
    opened: bool = False
    position: str = ""
    children: tuple[NavItem, ...] = ()


@dc.dataclass(slots=True, frozen=True)
class PagerLink:
    """Link to the previous or next page of a category."""

    label: str
    href: str


def build_header(
    tree: PageTree,
    location: PageLocation,
    current_dir: Path,
    version_info: VersionInfo | None,
) -> list[NavItem]:
    """Return one header item per category, in configuration order."""
    items: list[NavItem] = []
    for idx, category in enumerate(tree.categories):
        position = ""
        if idx == tree.links_right_index:
            position = "first-right"
        elif idx == tree.links_right_index - 1:
            position = "last-left"
        item = _header_item(category, idx, location, current_dir, version_info, position)
        if item is not None:
            items.append(item)
    return items


def _header_item(
    category: object,
    idx: int,
    location: PageLocation,
    current_dir: Path,
    version_info: VersionInfo | None,
    position: str,
) -> NavItem | None:
    match category:
        case LocalDocCategory():
            landing = category.landing_page
            if landing is None:
                return None
            return NavItem(
                kind="category",
                label=category.display_name,
                href=relative_url(landing.output_file, current_dir),
                active=idx == location.category_index,
                position=position,
            )
        case ExternalLinkCategory():
            return NavItem(
                kind="external-link",
                label=category.display_name,
                href=category.link,
                position=position,
            )
        case GithubLinkCategory():
            return NavItem(
                kind="github-link", label="Repository", href=category.link, position=position
            )
        case SearchCategory():
            return NavItem(kind="search", label="Search", position=position)
        case VersionCategory():
            if version_info is None:
                return None
            return NavItem(
                kind="version",
                label=f"version: {version_info.version}",
                href=version_info.link,
                position=position,
            )
        case _:
            return None


def build_sidebar(
    category: LocalDocCategory, location: PageLocation, current_dir: Path
) -> list[NavItem]:
    """Return the pages of ``category`` with the current page highlighted."""
    return _category_children(category, location.page_indexes, current_dir)


def build_page_list(
    tree: PageTree, location: PageLocation, current_dir: Path
) -> list[NavItem]:
    """Return the full site index shown in the collapsible page list."""
    items: list[NavItem] = []
    for idx, category in enumerate(tree.categories):
        match category:
            case LocalDocCategory():
                is_active = idx == location.category_index
                indexes = location.page_indexes if is_active else ()
                items.append(
                    NavItem(
                        kind="category",
                        label=category.display_name,
                        active=is_active,
                        opened=is_active,
                        children=tuple(
                            _category_children(category, indexes, current_dir)
                        ),
                    )
                )
            case ExternalLinkCategory():
                items.append(
                    NavItem(
                        kind="external-link",
                        label=category.display_name,
                        href=category.link,
                    )
                )
            case GithubLinkCategory():
                items.append(
                    NavItem(kind="github-link", label="Repository", href=category.link)
                )
            case _:
                continue
    return items


def _category_children(
    category: LocalDocCategory, page_indexes: tuple[int, ...], current_dir: Path
) -> list[NavItem]:
    items: list[NavItem] = []
    for idx, entry in enumerate(category.pages):
        is_active = bool(page_indexes) and page_indexes[0] == idx
        if isinstance(entry, PageGroup):
            children = tuple(
                _page_item(
                    page,
                    current_dir,
                    active=is_active and len(page_indexes) > 1 and page_indexes[1] == sub_idx,
                )
                for sub_idx, page in enumerate(entry.pages)
            )
            items.append(
                NavItem(
                    kind="group",
                    label=entry.display_name,
                    active=is_active,
                    opened=is_active or entry.default_open,
                    children=children,
                )
            )
        else:
            items.append(_page_item(entry, current_dir, active=is_active))
    return items


def _page_item(page: DocPage, current_dir: Path, *, active: bool) -> NavItem:
    return NavItem(
        kind="page",
        label=page.display_name,
        href=relative_url(page.output_file, current_dir),
        active=active,
    )


def neighbour_pages(
    category: LocalDocCategory, location: PageLocation, current_dir: Path
) -> tuple[PagerLink | None, PagerLink | None]:
    """Return links to the pages before and after the current one.

    Neighbours are taken in tree order within the category, so moving past
    the end of a group continues with the next entry of the category.
    """
    ordered = [page for _indexes, page in category.iter_pages()]
    position = next(
        idx for idx, (indexes, _page) in enumerate(category.iter_pages())
        if indexes == location.page_indexes
    )
    previous = ordered[position - 1] if position > 0 else None
    following = ordered[position + 1] if position + 1 < len(ordered) else None
    return _pager_link(previous, current_dir), _pager_link(following, current_dir)


def _pager_link(page: DocPage | None, current_dir: Path) -> PagerLink | None:
    if page is None:
        return None
    return PagerLink(label=page.display_name, href=relative_url(page.output_file, current_dir))


__all__ = [
    "NavItem",
    "PagerLink",
    "build_header",
    "build_page_list",
    "build_sidebar",
    "neighbour_pages",
]
