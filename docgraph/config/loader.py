"""Load ``.docConfig.json`` files into a :class:`~docgraph.config.PageTree`."""

from __future__ import annotations

import stat
import typing as typ
from pathlib import Path

from docgraph._constants import DOC_CONFIG_FILENAME

from .helpers import (
    _is_within,
    _normalize,
    _optional_bool,
    _optional_str,
    _output_path_for,
    _read_json_object,
    _require_str,
    _validate_site_map_root,
)
from .models import (
    Category,
    ConfigError,
    DocPage,
    ExternalLinkCategory,
    GithubLinkCategory,
    LocalDocCategory,
    LogoConfig,
    PageEntry,
    PageGroup,
    PageTree,
    SearchCategory,
    SiteConfig,
    VersionCategory,
    VersionInfo,
)


def load_site_config(
    input_dir: Path,
    output_dir: Path,
    *,
    version: str | None = None,
    site_map_root: str | None = None,
) -> SiteConfig:
    """Parse the root configuration and every category it references.

    Parameters
    ----------
    input_dir : Path
        Documentation root holding the root ``.docConfig.json``.
    output_dir : Path
        Directory where HTML pages will be generated; output paths in the
        resulting tree are computed relative to it.
    version : str, optional
        Project version displayed by ``version`` header entries.
    site_map_root : str, optional
        Overrides the ``siteMapRoot`` property of the root configuration.

    Returns
    -------
    SiteConfig
        The parsed page tree alongside logo, favicon, version and sitemap
        settings.

    Raises
    ------
    ConfigError
        If any configuration file is missing or malformed, a page path is
        neither a file nor a directory, pages are nested deeper than two
        levels, or two pages map to the same output file.

    Notes
    -----
    Only ``stat`` calls are made on page paths; Markdown sources are read
    later, one page at a time, by the site builder.
    """
    in_root = _normalize(input_dir)
    out_root = _normalize(output_dir)
    root_path = in_root / DOC_CONFIG_FILENAME
    raw = _read_json_object(root_path, label=f"Root {DOC_CONFIG_FILENAME} file")
    context = f'Root {DOC_CONFIG_FILENAME} file ("{root_path}")'

    logo = _parse_logo(raw, context=context)
    favicon_path = _parse_favicon(raw, context=context)
    other_versions_link = _optional_str(raw, "otherVersionsLink", context=context)
    configured_root = _optional_str(raw, "siteMapRoot", context=context)
    sitemap_source = site_map_root or configured_root
    resolved_sitemap_root = (
        _validate_site_map_root(sitemap_source, context=context)
        if sitemap_source
        else None
    )

    links_left = _parse_link_list(raw, "linksLeft", context=context)
    links_right = _parse_link_list(raw, "linksRight", context=context)
    builder = _TreeBuilder(in_root, out_root)
    categories: list[Category] = []
    for side, entries in (("linksLeft", links_left), ("linksRight", links_right)):
        for idx, entry in enumerate(entries):
            categories.append(
                builder.category(entry, where=f"`{side}` at index {idx}")
            )

    tree = PageTree(
        categories=tuple(categories),
        links_right_index=len(links_left) if links_right else -1,
    )
    version_info = (
        VersionInfo(version=version, link=other_versions_link)
        if version is not None
        else None
    )
    return SiteConfig(
        input_dir=in_root,
        output_dir=out_root,
        tree=tree,
        logo=logo,
        favicon_path=favicon_path,
        version_info=version_info,
        site_map_root=resolved_sitemap_root,
    )


def _parse_logo(raw: typ.Mapping[str, typ.Any], *, context: str) -> LogoConfig | None:
    if "logo" not in raw:
        return None
    payload = raw["logo"]
    if not isinstance(payload, dict):
        msg = f'{context} is invalid: The "logo" property, if defined, should contain an object.'
        raise ConfigError(msg)
    src_path = _require_str(payload, "srcPath", context=f'{context}: "logo"')
    link = _optional_str(payload, "link", context=f'{context}: "logo"')
    return LogoConfig(src_path=src_path, link=link)


def _parse_favicon(raw: typ.Mapping[str, typ.Any], *, context: str) -> str | None:
    if "favicon" not in raw:
        return None
    payload = raw["favicon"]
    if not isinstance(payload, dict):
        msg = f'{context} is invalid: The "favicon" property, if defined, should contain an object.'
        raise ConfigError(msg)
    return _require_str(payload, "srcPath", context=f'{context}: "favicon"')


def _parse_link_list(
    raw: typ.Mapping[str, typ.Any], key: str, *, context: str
) -> list[typ.Any]:
    value = raw.get(key, [])
    if not isinstance(value, list):
        msg = f'{context} is invalid: The "{key}" property, if defined, should be set as an Array.'
        raise ConfigError(msg)
    return value


class _TreeBuilder:
    """Walk category directories and classify page paths with ``stat``."""

    def __init__(self, input_root: Path, output_root: Path) -> None:
        self.input_root = input_root
        self.output_root = output_root
        self._seen_outputs: dict[Path, Path] = {}

    def category(self, entry: object, *, where: str) -> Category:
        """Build the category described by a ``linksLeft``/``linksRight`` entry."""
        if not isinstance(entry, dict):
            msg = f"Invalid element in {where}: should be an object."
            raise ConfigError(msg)
        kind = entry.get("type")
        if not isinstance(kind, str):
            msg = f"Element in {where} is missing its `type` property."
            raise ConfigError(msg)
        context = f'A "{kind}" element in {where}'
        match kind:
            case "local-doc":
                path = _require_str(entry, "path", context=context)
                display_name = _require_str(entry, "displayName", context=context)
                return self._local_doc(path, display_name)
            case "link":
                return ExternalLinkCategory(
                    link=_require_str(entry, "link", context=context),
                    display_name=_require_str(entry, "displayName", context=context),
                )
            case "github-link":
                return GithubLinkCategory(
                    link=_require_str(entry, "link", context=context)
                )
            case "search":
                return SearchCategory()
            case "version":
                return VersionCategory()
            case _:
                msg = f"Element in {where} has an unknown `type`: {kind!r}."
                raise ConfigError(msg)

    def _local_doc(self, rel_path: str, display_name: str) -> LocalDocCategory:
        category_dir = self._inside_root(self.input_root / rel_path)
        config_path = category_dir / DOC_CONFIG_FILENAME
        entries: list[PageEntry] = []
        for page in _parse_sub_config(config_path):
            page_path = self._inside_root(category_dir / page["path"])
            if _is_directory(page_path):
                entries.append(
                    PageGroup(
                        display_name=page["displayName"],
                        pages=self._group_pages(page_path),
                        default_open=page["defaultOpen"],
                    )
                )
            else:
                entries.append(self._leaf(page_path, page["displayName"]))
        return LocalDocCategory(display_name=display_name, pages=tuple(entries))

    def _group_pages(self, group_dir: Path) -> tuple[DocPage, ...]:
        pages: list[DocPage] = []
        for page in _parse_sub_config(group_dir / DOC_CONFIG_FILENAME):
            page_path = self._inside_root(group_dir / page["path"])
            if _is_directory(page_path):
                msg = (
                    f'Category page depth cannot exceed 2 yet "{page_path}" '
                    "is a directory."
                )
                raise ConfigError(msg)
            pages.append(self._leaf(page_path, page["displayName"]))
        return tuple(pages)

    def _leaf(self, page_path: Path, display_name: str) -> DocPage:
        relative = page_path.relative_to(self.input_root)
        output_file = _output_path_for(relative, self.output_root)
        previous = self._seen_outputs.get(output_file)
        if previous is not None:
            msg = (
                f'"{page_path}" and "{previous}" would both be written to '
                f'"{output_file}".'
            )
            raise ConfigError(msg)
        self._seen_outputs[output_file] = page_path
        return DocPage(
            input_file=page_path, output_file=output_file, display_name=display_name
        )

    def _inside_root(self, path: Path) -> Path:
        normalized = _normalize(path)
        if not _is_within(normalized, self.input_root):
            msg = f'"{normalized}" is outside of the documentation root "{self.input_root}".'
            raise ConfigError(msg)
        return normalized


def _is_directory(path: Path) -> bool:
    """Classify ``path`` as a directory (``True``) or regular file (``False``)."""
    try:
        mode = path.stat().st_mode
    except OSError as exc:
        msg = f'Cannot run stat on "{path}": {exc}'
        raise ConfigError(msg) from exc
    if stat.S_ISDIR(mode):
        return True
    if stat.S_ISREG(mode):
        return False
    msg = f'"{path}" is neither a file nor a directory.'
    raise ConfigError(msg)


def _parse_sub_config(path: Path) -> list[dict[str, typ.Any]]:
    """Return the validated ``pages`` entries of a category or group config."""
    raw = _read_json_object(path, label=f'"{path}" config file')
    context = f'"{path}" config file is invalid'
    pages = raw.get("pages")
    if not isinstance(pages, list) or not pages:
        msg = f'{context}: Should have a "pages" property with at least one entry.'
        raise ConfigError(msg)
    parsed: list[dict[str, typ.Any]] = []
    for idx, page in enumerate(pages):
        where = f'{context}: element {idx} of "pages"'
        if not isinstance(page, dict):
            msg = f"{where} has an invalid format (should be an object)."
            raise ConfigError(msg)
        parsed.append(
            {
                "path": _require_str(page, "path", context=where),
                "displayName": _require_str(page, "displayName", context=where),
                "defaultOpen": _optional_bool(page, "defaultOpen", context=where),
            }
        )
    return parsed


__all__ = ["load_site_config"]
