"""Load and validate ``.docConfig.json`` files for docgraph builds.

This subpackage parses the root configuration of a documentation tree, follows
every ``local-doc`` category into its own directory configuration (and one
further level of page groups), and produces strongly typed dataclasses
(:class:`SiteConfig`, :class:`PageTree`, etc.) that the site builder consumes.
The primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from docgraph.config import load_site_config
>>> site = load_site_config(Path("docs"), Path("build"))  # doctest: +SKIP
>>> [loc.page.display_name for loc in site.tree.iter_pages()]  # doctest: +SKIP
['Getting started', 'API']
"""

from .loader import load_site_config
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
    PageLocation,
    PageTree,
    SearchCategory,
    SiteConfig,
    VersionCategory,
    VersionInfo,
)

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
    "load_site_config",
]
