"""Utilities for rendering, cross-linking, and indexing docgraph documentation."""

from .anchors import AnchorErrorItem, AnchorRegistry, AnchorValidity
from .assets import AssetError
from .link_rewriter import BrokenLink, make_link_translator
from .media import MediaAssetError
from .page_renderer import PageRenderer, RenderedPage
from .renderer import HtmlContentRenderer
from .search_index import SearchRecord, extract_search_records
from .site_artifacts import SiteArtifacts
from .site_builder import BuildReport, SiteBuilder, build_site

__all__ = [
    "AnchorErrorItem",
    "AnchorRegistry",
    "AnchorValidity",
    "AssetError",
    "BrokenLink",
    "BuildReport",
    "HtmlContentRenderer",
    "MediaAssetError",
    "PageRenderer",
    "RenderedPage",
    "SearchRecord",
    "SiteArtifacts",
    "SiteBuilder",
    "build_site",
    "extract_search_records",
    "make_link_translator",
]
