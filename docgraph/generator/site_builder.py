"""High-level orchestration for documentation site generation.

This module coordinates loading the ``.docConfig.json`` tree, rendering every
Markdown page with resolved cross-document links, validating anchor
references once the whole tree is known, and writing the search index and
sitemap. It exposes :class:`SiteBuilder`, whose :meth:`SiteBuilder.run`
returns a :class:`BuildReport` describing what was written and which links or
anchors were found broken.

Example
-------
>>> from pathlib import Path
>>> from docgraph.generator import SiteBuilder
>>> report = SiteBuilder(Path("docs"), Path("build")).run()  # doctest: +SKIP
>>> report.pages_written  # doctest: +SKIP
[PosixPath('/abs/build/guide/intro.html'), ...]
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import logging
import shutil
import typing as typ
from pathlib import Path
from urllib.parse import urljoin

from jinja2 import Environment, FileSystemLoader, TemplateError

from docgraph.config import LocalDocCategory, load_site_config

from .anchors import AnchorErrorItem, AnchorRegistry, AnchorValidity
from .assets import copy_root_file, copy_static_assets
from .link_rewriter import BrokenLink, make_link_translator, relative_url
from .media import MediaAssetError
from .navigation import build_header, build_page_list, build_sidebar, neighbour_pages
from .page_renderer import PageRenderer, RenderedPage
from .renderer import HtmlContentRenderer
from .search_index import extract_search_records
from .site_artifacts import SiteArtifacts

if typ.TYPE_CHECKING:
    from docgraph.config import PageLocation, SiteConfig

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


@dc.dataclass(slots=True)
class BuildReport:
    """Outcome of a documentation build.

    Attributes
    ----------
    pages_written : list[Path]
        HTML pages generated, in render order.
    skipped_pages : list[Path]
        Markdown sources that failed to render or write.
    broken_links : list[BrokenLink]
        Local links whose target is not part of the page tree.
    anchor_errors : list[AnchorErrorItem]
        Anchor references that did not resolve after every page rendered.
    artifacts_written : list[Path]
        ``searchIndex.json`` and ``sitemap.xml`` when written.
    """

    pages_written: list[Path] = dc.field(default_factory=list)
    skipped_pages: list[Path] = dc.field(default_factory=list)
    broken_links: list[BrokenLink] = dc.field(default_factory=list)
    anchor_errors: list[AnchorErrorItem] = dc.field(default_factory=list)
    artifacts_written: list[Path] = dc.field(default_factory=list)

    @property
    def has_problems(self) -> bool:
        """Return ``True`` when any page, link or anchor failed."""
        return bool(self.skipped_pages or self.broken_links or self.anchor_errors)


class SiteBuilder:
    """Render a documentation tree into a static HTML site."""

    def __init__(
        self,
        input_dir: Path,
        output_dir: Path,
        *,
        version: str | None = None,
        clean: bool = False,
        site_map_root: str | None = None,
        templates_dir: Path | None = None,
        pygments_style: str = "default",
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        input_dir : Path
            Documentation root containing the root ``.docConfig.json``.
        output_dir : Path
            Directory receiving the generated site.
        version : str, optional
            Project version shown by ``version`` header entries.
        clean : bool, optional
            Remove ``output_dir`` before building. Defaults to ``False``.
        site_map_root : str, optional
            Absolute URL overriding the configured ``siteMapRoot``.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package
            templates.
        pygments_style : str, optional
            Pygments style used for code blocks and ``styles/code.css``.
        """
        self.input_dir = input_dir
        self.output_dir = output_dir
        self.version = version
        self.clean = clean
        self.site_map_root = site_map_root
        self.templates_dir = templates_dir or DEFAULT_TEMPLATES_DIR
        self.content_renderer = HtmlContentRenderer(pygments_style)
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("doc_page.jinja")

    def run(self) -> BuildReport:
        """Build the whole site and return a report.

        Raises
        ------
        ConfigError
            Raised when the configuration tree is invalid; nothing is rendered.
        AssetError
            Raised when bundled assets, the logo or the favicon cannot be
            copied.

        Notes
        -----
        Pages render one at a time in tree order. A page that fails to read,
        render or write is logged and skipped; it contributes no anchors,
        search records or sitemap URL. Anchor references are resolved only
        after the last page.
        """
        if self.clean and self.output_dir.exists():
            shutil.rmtree(self.output_dir)
        site = load_site_config(
            self.input_dir,
            self.output_dir,
            version=self.version,
            site_map_root=self.site_map_root,
        )
        site.output_dir.mkdir(parents=True, exist_ok=True)

        styles, scripts = copy_static_assets(
            site.output_dir, code_stylesheet=self.content_renderer.stylesheet
        )
        logo_path = (
            copy_root_file(site.logo.src_path, site.input_dir, site.output_dir)
            if site.logo
            else None
        )
        favicon_path = (
            copy_root_file(site.favicon_path, site.input_dir, site.output_dir)
            if site.favicon_path
            else None
        )

        report = BuildReport()
        registry = AnchorRegistry()
        artifacts = SiteArtifacts(templates_dir=self.templates_dir)
        file_map = site.tree.file_map()
        shared = _SharedPageContext(
            site=site,
            styles=styles,
            scripts=scripts,
            logo_path=logo_path,
            favicon_path=favicon_path,
        )

        for location in site.tree.iter_pages():
            page = location.page
            translator = make_link_translator(
                page.input_file,
                page.output_file.parent,
                file_map,
                registry,
                broken_links=report.broken_links,
            )
            rendered = self._build_page(location, shared, translator)
            if rendered is None:
                report.skipped_pages.append(page.input_file)
                continue
            registry.record_anchors(page.input_file, rendered.anchors)
            output_url = relative_url(page.output_file, site.output_dir)
            artifacts.add_search_records(output_url, extract_search_records(rendered.html))
            if site.site_map_root:
                artifacts.add_sitemap_url(urljoin(site.site_map_root, output_url))
            report.pages_written.append(page.output_file)
            logger.info("wrote %s", page.output_file)

        report.anchor_errors = registry.resolve_all()
        _log_anchor_errors(report.anchor_errors, registry)
        report.artifacts_written = artifacts.write(
            site.output_dir, include_sitemap=site.site_map_root is not None
        )
        return report

    def _build_page(
        self,
        location: PageLocation,
        shared: _SharedPageContext,
        translator: typ.Callable[[str], str | None],
    ) -> RenderedPage | None:
        """Render and write one page, returning ``None`` when it was skipped."""
        page = location.page
        try:
            source = page.input_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("error reading file %s: %s", page.input_file, exc)
            return None
        try:
            page.output_file.parent.mkdir(parents=True, exist_ok=True)
            rendered = PageRenderer(
                input_file=page.input_file,
                output_file=page.output_file,
                output_root=shared.site.output_dir,
                link_translator=translator,
                content_renderer=self.content_renderer,
            ).render(source)
            html = self._render_template(location, shared, rendered)
            page.output_file.write_text(html, encoding="utf-8")
        except (OSError, ValueError, MediaAssetError, TemplateError) as exc:
            logger.warning("could not generate %s: %s", page.output_file, exc)
            return None
        return rendered

    def _render_template(
        self,
        location: PageLocation,
        shared: _SharedPageContext,
        rendered: RenderedPage,
    ) -> str:
        """Wrap the rendered body in the page chrome."""
        site = shared.site
        page = location.page
        current_dir = page.output_file.parent
        category = site.tree.categories[location.category_index]
        if not isinstance(category, LocalDocCategory):  # pragma: no cover - tree invariant
            msg = f"Page {page.input_file} does not belong to a local-doc category."
            raise TypeError(msg)
        previous_page, next_page = neighbour_pages(category, location, current_dir)
        toc_html = (
            self.content_renderer.markdown(rendered.toc_markdown)
            if rendered.has_toc
            else ""
        )
        context = {
            "page_title": page.display_name,
            "content_html": rendered.html,
            "toc_html": toc_html,
            "root_url": relative_url(site.output_dir, current_dir),
            "css_urls": [relative_url(path, current_dir) for path in shared.styles],
            "script_urls": [relative_url(path, current_dir) for path in shared.scripts],
            "favicon_url": (
                relative_url(shared.favicon_path, current_dir)
                if shared.favicon_path
                else None
            ),
            "logo_url": (
                relative_url(shared.logo_path, current_dir) if shared.logo_path else None
            ),
            "logo_link": site.logo.link if site.logo else None,
            "header_items": build_header(
                site.tree, location, current_dir, site.version_info
            ),
            "sidebar_items": build_sidebar(category, location, current_dir),
            "page_list": build_page_list(site.tree, location, current_dir),
            "previous_page": previous_page,
            "next_page": next_page,
            "generated_at": dt.datetime.now(dt.UTC),
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        return html


@dc.dataclass(slots=True, frozen=True)
class _SharedPageContext:
    """Site-wide values every page template needs."""

    site: SiteConfig
    styles: list[Path]
    scripts: list[Path]
    logo_path: Path | None
    favicon_path: Path | None


def _log_anchor_errors(errors: list[AnchorErrorItem], registry: AnchorRegistry) -> None:
    for error in errors:
        if error.validity is AnchorValidity.ANCHOR_NOT_FOUND:
            message = (
                "A referenced anchor link was not found.\n"
                f"  File with link: {error.citing_file}\n"
                f"  Linked file:    {error.target_file}\n"
                f"  Anchor:         {error.anchor}"
            )
            available = registry.anchors_for(error.target_file)
            if available:
                message += "\n  Available Anchors: " + ", ".join(available)
        else:
            message = (
                "A referenced anchor points to a page that was not generated.\n"
                f"  File with link: {error.citing_file}\n"
                f"  Linked file:    {error.target_file}\n"
                f"  Anchor:         {error.anchor}"
            )
        logger.warning(message)


def build_site(
    input_dir: Path,
    output_dir: Path,
    *,
    version: str | None = None,
    clean: bool = False,
    site_map_root: str | None = None,
) -> BuildReport:
    """Build the documentation found in ``input_dir`` into ``output_dir``."""
    builder = SiteBuilder(
        input_dir,
        output_dir,
        version=version,
        clean=clean,
        site_map_root=site_map_root,
    )
    return builder.run()


__all__ = ["BuildReport", "SiteBuilder", "build_site"]
