"""Cyclopts CLI entrypoint for building docgraph documentation sites.

The ``docgraph`` console script reads the ``.docConfig.json`` tree found in an
input directory, renders every Markdown page it lists into HTML, and writes
the search index and (when a sitemap root is configured) ``sitemap.xml``.
Broken links and anchors are reported as warnings; ``--strict`` turns them
into a failing exit status for CI.

Examples
--------
Build the documentation under ``docs`` into ``build``:

>>> from docgraph.cli import main
>>> main(["docs", "build", "--project-version", "1.4.0"])  # doctest: +SKIP

Wipe the output directory first and fail on any broken reference:

>>> from docgraph.cli import app
>>> app(["docs", "build", "--clean", "--strict"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import ConfigError
from .generator import AssetError, BuildReport, SiteBuilder

LOG_FORMAT = "[%(levelname)s] %(message)s"
EXIT_PROBLEMS = 1
EXIT_CONFIG_ERROR = 2

app = App(
    name="docgraph",
    help="Generate a static HTML documentation site from Markdown files.",
    config=cyclopts.config.Env("DOCGRAPH_", command=False),  # type: ignore[unknown-argument]
)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


def _print_report(report: BuildReport) -> None:
    for path in [*report.pages_written, *report.artifacts_written]:
        print(f"wrote {_format_path(path)}")
    for path in report.skipped_pages:
        print(f"skipped {_format_path(path)}", file=sys.stderr)
    if report.has_problems:
        print(
            f"{len(report.broken_links)} broken link(s), "
            f"{len(report.anchor_errors)} broken anchor(s), "
            f"{len(report.skipped_pages)} skipped page(s)",
            file=sys.stderr,
        )


@app.default
def build(
    input_dir: typ.Annotated[
        Path, Parameter(help="Documentation root holding the root .docConfig.json")
    ],
    output_dir: typ.Annotated[
        Path, Parameter(help="Directory receiving the generated site")
    ],
    *,
    project_version: typ.Annotated[
        str | None,
        Parameter(
            help="Project version shown in the header",
            env_var="DOCGRAPH_PROJECT_VERSION",
        ),
    ] = None,
    clean: typ.Annotated[
        bool, Parameter(help="Remove the output directory before building")
    ] = False,
    site_map_root: typ.Annotated[
        str | None,
        Parameter(
            help="Absolute URL prefix for sitemap entries (overrides siteMapRoot)",
            env_var="DOCGRAPH_SITE_MAP_ROOT",
        ),
    ] = None,
    strict: typ.Annotated[
        bool, Parameter(help="Exit with status 1 on broken links or anchors")
    ] = False,
    verbose: typ.Annotated[bool, Parameter(help="Log every generated file")] = False,
) -> None:
    """Build the documentation site found in ``input_dir``.

    Parameters
    ----------
    input_dir : Path
        Documentation root containing the root ``.docConfig.json``.
    output_dir : Path
        Directory where the HTML pages, assets, ``searchIndex.json`` and
        ``sitemap.xml`` are written.
    project_version : str or None, optional
        Version displayed by ``version`` header entries; when ``None`` those
        entries are omitted.
    clean : bool, optional
        Remove ``output_dir`` before building.
    site_map_root : str or None, optional
        Overrides the ``siteMapRoot`` property of the root configuration.
    strict : bool, optional
        Exit with status 1 when pages were skipped or links/anchors are broken.
    verbose : bool, optional
        Lower the log level to ``DEBUG``.

    Returns
    -------
    None
        Writes the site and prints the generated paths.

    Raises
    ------
    SystemExit
        With status 2 for configuration errors, and status 1 when assets
        cannot be copied or, under ``--strict``, when problems were reported.
    """
    _configure_logging(verbose=verbose)
    builder = SiteBuilder(
        input_dir,
        output_dir,
        version=project_version,
        clean=clean,
        site_map_root=site_map_root,
    )
    try:
        report = builder.run()
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(EXIT_CONFIG_ERROR) from exc
    except AssetError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(EXIT_PROBLEMS) from exc
    _print_report(report)
    if strict and report.has_problems:
        raise SystemExit(EXIT_PROBLEMS)


def main(tokens: list[str] | None = None) -> None:
    """Invoke the Cyclopts application that powers the ``docgraph`` command.

    Parameters
    ----------
    tokens : list[str] or None, optional
        Arguments to parse instead of ``sys.argv``.

    Examples
    --------
    >>> main(["docs", "build"])  # doctest: +SKIP
    """
    app(tokens)


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
