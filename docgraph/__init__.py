"""Static documentation site generator for trees of Markdown files.

This package exposes the ``docgraph`` console script, which reads a directory
of Markdown pages described by ``.docConfig.json`` files and writes a
navigable HTML site with a search index and an optional sitemap.

Exports
-------
- ``app``: Cyclopts application entry.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docgraph import main
>>> main(["docs", "build"])  # doctest: +SKIP
>>> from docgraph import app
>>> app.name  # doctest: +SKIP
('docgraph',)
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
