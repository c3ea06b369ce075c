"""Shared fixtures that lay out documentation trees on disk.

Tests describe a tree as a mapping of relative paths to contents: strings are
written verbatim (Markdown pages, media placeholders) and dictionaries or lists
are serialized as JSON (``.docConfig.json`` files).
"""

from __future__ import annotations

import json
import typing as typ

import pytest

if typ.TYPE_CHECKING:
    from pathlib import Path

TreeLayout = dict[str, "str | dict[str, typ.Any] | list[typ.Any]"]
WriteTree = typ.Callable[[TreeLayout], "Path"]

INTRO_MARKDOWN = (
    "# Introduction\n\n"
    "See the [client](../api/client.md#usage) and some [tips](advanced/tips.md).\n\n"
    "## Setup\n\n"
    "Install it first.\n\n"
    "Jump back to [setup](#setup).\n"
)
TIPS_MARKDOWN = "# Tips\n\nBack to the [introduction](../intro.md#introduction).\n"
CLIENT_MARKDOWN = "# Client\n\nThe client API.\n\n## Usage\n\nCall it.\n"


def sample_tree_layout() -> TreeLayout:
    """Return a two-category tree with a page group and cross-page anchors."""
    return {
        ".docConfig.json": {
            "siteMapRoot": "https://docs.example.com",
            "otherVersionsLink": "https://docs.example.com/versions",
            "linksLeft": [
                {"type": "local-doc", "path": "guide", "displayName": "Guide"},
                {"type": "local-doc", "path": "api", "displayName": "API"},
            ],
            "linksRight": [
                {"type": "search"},
                {"type": "version"},
                {"type": "github-link", "link": "https://github.com/example/docgraph"},
            ],
        },
        "guide/.docConfig.json": {
            "pages": [
                {"path": "intro.md", "displayName": "Introduction"},
                {"path": "advanced", "displayName": "Advanced", "defaultOpen": True},
            ]
        },
        "guide/intro.md": INTRO_MARKDOWN,
        "guide/advanced/.docConfig.json": {
            "pages": [{"path": "tips.md", "displayName": "Tips"}]
        },
        "guide/advanced/tips.md": TIPS_MARKDOWN,
        "api/.docConfig.json": {
            "pages": [{"path": "client.md", "displayName": "Client"}]
        },
        "api/client.md": CLIENT_MARKDOWN,
    }


@pytest.fixture
def write_tree(tmp_path: Path) -> WriteTree:
    """Return a helper writing a tree layout under ``tmp_path / "docs"``."""

    def _write(layout: TreeLayout) -> Path:
        root = tmp_path / "docs"
        for relative, content in layout.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, str):
                path.write_text(content, encoding="utf-8")
            else:
                path.write_text(json.dumps(content), encoding="utf-8")
        return root

    return _write


@pytest.fixture
def tree_layout() -> TreeLayout:
    """Return a fresh copy of the sample tree layout for tests to tweak."""
    return sample_tree_layout()


@pytest.fixture
def sample_docs(write_tree: WriteTree, tree_layout: TreeLayout) -> Path:
    """Write the sample tree and return its root directory."""
    return write_tree(tree_layout)


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Return the directory a test build writes into."""
    return tmp_path / "site"
