"""Tests for the ``docgraph`` command line entrypoint."""

from __future__ import annotations

import typing as typ

import pytest

from docgraph import cli

if typ.TYPE_CHECKING:
    from pathlib import Path

    from tests.conftest import TreeLayout, WriteTree


def test_build_prints_written_files(
    sample_docs: Path,
    output_dir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    cli.build(sample_docs, output_dir, project_version="3.1.0")

    out = capsys.readouterr().out.splitlines()
    assert len(out) == 5
    assert all(line.startswith("wrote ") for line in out)
    assert out[0].endswith("intro.html")
    assert out[-1].endswith("searchIndex.json")
    assert "version: 3.1.0" in (output_dir / "api" / "client.html").read_text(
        encoding="utf-8"
    )


def test_build_reports_problems_without_failing(
    write_tree: WriteTree,
    tree_layout: TreeLayout,
    output_dir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    tree_layout["api/client.md"] = "# Client\n\n[gone](gone.md)\n"
    docs = write_tree(tree_layout)

    cli.build(docs, output_dir)

    err = capsys.readouterr().err
    assert "1 broken link(s)" in err


def test_strict_mode_exits_with_problems(
    write_tree: WriteTree, tree_layout: TreeLayout, output_dir: Path
) -> None:
    tree_layout["api/client.md"] = "# Client\n\n[gone](gone.md)\n"
    docs = write_tree(tree_layout)

    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(docs), str(output_dir), "--strict"])

    assert excinfo.value.code == cli.EXIT_PROBLEMS
    assert (output_dir / "api" / "client.html").exists()


def test_config_error_exits_with_status_two(
    tmp_path: Path, output_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(tmp_path), str(output_dir), "--project-version", "1.0"])

    assert excinfo.value.code == cli.EXIT_CONFIG_ERROR
    assert "error: Impossible to read" in capsys.readouterr().err


def test_asset_error_exits_with_status_one(
    write_tree: WriteTree,
    tree_layout: TreeLayout,
    output_dir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    root_config = typ.cast("dict[str, typ.Any]", tree_layout[".docConfig.json"])
    root_config["favicon"] = {"srcPath": "missing.ico"}
    docs = write_tree(tree_layout)

    with pytest.raises(SystemExit) as excinfo:
        cli.build(docs, output_dir)

    assert excinfo.value.code == cli.EXIT_PROBLEMS
    assert "missing.ico" in capsys.readouterr().err


def test_site_map_root_flag_overrides_config(
    sample_docs: Path, output_dir: Path
) -> None:
    cli.build(sample_docs, output_dir, site_map_root="https://mirror.example.org")

    sitemap = (output_dir / "sitemap.xml").read_text(encoding="utf-8")
    assert "https://mirror.example.org/guide/intro.html" in sitemap
    assert "docs.example.com" not in sitemap
