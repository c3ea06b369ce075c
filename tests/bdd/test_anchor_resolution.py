"""Behaviour tests for deferred cross-page anchor resolution.

These pytest-bdd scenarios, driven by ``anchor_resolution.feature``, build a
small documentation tree with :func:`docgraph.generator.build_site` and check
that anchor references are validated against the whole tree: a link to a page
rendered later still resolves, a link to a missing heading is reported with
the anchors available in its target, and repeated headings get numbered
anchors.

Usage
-----
Run ``pytest tests/bdd/test_anchor_resolution.py -v`` after installing the
test extra (``pip install -e .[test]``). The scenarios only touch ``tmp_path``.
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from docgraph.generator import AnchorValidity, BuildReport, build_site

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "anchor_resolution.feature"
)
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _two_page_tree(first_page: str, last_page: str) -> dict[str, object]:
    return {
        ".docConfig.json": {
            "linksLeft": [
                {"type": "local-doc", "path": "start", "displayName": "Start"},
                {"type": "local-doc", "path": "reference", "displayName": "Reference"},
            ]
        },
        "start/.docConfig.json": {
            "pages": [{"path": "first.md", "displayName": "First"}]
        },
        "start/first.md": first_page,
        "reference/.docConfig.json": {
            "pages": [{"path": "last.md", "displayName": "Last"}]
        },
        "reference/last.md": last_page,
    }


@given("a documentation tree where the first page links to a heading of the last page")
def given_forward_reference(
    write_tree: typ.Callable[[dict[str, object]], Path],
    scenario_state: dict[str, object],
) -> None:
    """Write a tree whose first page cites an anchor rendered afterwards."""
    scenario_state["docs"] = write_tree(
        _two_page_tree(
            "# First\n\nRead about [options](../reference/last.md#options).\n",
            "# Last\n\n## Options\n\nEvery option.\n",
        )
    )


@given("a documentation tree where the first page links to a missing heading")
def given_missing_heading(
    write_tree: typ.Callable[[dict[str, object]], Path],
    scenario_state: dict[str, object],
) -> None:
    """Write a tree whose first page cites an anchor that never exists."""
    scenario_state["docs"] = write_tree(
        _two_page_tree(
            "# First\n\nRead about [flags](../reference/last.md#flags).\n",
            "# Last\n\n## Options\n\nEvery option.\n",
        )
    )


@given(parsers.parse('a documentation tree with a page repeating the heading "{title}"'))
def given_repeated_heading(
    write_tree: typ.Callable[[dict[str, object]], Path],
    scenario_state: dict[str, object],
    title: str,
) -> None:
    """Write a tree whose first page uses the same heading twice."""
    scenario_state["docs"] = write_tree(
        _two_page_tree(
            f"# {title}\n\nOne.\n\n# {title}\n\nTwo.\n",
            "# Last\n",
        )
    )


@when("I build the documentation site")
def when_build(
    tmp_path: Path,
    scenario_state: dict[str, object],
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Build the scenario tree into a fresh output directory."""
    output_dir = tmp_path / "site"
    with caplog.at_level(logging.WARNING):
        report = build_site(typ.cast("Path", scenario_state["docs"]), output_dir)
    scenario_state["output_dir"] = output_dir
    scenario_state["report"] = report


@then("no anchor errors are reported")
def then_no_anchor_errors(scenario_state: dict[str, object]) -> None:
    """Verify the resolution pass found every referenced anchor."""
    report = typ.cast("BuildReport", scenario_state["report"])
    assert report.anchor_errors == []


@then("the link points at the generated page and heading")
def then_link_rewritten(scenario_state: dict[str, object]) -> None:
    """Verify the Markdown link now targets the HTML page and its heading id."""
    output_dir = typ.cast("Path", scenario_state["output_dir"])
    first = BeautifulSoup(
        (output_dir / "start" / "first.html").read_text(encoding="utf-8"), "html.parser"
    )
    link = first.find("article").find("a")
    assert link["href"] == "../reference/last.html#options"
    last = BeautifulSoup(
        (output_dir / "reference" / "last.html").read_text(encoding="utf-8"),
        "html.parser",
    )
    assert last.find(id="options") is not None


@then("one anchor error reports the missing heading")
def then_one_anchor_error(scenario_state: dict[str, object]) -> None:
    """Verify exactly one anchor-not-found error names the missing heading."""
    report = typ.cast("BuildReport", scenario_state["report"])
    assert len(report.anchor_errors) == 1
    error = report.anchor_errors[0]
    assert error.anchor == "flags"
    assert error.validity is AnchorValidity.ANCHOR_NOT_FOUND
    assert error.target_file.name == "last.md"


@then("the warning lists the anchors available in the target page")
def then_warning_lists_anchors(caplog: pytest.LogCaptureFixture) -> None:
    """Verify the diagnostic helps fix the link by listing existing anchors."""
    assert "Available Anchors: last, options" in caplog.text


@then(
    parsers.parse('the page headings carry the anchors "{first}" and "{second}"')
)
def then_numbered_anchors(
    scenario_state: dict[str, object], first: str, second: str
) -> None:
    """Verify repeated headings received distinct ``id`` attributes."""
    output_dir = typ.cast("Path", scenario_state["output_dir"])
    soup = BeautifulSoup(
        (output_dir / "start" / "first.html").read_text(encoding="utf-8"), "html.parser"
    )
    ids = [h1["id"] for h1 in soup.find("article").find_all("h1")]
    assert ids == [first, second]
