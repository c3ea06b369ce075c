"""Tests for the sitemap and search index accumulator."""

from __future__ import annotations

import datetime as dt
import logging
import typing as typ

import msgspec.json as msgspec_json
import pytest
from bs4 import BeautifulSoup

from docgraph.generator.search_index import SearchRecord
from docgraph.generator.site_artifacts import SiteArtifacts

if typ.TYPE_CHECKING:
    from pathlib import Path

BUILD_DATE = dt.date(2024, 5, 17)


@pytest.fixture
def artifacts() -> SiteArtifacts:
    return SiteArtifacts(today=lambda: BUILD_DATE)


def test_sitemap_lists_urls_in_order(artifacts: SiteArtifacts) -> None:
    artifacts.add_sitemap_url("https://docs.example.com/guide/intro.html")
    artifacts.add_sitemap_url("https://docs.example.com/api/client.html?a=1&b=2")

    xml = artifacts.serialize_sitemap()

    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert "&b=2" not in xml
    soup = BeautifulSoup(xml, "html.parser")
    assert [loc.get_text() for loc in soup.find_all("loc")] == [
        "https://docs.example.com/guide/intro.html",
        "https://docs.example.com/api/client.html?a=1&b=2",
    ]
    assert {lastmod.get_text() for lastmod in soup.find_all("lastmod")} == {"2024-05-17"}


def test_search_index_groups_records_per_page(artifacts: SiteArtifacts) -> None:
    artifacts.add_search_records(
        "guide/intro.html",
        [SearchRecord(h1="Intro", anchor_h1="intro", body="Welcome")],
    )
    artifacts.add_search_records("api/client.html", [])

    payload = msgspec_json.decode(artifacts.serialize_search_index())

    assert payload == [
        {
            "file": "guide/intro.html",
            "index": [{"h1": "Intro", "body": "Welcome", "anchorH1": "intro"}],
        },
        {"file": "api/client.html", "index": []},
    ]


def test_search_index_keeps_unicode(artifacts: SiteArtifacts) -> None:
    artifacts.add_search_records("a.html", [SearchRecord(h1="Café", body="déjà vu")])

    assert "Café" in artifacts.serialize_search_index()


def test_write_skips_sitemap_when_not_requested(
    artifacts: SiteArtifacts, tmp_path: Path
) -> None:
    artifacts.add_sitemap_url("https://docs.example.com/a.html")

    written = artifacts.write(tmp_path, include_sitemap=False)

    assert written == [tmp_path / "searchIndex.json"]
    assert not (tmp_path / "sitemap.xml").exists()


def test_write_includes_sitemap_when_requested(
    artifacts: SiteArtifacts, tmp_path: Path
) -> None:
    written = artifacts.write(tmp_path, include_sitemap=True)

    assert written == [tmp_path / "sitemap.xml", tmp_path / "searchIndex.json"]
    assert "<urlset" in (tmp_path / "sitemap.xml").read_text(encoding="utf-8")


def test_write_failures_are_logged(
    artifacts: SiteArtifacts, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    missing = tmp_path / "missing"

    with caplog.at_level(logging.WARNING):
        written = artifacts.write(missing, include_sitemap=True)

    assert written == []
    assert "Could not create sitemap file" in caplog.text
    assert "Could not create search index file" in caplog.text
