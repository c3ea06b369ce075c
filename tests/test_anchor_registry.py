"""Tests for anchor naming and deferred anchor resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from docgraph.generator.anchors import (
    AnchorErrorItem,
    AnchorNameGenerator,
    AnchorRegistry,
    AnchorValidity,
    slugify_heading,
)

PAGE_A = Path("/docs/a.md")
PAGE_B = Path("/docs/b.md")
PAGE_C = Path("/docs/c.md")


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Example", "example"),
        ("  Getting Started  ", "getting-started"),
        ("What's new in 2.0?", "whats-new-in-20"),
        ("snake_case-and-dash", "snake_case-and-dash"),
        ("Ünïcode only", "ncode-only"),
        ("", ""),
    ],
)
def test_slugify_heading(title: str, expected: str) -> None:
    assert slugify_heading(title) == expected


def test_duplicate_titles_get_numbered_suffixes() -> None:
    names = AnchorNameGenerator()

    generated = [names.next_for(title) for title in ["Example", "Example", "Example"]]

    assert generated == ["example", "example_(1)", "example_(2)"]


def test_resolve_all_distinguishes_failure_kinds() -> None:
    registry = AnchorRegistry()
    registry.queue_reference(PAGE_A, PAGE_B, "setup")
    registry.queue_reference(PAGE_A, PAGE_B, "missing")
    registry.queue_reference(PAGE_B, PAGE_C, "anything")
    registry.record_anchors(PAGE_B, ["intro", "setup"])

    errors = registry.resolve_all()

    assert errors == [
        AnchorErrorItem(PAGE_A, PAGE_B, "missing", AnchorValidity.ANCHOR_NOT_FOUND),
        AnchorErrorItem(PAGE_B, PAGE_C, "anything", AnchorValidity.FILE_NOT_FOUND),
    ]


def test_references_may_precede_anchor_recording() -> None:
    registry = AnchorRegistry()
    registry.queue_reference(PAGE_A, PAGE_B, "later")

    assert registry.resolve(PAGE_B, "later") is AnchorValidity.FILE_NOT_FOUND

    registry.record_anchors(PAGE_B, ["later"])

    assert registry.resolve_all() == []


def test_self_reference_resolves_against_citing_file() -> None:
    registry = AnchorRegistry()
    registry.queue_reference(PAGE_A, PAGE_A, "usage")
    registry.record_anchors(PAGE_A, ["usage"])

    assert registry.resolve_all() == []


def test_record_anchors_replaces_previous_set() -> None:
    registry = AnchorRegistry()
    registry.record_anchors(PAGE_A, ["old"])
    registry.record_anchors(PAGE_A, ["new"])

    assert registry.anchors_for(PAGE_A) == ("new",)
    assert registry.resolve(PAGE_A, "old") is AnchorValidity.ANCHOR_NOT_FOUND
    assert registry.anchors_for(PAGE_B) is None


def test_references_keep_queue_order() -> None:
    registry = AnchorRegistry()
    registry.queue_reference(PAGE_B, PAGE_A, "two")
    registry.queue_reference(PAGE_A, PAGE_B, "one")

    assert [ref.anchor for ref in registry.references] == ["two", "one"]
