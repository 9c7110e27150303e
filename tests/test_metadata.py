"""Tests for mdcatalog.metadata."""

from __future__ import annotations

import pytest

from mdcatalog.metadata import (
    FrontmatterError,
    extract_description,
    extract_title,
    frontmatter_from_mapping,
    parse_document,
)
from mdcatalog.models import Frontmatter


def test_parse_document_separates_metadata_and_body() -> None:
    meta, body = parse_document(
        "---\n"
        "title: Graph Basics\n"
        "category: [week-3, extra]\n"
        "order: 2\n"
        "draft: false\n"
        "published: true\n"
        "author: Sam\n"
        "---\n"
        "# Heading\n\nBody text.\n"
    )
    assert meta.title == "Graph Basics"
    assert meta.category == ("week-3", "extra")
    assert meta.primary_category == "week-3"
    assert meta.order == 2
    assert meta.draft is False
    assert meta.published is True
    assert meta.extra == {"author": "Sam"}
    assert body.startswith("# Heading")
    assert "title:" not in body


def test_parse_document_without_frontmatter_returns_whole_body() -> None:
    meta, body = parse_document("# Only Body\n\nText")
    assert meta == Frontmatter()
    assert "Only Body" in body


def test_parse_document_rejects_malformed_yaml() -> None:
    with pytest.raises(FrontmatterError):
        parse_document("---\ntitle: [unclosed\n---\nbody\n")


def test_frontmatter_coercion_rejects_wrong_types() -> None:
    meta = frontmatter_from_mapping(
        {"title": 42, "order": True, "draft": "yes", "published": "no", "id": 7}
    )
    assert meta.title == "42"
    assert meta.order is None
    assert meta.draft is True
    assert meta.published is False
    assert meta.id == "7"


def test_title_prefers_frontmatter_then_heading_then_filename() -> None:
    explicit = Frontmatter(title="From Meta")
    assert extract_title("# Heading", explicit, "file.md") == "From Meta"
    assert extract_title("intro\n# First  \n# Second", Frontmatter(), "file.md") == "First"
    assert extract_title("no heading here", Frontmatter(), "my_notes-file.md") == "my notes file"


def test_level_two_headings_are_not_titles() -> None:
    assert extract_title("## Sub heading", Frontmatter(), "notes.md") == "notes"


def test_description_uses_first_line_after_first_heading() -> None:
    body = "# Title\n\n## Sub\n\nFirst paragraph line.\nSecond line."
    assert extract_description(body, Frontmatter()) == "First paragraph line."


def test_description_is_truncated_to_150_characters() -> None:
    body = "# Title\n" + "x" * 400
    description = extract_description(body, Frontmatter())
    assert description is not None
    assert len(description) == 150


def test_description_absent_without_heading() -> None:
    assert extract_description("just text", Frontmatter()) is None
    assert extract_description("just text", Frontmatter(description="Given")) == "Given"


def test_parse_document_ignores_leading_byte_order_mark() -> None:
    meta, body = parse_document("\ufeff---\ndraft: true\ntitle: Secret\n---\n# Secret\n")
    assert meta.draft is True
    assert meta.title == "Secret"
    assert body.strip() == "# Secret"
