"""Tests for mdcatalog.ids."""

from __future__ import annotations

from mdcatalog.ids import IdAllocator, allocate, slugify
from mdcatalog.models import Frontmatter


def test_slugify_normalises_names() -> None:
    assert slugify("My Notes (Final)!") == "my-notes-final"
    assert slugify("--Already--Hyphenated--") == "already-hyphenated"
    assert slugify("snake_case_name") == "snake_case_name"
    assert slugify("a   b\tc") == "a-b-c"


def test_collisions_get_numeric_suffixes_in_call_order() -> None:
    used: set[str] = set()
    assert allocate("notes.md", "misc", used) == "misc-notes"
    assert allocate("other/notes.md", "misc", used) == "misc-notes-1"
    assert allocate("third/notes.md", "misc", used) == "misc-notes-2"
    assert used == {"misc-notes", "misc-notes-1", "misc-notes-2"}


def test_explicit_id_is_returned_without_collision_check() -> None:
    used = {"custom"}
    meta = Frontmatter(id="custom")
    assert allocate("a.md", "misc", used, meta) == "custom"
    assert allocate("b.md", "misc", used, meta) == "custom"


def test_generated_ids_avoid_explicit_ids() -> None:
    allocator = IdAllocator()
    assert allocator.allocate("x.md", "misc", Frontmatter(id="misc-notes")) == "misc-notes"
    assert allocator.allocate("notes.md", "misc") == "misc-notes-1"
    assert "misc-notes" in allocator
    assert len(allocator) == 2


def test_empty_slug_falls_back_to_category() -> None:
    used: set[str] = set()
    assert allocate("!!!.md", "misc", used) == "misc"
    assert allocate("???.md", "misc", used) == "misc-1"
