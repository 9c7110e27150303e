"""Tests for mdcatalog.staleness."""

from __future__ import annotations

import os
from pathlib import Path

from mdcatalog.staleness import is_catalog_stale


def _touch(path: Path, mtime: float) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        path.write_text("x", encoding="utf-8")
    os.utime(path, (mtime, mtime))
    return path


def test_missing_catalog_is_stale(tmp_path: Path) -> None:
    assert is_catalog_stale(tmp_path / "catalog.json", None, []) is True


def test_catalog_newer_than_inputs_is_fresh(tmp_path: Path) -> None:
    note = _touch(tmp_path / "a.md", 1_000)
    config = _touch(tmp_path / ".mdcatalog.yml", 1_000)
    output = _touch(tmp_path / "catalog.json", 2_000)
    assert is_catalog_stale(output, config, [note]) is False


def test_newer_content_file_makes_catalog_stale(tmp_path: Path) -> None:
    output = _touch(tmp_path / "catalog.json", 2_000)
    old = _touch(tmp_path / "a.md", 1_000)
    new = _touch(tmp_path / "week-1" / "b.md", 3_000)
    assert is_catalog_stale(output, None, [old, new]) is True


def test_newer_config_makes_catalog_stale(tmp_path: Path) -> None:
    output = _touch(tmp_path / "catalog.json", 2_000)
    config = _touch(tmp_path / ".mdcatalog.yml", 3_000)
    assert is_catalog_stale(output, config, []) is True


def test_missing_inputs_are_ignored(tmp_path: Path) -> None:
    output = _touch(tmp_path / "catalog.json", 2_000)
    assert is_catalog_stale(output, tmp_path / "absent.yml", [tmp_path / "gone.md"]) is False
