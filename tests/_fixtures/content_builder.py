"""Helper utilities for constructing temporary content trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from mdcatalog.catalog_builder import CatalogBuilder
from mdcatalog.config import CatalogConfig
from mdcatalog.models import Catalog


class ContentBuilder:
    """Utility for writing markdown files into a throwaway directory and scanning it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "notes"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the content directory."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def config(self, **overrides: object) -> CatalogConfig:
        """Return the default configuration rooted here, with optional overrides."""
        return CatalogConfig.default(self.root).with_overrides(**overrides)

    def build(self, **overrides: object) -> Catalog:
        """Return a fresh catalog of the directory contents."""
        return CatalogBuilder(self.config(**overrides)).generate()

    def path(self) -> Path:
        """Return the content root path."""
        return self.root


__all__ = ["ContentBuilder"]
