"""Path classification: ignore rules, auto-discovery and category inference."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .config import DEFAULT_IGNORE, DEFAULT_IGNORE_FILES
from .globbing import compile_glob, normalize_path
from .models import Frontmatter

WEEK_SEGMENT = re.compile(r"^week-(\d+)")

_ROOT_REFERENCE_FILES = {"Index.md", "README.md"}

REFERENCE_CATEGORY = "reference"
MISC_CATEGORY = "misc"
UNCATEGORIZED = "uncategorized"


def split_segments(rel_path: str) -> List[str]:
    return [part for part in normalize_path(rel_path).split("/") if part and part != "."]


@dataclass(frozen=True)
class PathClassifier:
    """Makes the three per-path judgments used during a scan.

    All paths are relative to the scan root and use forward slashes.
    """

    ignore: Sequence[str] = DEFAULT_IGNORE
    ignore_files: Sequence[str] = DEFAULT_IGNORE_FILES

    def is_ignored(self, rel_path: str) -> bool:
        """Return True when a segment equals an ignore token or the basename is excluded."""
        segments = split_segments(rel_path)
        if not segments:
            return False
        tokens = set(self.ignore)
        if any(segment in tokens for segment in segments):
            return True
        basename = segments[-1]
        for pattern in self.ignore_files:
            compiled = compile_glob(pattern)
            if compiled is not None and compiled.match(basename):
                return True
        return False

    def is_auto_discovered(self, rel_path: str) -> bool:
        """Return True for root-level files and files under week directories."""
        segments = split_segments(rel_path)
        if len(segments) == 1:
            return True
        if len(segments) > 1 and segments[0] == "weeks" and segments[1].startswith("week-"):
            return True
        return bool(segments) and segments[0].startswith("week-")

    def infer_category(self, rel_path: str, frontmatter: Optional[Frontmatter] = None) -> str:
        """Pick the category id for a document."""
        if frontmatter is not None:
            explicit = frontmatter.primary_category
            if explicit:
                return explicit

        segments = split_segments(rel_path)
        for segment in segments:
            match = WEEK_SEGMENT.match(segment)
            if match:
                return f"week-{match.group(1)}"

        if len(segments) == 1:
            if segments[0] in _ROOT_REFERENCE_FILES:
                return REFERENCE_CATEGORY
            return MISC_CATEGORY

        return UNCATEGORIZED


__all__ = [
    "MISC_CATEGORY",
    "PathClassifier",
    "REFERENCE_CATEGORY",
    "UNCATEGORIZED",
    "WEEK_SEGMENT",
    "split_segments",
]
