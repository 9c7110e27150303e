"""Stable, collision-free document identifiers."""

from __future__ import annotations

import posixpath
import re
from typing import Iterable, Optional, Set

from .models import Frontmatter

_NON_SLUG_CHARS = re.compile(r"[^\w\s-]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")
_HYPHEN_RUNS = re.compile(r"-+")


def slugify(text: str) -> str:
    """Return a lowercase, hyphen-separated slug for ``text``."""
    slug = text.lower()
    slug = _NON_SLUG_CHARS.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHEN_RUNS.sub("-", slug)
    return slug.strip("-")


def _stem(path: str) -> str:
    name = posixpath.basename(path.replace("\\", "/"))
    return name[:-3] if name.endswith(".md") else name


def allocate(
    path: str,
    category: str,
    used_ids: Set[str],
    frontmatter: Optional[Frontmatter] = None,
) -> str:
    """Return an id for ``path`` and record it in ``used_ids``.

    An explicit frontmatter ``id`` is returned as-is without a collision
    check. Generated ids take the form ``{category}-{slug}`` and get a
    ``-1``, ``-2`` ... suffix until unused.
    """
    if frontmatter is not None and frontmatter.id:
        used_ids.add(frontmatter.id)
        return frontmatter.id

    slug = slugify(_stem(path))
    base_id = f"{category}-{slug}" if slug else category

    candidate = base_id
    counter = 1
    while candidate in used_ids:
        candidate = f"{base_id}-{counter}"
        counter += 1

    used_ids.add(candidate)
    return candidate


class IdAllocator:
    """Holds the used-id set for one generation run."""

    def __init__(self, reserved: Iterable[str] = ()) -> None:
        self._used: Set[str] = set(reserved)

    def allocate(
        self, path: str, category: str, frontmatter: Optional[Frontmatter] = None
    ) -> str:
        return allocate(path, category, self._used, frontmatter)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._used

    def __len__(self) -> int:
        return len(self._used)


__all__ = ["IdAllocator", "allocate", "slugify"]
