"""Frontmatter extraction and title/description derivation for markdown files."""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional, Tuple

import frontmatter
import yaml

from .models import Frontmatter

DESCRIPTION_LIMIT = 150

_BOM = "\ufeff"

_HEADING_PATTERN = re.compile(r"^#\s+(.+)$", re.MULTILINE)
_FILENAME_SEPARATORS = re.compile(r"[_-]")

_RECOGNIZED_KEYS = {"title", "description", "category", "id", "draft", "published", "order"}


class FrontmatterError(ValueError):
    """Raised when a document's metadata block cannot be parsed."""


def parse_document(text: str) -> Tuple[Frontmatter, str]:
    """Split raw markdown into a typed frontmatter view and the body text."""
    # A leading byte-order mark hides the opening "---" delimiter.
    text = text.lstrip(_BOM)
    try:
        post = frontmatter.loads(text)
    except (yaml.YAMLError, TypeError, ValueError) as exc:
        raise FrontmatterError(f"invalid frontmatter: {exc}") from exc
    return frontmatter_from_mapping(post.metadata), post.content


def frontmatter_from_mapping(data: Mapping[str, Any]) -> Frontmatter:
    """Coerce a loose metadata mapping into :class:`Frontmatter`."""
    extra: Dict[str, Any] = {
        str(key): value for key, value in data.items() if key not in _RECOGNIZED_KEYS
    }
    return Frontmatter(
        title=_as_text(data.get("title")),
        description=_as_text(data.get("description")),
        category=_as_category(data.get("category")),
        id=_as_text(data.get("id")),
        draft=_as_flag(data.get("draft")),
        published=_as_flag(data.get("published")),
        order=_as_number(data.get("order")),
        extra=extra,
    )


def extract_title(body: str, meta: Frontmatter, filename: str) -> str:
    """Return the display title for a document; never empty."""
    if meta.title:
        return meta.title

    match = _HEADING_PATTERN.search(body)
    if match:
        heading = match.group(1).strip()
        if heading:
            return heading

    stem = filename[:-3] if filename.endswith(".md") else filename
    fallback = _FILENAME_SEPARATORS.sub(" ", stem).strip()
    return fallback or filename


def extract_description(body: str, meta: Frontmatter) -> Optional[str]:
    """Return the frontmatter description or the first line after the first heading."""
    if meta.description:
        return meta.description

    found_heading = False
    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith("#"):
            found_heading = True
            continue
        if found_heading and stripped:
            return stripped[:DESCRIPTION_LIMIT]
    return None


def _as_text(value: Any) -> Optional[str]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (str, int, float)):
        text = str(value)
        return text if text else None
    return None


def _as_category(value: Any) -> Optional[str | Tuple[str, ...]]:
    if isinstance(value, (list, tuple)):
        items = tuple(text for text in (_as_text(item) for item in value) if text)
        return items or None
    return _as_text(value)


def _as_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"true", "yes", "1"}
    if isinstance(value, int):
        return value != 0
    return False


def _as_number(value: Any) -> Optional[int | float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    return None


__all__ = [
    "DESCRIPTION_LIMIT",
    "FrontmatterError",
    "extract_description",
    "extract_title",
    "frontmatter_from_mapping",
    "parse_document",
]
