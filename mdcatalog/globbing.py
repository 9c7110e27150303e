"""Restricted glob matching for content discovery.

Supports ``**/`` (zero or more directories), ``**`` (anything, including
``/``), ``*`` (anything except ``/``) and ``?`` (one character except ``/``).
Everything else is matched literally.
"""

from __future__ import annotations

import os
import re
from functools import lru_cache
from typing import Iterable, Optional, Pattern

from .logging import get_logger

_logger = get_logger("globbing")


def translate(pattern: str) -> str:
    """Return an anchored regular expression source for ``pattern``."""
    parts = []
    index = 0
    length = len(pattern)
    while index < length:
        if pattern.startswith("**/", index):
            parts.append("(?:.+/)?")
            index += 3
        elif pattern.startswith("**", index):
            parts.append(".*")
            index += 2
        elif pattern[index] == "*":
            parts.append("[^/]*")
            index += 1
        elif pattern[index] == "?":
            parts.append("[^/]")
            index += 1
        else:
            parts.append(re.escape(pattern[index]))
            index += 1
    return "^" + "".join(parts) + "$"


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> Optional[Pattern[str]]:
    """Compile ``pattern``; ``None`` when the translated expression is invalid."""
    try:
        return re.compile(translate(pattern))
    except re.error as exc:
        _logger.debug("Glob %r did not compile (%s); using substring fallback", pattern, exc)
        return None


def normalize_path(path: str, root: str | None = None) -> str:
    """Return ``path`` relative to ``root`` using forward slashes."""
    if root is not None:
        path = os.path.relpath(path, root)
    return path.replace(os.sep, "/").replace("\\", "/")


def matches(path: str, pattern: str, root: str | None = None) -> bool:
    """Return True when ``path`` (relative to ``root``) matches ``pattern``."""
    target = normalize_path(path, root)
    compiled = compile_glob(pattern)
    if compiled is None:
        needle = pattern.replace("**", "").replace("*", "").replace("?", "")
        return needle in target
    return compiled.match(target) is not None


def matches_any(path: str, patterns: Iterable[str], root: str | None = None) -> bool:
    """Return True when ``path`` satisfies at least one of ``patterns``."""
    return any(matches(path, pattern, root) for pattern in patterns)


__all__ = ["compile_glob", "matches", "matches_any", "normalize_path", "translate"]
