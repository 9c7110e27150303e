"""Keyword-driven tag detection for documents."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Dict, List, Mapping, Optional, Pattern, Sequence

from .config import TagRule, TagStyle

DEFAULT_TAG_STYLE = TagStyle(name="", bg="#EDEBE8", text="#6B6B6B")

_FENCED_BLOCK = re.compile(r"(```|~~~)[\s\S]*?(?:\1|\Z)")
_MARKDOWN_LINK = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")
_HTML_TAG = re.compile(r"</?[A-Za-z][^>]*>")
_BARE_URL = re.compile(r"(?:https?://|www\.)\S+")
_WHITESPACE = re.compile(r"\s+")


def strip_noise(content: str) -> str:
    """Remove markup that should not trigger tags.

    Fenced code blocks are dropped, links keep only their visible text,
    HTML tags and bare URLs are removed. Inline code spans stay.
    """
    text = _FENCED_BLOCK.sub(" ", content)
    text = _MARKDOWN_LINK.sub(r"\1", text)
    text = _HTML_TAG.sub(" ", text)
    text = _BARE_URL.sub(" ", text)
    return text


@lru_cache(maxsize=1024)
def keyword_pattern(keyword: str) -> Pattern[str]:
    """Return a case-insensitive whole-word pattern for ``keyword``."""
    return re.compile(r"\b" + re.escape(keyword.lower()) + r"\b", re.IGNORECASE)


class TagDetector:
    """Matches configured tag rules against document text."""

    def __init__(self, rules: Sequence[TagRule]) -> None:
        self.rules = tuple(rules)

    def detect_head(self, title: str, description: Optional[str] = None) -> List[str]:
        """Return tags whose keywords appear in the title or description, in rule order."""
        text = f"{title} {description or ''}".lower()
        detected: List[str] = []
        for rule in self.rules:
            if rule.tag in detected:
                continue
            if any(keyword_pattern(kw).search(text) for kw in rule.keywords if kw):
                detected.append(rule.tag)
        return detected

    def count_content(self, content: str) -> Dict[str, int]:
        """Return per-tag match counts over cleaned body text, first-seen order."""
        text = strip_noise(content).lower()
        counts: Dict[str, int] = {}
        for rule in self.rules:
            total = sum(len(keyword_pattern(kw).findall(text)) for kw in rule.keywords if kw)
            if total:
                counts[rule.tag] = counts.get(rule.tag, 0) + total
        return counts

    def detect_content(self, content: str) -> List[str]:
        """Return tags found in the body, most frequent first; ties keep rule order."""
        counts = self.count_content(content)
        return sorted(counts, key=lambda tag: -counts[tag])

    def detect(
        self,
        title: str,
        description: Optional[str] = None,
        content: Optional[str] = None,
    ) -> List[str]:
        """Return head-matched tags followed by any new content-matched tags.

        No truncation happens here; callers cap the list themselves.
        """
        tags = self.detect_head(title, description)
        if content:
            for tag in self.detect_content(content):
                if tag not in tags:
                    tags.append(tag)
        return tags


def detect_tags(
    rules: Sequence[TagRule],
    title: str,
    description: Optional[str] = None,
    content: Optional[str] = None,
    *,
    max_tags: Optional[int] = None,
) -> List[str]:
    """Convenience wrapper that also applies an explicit ``max_tags`` cap."""
    tags = TagDetector(rules).detect(title, description, content)
    if max_tags is not None:
        return tags[:max_tags]
    return tags


def normalize_tag(tag: str) -> str:
    return _WHITESPACE.sub("-", tag.lower())


def tag_style(tag: str, styles: Mapping[str, TagStyle]) -> TagStyle:
    """Return the configured style for ``tag`` or the default warm-gray style."""
    configured = styles.get(normalize_tag(tag))
    if configured is not None:
        return configured
    return TagStyle(name=tag, bg=DEFAULT_TAG_STYLE.bg, text=DEFAULT_TAG_STYLE.text)


__all__ = [
    "DEFAULT_TAG_STYLE",
    "TagDetector",
    "detect_tags",
    "keyword_pattern",
    "normalize_tag",
    "strip_noise",
    "tag_style",
]
