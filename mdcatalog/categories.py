"""Category display metadata and ordering."""

from __future__ import annotations

import re
from functools import cmp_to_key
from typing import Dict, List, Mapping, Optional, Sequence

from .config import CategoryDisplay
from .models import CategoryGroup, DocumentRecord

_WEEK_ID = re.compile(r"^week-(\d+)$")
_WORD_START = re.compile(r"\b\w")

_KNOWN_NAMES: Dict[str, str] = {
    "reference": "Reference",
    "misc": "Miscellaneous",
    "uncategorized": "Uncategorized",
}

_KNOWN_DESCRIPTIONS: Dict[str, str] = {
    "reference": "Index and reference documentation",
    "misc": "Additional notes and resources",
    "uncategorized": "Other documents",
}

DEFAULT_EMOJI = "📁"

DEFAULT_CATEGORY_EMOJIS: Dict[str, str] = {
    "reference": "📚",
    "misc": "📋",
    "uncategorized": "📋",
    "docs": "📖",
    "documentation": "📖",
    "notes": "📝",
    "readme": "📖",
    "index": "🏠",
    "home": "🏠",
    "getting-started": "🚀",
    "guide": "📘",
    "tutorial": "🎓",
    "api": "⚡",
    "config": "⚙️",
    "configuration": "⚙️",
    "setup": "🔧",
    "install": "📦",
    "examples": "💡",
    "faq": "❓",
    "changelog": "📋",
    "contributing": "🤝",
    "license": "📜",
}


def week_number(category_id: str) -> Optional[int]:
    match = _WEEK_ID.match(category_id)
    return int(match.group(1)) if match else None


def title_case(value: str) -> str:
    """Turn ``kebab-case`` or ``snake_case`` into ``Title Case``."""
    spaced = value.replace("-", " ").replace("_", " ")
    return _WORD_START.sub(lambda match: match.group(0).upper(), spaced)


def display_name(category_id: str, overrides: Mapping[str, CategoryDisplay] | None = None) -> str:
    override = (overrides or {}).get(category_id)
    if override is not None and override.label:
        return override.label
    if week_number(category_id) is not None:
        return f"Week {_week_digits(category_id)}"
    return _KNOWN_NAMES.get(category_id) or title_case(category_id)


def display_description(
    category_id: str, overrides: Mapping[str, CategoryDisplay] | None = None
) -> str:
    override = (overrides or {}).get(category_id)
    if override is not None and override.description:
        return override.description
    if week_number(category_id) is not None:
        return f"Materials for Week {_week_digits(category_id)}"
    return _KNOWN_DESCRIPTIONS.get(category_id, "")


def display_emoji(category_id: str, overrides: Mapping[str, CategoryDisplay] | None = None) -> str:
    override = (overrides or {}).get(category_id)
    if override is not None and override.emoji:
        return override.emoji
    return DEFAULT_CATEGORY_EMOJIS.get(category_id.lower(), DEFAULT_EMOJI)


def display_color(
    category_id: str, overrides: Mapping[str, CategoryDisplay] | None = None
) -> Optional[str]:
    override = (overrides or {}).get(category_id)
    return override.color if override is not None and override.color else None


def _week_digits(category_id: str) -> str:
    # Keep the digits as written, e.g. "week-03" -> "Week 03".
    return category_id[len("week-"):]


def _compare_records(a: DocumentRecord, b: DocumentRecord) -> int:
    if a.order is not None and b.order is not None:
        return (a.order > b.order) - (a.order < b.order)
    if a.order is not None:
        return -1
    if b.order is not None:
        return 1
    return (a.title > b.title) - (a.title < b.title)


def _compare_groups(a: CategoryGroup, b: CategoryGroup) -> int:
    week_a = week_number(a.id)
    week_b = week_number(b.id)
    if week_a is not None and week_b is not None:
        return week_a - week_b
    if week_a is not None:
        return -1
    if week_b is not None:
        return 1
    return (a.name > b.name) - (a.name < b.name)


def sort_records(records: Sequence[DocumentRecord]) -> List[DocumentRecord]:
    """Order by numeric ``order`` first, then documents without one by title."""
    return sorted(records, key=cmp_to_key(_compare_records))


def sort_groups(groups: Sequence[CategoryGroup]) -> List[CategoryGroup]:
    """Order week groups numerically ahead of every other group, others by name."""
    return sorted(groups, key=cmp_to_key(_compare_groups))


def build_group(
    category_id: str,
    records: Sequence[DocumentRecord],
    overrides: Mapping[str, CategoryDisplay] | None = None,
) -> CategoryGroup:
    return CategoryGroup(
        id=category_id,
        name=display_name(category_id, overrides),
        description=display_description(category_id, overrides),
        emoji=display_emoji(category_id, overrides),
        color=display_color(category_id, overrides),
        files=tuple(sort_records(records)),
    )


__all__ = [
    "DEFAULT_CATEGORY_EMOJIS",
    "build_group",
    "display_color",
    "display_description",
    "display_emoji",
    "display_name",
    "sort_groups",
    "sort_records",
    "title_case",
    "week_number",
]
