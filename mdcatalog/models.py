"""Core data models shared across mdcatalog components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

Number = Union[int, float]


@dataclass(frozen=True)
class Frontmatter:
    """Typed view over a document's metadata block.

    Recognized keys are exposed as attributes; everything else is kept
    untouched in ``extra`` so callers can pass it through.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    category: Union[str, Tuple[str, ...], None] = None
    id: Optional[str] = None
    draft: bool = False
    published: bool = False
    order: Optional[Number] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    @property
    def primary_category(self) -> Optional[str]:
        """Return the explicit category, taking the first entry of a list."""
        if isinstance(self.category, tuple):
            return self.category[0] if self.category else None
        return self.category or None


@dataclass(frozen=True)
class DocumentRecord:
    """Derived metadata for one markdown source file."""

    id: str
    title: str
    category: str
    path: str
    description: Optional[str] = None
    order: Optional[Number] = None
    tags: Optional[Tuple[str, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "path": self.path,
        }
        if self.description is not None:
            data["description"] = self.description
        if self.order is not None:
            data["order"] = self.order
        if self.tags is not None:
            data["tags"] = list(self.tags)
        return data


@dataclass(frozen=True)
class CategoryGroup:
    """Named bucket of documents sharing a category id."""

    id: str
    name: str
    description: str
    files: Tuple[DocumentRecord, ...]
    emoji: Optional[str] = None
    color: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
        }
        if self.emoji is not None:
            data["emoji"] = self.emoji
        if self.color is not None:
            data["color"] = self.color
        data["files"] = [record.to_dict() for record in self.files]
        return data


@dataclass(frozen=True)
class Catalog:
    """Output of a single generation run."""

    document_records: Tuple[DocumentRecord, ...] = ()
    category_groups: Tuple[CategoryGroup, ...] = ()
    tag_styles: Mapping[str, Mapping[str, str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "documentRecords": [record.to_dict() for record in self.document_records],
            "categoryGroups": [group.to_dict() for group in self.category_groups],
        }
        # Only present when tags were detected.
        if self.tag_styles:
            data["tagStyles"] = {tag: dict(style) for tag, style in self.tag_styles.items()}
        return data
