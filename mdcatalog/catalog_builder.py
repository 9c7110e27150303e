"""Content scanning and catalog generation."""

from __future__ import annotations

import logging
import os
from collections import OrderedDict
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence

from .categories import build_group, sort_groups
from .classifier import PathClassifier
from .config import CatalogConfig
from .globbing import matches_any
from .ids import IdAllocator
from .logging import get_logger
from .metadata import FrontmatterError, extract_description, extract_title, parse_document
from .models import Catalog, DocumentRecord
from .tagging import TagDetector, tag_style

_MARKDOWN_SUFFIX = ".md"


class CatalogBuilder:
    """Walks a content directory and produces a :class:`Catalog`."""

    def __init__(self, config: CatalogConfig | None = None) -> None:
        self.config = config
        self.logger = get_logger("builder")

    def _resolve_config(self, root: Path | str | None) -> CatalogConfig:
        if self.config is not None:
            return self.config
        return CatalogConfig.default(root)

    def _resolve_root(self, config: CatalogConfig, root: Path | str | None) -> Path:
        root_path = Path(root).expanduser().resolve() if root is not None else config.content_dir
        if not root_path.exists():
            raise FileNotFoundError(f"Content directory not found: {root_path}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Content path is not a directory: {root_path}")
        return root_path

    def discover(self, root: Path | str | None = None) -> List[Path]:
        """Return markdown files under ``root`` that pass ignore and pattern checks."""
        config = self._resolve_config(root)
        root_path = self._resolve_root(config, root)
        classifier = PathClassifier(ignore=config.ignore, ignore_files=config.ignore_files)
        return list(_iter_markdown_files(root_path, classifier, config.patterns, self.logger))

    def generate(self, root: Path | str | None = None) -> Catalog:
        """Scan ``root`` (default: the configured content directory) and build a catalog."""
        config = self._resolve_config(root)
        root_path = self._resolve_root(config, root)
        classifier = PathClassifier(ignore=config.ignore, ignore_files=config.ignore_files)

        self.logger.info("Scanning for markdown files in %s", root_path)
        markdown_files = list(
            _iter_markdown_files(root_path, classifier, config.patterns, self.logger)
        )
        self.logger.info("Found %d markdown files", len(markdown_files))

        if not markdown_files:
            self.logger.warning("No markdown files found in %s.", root_path)
            self.logger.warning("Please check your configuration:")
            self.logger.warning("  1. Verify content_dir points to a directory with markdown files")
            self.logger.warning("  2. Check that patterns match your file structure")
            self.logger.warning("  3. Ensure files are not excluded by the ignore lists")
            return Catalog()

        allocator = IdAllocator()
        detector = TagDetector(config.tag_rules) if config.tag_rules else None
        records: List[DocumentRecord] = []
        for path in markdown_files:
            record = self._build_record(path, root_path, classifier, allocator, detector, config)
            if record is not None:
                records.append(record)

        self.logger.info("Generated %d document entries", len(records))

        grouped: Dict[str, List[DocumentRecord]] = OrderedDict()
        for record in records:
            grouped.setdefault(record.category, []).append(record)

        groups = sort_groups(
            [
                build_group(category_id, members, config.categories)
                for category_id, members in grouped.items()
            ]
        )
        return Catalog(
            document_records=tuple(records),
            category_groups=tuple(groups),
            tag_styles=_collect_tag_styles(records, config),
        )

    def _build_record(
        self,
        path: Path,
        root: Path,
        classifier: PathClassifier,
        allocator: IdAllocator,
        detector: Optional[TagDetector],
        config: CatalogConfig,
    ) -> Optional[DocumentRecord]:
        rel_path = path.relative_to(root).as_posix()
        try:
            text = path.read_text(encoding="utf-8-sig")
            meta, body = parse_document(text)
        except (OSError, UnicodeDecodeError, FrontmatterError) as exc:
            self.logger.warning("Could not process file %s: %s", path, exc)
            return None

        if meta.draft:
            self.logger.debug("Skipping draft %s", rel_path)
            return None

        if not classifier.is_auto_discovered(rel_path) and not meta.published:
            self.logger.debug("Skipping %s: outside auto-discovered locations and not published", rel_path)
            return None

        category = classifier.infer_category(rel_path, meta)
        title = extract_title(body, meta, path.name)
        description = extract_description(body, meta)
        doc_id = allocator.allocate(rel_path, category, meta)

        tags = None
        if detector is not None:
            content = body if config.tagging.include_content else None
            detected = detector.detect(title, description, content)
            max_tags = config.tagging.max_tags
            tags = tuple(detected[:max_tags] if max_tags is not None else detected)

        return DocumentRecord(
            id=doc_id,
            title=title,
            category=category,
            path=f"/{rel_path}",
            description=description,
            order=meta.order,
            tags=tags,
        )


def _collect_tag_styles(
    records: Sequence[DocumentRecord], config: CatalogConfig
) -> Dict[str, Dict[str, str]]:
    """Resolve display styles for every detected tag, in first-seen order."""
    styles: Dict[str, Dict[str, str]] = {}
    for record in records:
        for tag in record.tags or ():
            if tag not in styles:
                styles[tag] = tag_style(tag, config.tags).to_dict()
    return styles


def _iter_markdown_files(
    root: Path,
    classifier: PathClassifier,
    patterns: Sequence[str],
    logger: logging.Logger,
) -> Iterator[Path]:
    """Depth-first walk in name order, pruning ignored directories before descent."""

    def _walk(directory: Path) -> Iterator[Path]:
        try:
            with os.scandir(directory) as handle:
                entries = sorted(handle, key=lambda entry: entry.name)
        except OSError as exc:
            logger.warning("Could not read directory %s: %s", directory, exc)
            return

        for entry in entries:
            full_path = directory / entry.name
            rel_path = full_path.relative_to(root).as_posix()
            if entry.is_dir(follow_symlinks=False):
                if classifier.is_ignored(rel_path):
                    continue
                yield from _walk(full_path)
            elif entry.is_file() and entry.name.endswith(_MARKDOWN_SUFFIX):
                if classifier.is_ignored(rel_path):
                    continue
                if matches_any(str(full_path), patterns, str(root)):
                    yield full_path

    yield from _walk(root)


def generate_catalog(
    root: Path | str | None = None, config: CatalogConfig | None = None
) -> Catalog:
    """Build a catalog for ``root`` using ``config`` or the defaults."""
    return CatalogBuilder(config).generate(root)


__all__ = ["CatalogBuilder", "generate_catalog"]
