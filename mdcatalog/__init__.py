"""Catalog generation for directories of markdown notes."""

from .catalog_builder import CatalogBuilder, generate_catalog
from .config import CatalogConfig, ConfigError, TagRule, load_config
from .models import Catalog, CategoryGroup, DocumentRecord, Frontmatter
from .tagging import TagDetector, detect_tags

__all__ = [
    "Catalog",
    "CatalogBuilder",
    "CatalogConfig",
    "CategoryGroup",
    "ConfigError",
    "DocumentRecord",
    "Frontmatter",
    "TagDetector",
    "TagRule",
    "detect_tags",
    "generate_catalog",
    "load_config",
]
