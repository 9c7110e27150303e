"""Persistence helpers for generated catalogs."""

from .catalog_store import CatalogStore

__all__ = ["CatalogStore"]
