"""Atomic on-disk persistence for generated catalogs."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from ..logging import get_logger
from ..models import Catalog


class CatalogStore:
    """Writes a catalog as JSON so readers see either the old or the new file."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._logger = get_logger("store")

    @property
    def path(self) -> Path:
        return self._path

    def write(self, catalog: Catalog) -> Path:
        payload = json.dumps(catalog.to_dict(), indent=2, ensure_ascii=False) + "\n"
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        self._logger.info(
            "Wrote %d documents in %d categories to %s",
            len(catalog.document_records),
            len(catalog.category_groups),
            self._path,
        )
        return self._path

    def read(self) -> Optional[Dict[str, Any]]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError) as exc:
            self._logger.warning("Could not read catalog %s: %s", self._path, exc)
            return None
        if not isinstance(data, dict):
            return None
        return data


__all__ = ["CatalogStore"]
