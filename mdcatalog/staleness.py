"""Decide whether a previously written catalog needs regeneration."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from .logging import get_logger

_logger = get_logger("staleness")


def is_catalog_stale(
    output_path: Path | str,
    config_path: Optional[Path | str],
    content_files: Iterable[Path | str],
) -> bool:
    """Return True when the output is missing or older than any of its inputs."""
    output = Path(output_path)
    if not output.exists():
        _logger.debug("Catalog %s does not exist", output)
        return True

    catalog_mtime = output.stat().st_mtime_ns

    if config_path is not None:
        config = Path(config_path)
        if config.exists() and config.stat().st_mtime_ns > catalog_mtime:
            _logger.debug("Configuration %s is newer than the catalog", config)
            return True

    for candidate in content_files:
        path = Path(candidate)
        try:
            modified = path.stat().st_mtime_ns
        except OSError:
            continue
        if modified > catalog_mtime:
            _logger.debug("Content file %s is newer than the catalog", path)
            return True

    return False


__all__ = ["is_catalog_stale"]
