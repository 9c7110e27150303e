from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.content_builder import ContentBuilder


@pytest.fixture
def content_builder(tmp_path: Path) -> ContentBuilder:
    """Provide a reusable content builder rooted at the pytest tmp_path."""
    return ContentBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_mdcatalog_logger():
    """Undo handler/propagation changes made by CLI runs so caplog keeps working."""
    yield
    logger = logging.getLogger("mdcatalog")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
