from __future__ import annotations

import logging
from pathlib import Path

import pytest

from cuefix.logging import configure_logging
from tests._fixtures.library_builder import LibraryBuilder


@pytest.fixture
def library_builder(tmp_path: Path) -> LibraryBuilder:
    """Provide a reusable library builder rooted at the pytest tmp_path."""
    return LibraryBuilder(tmp_path)


@pytest.fixture
def console(capsys):
    """Return a callable that binds cuefix logging to the captured streams.

    Call it from the test body: handlers must be created while the test's
    own capture is active.
    """

    def _start():
        configure_logging()
        return capsys

    yield _start
    logger = logging.getLogger("cuefix")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
