"""Pytest configuration and fixtures."""

import logging
import textwrap
from pathlib import Path

import pytest

from verdict.config import VerdictOptions, configure


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Detach handlers from verdict loggers after each test so names can be reused."""
    yield

    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("verdict"):
            logger = logging.getLogger(name)
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()


@pytest.fixture(autouse=True)
def reset_options():
    """Restore default options after tests that reconfigure them."""
    previous = configure(VerdictOptions())
    yield
    configure(previous)


@pytest.fixture()
def tmp_yaml(tmp_path):
    """Helper that writes YAML content to a temp file and returns its path."""

    def _write(content: str) -> Path:
        p = tmp_path / "verdict.yaml"
        p.write_text(textwrap.dedent(content))
        return p

    return _write
