"""Global pytest configuration.

Conditionally registers optional fixture plugin `tests.algorithms.sample_graphs`.
Avoid importing the plugin directly to let pytest apply assertion rewriting.
"""

from __future__ import annotations

from importlib.util import find_spec

import pytest

from gmatch.logging import reset_logging, setup_root_logger

pytest_plugins: list[str] = []
if find_spec("tests.algorithms.sample_graphs") is not None:
    pytest_plugins = ["tests.algorithms.sample_graphs"]


@pytest.fixture(autouse=True)
def _fresh_logging():
    """Give each test the default gmatch logging setup."""
    reset_logging()
    setup_root_logger()
    yield
    reset_logging()
    setup_root_logger()
