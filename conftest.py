"""
Repository-level pytest configuration.

Unit suites never start a browser; the defaults below keep them independent
of whatever configuration the machine running them has.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from pagekit.common import ConfigLoader, init_logger


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _test_env_defaults() -> Generator[None, None, None]:
    """
    Set predictable environment defaults if not already provided by the user/CI.
    """
    defaults = {
        "APP_BASE_URL": "http://localhost:3000",
        "BROWSER_HEADLESS": "true",
        "TIMEOUTS_POLL_INTERVAL": "0.01",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    ConfigLoader.reset()
    init_logger()
    yield
    ConfigLoader.reset()
