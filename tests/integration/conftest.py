"""Fixtures for CLI tests."""

import pytest
from click.testing import CliRunner

from modelgen.config.logging import setup_logging
from modelgen.config.settings import get_settings


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate every test from MODELGEN_* variables and cached settings."""
    for name in ("MODELGEN_DB", "MODELGEN_METRICS", "MODELGEN_OUTPUT_DIR", "MODELGEN_LOG_LEVEL",
                 "MODELGEN_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    # The runner's streams are closed once a test ends
    setup_logging()
