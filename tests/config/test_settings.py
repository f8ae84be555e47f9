"""Tests for settings and logging configuration."""

import logging

import pytest

from modelgen.config.logging import get_logger, setup_logging
from modelgen.config.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    setup_logging()


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("MODELGEN_DB", "MODELGEN_METRICS", "MODELGEN_OUTPUT_DIR", "MODELGEN_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.db == "sqlite3"
        assert settings.metrics is False
        assert settings.output_dir is None
        assert settings.log_level == "WARNING"

    def test_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("MODELGEN_DB", "postgres")
        monkeypatch.setenv("MODELGEN_METRICS", "true")
        monkeypatch.setenv("MODELGEN_OUTPUT_DIR", str(tmp_path))

        settings = get_settings()

        assert settings.db == "postgres"
        assert settings.metrics is True
        assert settings.output_dir == tmp_path

    def test_cached(self):
        assert get_settings() is get_settings()


class TestLogging:
    def test_loggers_live_under_the_package_logger(self):
        assert get_logger("modelgen.synth").name == "modelgen.synth"
        assert get_logger("plugins").name == "modelgen.plugins"

    def test_setup_logging(self, tmp_path):
        log_file = tmp_path / "modelgen.log"
        setup_logging(level="debug", log_file=log_file)

        root = logging.getLogger("modelgen")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        assert root.propagate is False

        get_logger("tests").debug("hello")
        for handler in root.handlers:
            handler.flush()
        assert "hello" in log_file.read_text()
