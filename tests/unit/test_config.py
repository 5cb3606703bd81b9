"""
Unit tests for settings and logging configuration.
"""

import logging

from config.logging_config import get_logger, setup_logger
from config.settings import Settings


class TestSettings:

    def test_defaults(self, temp_dir):
        settings = Settings(output_dir=temp_dir / "out", temp_dir=temp_dir / "tmp")
        assert settings.default_template == "fiction"
        assert settings.layout_engine == "reportlab"
        assert settings.render_timeout_seconds == 60.0
        assert settings.templates_file is None

    def test_directories_created(self, temp_dir):
        Settings(output_dir=temp_dir / "out", temp_dir=temp_dir / "tmp")
        assert (temp_dir / "out").is_dir()
        assert (temp_dir / "tmp").is_dir()

    def test_environment_overrides(self, temp_dir, monkeypatch):
        monkeypatch.setenv("FORMATTER_LAYOUT_ENGINE", "soffice")
        monkeypatch.setenv("FORMATTER_RENDER_TIMEOUT_SECONDS", "15")
        monkeypatch.setenv("FORMATTER_DEFAULT_TEMPLATE", "nonFiction")

        settings = Settings(output_dir=temp_dir / "out", temp_dir=temp_dir / "tmp")

        assert settings.layout_engine == "soffice"
        assert settings.render_timeout_seconds == 15.0
        assert settings.default_template == "nonFiction"

    def test_summary(self, test_settings):
        summary = test_settings.summary()
        assert summary["layout_engine"] == "reportlab"
        assert summary["templates_file"] is None


class TestLogging:

    def test_handlers_added_once(self):
        first = get_logger("formatter.test.once")
        second = get_logger("formatter.test.once")
        assert first is second
        assert len(first.handlers) == 2

    def test_file_logging_optional(self):
        logger = setup_logger("formatter.test.console_only", log_file=None)
        assert [type(h) for h in logger.handlers] == [logging.StreamHandler]

    def test_file_handler_rotates(self, temp_dir):
        logger = setup_logger("formatter.test.file", log_file=str(temp_dir / "logs" / "run.log"))
        logger.info("hello")
        assert (temp_dir / "logs" / "run.log").exists()
