"""Tests for structlog setup."""

import structlog

from versionable.config import VersionableSettings
from versionable.core.logging import configure_logging


class TestConfigureLogging:
    """Tests for configure_logging."""

    def teardown_method(self):
        structlog.reset_defaults()

    def test_configures_structlog(self):
        """Verify structlog is configured from settings."""
        configure_logging(VersionableSettings(_env_file=None, log_level="debug"))

        assert structlog.is_configured()

    def test_json_renderer(self):
        """Verify json_logs selects the JSON renderer."""
        configure_logging(VersionableSettings(_env_file=None, json_logs=True))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_unknown_level_falls_back_to_info(self):
        """Verify an unknown level does not break configuration."""
        configure_logging(VersionableSettings(_env_file=None, log_level="chatty"))

        assert structlog.is_configured()
