"""Tests for package settings."""

import pytest
from pydantic import ValidationError

from versionable.config import VersionableSettings


class TestVersionableSettings:
    """Tests for VersionableSettings."""

    def test_defaults(self):
        """Verify the default configuration."""
        config = VersionableSettings(_env_file=None)

        assert config.enabled is True
        assert config.table_name == "versions"
        assert config.console_url == "console"
        assert config.trust_forwarded_headers is True
        assert config.max_user_agent_length == 512

    def test_reads_prefixed_environment(self, monkeypatch):
        """Verify VERSIONABLE_* variables are applied."""
        monkeypatch.setenv("VERSIONABLE_ENABLED", "false")
        monkeypatch.setenv("VERSIONABLE_CONSOLE_URL", "cli")

        config = VersionableSettings(_env_file=None)

        assert config.enabled is False
        assert config.console_url == "cli"

    @pytest.mark.parametrize("name", ["", "model-versions", "versions;drop"])
    def test_rejects_invalid_table_name(self, name):
        """Verify table names must be identifiers."""
        with pytest.raises(ValidationError):
            VersionableSettings(_env_file=None, table_name=name)

    def test_rejects_non_positive_user_agent_length(self):
        """Verify the user agent limit must be positive."""
        with pytest.raises(ValidationError):
            VersionableSettings(_env_file=None, max_user_agent_length=0)
