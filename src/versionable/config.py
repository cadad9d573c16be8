"""Package configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from versionable.constants import (
    CONSOLE_URL,
    DEFAULT_TABLE_NAME,
    MAX_USER_AGENT_LENGTH,
)


class VersionableSettings(BaseSettings):
    """Versioning settings loaded from ``VERSIONABLE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="VERSIONABLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Versioning
    enabled: bool = True
    table_name: str = DEFAULT_TABLE_NAME

    # Request context
    console_url: str = CONSOLE_URL
    trust_forwarded_headers: bool = True
    max_user_agent_length: int = MAX_USER_AGENT_LENGTH

    # Observability
    log_level: str = "INFO"
    json_logs: bool = False

    # Problem Details type URIs
    api_docs_base_url: str = "https://api.example.com"

    @field_validator("table_name")
    @classmethod
    def validate_table_name(cls, v: str) -> str:
        """Validate that the versions table name is a plain identifier.

        Args:
            v: The table name value

        Returns:
            The validated table name

        Raises:
            ValueError: If the name is empty or not an identifier
        """
        if not v or not v.replace("_", "a").isalnum():
            raise ValueError(
                "VERSIONABLE_TABLE_NAME must be a non-empty identifier "
                "made of letters, digits and underscores"
            )
        return v

    @field_validator("max_user_agent_length")
    @classmethod
    def validate_max_user_agent_length(cls, v: int) -> int:
        """Validate that the user agent limit is positive."""
        if v <= 0:
            raise ValueError("VERSIONABLE_MAX_USER_AGENT_LENGTH must be positive")
        return v


@lru_cache
def get_settings() -> VersionableSettings:
    """Get cached settings instance."""
    return VersionableSettings()


# Global settings instance
settings = get_settings()
