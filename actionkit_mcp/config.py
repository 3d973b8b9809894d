"""Configuration management for the ActionKit MCP bridge.

Loads configuration from environment variables (and an optional .env file)
with sensible defaults. Secrets are never logged or exposed in responses.
"""

from typing import Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """ActionKit MCP bridge settings.

    All settings can be overridden via environment variables.
    Prefix: None (uses exact variable names).
    """

    # Server settings
    mcp_log_level: str = Field(default="INFO", description="Logging level")
    mcp_server_name: str = Field(default="actionkit-mcp", description="Name advertised to MCP clients")
    mcp_server_version: str = Field(default="1.0.0", description="Version advertised to MCP clients")

    # ActionKit project settings
    paragon_project_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("paragon_project_id", "next_public_paragon_project_id"),
        description="Paragon project ID that owns the action catalog"
    )
    actionkit_base_url: str = Field(
        default="https://actionkit.useparagon.com",
        description="ActionKit API base URL"
    )
    actionkit_timeout: int = Field(
        default=30,
        description="Timeout for ActionKit API requests in seconds"
    )

    # Credential settings
    signing_key: Optional[str] = Field(
        default=None,
        description="PEM-encoded RSA private key used to sign user tokens (never logged)"
    )
    actionkit_user_id: Optional[str] = Field(
        default=None,
        description="Subject (user ID) the signed token is issued for"
    )

    # Bridge behavior
    actionkit_failure_policy: Literal["abort", "skip"] = Field(
        default="abort",
        description="abort: one bad action disables all tools; skip: drop it and continue"
    )
    actionkit_string_length_mode: Literal["max", "exact"] = Field(
        default="max",
        description="How the 255-character limit applies to string parameters"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore unknown environment variables
        "populate_by_name": True,
    }

    def get_safe_dict(self) -> dict:
        """Return config as dict with secrets masked.

        Use this for logging or debugging - never exposes secrets.
        """
        data = self.model_dump()
        if data.get("signing_key"):
            data["signing_key"] = "***MASKED***"
        return data


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Creates the instance on first call, then returns cached version.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from environment.

    Useful for testing or after environment changes.
    """
    global _settings
    _settings = None
    return get_settings()
