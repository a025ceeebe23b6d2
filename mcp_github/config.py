# =============================================================================
# GitHub MCP Server - Settings
# =============================================================================
"""
Pydantic Settings configuration for the GitHub MCP server.

Loads configuration from environment variables (and a ``.env`` file when
present) with validation and type safety.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Server settings loaded from environment variables.

    Attributes:
        github_token: GitHub personal access token. Empty means read-only.
        github_api_base_url: GitHub API base URL.
        github_request_timeout: Request timeout in seconds.
        github_memory_file: Path of the JSON file backing the memory store.
        log_level: Logging level.
    """

    github_token: str = Field(
        default="",
        description="GitHub personal access token",
    )
    github_api_base_url: str = Field(
        default="https://api.github.com",
        description="GitHub API base URL",
    )
    github_request_timeout: float = Field(
        default=30.0,
        description="Request timeout in seconds",
    )
    github_memory_file: str = Field(
        default="memory.json",
        description="Path of the memory JSON file",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()
