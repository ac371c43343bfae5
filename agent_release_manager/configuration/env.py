"""Pydantic Settings model for application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from agent_release_manager.utils.constants import DEFAULT_EDITOR_COMMAND, DEFAULT_GITHUB_API_URL, DEFAULT_REPO


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False
    EDITOR: str = DEFAULT_EDITOR_COMMAND

    # GitHub API settings
    GITHUB_API_URL: str = DEFAULT_GITHUB_API_URL
    REPO: str = DEFAULT_REPO

    # GitHub PAT settings
    GITHUB_PAT_TOKEN: str | None = None

    # Release commit identity
    COMMIT_AUTHOR_NAME: str | None = None
    COMMIT_AUTHOR_EMAIL: str | None = None
