"""Reconcile configuration between CLI arguments and environment variables."""

from pathlib import Path

import structlog

from agent_release_manager.configuration.env import Settings
from agent_release_manager.configuration.exceptions import RequiredConfigurationElementError
from agent_release_manager.configuration.models import GitHubAuthenticationType, ReleaseConfig
from agent_release_manager.utils.constants import (
    DEFAULT_COMMIT_AUTHOR_EMAIL,
    DEFAULT_COMMIT_AUTHOR_NAME,
    DEFAULT_RELEASE_NOTES_FILE,
    DEFAULT_VERSION_FILE,
    LATEST_RELEASE_MARKER,
)
from agent_release_manager.utils.github import split_repository

logger = structlog.get_logger(__name__)


async def validate_github_authentication_configuration(github_pat_token: str | None) -> GitHubAuthenticationType:
    """Determines how to authenticate against GitHub.

    Release and search lookups work anonymously against public repositories,
    so a missing token falls back to unauthenticated access at a lower rate
    limit instead of failing.
    """
    if github_pat_token:
        return GitHubAuthenticationType.PAT
    logger.warning("No GitHub PAT configured - using unauthenticated GitHub API access")
    return GitHubAuthenticationType.ANONYMOUS


async def reconcile_release_configuration(
    cli_version: str,
    cli_dry_run: bool = False,
    cli_derived_from: str | None = None,
    cli_editor_command: str | None = None,
    cli_repo: str | None = None,
    cli_repo_root: Path | None = None,
    cli_version_file: Path | None = None,
    cli_release_notes_file: Path | None = None,
    cli_github_api_url: str | None = None,
    cli_github_pat_token: str | None = None,
    cli_debug: bool = False,
    settings: Settings | None = None,
) -> ReleaseConfig:
    """Builds the release configuration, preferring CLI values over environment settings.

    Raises:
        RequiredConfigurationElementError: If no repository is configured, or
            no editor command is configured for a run that writes files.
        ValueError: If the repository is not in the form owner/repo.
    """
    settings = settings or Settings()

    repo = cli_repo or settings.REPO
    if not repo:
        raise RequiredConfigurationElementError(name="GitHub repository", cli_name="--repo", env_name="REPO")
    split_repository(repo)

    editor_command = cli_editor_command or settings.EDITOR
    if not editor_command and not cli_dry_run:
        raise RequiredConfigurationElementError(name="Editor command", cli_name="--editor", env_name="EDITOR")

    github_pat_token = cli_github_pat_token or settings.GITHUB_PAT_TOKEN
    github_authentication_type = await validate_github_authentication_configuration(github_pat_token)

    return ReleaseConfig(
        version=cli_version,
        dry_run=cli_dry_run,
        derived_from=cli_derived_from or LATEST_RELEASE_MARKER,
        editor_command=editor_command,
        repo=repo,
        repo_root=(cli_repo_root or Path.cwd()).resolve(),
        version_file=cli_version_file or Path(DEFAULT_VERSION_FILE),
        release_notes_file=cli_release_notes_file or Path(DEFAULT_RELEASE_NOTES_FILE),
        github_api_url=cli_github_api_url or settings.GITHUB_API_URL,
        github_authentication_type=github_authentication_type,
        github_pat_token=github_pat_token,
        commit_author_name=settings.COMMIT_AUTHOR_NAME or DEFAULT_COMMIT_AUTHOR_NAME,
        commit_author_email=settings.COMMIT_AUTHOR_EMAIL or DEFAULT_COMMIT_AUTHOR_EMAIL,
        debug=cli_debug or settings.DEBUG,
    )
