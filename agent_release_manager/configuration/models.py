"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from agent_release_manager.utils.constants import (
    DEFAULT_COMMIT_AUTHOR_EMAIL,
    DEFAULT_COMMIT_AUTHOR_NAME,
    DEFAULT_EDITOR_COMMAND,
    DEFAULT_GITHUB_API_URL,
    DEFAULT_RELEASE_NOTES_FILE,
    DEFAULT_REPO,
    DEFAULT_VERSION_FILE,
    LATEST_RELEASE_MARKER,
)


class GitHubAuthenticationType(str, Enum):
    """Enum for GitHub authentication types."""

    PAT = "pat"
    ANONYMOUS = "anonymous"


@dataclass
class ReleaseConfig:
    """Configuration for a release branch run.

    Passed explicitly into the orchestrator; nothing below the CLI reads
    environment variables.
    """

    version: str
    dry_run: bool = False
    derived_from: str = LATEST_RELEASE_MARKER
    editor_command: str = DEFAULT_EDITOR_COMMAND
    repo: str = DEFAULT_REPO
    repo_root: Path = field(default_factory=Path.cwd)
    version_file: Path = Path(DEFAULT_VERSION_FILE)
    release_notes_file: Path = Path(DEFAULT_RELEASE_NOTES_FILE)
    github_api_url: str = DEFAULT_GITHUB_API_URL
    github_authentication_type: GitHubAuthenticationType = GitHubAuthenticationType.ANONYMOUS
    github_pat_token: str | None = None
    commit_author_name: str = DEFAULT_COMMIT_AUTHOR_NAME
    commit_author_email: str = DEFAULT_COMMIT_AUTHOR_EMAIL
    debug: bool = False

    @property
    def version_file_path(self) -> Path:
        """Absolute path of the version file."""
        return self.repo_root / self.version_file

    @property
    def release_notes_path(self) -> Path:
        """Absolute path of the release notes file."""
        return self.repo_root / self.release_notes_file
