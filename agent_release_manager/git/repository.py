"""Git plumbing for committing and pushing a release branch."""

import re
import subprocess
from pathlib import Path

import structlog
from packaging import version

from agent_release_manager.exceptions import GitCommandError
from agent_release_manager.utils.constants import MINIMUM_GIT_VERSION

logger = structlog.get_logger(__name__)

GIT = "git"
GIT_VERSION_PATTERN = re.compile(r"(\d+\.\d+(?:\.\d+)?)")


class GitRepository:
    """Runs git commands against a working tree."""

    def __init__(self, root: Path) -> None:
        """Initialize with the root of the working tree."""
        self.root = root

    def run(self, *args: str, capture: bool = True) -> str:
        """Run a git command in the working tree.

        Commands that change the repository run in the foreground so their
        output (and any credential prompt) reaches the terminal.

        Returns:
            Captured stdout, or an empty string for foreground commands.

        Raises:
            GitCommandError: If git is missing or the command exits non-zero.
        """
        cmd = [GIT, *args]
        logger.debug("Running git command", command=" ".join(cmd), cwd=str(self.root))
        try:
            result = subprocess.run(cmd, cwd=self.root, capture_output=capture, text=True, check=False)
        except FileNotFoundError as exc:
            raise GitCommandError(cmd, None, "git executable not found") from exc
        if result.returncode != 0:
            raise GitCommandError(cmd, result.returncode, result.stderr or "")
        return result.stdout or ""

    def installed_version(self) -> version.Version:
        """Return the version of the installed git."""
        output = self.run("--version")
        match = GIT_VERSION_PATTERN.search(output)
        if match is None:
            raise GitCommandError([GIT, "--version"], 0, f"Cannot parse git version from '{output.strip()}'")
        return version.parse(match.group(1))

    def verify_minimum_version(self, minimum: str = MINIMUM_GIT_VERSION) -> None:
        """Fail unless the installed git is at least the minimum version."""
        installed = self.installed_version()
        if installed < version.parse(minimum):
            raise GitCommandError([GIT, "--version"], 0, f"git {minimum} or newer is required, found {installed}")
        logger.debug("Git version is supported", installed=str(installed), minimum=minimum)

    def status(self) -> str:
        """Return porcelain status of tracked files; empty when the tree is clean."""
        return self.run("status", "--untracked-files=no", "--porcelain")

    def add(self, *paths: Path) -> None:
        self.run("add", *(str(path) for path in paths))

    def create_branch(self, branch: str) -> None:
        """Create and switch to a new branch, carrying staged changes along."""
        self.run("checkout", "-b", branch, capture=False)

    def commit(self, message: str, author_name: str, author_email: str) -> None:
        """Commit staged changes as the given identity without touching git config."""
        self.run("-c", f"user.name={author_name}", "-c", f"user.email={author_email}", "commit", "-m", message, capture=False)

    def push(self, branch: str, remote: str = "origin") -> None:
        self.run("push", "--set-upstream", remote, branch, capture=False)
