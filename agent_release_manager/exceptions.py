"""Errors that halt a release branch run.

Every error here is fatal. The orchestrator raises them before any file is
written or any git command mutates the repository.
"""


class ReleaseError(Exception):
    """Base class for errors raised while cutting a release branch."""

    pass


class InvalidVersionFormatError(ReleaseError):
    """Raised when a version string is malformed or is a closed-line sentinel."""

    def __init__(self, candidate: str | None, reason: str) -> None:
        """Initializes the exception with the rejected candidate and why it was rejected."""
        super().__init__(
            f"Invalid version '{candidate}': {reason}. Version must be in the form of <major>.<minor>.<patch> where each level is 0-999"
        )
        self.candidate = candidate
        self.reason = reason


class VersionAlreadyReleasedError(ReleaseError):
    """Raised when a tagged release already exists upstream for the version."""

    def __init__(self, version: str) -> None:
        """Initializes the exception with the version already in use."""
        super().__init__(f"Version {version} is already in use")
        self.version = version


class DerivedReleaseNotFoundError(ReleaseError):
    """Raised when the baseline release for the pull request search cannot be resolved."""

    def __init__(self, derived_from: str) -> None:
        """Initializes the exception with the unresolved derived-from marker."""
        super().__init__(f"Cannot find release {derived_from}")
        self.derived_from = derived_from


class MalformedPullRequestRecordError(ReleaseError):
    """Raised when a pull request search result lacks required fields."""

    def __init__(self, detail: str, item: object | None = None) -> None:
        """Initializes the exception with the validation detail and the offending item."""
        super().__init__(f"Malformed pull request record: {detail}")
        self.item = item


class UpstreamLookupFailureError(ReleaseError):
    """Raised when a GitHub lookup fails for a reason other than "not found"."""

    def __init__(self, operation: str, detail: str) -> None:
        """Initializes the exception with the failed operation and the underlying error."""
        super().__init__(f"GitHub lookup failed during {operation}: {detail}")
        self.operation = operation
        self.detail = detail


class DirtyWorkingTreeError(ReleaseError):
    """Raised when the clone has uncommitted changes to tracked files."""

    def __init__(self, status: str) -> None:
        """Initializes the exception with the porcelain status output."""
        super().__init__(f"You have uncommitted changes in this clone. Aborting.\n{status}")
        self.status = status


class GitCommandError(ReleaseError):
    """Raised when a git command fails or git is too old."""

    def __init__(self, command: list[str], returncode: int | None, stderr: str) -> None:
        """Initializes the exception with the command and its failure output."""
        super().__init__(f"'{' '.join(command)}' failed (exit {returncode}): {stderr.strip()}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class EditorCommandError(ReleaseError):
    """Raised when the release notes editor cannot be launched or exits non-zero."""

    pass
