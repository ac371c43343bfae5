"""Release notes aggregation and release branch creation."""

from .classifier import PullRequestClassifier, classify_pull_requests
from .composer import ReleaseNotesComposer, compose_release_notes
from .extractor import DataExtractor
from .models import (
    RELEASE_NOTE_CATEGORIES,
    Category,
    ClassifiedPullRequests,
    PullRequestRecord,
    ReleaseBranchResult,
    ReleaseNoteEntry,
    ReleaseStatus,
    Version,
)
from .orchestrator import ReleaseOrchestrator
from .validator import VersionValidator, validate_version

__all__ = [
    "Category",
    "RELEASE_NOTE_CATEGORIES",
    "ClassifiedPullRequests",
    "PullRequestRecord",
    "ReleaseNoteEntry",
    "ReleaseBranchResult",
    "ReleaseStatus",
    "Version",
    "VersionValidator",
    "validate_version",
    "PullRequestClassifier",
    "classify_pull_requests",
    "ReleaseNotesComposer",
    "compose_release_notes",
    "DataExtractor",
    "ReleaseOrchestrator",
]
