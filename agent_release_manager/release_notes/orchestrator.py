"""Main release branch orchestration."""

import structlog

from ..configuration.models import ReleaseConfig
from ..exceptions import DirtyWorkingTreeError, VersionAlreadyReleasedError
from ..git.repository import GitRepository
from ..github.abc import GitHubClientBase
from ..github.adapter import GitHubKitAdapter
from ..utils.constants import COMMIT_MESSAGE_TEMPLATE, RELEASE_BRANCH_PREFIX
from ..utils.editor import open_in_editor
from ..utils.files import atomic_write_text, read_text
from .classifier import PullRequestClassifier
from .composer import ReleaseNotesComposer
from .extractor import DataExtractor
from .models import ReleaseBranchResult, ReleaseStatus, Version
from .validator import VersionValidator

logger = structlog.get_logger(__name__)


class ReleaseOrchestrator:
    """Sequences validation, lookup, classification, composition and persistence.

    Every step runs to completion before the next one starts. Nothing is
    written to the working tree until the release notes have been fully
    composed, so any failure before that leaves the clone and the remote
    exactly as they were.
    """

    def __init__(
        self,
        config: ReleaseConfig,
        adapter: GitHubClientBase | None = None,
        git: GitRepository | None = None,
        validator: VersionValidator | None = None,
        classifier: PullRequestClassifier | None = None,
        composer: ReleaseNotesComposer | None = None,
    ) -> None:
        """Initialize with the run configuration and optional collaborators.

        Args:
            config: Explicit configuration for this run
            adapter: GitHub adapter; created from the configuration when omitted
            git: Git working tree; defaults to the configured repository root
            validator: Version validator
            classifier: Pull request classifier
            composer: Release notes composer
        """
        self.config = config
        self.adapter = adapter
        self.git = git or GitRepository(config.repo_root)
        self.validator = validator or VersionValidator()
        self.classifier = classifier or PullRequestClassifier()
        self.composer = composer or ReleaseNotesComposer()

    async def initialize(self) -> None:
        """Initialize GitHub adapter."""
        self.adapter = await GitHubKitAdapter.create(
            repo=self.config.repo,
            github_auth_type=self.config.github_authentication_type,
            github_pat_token=self.config.github_pat_token,
            github_api_url=self.config.github_api_url,
        )
        logger.info("GitHub adapter initialized", repo=self.config.repo)

    @property
    def branch_name(self) -> str:
        return f"{RELEASE_BRANCH_PREFIX}{self.config.version}"

    async def verify_version_available(self, version: Version) -> None:
        """Raise VersionAlreadyReleasedError if a release is already tagged for the version."""
        if not await self.adapter.is_version_available(str(version)):
            raise VersionAlreadyReleasedError(str(version))
        logger.info(f"Version {version} is available for use")

    def check_working_tree(self) -> None:
        """Refuse to run on a dirty clone, except in dry run where it is only reported."""
        status = self.git.status()
        if not status:
            logger.info("Git repo is clean.")
            return
        if not self.config.dry_run:
            raise DirtyWorkingTreeError(status)
        logger.warning("You have uncommitted changes in this clone. Continuing because this is a dry run.", status=status)

    async def run(self) -> ReleaseBranchResult:
        """Cut the release branch.

        Returns:
            Result of the run. In dry run mode nothing is written, no editor is
            opened and no git command changes the repository.

        Raises:
            ReleaseError: On any validation, lookup or git failure.
        """
        version = self.validator.validate(self.config.version)
        self.git.verify_minimum_version()

        if not self.adapter:
            await self.initialize()

        await self.verify_version_available(version)
        self.check_working_tree()

        logger.info(f"Derived from {self.config.derived_from}")
        extractor = DataExtractor(self.adapter)
        merged_since = await extractor.resolve_merged_since(self.config.derived_from)
        records = await extractor.fetch_pull_requests(merged_since)

        classified = self.classifier.classify(records)
        prior_notes = read_text(self.config.release_notes_path)
        release_notes = self.composer.compose(classified, prior_notes)

        result = ReleaseBranchResult(
            status=ReleaseStatus.DRY_RUN if self.config.dry_run else ReleaseStatus.SUCCESS,
            version=str(version),
            branch=self.branch_name,
            derived_from=self.config.derived_from,
            merged_since=merged_since,
            pull_request_count=len(records),
            classified={category.value: [str(entry) for entry in entries] for category, entries in classified.items()},
            release_notes=release_notes,
        )

        if self.config.dry_run:
            logger.info("Dry run mode - not writing files, opening the editor or pushing", found_prs=result.classified)
            logger.debug("=" * 80)
            logger.debug("DRY RUN - RELEASE NOTES FILE WOULD CONTAIN:\n" + release_notes)
            logger.debug("=" * 80)
            return result

        self.persist(version, release_notes)
        self.commit_and_push(version)
        logger.info("Created release branch", branch=self.branch_name, version=str(version))
        return result

    def persist(self, version: Version, release_notes: str) -> None:
        """Write the version file and release notes, then let the user review the notes."""
        logger.info("Writing agent version file", path=str(self.config.version_file_path))
        atomic_write_text(self.config.version_file_path, f"{version}\n")

        logger.info("Writing release notes", path=str(self.config.release_notes_path))
        atomic_write_text(self.config.release_notes_path, release_notes)
        open_in_editor(self.config.editor_command, self.config.release_notes_path)

    def commit_and_push(self, version: Version) -> None:
        """Stage the release files, commit them on the release branch and push it."""
        self.git.add(self.config.version_file, self.config.release_notes_file)
        self.git.create_branch(self.branch_name)
        self.git.commit(
            COMMIT_MESSAGE_TEMPLATE.format(version=version),
            author_name=self.config.commit_author_name,
            author_email=self.config.commit_author_email,
        )
        self.git.push(self.branch_name)
