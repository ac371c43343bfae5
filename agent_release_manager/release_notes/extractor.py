"""Resolve the baseline release and fetch the pull requests merged since."""

from datetime import datetime

import structlog

from ..exceptions import DerivedReleaseNotFoundError
from ..github.abc import GitHubClientBase
from ..utils.constants import LATEST_RELEASE_MARKER
from ..utils.github import release_tag
from .models import PullRequestRecord

logger = structlog.get_logger(__name__)


class DataExtractor:
    """Extracts the pull requests that belong in the next release's notes."""

    def __init__(self, adapter: GitHubClientBase):
        """Initialize with GitHub adapter."""
        self.adapter = adapter

    async def resolve_merged_since(self, derived_from: str) -> datetime:
        """Resolve a derived-from marker to the publish time of that release.

        Args:
            derived_from: ``"latest"`` or a version, with or without the ``v``
                prefix.

        Returns:
            When the baseline release was published.

        Raises:
            DerivedReleaseNotFoundError: If the release does not exist or was
                never published.
            UpstreamLookupFailureError: If GitHub cannot answer.
        """
        logger.info("Resolving derived-from release", derived_from=derived_from)
        if derived_from == LATEST_RELEASE_MARKER:
            release = await self.adapter.find_latest_release()
        else:
            release = await self.adapter.find_release(release_tag(derived_from))

        published_at = getattr(release, "published_at", None) if release is not None else None
        if published_at is None:
            raise DerivedReleaseNotFoundError(derived_from)

        logger.info("Resolved derived-from release", tag_name=getattr(release, "tag_name", None), published_at=published_at.isoformat())
        return published_at

    async def fetch_pull_requests(self, merged_since: datetime) -> list[PullRequestRecord]:
        """Fetch pull requests merged since a point in time, in search order.

        Raises:
            MalformedPullRequestRecordError: If a search result lacks required fields.
            UpstreamLookupFailureError: If GitHub cannot answer.
        """
        logger.info(f"Fetching PRs merged since {merged_since.isoformat()}")
        items = await self.adapter.search_merged_pull_requests(merged_since)
        records = [PullRequestRecord.from_search_item(item) for item in items]
        logger.info("Fetched merged pull requests", count=len(records))
        return records
