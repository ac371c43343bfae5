"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any


class GitHubClientBase(ABC):
    """Base ABC for the GitHub operations needed to cut a release."""

    # Release/Tag Operations
    @abstractmethod
    async def find_release(self, tag_name: str) -> Any | None:
        """Get a release by tag name, or None if no such release exists."""
        pass

    @abstractmethod
    async def find_latest_release(self) -> Any | None:
        """Get the latest published release, or None if the repository has none."""
        pass

    @abstractmethod
    async def is_version_available(self, version: str) -> bool:
        """Check that no tagged release exists for the version."""
        pass

    # Search Operations
    @abstractmethod
    async def search_merged_pull_requests(self, merged_since: datetime) -> list[dict[str, Any]]:
        """Search pull requests merged on or after a point in time."""
        pass
