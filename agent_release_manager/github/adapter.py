"""GitHub client adapter for the githubkit library."""

from datetime import datetime, timezone
from functools import wraps
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import GitHubException, RequestFailed

from agent_release_manager.configuration.models import GitHubAuthenticationType
from agent_release_manager.exceptions import UpstreamLookupFailureError
from agent_release_manager.utils.constants import DEFAULT_GITHUB_API_URL, SEARCH_MAX_PAGES, SEARCH_PAGE_SIZE
from agent_release_manager.utils.github import split_repository
from agent_release_manager.utils.retry import retry_on_rate_limit

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_client

if TYPE_CHECKING:
    from githubkit.versions.latest.models import Release

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def raise_upstream_lookup_failure(func: F) -> F:
    """Decorator turning GitHub transport, HTTP and decoding errors into UpstreamLookupFailureError.

    Methods handle the "not found" case themselves before this runs, so any
    error reaching this decorator is a genuine lookup failure.
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except (GitHubException, ValueError) as exc:
            status_code = exc.response.status_code if isinstance(exc, RequestFailed) else None
            logger.error(
                "GitHub lookup failed",
                function=func.__name__,
                error=str(exc),
                error_type=type(exc).__name__,
                status_code=status_code,
            )
            raise UpstreamLookupFailureError(func.__name__, str(exc) or type(exc).__name__) from exc

    return wrapper  # type: ignore


def format_search_timestamp(moment: datetime) -> str:
    """Format a timestamp for a GitHub search qualifier (UTC, second precision)."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    @classmethod
    async def create(
        cls,
        repo: str,
        github_auth_type: GitHubAuthenticationType,
        github_pat_token: str | None = None,
        github_api_url: str = DEFAULT_GITHUB_API_URL,
    ) -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_auth_type: Type of authentication (PAT or anonymous)
            github_pat_token: Personal access token (required for PAT auth)
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance
        """
        owner, repo_name = split_repository(repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
            auth_type=github_auth_type.value,
        )
        client = await get_github_client(
            github_auth_type=github_auth_type,
            github_pat_token=github_pat_token,
            github_api_url=github_api_url,
        )
        return cls(client, owner, repo_name)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo_name}"

    # Release/Tag Operations
    @raise_upstream_lookup_failure
    @retry_on_rate_limit()
    async def find_release(self, tag_name: str) -> "Release | None":
        """Get a release by tag name, or None if GitHub answers 404."""
        try:
            response: "Response[Release]" = await self.client.rest.repos.async_get_release_by_tag(
                owner=self.owner,
                repo=self.repo_name,
                tag=tag_name,
            )
        except RequestFailed as exc:
            if exc.response.status_code == 404:
                logger.debug("Release not found", tag_name=tag_name)
                return None
            raise
        return response.parsed_data

    @raise_upstream_lookup_failure
    @retry_on_rate_limit()
    async def find_latest_release(self) -> "Release | None":
        """Get the latest published release, or None if the repository has none."""
        try:
            response: "Response[Release]" = await self.client.rest.repos.async_get_latest_release(
                owner=self.owner,
                repo=self.repo_name,
            )
        except RequestFailed as exc:
            if exc.response.status_code == 404:
                logger.debug("Repository has no published release")
                return None
            raise
        return response.parsed_data

    async def is_version_available(self, version: str) -> bool:
        """Check that no tagged release exists for the version.

        Raises:
            UpstreamLookupFailureError: If GitHub cannot answer. A failed
                lookup never counts as available.
        """
        release = await self.find_release(f"v{version}")
        available = release is None
        logger.info("Checked version availability", version=version, available=available)
        return available

    # Search Operations
    @raise_upstream_lookup_failure
    @retry_on_rate_limit()
    async def search_merged_pull_requests(self, merged_since: datetime, per_page: int = SEARCH_PAGE_SIZE) -> list[dict[str, Any]]:
        """Search pull requests merged on or after a point in time, handling pagination.

        Returns:
            Raw search result items in the order GitHub returned them.
        """
        query = f"type:pr is:merged repo:{self.full_name} merged:>={format_search_timestamp(merged_since)}"
        logger.info("Searching merged pull requests", query=query)

        all_items: list[dict[str, Any]] = []
        page: int = 1
        while True:
            response = await self.client.rest.search.async_issues_and_pull_requests(
                q=query,
                sort="created",
                order="asc",
                per_page=per_page,
                page=page,
            )
            body = response.json()
            if not isinstance(body, dict) or not isinstance(body.get("items"), list):
                raise ValueError(f"Unexpected search response body on page {page}")
            if body.get("incomplete_results"):
                logger.warning("GitHub search returned incomplete results", page=page)

            items: list[dict[str, Any]] = body["items"]
            logger.debug(f"Got {len(items)} pull requests on page {page}")
            all_items.extend(items)

            if len(items) < per_page:
                break
            if page >= SEARCH_MAX_PAGES:
                logger.warning("Reached page limit for search", query=query, results_count=len(all_items))
                break
            page += 1

        logger.info(f"Total merged pull requests found: {len(all_items)}")
        return all_items
