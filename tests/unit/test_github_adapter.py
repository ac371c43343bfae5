"""Unit tests for the GitHubKitAdapter class and related GitHub operations."""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from githubkit.exception import RequestFailed, RequestTimeout

from agent_release_manager.exceptions import UpstreamLookupFailureError
from agent_release_manager.github import adapter as adapter_module
from agent_release_manager.github.adapter import GitHubKitAdapter, format_search_timestamp


def make_request_failed(status_code: int, headers: dict[str, str] | None = None) -> RequestFailed:
    """Create a RequestFailed error carrying a mocked response."""
    response = MagicMock()
    response.status_code = status_code
    response.headers = headers or {}
    return RequestFailed(response)


class DummyResponse:
    """A dummy response object to mock GitHub API responses."""

    def __init__(self, parsed_data: Any = None, body: Any = None) -> None:
        """Initialize the dummy response with parsed data and a raw JSON body."""
        self.status_code = 200
        self.parsed_data = parsed_data
        self._body = body

    def json(self) -> Any:
        return self._body


@pytest.fixture
def adapter() -> GitHubKitAdapter:
    return GitHubKitAdapter(MagicMock(), "owner", "repo")


@pytest.mark.asyncio
async def test_find_release_returns_release(adapter: GitHubKitAdapter) -> None:
    """Test that an existing release is returned."""
    release = MagicMock()
    adapter.client.rest.repos.async_get_release_by_tag = AsyncMock(return_value=DummyResponse(parsed_data=release))

    assert await adapter.find_release("v1.2.3") is release
    adapter.client.rest.repos.async_get_release_by_tag.assert_awaited_once_with(owner="owner", repo="repo", tag="v1.2.3")


@pytest.mark.asyncio
async def test_find_release_not_found_returns_none(adapter: GitHubKitAdapter) -> None:
    """Test that a 404 means the release does not exist."""
    adapter.client.rest.repos.async_get_release_by_tag = AsyncMock(side_effect=make_request_failed(404))

    assert await adapter.find_release("v1.2.3") is None


@pytest.mark.asyncio
async def test_find_release_server_error_is_lookup_failure(adapter: GitHubKitAdapter) -> None:
    """Test that non-404 HTTP errors are surfaced as lookup failures."""
    adapter.client.rest.repos.async_get_release_by_tag = AsyncMock(side_effect=make_request_failed(500))

    with pytest.raises(UpstreamLookupFailureError) as exc_info:
        await adapter.find_release("v1.2.3")
    assert exc_info.value.operation == "find_release"


@pytest.mark.asyncio
async def test_find_release_timeout_is_lookup_failure(adapter: GitHubKitAdapter) -> None:
    """Test that transport errors are surfaced as lookup failures."""
    adapter.client.rest.repos.async_get_release_by_tag = AsyncMock(side_effect=RequestTimeout(MagicMock()))

    with pytest.raises(UpstreamLookupFailureError):
        await adapter.find_release("v1.2.3")


@pytest.mark.asyncio
async def test_find_release_parse_error_is_lookup_failure(adapter: GitHubKitAdapter) -> None:
    """Test that an undecodable body is a lookup failure, not a missing release."""
    adapter.client.rest.repos.async_get_release_by_tag = AsyncMock(side_effect=ValueError("Expecting value: line 1 column 1"))

    with pytest.raises(UpstreamLookupFailureError):
        await adapter.find_release("v1.2.3")


@pytest.mark.asyncio
async def test_find_latest_release_none_when_repository_has_no_release(adapter: GitHubKitAdapter) -> None:
    """Test that a 404 on the latest release endpoint means no release exists."""
    adapter.client.rest.repos.async_get_latest_release = AsyncMock(side_effect=make_request_failed(404))

    assert await adapter.find_latest_release() is None


@pytest.mark.asyncio
async def test_is_version_available_when_tag_missing(adapter: GitHubKitAdapter) -> None:
    """Test that a version is available when no release carries its tag."""
    adapter.client.rest.repos.async_get_release_by_tag = AsyncMock(side_effect=make_request_failed(404))

    assert await adapter.is_version_available("1.2.3") is True
    adapter.client.rest.repos.async_get_release_by_tag.assert_awaited_once_with(owner="owner", repo="repo", tag="v1.2.3")


@pytest.mark.asyncio
async def test_is_version_available_when_tag_exists(adapter: GitHubKitAdapter) -> None:
    """Test that a tagged release makes the version unavailable."""
    adapter.client.rest.repos.async_get_release_by_tag = AsyncMock(return_value=DummyResponse(parsed_data=MagicMock()))

    assert await adapter.is_version_available("1.2.3") is False


@pytest.mark.asyncio
async def test_is_version_available_lookup_failure_propagates(adapter: GitHubKitAdapter) -> None:
    """Test that a failed lookup is never treated as available."""
    adapter.client.rest.repos.async_get_release_by_tag = AsyncMock(side_effect=make_request_failed(502))

    with pytest.raises(UpstreamLookupFailureError):
        await adapter.is_version_available("1.2.3")


@pytest.mark.asyncio
async def test_find_release_retries_on_rate_limit(adapter: GitHubKitAdapter, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that a rate-limited lookup is retried after waiting."""
    sleep = AsyncMock()
    monkeypatch.setattr("agent_release_manager.utils.retry.asyncio.sleep", sleep)
    release = MagicMock()
    adapter.client.rest.repos.async_get_release_by_tag = AsyncMock(
        side_effect=[make_request_failed(429, {"retry-after": "3"}), DummyResponse(parsed_data=release)]
    )

    assert await adapter.find_release("v1.2.3") is release
    sleep.assert_awaited_once_with(3.0)


@pytest.mark.asyncio
async def test_search_merged_pull_requests_single_page(adapter: GitHubKitAdapter, search_item: Callable[..., dict[str, Any]]) -> None:
    """Test the search query and that items are returned in order."""
    items = [search_item(2, "b"), search_item(1, "a")]
    adapter.client.rest.search.async_issues_and_pull_requests = AsyncMock(
        return_value=DummyResponse(body={"total_count": 2, "incomplete_results": False, "items": items})
    )
    since = datetime(2024, 2, 1, 12, 30, tzinfo=timezone.utc)

    result = await adapter.search_merged_pull_requests(since)

    assert result == items
    kwargs = adapter.client.rest.search.async_issues_and_pull_requests.await_args.kwargs
    assert kwargs["q"] == "type:pr is:merged repo:owner/repo merged:>=2024-02-01T12:30:00Z"
    assert kwargs["order"] == "asc"
    assert kwargs["page"] == 1


@pytest.mark.asyncio
async def test_search_merged_pull_requests_paginates(adapter: GitHubKitAdapter, search_item: Callable[..., dict[str, Any]]) -> None:
    """Test that full pages trigger fetching the next page."""
    first_page = [search_item(1, "a"), search_item(2, "b")]
    second_page = [search_item(3, "c")]
    adapter.client.rest.search.async_issues_and_pull_requests = AsyncMock(
        side_effect=[DummyResponse(body={"items": first_page}), DummyResponse(body={"items": second_page})]
    )

    result = await adapter.search_merged_pull_requests(datetime(2024, 1, 1, tzinfo=timezone.utc), per_page=2)

    assert [item["number"] for item in result] == [1, 2, 3]
    pages = [call.kwargs["page"] for call in adapter.client.rest.search.async_issues_and_pull_requests.await_args_list]
    assert pages == [1, 2]


@pytest.mark.asyncio
async def test_search_merged_pull_requests_stops_at_page_limit(adapter: GitHubKitAdapter, search_item: Callable[..., dict[str, Any]]) -> None:
    """Test that pagination stops at the search API's page limit."""
    adapter.client.rest.search.async_issues_and_pull_requests = AsyncMock(return_value=DummyResponse(body={"items": [search_item(1, "a")]}))

    result = await adapter.search_merged_pull_requests(datetime(2024, 1, 1, tzinfo=timezone.utc), per_page=1)

    assert len(result) == 10
    assert adapter.client.rest.search.async_issues_and_pull_requests.await_count == 10


@pytest.mark.asyncio
async def test_search_merged_pull_requests_unexpected_body(adapter: GitHubKitAdapter) -> None:
    """Test that a body without items is a lookup failure."""
    adapter.client.rest.search.async_issues_and_pull_requests = AsyncMock(return_value=DummyResponse(body={"message": "Validation Failed"}))

    with pytest.raises(UpstreamLookupFailureError):
        await adapter.search_merged_pull_requests(datetime(2024, 1, 1, tzinfo=timezone.utc))


@pytest.mark.asyncio
async def test_search_merged_pull_requests_http_error(adapter: GitHubKitAdapter) -> None:
    """Test that a failed search is a lookup failure."""
    adapter.client.rest.search.async_issues_and_pull_requests = AsyncMock(side_effect=make_request_failed(422))

    with pytest.raises(UpstreamLookupFailureError):
        await adapter.search_merged_pull_requests(datetime(2024, 1, 1, tzinfo=timezone.utc))


@pytest.mark.parametrize(
    "moment,expected",
    [
        pytest.param(datetime(2024, 2, 1, 12, 30, 15, tzinfo=timezone.utc), "2024-02-01T12:30:15Z", id="utc"),
        pytest.param(datetime(2024, 2, 1, 14, 30, 15, tzinfo=timezone(timedelta(hours=2))), "2024-02-01T12:30:15Z", id="offset converted"),
        pytest.param(datetime(2024, 2, 1, 12, 30, 15, 999), "2024-02-01T12:30:15Z", id="naive, microseconds dropped"),
    ],
)
def test_format_search_timestamp(moment: datetime, expected: str) -> None:
    """Test formatting timestamps for the merged: search qualifier."""
    assert format_search_timestamp(moment) == expected


def test_adapter_defers_versioned_models_import() -> None:
    """Test that githubkit's versioned models are only imported for type checking."""
    assert "Release" not in vars(adapter_module)
