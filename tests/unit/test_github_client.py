"""Unit tests for githubkit client setup."""

import pytest
from githubkit.auth import TokenAuthStrategy, UnauthAuthStrategy

from agent_release_manager.configuration.models import GitHubAuthenticationType
from agent_release_manager.github.client import get_github_client


@pytest.mark.asyncio
async def test_pat_client() -> None:
    client = await get_github_client(GitHubAuthenticationType.PAT, "test-token", "https://api.github.com")
    assert isinstance(client.auth, TokenAuthStrategy)


@pytest.mark.asyncio
async def test_anonymous_client() -> None:
    """Test that no token yields an unauthenticated client."""
    client = await get_github_client(GitHubAuthenticationType.ANONYMOUS, None, "https://api.github.com")
    assert isinstance(client.auth, UnauthAuthStrategy)


@pytest.mark.asyncio
async def test_pat_client_requires_token() -> None:
    with pytest.raises(RuntimeError, match="requires github_pat_token"):
        await get_github_client(GitHubAuthenticationType.PAT, None, "https://api.github.com")
