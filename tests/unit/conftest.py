"""Fixtures for unit tests."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Generator

import pytest
import structlog

from agent_release_manager.configuration.models import ReleaseConfig


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


def make_search_item(number: int, title: str, labels: list[str] | None = None, merged_at: str = "2024-03-01T10:00:00Z") -> dict[str, Any]:
    """Build a raw GitHub issue search item for a merged pull request."""
    return {
        "number": number,
        "title": title,
        "labels": [{"id": index, "name": name, "color": "ededed"} for index, name in enumerate(labels or [])],
        "state": "closed",
        "closed_at": merged_at,
        "pull_request": {"merged_at": merged_at, "url": f"https://api.github.com/repos/owner/repo/pulls/{number}"},
    }


@pytest.fixture
def release_config(tmp_path: Path) -> ReleaseConfig:
    """A release configuration rooted in a temporary clone."""
    return ReleaseConfig(
        version="3.220.1",
        repo="owner/repo",
        repo_root=tmp_path,
        editor_command="true",
    )


@pytest.fixture
def published_at() -> datetime:
    return datetime(2024, 2, 1, 12, 30, tzinfo=timezone.utc)


@pytest.fixture
def search_item() -> Any:
    """Factory for raw GitHub search items."""
    return make_search_item
