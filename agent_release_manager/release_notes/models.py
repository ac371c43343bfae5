"""Data models for release branch creation and release notes generation."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError, field_validator

from ..exceptions import MalformedPullRequestRecordError


class Category(str, Enum):
    """Release notes section a pull request is filed under."""

    FEATURES = "Features"
    BUGS = "Bugs"
    MISC = "Misc"
    EXCLUDED = "Excluded"


RELEASE_NOTE_CATEGORIES: tuple[Category, ...] = (Category.FEATURES, Category.BUGS, Category.MISC)
"""Categories rendered into the release notes, in document order."""


class ReleaseStatus(str, Enum):
    """Outcome of a release branch run."""

    SUCCESS = "success"
    DRY_RUN = "dry_run"


@dataclass(frozen=True)
class Version:
    """A validated <major>.<minor>.<patch> release version."""

    major: int
    minor: int
    patch: int

    @property
    def tag(self) -> str:
        """Git tag of the release for this version."""
        return f"v{self}"

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class PullRequestLabel(BaseModel):
    """A label attached to a pull request."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str


class PullRequestRecord(BaseModel):
    """A merged pull request as returned by the GitHub search API."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    number: StrictInt
    title: str = Field(min_length=1)
    labels: list[PullRequestLabel] = Field(default_factory=list)
    merged_at: datetime | None = None

    @field_validator("labels", mode="before")
    @classmethod
    def _normalize_labels(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [{"name": label} if isinstance(label, str) else label for label in value]
        return value

    @property
    def label_names(self) -> list[str]:
        """Label names in the order they are attached to the pull request."""
        return [label.name for label in self.labels]

    @classmethod
    def from_search_item(cls, item: Any) -> "PullRequestRecord":
        """Build a record from a raw search result item.

        The merge timestamp is taken from ``pull_request.merged_at`` when the
        search result carries it, otherwise from ``closed_at``.

        Raises:
            MalformedPullRequestRecordError: If the item is missing its number
                or title, or any field has the wrong type.
        """
        if isinstance(item, cls):
            return item
        if not isinstance(item, Mapping):
            raise MalformedPullRequestRecordError(f"expected a mapping, got {type(item).__name__}", item)

        pull_request = item.get("pull_request")
        merged_at = pull_request.get("merged_at") if isinstance(pull_request, Mapping) else None
        try:
            return cls.model_validate(
                {
                    "number": item.get("number"),
                    "title": item.get("title"),
                    "labels": item.get("labels"),
                    "merged_at": merged_at or item.get("merged_at") or item.get("closed_at"),
                }
            )
        except ValidationError as e:
            raise MalformedPullRequestRecordError(str(e), item) from e


@dataclass(frozen=True)
class ReleaseNoteEntry:
    """One line of the release notes, produced from exactly one pull request."""

    number: int
    title: str

    @classmethod
    def from_record(cls, record: PullRequestRecord) -> "ReleaseNoteEntry":
        return cls(number=record.number, title=record.title)

    def __str__(self) -> str:
        return f" - {self.title} (#{self.number})"


ClassifiedPullRequests = dict[Category, list[ReleaseNoteEntry]]
"""Release note entries grouped by category, in the order pull requests were received."""


class ReleaseBranchResult(BaseModel):
    """Result of a release branch run."""

    status: ReleaseStatus
    version: str
    branch: str
    derived_from: str
    merged_since: datetime | None = None
    pull_request_count: int = 0
    classified: dict[str, list[str]] = Field(default_factory=dict)
    release_notes: str = ""
