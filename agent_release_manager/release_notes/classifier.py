"""Categorization of merged pull requests into release notes sections."""

from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from ..utils.constants import BUG_LABEL, ENHANCEMENT_LABEL, INTERNAL_LABEL
from .models import (
    RELEASE_NOTE_CATEGORIES,
    Category,
    ClassifiedPullRequests,
    PullRequestRecord,
    ReleaseNoteEntry,
)

logger = structlog.get_logger(__name__)

DEFAULT_LABEL_CATEGORIES: Mapping[str, Category] = {
    BUG_LABEL: Category.BUGS,
    ENHANCEMENT_LABEL: Category.FEATURES,
    INTERNAL_LABEL: Category.EXCLUDED,
}


class PullRequestClassifier:
    """Files each pull request under exactly one release notes category.

    A pull request's labels are folded left to right starting from ``Misc``.
    Each recognized label replaces the current category, so when a pull
    request carries both ``bug`` and ``enhancement`` the later one wins.
    ``Excluded`` is absorbing: the scan stops at the first label mapping to it.
    """

    def __init__(self, label_categories: Mapping[str, Category] | None = None) -> None:
        """Initialize with an optional label name to category table."""
        self.label_categories = dict(DEFAULT_LABEL_CATEGORIES if label_categories is None else label_categories)

    def apply_label(self, category: Category, label: str) -> Category:
        """Transition the category accumulator for one label."""
        if category is Category.EXCLUDED:
            return category
        return self.label_categories.get(label, category)

    def categorize(self, labels: Iterable[str]) -> Category:
        """Fold a label sequence into the category it settles on."""
        category = Category.MISC
        for label in labels:
            category = self.apply_label(category, label)
            if category is Category.EXCLUDED:
                break
        return category

    def classify(self, records: Iterable[PullRequestRecord | Mapping[str, Any]]) -> ClassifiedPullRequests:
        """Group pull requests into release note entries by category.

        Args:
            records: Pull requests in the order the search returned them. Raw
                search items are converted with ``PullRequestRecord.from_search_item``.

        Returns:
            A mapping holding every release notes category, each with its
            entries in the order the pull requests were received. Excluded
            pull requests do not appear.

        Raises:
            MalformedPullRequestRecordError: If a raw item lacks required fields.
        """
        classified: ClassifiedPullRequests = {category: [] for category in RELEASE_NOTE_CATEGORIES}
        for item in records:
            record = PullRequestRecord.from_search_item(item)
            category = self.categorize(record.label_names)
            logger.debug("Categorized pull request", number=record.number, labels=record.label_names, category=category.value)
            if category is Category.EXCLUDED:
                continue
            classified[category].append(ReleaseNoteEntry.from_record(record))
        return classified


def classify_pull_requests(records: Iterable[PullRequestRecord | Mapping[str, Any]]) -> ClassifiedPullRequests:
    """Classify pull requests with the default label table."""
    return PullRequestClassifier().classify(records)
