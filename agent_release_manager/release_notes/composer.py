"""Markdown composition of the release notes document."""

from collections.abc import Mapping, Sequence

import structlog

from .models import RELEASE_NOTE_CATEGORIES, Category, ReleaseNoteEntry

logger = structlog.get_logger(__name__)


class ReleaseNotesComposer:
    """Renders categorized entries as markdown sections ahead of the prior notes.

    Every category gets a heading even when it has no entries, so the
    document shape stays the same from one release to the next.
    """

    def __init__(self, categories: Sequence[Category] = RELEASE_NOTE_CATEGORIES) -> None:
        """Initialize with the categories to render, in document order."""
        self.categories = tuple(categories)

    def render_section(self, category: Category, entries: Sequence[ReleaseNoteEntry | str]) -> str:
        """Render one category heading, its entries, and the trailing blank line."""
        lines = "\n".join(str(entry) for entry in entries)
        return f"## {category.value}\n{lines}\n\n"

    def compose(self, classified: Mapping[Category, Sequence[ReleaseNoteEntry | str]], prior_notes: str) -> str:
        """Prepend the new release sections to the prior release notes.

        Args:
            classified: Entries per category. Missing categories render empty.
            prior_notes: Existing release notes, appended verbatim.

        Returns:
            The new release notes document.
        """
        sections = "".join(self.render_section(category, classified.get(category, ())) for category in self.categories)
        logger.debug(
            "Composed release notes",
            entry_counts={category.value: len(classified.get(category, ())) for category in self.categories},
            prior_length=len(prior_notes),
        )
        return sections + prior_notes


def compose_release_notes(classified: Mapping[Category, Sequence[ReleaseNoteEntry | str]], prior_notes: str) -> str:
    """Compose release notes with the default category order."""
    return ReleaseNotesComposer().compose(classified, prior_notes)
