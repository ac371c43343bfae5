"""Utility modules for shared functionality."""

from .constants import (
    CLOSED_VERSION_LINE_SUFFIX,
    DEFAULT_RELEASE_NOTES_FILE,
    DEFAULT_VERSION_FILE,
    LATEST_RELEASE_MARKER,
    VALID_RELEASE_PATTERN,
)
from .retry import retry_on_rate_limit

__all__ = [
    "VALID_RELEASE_PATTERN",
    "CLOSED_VERSION_LINE_SUFFIX",
    "LATEST_RELEASE_MARKER",
    "DEFAULT_VERSION_FILE",
    "DEFAULT_RELEASE_NOTES_FILE",
    "retry_on_rate_limit",
]
