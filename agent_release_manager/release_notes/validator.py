"""Validation of proposed release versions."""

import structlog

from ..utils.constants import CLOSED_VERSION_LINE_SUFFIX, VALID_RELEASE_PATTERN
from ..exceptions import InvalidVersionFormatError
from .models import Version

logger = structlog.get_logger(__name__)


class VersionValidator:
    """Checks a proposed version string against the release version format.

    Availability upstream is a separate network check, see
    ``GitHubKitAdapter.is_version_available``.
    """

    def validate(self, candidate: str | None) -> Version:
        """Validate a candidate version string.

        Args:
            candidate: Proposed version, e.g. ``"3.220.1"``.

        Returns:
            The parsed version.

        Raises:
            InvalidVersionFormatError: If the candidate is empty, is not three
                dot-separated numbers of 1-3 digits, or is a ``*.999.999``
                sentinel.
        """
        if not candidate:
            raise InvalidVersionFormatError(candidate, "no version supplied")
        if not VALID_RELEASE_PATTERN.fullmatch(candidate):
            raise InvalidVersionFormatError(candidate, "not of the form <major>.<minor>.<patch>")
        if candidate.endswith(CLOSED_VERSION_LINE_SUFFIX):
            raise InvalidVersionFormatError(candidate, f"'*{CLOSED_VERSION_LINE_SUFFIX}' is reserved for closed version lines")

        major, minor, patch = (int(part) for part in candidate.split("."))
        version = Version(major=major, minor=minor, patch=patch)
        logger.debug("Validated version", version=str(version))
        return version


def validate_version(candidate: str | None) -> Version:
    """Validate a candidate version string with the default validator."""
    return VersionValidator().validate(candidate)
