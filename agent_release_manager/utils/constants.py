"""Shared constants used across the application."""

import re

# Version Constants
# -----------------

VALID_RELEASE_PATTERN = re.compile(r"^[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}$")
"""Pattern a release version must match (<major>.<minor>.<patch>, each 0-999)."""

CLOSED_VERSION_LINE_SUFFIX = ".999.999"
"""Reserved suffix marking a version line as closed to further releases."""

LATEST_RELEASE_MARKER = "latest"
"""Derived-from marker selecting the most recently published release."""

MINIMUM_GIT_VERSION = "2.9.0"
"""Oldest git release the branch-cutting workflow is known to work with."""

# GitHub Constants
# ----------------

DEFAULT_REPO = "microsoft/azure-pipelines-agent"
"""Repository whose releases and pull requests are inspected by default."""

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default GitHub API URL."""

SEARCH_PAGE_SIZE = 100
"""Maximum results GitHub returns per search page."""

SEARCH_MAX_PAGES = 10
"""GitHub search only exposes the first 1000 results."""

# Release Notes Constants
# -----------------------

BUG_LABEL = "bug"
ENHANCEMENT_LABEL = "enhancement"
INTERNAL_LABEL = "internal"

# Default File Settings
DEFAULT_VERSION_FILE = "src/agentversion"
"""Path, relative to the repository root, of the file holding the agent version."""

DEFAULT_RELEASE_NOTES_FILE = "releaseNote.md"
"""Path, relative to the repository root, of the release notes file."""

DEFAULT_EDITOR_COMMAND = "code --wait"
"""Editor launched to review the release notes before committing."""

# Git Settings
RELEASE_BRANCH_PREFIX = "releases/"
COMMIT_MESSAGE_TEMPLATE = "Agent Release {version}"
DEFAULT_COMMIT_AUTHOR_NAME = "azure-pipelines-bot"
DEFAULT_COMMIT_AUTHOR_EMAIL = "azure-pipelines-bot@microsoft.com"
