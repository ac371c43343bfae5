"""Contains utility functions for GitHub interactions."""


def split_repository(repo: str | None) -> tuple[str, str]:
    """Splits an 'owner/repo' string into owner and repository name."""
    if not repo:
        raise ValueError("A repository in the format 'owner/repo' is required.")
    parts = repo.strip("/").split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Repository '{repo}' must be in the format 'owner/repo' with no extra parts.")
    owner, repository = parts
    return owner, repository


def release_tag(derived_from: str) -> str:
    """Normalize a version or tag name to a release tag ('3.220.1' -> 'v3.220.1')."""
    return derived_from if derived_from.startswith("v") else f"v{derived_from}"
