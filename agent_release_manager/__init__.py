"""Cuts release branches for the agent: version bump plus categorized release notes."""
