"""Git working tree operations."""
