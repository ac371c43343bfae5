"""Configuration handling for CLI arguments and environment variables."""
