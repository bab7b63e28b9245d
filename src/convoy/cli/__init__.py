"""Command-line interface for convoy."""
