"""Command-line interface for the playlist service."""
