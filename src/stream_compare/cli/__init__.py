"""Command-line interface for stream-compare."""
