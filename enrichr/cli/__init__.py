"""Command-line interface for enrichr."""
