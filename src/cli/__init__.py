"""Command-line interface for Sharkglobe."""
