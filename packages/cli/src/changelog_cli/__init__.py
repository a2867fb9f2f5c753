"""Command-line interface for changelog-generator."""
