"""Changelog generation from tagged git merge history."""
