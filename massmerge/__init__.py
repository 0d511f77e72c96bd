"""Bulk approve and merge pull requests across GitHub organizations."""

__version__ = "1.0.0"
