"""Batch search-result processing for a content repository."""

__version__ = "0.1.0"
