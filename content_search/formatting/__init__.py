"""Formatting module -- streaming JSON writer and content formatter."""

from content_search.formatting.formatter import ResultFormatter
from content_search.formatting.json_writer import JSONWriter

__all__ = ["JSONWriter", "ResultFormatter"]
