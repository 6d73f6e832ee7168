"""Utils module -- config, logging."""

from content_search.utils.config import settings
from content_search.utils.logger import get_logger, log_search

__all__ = ["settings", "get_logger", "log_search"]
