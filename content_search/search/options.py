"""Helpers for reading integer options from query/request maps."""

from content_search.errors import ConfigurationError
from content_search.search.models import ITEMS_OPTION, Query, int_param

__all__ = ["int_param", "requested_page_size"]


def requested_page_size(query: Query) -> int:
    """Return the page size the caller asked for.

    The option is mandatory here: a missing, non-numeric or negative value
    raises :class:`ConfigurationError`.
    """
    raw = query.options.get(ITEMS_OPTION)
    if raw is None:
        raise ConfigurationError(f"Query option '{ITEMS_OPTION}' is required")
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"Query option '{ITEMS_OPTION}' is not an integer: {raw!r}"
        ) from exc
    if value < 0:
        raise ConfigurationError(f"Query option '{ITEMS_OPTION}' is negative: {value}")
    return value

