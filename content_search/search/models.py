"""Search data model -- queries, hits, result pages and resolved content."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

from content_search.errors import ConfigurationError
from content_search.utils.config import settings

ITEMS_OPTION = "items"
PAGE_OPTION = "page"
DEPTH_ATTRIBUTE = "depth"

RESOURCE_TYPE_PROPERTY = "sling:resourceType"
LINK_RESOURCE_TYPE = "sakai/link"
LINK_TARGET_PROPERTY = "sakai:link"


@dataclass(frozen=True)
class Query:
    """Free-text terms plus an ordered map of backend options."""

    text: str = ""
    options: Dict[str, str] = field(default_factory=dict)

    def with_option(self, name: str, value: str) -> "Query":
        """Return a copy with one option overridden; ``self`` is left untouched."""
        options = dict(self.options)
        options[name] = value
        return Query(text=self.text, options=options)


@dataclass(frozen=True)
class Result:
    """A single search hit: a stable key and optional inline properties."""

    key: str
    properties: Optional[Mapping[str, Any]] = None


class ResultPage(ABC):
    """A page of results plus the backend's (possibly estimated) total."""

    @property
    @abstractmethod
    def size(self) -> int:
        ...

    @abstractmethod
    def result_iterator(self) -> Iterator[Result]:
        ...


class StreamingResultPage(ResultPage):
    """Single-pass page backed by a lazy iterator.

    Every call to :meth:`result_iterator` hands out the same iterator, so once
    it has been drained the page is spent and a new query is needed.
    """

    def __init__(self, size: int, results: Iterator[Result]):
        self._size = size
        self._iterator = iter(results)

    @property
    def size(self) -> int:
        return self._size

    def result_iterator(self) -> Iterator[Result]:
        return self._iterator


class MaterializedResultPage(ResultPage):
    """In-memory page over an ordered sequence; iteration can be replayed."""

    def __init__(self, results: Sequence[Result]):
        self._results: List[Result] = list(results)

    @property
    def size(self) -> int:
        return len(self._results)

    @property
    def results(self) -> List[Result]:
        return list(self._results)

    def result_iterator(self) -> Iterator[Result]:
        return iter(self._results)


@dataclass(frozen=True)
class Content:
    """Repository entity resolved from a result key."""

    path: str
    properties: Mapping[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.path.rstrip("/").rsplit("/", 1)[-1]

    @property
    def resource_type(self) -> Optional[str]:
        return self.properties.get(RESOURCE_TYPE_PROPERTY)

    @property
    def is_link(self) -> bool:
        return self.resource_type == LINK_RESOURCE_TYPE


@dataclass(frozen=True)
class Session:
    """The authenticated caller on whose behalf content is read."""

    user_id: str
    is_admin: bool = False


@dataclass
class SearchRequest:
    """Per-request context: caller session, request params, request attributes."""

    session: Session
    params: Dict[str, str] = field(default_factory=dict)
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def depth(self) -> int:
        value = self.attributes.get(DEPTH_ATTRIBUTE)
        if value is None:
            return 0
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Request attribute 'depth' is not an integer: {value!r}") from exc

    @property
    def page_size(self) -> int:
        return int_param(self.params, ITEMS_OPTION, settings.default_page_size)


def int_param(params: Mapping[str, str], name: str, default: int) -> int:
    """Read a non-negative integer request parameter, falling back to *default*."""
    raw = params.get(name)
    if raw is None or not str(raw).strip():
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Request parameter '{name}' is not an integer: {raw!r}") from exc
    if value < 0:
        raise ConfigurationError(f"Request parameter '{name}' is negative: {value}")
    return value
