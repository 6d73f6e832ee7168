"""Name -> processor registry, so strategies are chosen by configuration."""

import threading
from typing import Dict, List

from content_search.errors import ConfigurationError
from content_search.processors.base import BatchResultProcessor
from content_search.processors.config import SamplingConfigHolder
from content_search.processors.direct import DirectProcessor
from content_search.processors.sampling import SamplingProcessor
from content_search.search.backend import Repository, SearchBackend
from content_search.utils.logger import get_logger

log = get_logger(__name__)

FILES = "files"
RANDOM_CONTENT = "random-content"


class ProcessorRegistry:
    """Thread-safe map of registration names to processors."""

    def __init__(self):
        self._processors: Dict[str, BatchResultProcessor] = {}
        self._lock = threading.Lock()

    def register(self, name: str, processor: BatchResultProcessor) -> None:
        with self._lock:
            if name in self._processors:
                log.info("Replacing batch processor registered as '%s'", name)
            self._processors[name] = processor

    def unregister(self, name: str) -> None:
        with self._lock:
            self._processors.pop(name, None)

    def get(self, name: str) -> BatchResultProcessor:
        try:
            return self._processors[name]
        except KeyError:
            raise ConfigurationError(
                f"No batch processor registered as '{name}' (known: {', '.join(self.names())})"
            ) from None

    def names(self) -> List[str]:
        return sorted(self._processors)


def build_default_registry(
    backend: SearchBackend,
    repository: Repository,
    sampling_config: SamplingConfigHolder | None = None,
    seed: int | None = None,
) -> ProcessorRegistry:
    """Register the file formatter and the random-content sampler."""
    registry = ProcessorRegistry()
    registry.register(FILES, DirectProcessor(backend, repository))
    registry.register(RANDOM_CONTENT, SamplingProcessor(backend, sampling_config, seed=seed))
    return registry
