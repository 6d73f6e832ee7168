"""Random sampling over an amplified window of search results."""

import itertools
import threading
from typing import Iterator, List

import numpy as np

from content_search.errors import FormattingFailure
from content_search.formatting.json_writer import JSONWriter
from content_search.processors.base import BatchResultProcessor
from content_search.processors.config import SamplingConfig, SamplingConfigHolder
from content_search.search.backend import SearchBackend
from content_search.search.models import (
    ITEMS_OPTION,
    MaterializedResultPage,
    Query,
    Result,
    ResultPage,
    SearchRequest,
)
from content_search.search.options import requested_page_size
from content_search.utils.logger import get_logger

log = get_logger(__name__)


class SamplingProcessor(BatchResultProcessor):
    """Return a random subset of the matches instead of the top-ranked page.

    For a requested page of ``k`` items the backend is asked, once, for
    ``k * amplification_factor`` items (clamped to ``max_fetch_size`` when
    one is configured).  That window is shuffled and cut back to ``k``.

    The sample is uniform over the fetched window only: matches ranked past
    the window can never be picked.  Results must carry their display data
    inline since nothing is resolved from the repository.
    """

    def __init__(
        self,
        backend: SearchBackend,
        config: SamplingConfigHolder | None = None,
        seed: int | None = None,
    ):
        self.backend = backend
        self.config = config or SamplingConfigHolder(SamplingConfig.from_settings())
        self._seed_sequence = np.random.SeedSequence(seed)
        self._seed_lock = threading.Lock()

    def get_result_page(self, request: SearchRequest, query: Query) -> ResultPage:
        requested = requested_page_size(query)
        fetch_size = self.config.current.fetch_size(requested)

        if fetch_size == 0:
            log.debug("Nothing to sample (requested=%d, fetch_size=0)", requested)
            return MaterializedResultPage([])

        # The caller's query is never touched; the backend gets a private copy.
        page = self.backend.execute(query.with_option(ITEMS_OPTION, str(fetch_size)))
        window: List[Result] = list(itertools.islice(page.result_iterator(), fetch_size))

        order = self._generator().permutation(len(window))
        sample = [window[i] for i in order[:requested]]
        log.debug(
            "Sampled %d of %d fetched results (requested=%d, fetch_size=%d)",
            len(sample),
            len(window),
            requested,
            fetch_size,
        )
        return MaterializedResultPage(sample)

    def write_results(
        self,
        request: SearchRequest,
        writer: JSONWriter,
        results: Iterator[Result],
    ) -> None:
        limit = request.page_size
        for result in itertools.islice(results, limit):
            if result.properties is None:
                raise FormattingFailure(f"Result {result.key} carries no inline properties")
            writer.write_value_map(result.properties)

    def _generator(self) -> np.random.Generator:
        """A fresh generator per call; spawning is the only shared step."""
        with self._seed_lock:
            (child,) = self._seed_sequence.spawn(1)
        return np.random.default_rng(child)
