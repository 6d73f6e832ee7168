"""Processors module -- direct and sampling result processors, plus registry."""

from content_search.processors.base import BatchResultProcessor
from content_search.processors.config import SamplingConfig, SamplingConfigHolder
from content_search.processors.direct import DirectProcessor
from content_search.processors.registry import (
    FILES,
    RANDOM_CONTENT,
    ProcessorRegistry,
    build_default_registry,
)
from content_search.processors.sampling import SamplingProcessor

__all__ = [
    "BatchResultProcessor",
    "DirectProcessor",
    "FILES",
    "ProcessorRegistry",
    "RANDOM_CONTENT",
    "SamplingConfig",
    "SamplingConfigHolder",
    "SamplingProcessor",
    "build_default_registry",
]
