"""
Search Engine Package

Source search (cache → upstream → fallback) and the combined aggregator.
"""

from .aggregator import SearchAggregator, combined_cache_key
from .result import SourceOutcome, SourceStatus
from .source_search import SourceSearchService, source_cache_key

__all__ = [
    "SearchAggregator",
    "SourceOutcome",
    "SourceSearchService",
    "SourceStatus",
    "combined_cache_key",
    "source_cache_key",
]
