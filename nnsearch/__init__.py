"""
nnsearch - Approximate nearest neighbor search on navigable small-world graphs

An in-memory vector index: insert vectors one at a time, then query for the
k closest vectors under a pluggable distance metric.
"""

import logging

__version__ = "0.1.0"

from nnsearch.exceptions import NNSearchError, DimensionMismatchError, InvalidInputError
from nnsearch.config import NSWConfig, get_default_config, get_high_recall_config
from nnsearch.nsw.searcher import SearchResult
from nnsearch.index import VectorIndex, NSWIndex, NaiveKnnIndex

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "NSWIndex",
    "NaiveKnnIndex",
    "VectorIndex",
    "SearchResult",
    "NSWConfig",
    "get_default_config",
    "get_high_recall_config",
    "NNSearchError",
    "DimensionMismatchError",
    "InvalidInputError",
]
