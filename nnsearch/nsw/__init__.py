"""
NSW (Navigable Small World) implementation module.

This module contains the graph engine behind NSWIndex: a flat proximity graph
where each vector is linked to a handful of approximate nearest neighbors at
insertion time, searched with greedy best-first traversal from random entry
points.

Components:
- distance: Distance metrics (Euclidean, Hamming, cosine)
- utils: Helper functions (vector conversion, ranking, data generation)
- graph: Graph data structure (nodes + adjacency map)
- builder: Insertion algorithm
- searcher: Search algorithm
"""

from nnsearch.nsw.distance import (
    DistanceMetric,
    EuclideanDistance,
    HammingDistance,
    CosineDistance,
    get_metric,
)
from nnsearch.nsw.graph import VectorNode, NSWGraph
from nnsearch.nsw.searcher import NSWSearcher, SearchResult
from nnsearch.nsw.builder import NSWBuilder

__all__ = [
    "DistanceMetric",
    "EuclideanDistance",
    "HammingDistance",
    "CosineDistance",
    "get_metric",
    "VectorNode",
    "NSWGraph",
    "NSWSearcher",
    "SearchResult",
    "NSWBuilder",
]
