"""
Vector indexes: the NSW graph index and a brute-force baseline.

Both indexes share the VectorIndex interface:
- add(vector) -> id            (ids are assigned sequentially from 0)
- add_batch(vectors) -> ids
- search(query, k) -> SearchResult
- size()
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union
import logging
import threading
import numpy as np
import numpy.typing as npt

from nnsearch.config import NSWConfig, get_default_config
from nnsearch.exceptions import DimensionMismatchError, InvalidInputError
from nnsearch.graph_validator import GraphValidator
from nnsearch.nsw.builder import NSWBuilder
from nnsearch.nsw.distance import DistanceMetric, get_metric
from nnsearch.nsw.graph import NSWGraph
from nnsearch.nsw.searcher import NSWSearcher, SearchResult
from nnsearch.nsw.utils import as_vector, rank_by_distance

Vector = npt.NDArray[np.float32]

logger = logging.getLogger(__name__)


class VectorIndex(ABC):
    """Common interface for nearest-neighbor indexes."""

    dimension: int

    @abstractmethod
    def add(self, vector: Sequence[float]) -> int:
        """Insert a vector and return its id."""

    def add_batch(self, vectors: Iterable[Sequence[float]]) -> List[int]:
        """
        Insert vectors in order.

        Stops at the first vector that fails; the ones before it stay inserted.

        Returns:
            IDs assigned to the vectors, in input order
        """
        ids = [self.add(vector) for vector in vectors]
        logger.info("Added %d vectors to %s (size=%d)", len(ids), self.__class__.__name__, self.size())
        return ids

    @abstractmethod
    def search(self, query: Sequence[float], k: int) -> SearchResult:
        """Return up to k nearest stored ids, closest first."""

    @abstractmethod
    def size(self) -> int:
        """Number of stored vectors."""

    def __len__(self) -> int:
        return self.size()


class NaiveKnnIndex(VectorIndex):
    """
    Exact nearest neighbors by linear scan.

    Useful as ground truth for the NSW index and for tiny collections.
    """

    def __init__(self, dimension: int, metric: Union[str, DistanceMetric] = "euclidean") -> None:
        if dimension < 1:
            raise InvalidInputError(f"dimension must be >= 1, got {dimension}")

        self.dimension = dimension
        self.metric = get_metric(metric)
        self._points: List[Vector] = []

    def add(self, vector: Sequence[float]) -> int:
        vector = as_vector(vector)
        if len(vector) != self.dimension:
            raise DimensionMismatchError(self.dimension, len(vector))

        self._points.append(vector)
        return len(self._points) - 1

    def search(self, query: Sequence[float], k: int) -> SearchResult:
        if k < 1:
            raise InvalidInputError(f"k must be >= 1, got {k}")

        query = as_vector(query)
        if len(query) != self.dimension:
            raise DimensionMismatchError(self.dimension, len(query))

        distances = [self.metric.compute(query, point) for point in self._points]
        ranked = rank_by_distance(list(range(len(self._points))), distances, k=k)

        return SearchResult(
            ids=[node_id for node_id, _ in ranked],
            distances=[dist for _, dist in ranked],
            k=k,
        )

    def size(self) -> int:
        return len(self._points)


class NSWIndex(VectorIndex):
    """
    Approximate nearest-neighbor index on a navigable small-world graph.

    Every public call holds one exclusive lock for its whole duration:
    insertion searches the graph and then mutates it, and must not interleave
    with other calls. Sharing an index between threads is therefore safe but
    fully serialized.

    Example:
        >>> index = NSWIndex(dimension=2, trial=3, min_degree=4, seed=0)
        >>> index.add([0.1, 0.2])
        0
        >>> index.add([0.1, 0.1])
        1
        >>> index.search([0.1, 0.1], k=2).ids
        [1, 0]
    """

    def __init__(
        self,
        dimension: int,
        metric: Union[str, DistanceMetric, None] = None,
        trial: Optional[int] = None,
        min_degree: Optional[int] = None,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        config: Optional[NSWConfig] = None,
    ) -> None:
        """
        Initialize an empty index.

        Args:
            dimension: Dimensionality of vectors
            metric: Distance metric name or instance (default from config)
            trial: Random restarts per search (default from config)
            min_degree: Neighbors wired to each new vector (default from config)
            seed: Seed for entry-point selection (default from config)
            rng: Random generator to use instead of seeding a new one
            config: NSWConfig supplying defaults; explicit arguments take precedence
        """
        if config is None:
            config = get_default_config()
        self.config = config

        if metric is None:
            metric = config.metric
        if trial is None:
            trial = config.trial
        if min_degree is None:
            min_degree = config.min_degree
        if seed is None:
            seed = config.seed
        if rng is None:
            rng = np.random.default_rng(seed)

        self.dimension = dimension
        self.metric = get_metric(metric)
        self.trial = trial
        self.min_degree = min_degree

        self._graph = NSWGraph(dimension=dimension)
        self._searcher = NSWSearcher(self._graph, metric=self.metric, trial=trial, rng=rng)
        self._builder = NSWBuilder(self._graph, self._searcher, min_degree=min_degree)
        self._lock = threading.Lock()

        logger.info(
            "Created NSWIndex(dim=%d, metric=%s, trial=%d, min_degree=%d)",
            dimension, self.metric.name, trial, min_degree,
        )

    @classmethod
    def from_config(cls, dimension: int, config: NSWConfig) -> "NSWIndex":
        """Build an index whose parameters all come from a config."""
        return cls(dimension=dimension, config=config)

    @property
    def graph(self) -> NSWGraph:
        return self._graph

    def add(self, vector: Sequence[float]) -> int:
        """
        Insert a vector.

        Args:
            vector: Sequence of numbers with length == dimension

        Returns:
            The id assigned to the vector

        Raises:
            DimensionMismatchError: If the length is wrong (index unchanged)
        """
        vector = as_vector(vector)
        with self._lock:
            return self._builder.insert(vector)

    def add_batch(self, vectors: Iterable[Sequence[float]]) -> List[int]:
        if isinstance(vectors, np.ndarray) and vectors.ndim == 1:
            vectors = [vectors]
        return super().add_batch(vectors)

    def search(self, query: Sequence[float], k: int) -> SearchResult:
        """
        Search for the approximate k nearest neighbors.

        Args:
            query: Query vector (length == dimension)
            k: Number of neighbors (>= 1)

        Returns:
            SearchResult, closest first; check is_partial before assuming
            k ids came back
        """
        query = as_vector(query)
        with self._lock:
            return self._searcher.search(query, k)

    def get_vector(self, node_id: int) -> Optional[Vector]:
        """Return the stored vector for an id, or None."""
        node = self._graph.get_node(node_id)
        return None if node is None else node.vector

    def size(self) -> int:
        return self._graph.size()

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get statistics about the index and its graph.

        Returns:
            Dictionary with index parameters and graph metrics
        """
        with self._lock:
            stats: Dict[str, Any] = {
                "total_vectors": self.size(),
                "dimension": self.dimension,
                "metric": self.metric.name,
                "trial": self.trial,
                "min_degree": self.min_degree,
            }
            stats.update(GraphValidator(self._graph).get_graph_statistics())
        return stats

    def __repr__(self) -> str:
        return (
            f"NSWIndex(size={self.size()}, dim={self.dimension}, "
            f"metric={self.metric.name}, trial={self.trial}, min_degree={self.min_degree})"
        )
