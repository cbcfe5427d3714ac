"""
NSW search algorithm.

This module answers approximate k-nearest-neighbor queries on the NSW graph
with a greedy, multi-restart traversal:
1. Pick a random entry node and put it in a min-heap of candidates
2. Repeatedly pop the closest candidate and add its unvisited neighbors
3. Stop a restart once the closest remaining candidate is no closer than
   the k-th best node found so far
4. Repeat from a new random entry node `trial` times, keeping the visited
   set and the best results across restarts

The trial parameter controls the accuracy-speed tradeoff:
- More restarts = better recall, slower search
- Fewer restarts = faster search, lower recall

Graphs with at most k nodes are answered exhaustively, since every node is
part of the answer anyway.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set, Tuple, Union
import heapq
import logging
import numpy as np
import numpy.typing as npt

from nnsearch.exceptions import InvalidInputError
from nnsearch.nsw.distance import DistanceMetric, get_metric
from nnsearch.nsw.graph import NSWGraph
from nnsearch.nsw.utils import rank_by_distance

Vector = npt.NDArray[np.float32]

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """
    Neighbors returned by a k-nearest-neighbor query.

    ids and distances are parallel lists ordered closest first. When fewer
    than k neighbors could be produced (small index, or a traversal that
    reached fewer than k nodes) is_partial is True.
    """

    ids: List[int]
    distances: List[float]
    k: int

    @property
    def is_partial(self) -> bool:
        return len(self.ids) < self.k

    def items(self) -> List[Tuple[int, float]]:
        """Return (node_id, distance) pairs, closest first."""
        return list(zip(self.ids, self.distances))

    def __len__(self) -> int:
        return len(self.ids)


@dataclass
class DistanceCache:
    """
    Distances from one query to graph nodes, computed at most once per node.

    A cache lives for a single search call.
    """

    graph: NSWGraph
    query: Vector
    distance: Callable[[Vector, Vector], float]
    cache: Dict[int, float] = field(default_factory=dict)

    def get(self, node_id: int) -> float:
        dist = self.cache.get(node_id)
        if dist is None:
            node = self.graph.get_node(node_id)
            # Adjacency only ever references stored nodes
            assert node is not None, f"Node {node_id} is referenced but not stored"
            dist = self.distance(self.query, node.vector)
            self.cache[node_id] = dist
        return dist

    def __len__(self) -> int:
        return len(self.cache)


class NSWSearcher:
    """
    Handles search queries on the NSW graph.

    Entry points are drawn from an explicit random generator, so a searcher
    built with a seeded generator is fully reproducible.
    """

    def __init__(
        self,
        graph: NSWGraph,
        metric: Union[str, DistanceMetric] = "euclidean",
        trial: int = 3,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Initialize searcher with a graph.

        Args:
            graph: The NSWGraph to search in
            metric: Distance metric name or instance
            trial: Number of random restarts per query (higher = better recall)
            rng: Random generator for entry points (unseeded if not given)
        """
        if trial < 1:
            raise InvalidInputError(f"trial must be >= 1, got {trial}")

        self.graph = graph
        self.metric = get_metric(metric)
        self.trial = trial
        self.rng = rng if rng is not None else np.random.default_rng()

        # Bound once so the traversal loop calls the metric directly
        self._distance = self.metric.compute

    def search(self, query: Vector, k: int) -> SearchResult:
        """
        Search for k nearest neighbors to the query vector.

        Args:
            query: Query vector to search for
            k: Number of nearest neighbors to return (>= 1)

        Returns:
            SearchResult sorted by distance (closest first); possibly shorter
            than k, in which case result.is_partial is True

        Raises:
            InvalidInputError: If k < 1
            DimensionMismatchError: If the query doesn't match the graph
        """
        if k < 1:
            raise InvalidInputError(f"k must be >= 1, got {k}")

        query = np.asarray(query, dtype=np.float32)
        self.graph.check_dimension(query)

        cache = DistanceCache(self.graph, query, self._distance)

        if self.graph.size() <= k:
            ranked = self._search_exhaustive(cache)
        else:
            ranked = self._search_greedy(cache, k)

        result = SearchResult(
            ids=[node_id for node_id, _ in ranked],
            distances=[dist for _, dist in ranked],
            k=k,
        )

        logger.debug(
            "Searched %d nodes for k=%d: %d distance evaluations, %d results",
            self.graph.size(), k, len(cache), len(result),
        )
        if result.is_partial:
            logger.debug("Partial result: %d of %d neighbors", len(result), k)

        return result

    def _search_exhaustive(self, cache: DistanceCache) -> List[Tuple[int, float]]:
        """Rank every stored node (used when the graph has at most k nodes)."""
        node_ids = list(self.graph.nodes)
        return rank_by_distance(node_ids, [cache.get(node_id) for node_id in node_ids])

    def _search_greedy(self, cache: DistanceCache, k: int) -> List[Tuple[int, float]]:
        """
        Multi-restart greedy traversal.

        visited and the best results are shared by all restarts; the candidate
        heap starts fresh for each one. Results only ever grow, so keeping the
        best k of them is enough both for the stopping rule and the answer.

        Args:
            cache: Distance cache for this query
            k: Number of nearest neighbors to return

        Returns:
            Up to k (node_id, distance) tuples, closest first
        """
        size = self.graph.size()
        visited: Set[int] = set()

        # Best k results as a max-heap of (-distance, -node_id)
        best: List[Tuple[float, int]] = []

        for _ in range(self.trial):
            entry_id = int(self.rng.integers(size))

            # Min-heap of (distance, node_id)
            candidates: List[Tuple[float, int]] = [(cache.get(entry_id), entry_id)]

            while candidates:
                current_dist, current_id = heapq.heappop(candidates)

                # Candidates come out in increasing distance, so once the k-th
                # best result is this close nothing left can improve the top k
                if len(best) >= k and -best[0][0] <= current_dist:
                    break

                staged: List[int] = []
                for neighbor_id in self.graph.get_neighbors(current_id):
                    if neighbor_id in visited:
                        continue

                    visited.add(neighbor_id)
                    heapq.heappush(candidates, (cache.get(neighbor_id), neighbor_id))
                    staged.append(neighbor_id)

                if current_id not in visited:
                    visited.add(current_id)
                    staged.append(current_id)

                for node_id in staged:
                    self._keep_best(best, node_id, cache.get(node_id), k)

        logger.debug("Greedy search: %d restarts, %d visited nodes", self.trial, len(visited))

        ranked = sorted((-neg_dist, -neg_id) for neg_dist, neg_id in best)
        return [(node_id, dist) for dist, node_id in ranked]

    @staticmethod
    def _keep_best(
        best: List[Tuple[float, int]], node_id: int, dist: float, k: int
    ) -> None:
        """Push a result onto the bounded max-heap, evicting the worst if full."""
        item = (-dist, -node_id)
        if len(best) < k:
            heapq.heappush(best, item)
        elif item > best[0]:
            heapq.heapreplace(best, item)
