"""Graph validation and connectivity checks for NSW graphs.

The insertion algorithm is supposed to keep two properties by construction:
every neighbor reference points at a stored node, and every edge appears in
both endpoints' adjacency lists. This module checks those properties and
reports connectivity statistics (a disconnected NSW graph can never be fully
explored from a single entry point).
"""

from typing import Dict, List, Optional, Set, Tuple
from collections import Counter, deque
import numpy as np

from nnsearch.nsw.graph import NSWGraph


# Type alias for edge identification
EdgeId = Tuple[int, int]


class GraphValidator:
    """Validates graph structure and connectivity properties of an NSWGraph.

    The validator reads the graph it was given each time a check runs, so it
    can be kept around while the graph grows.
    """

    def __init__(self, graph: NSWGraph) -> None:
        """Initialize the graph validator.

        Args:
            graph: Graph to inspect
        """
        self.graph = graph

    def find_dangling_edges(self) -> List[EdgeId]:
        """Find edges that reference a node which isn't stored.

        Returns:
            List of (node_id, neighbor_id) pairs where either end is missing
        """
        dangling = []
        for node_id, neighbor_ids in self.graph.adjacency_ids.items():
            for neighbor_id in neighbor_ids:
                if node_id not in self.graph.nodes or neighbor_id not in self.graph.nodes:
                    dangling.append((node_id, neighbor_id))
        return dangling

    def find_asymmetric_edges(self) -> List[EdgeId]:
        """Find edges whose reverse edge is missing.

        Edge multiplicity counts: if u lists v twice, v must list u twice.

        Returns:
            List of (node_id, neighbor_id) pairs without a matching reverse edge
        """
        counts: Counter = Counter()
        for node_id, neighbor_ids in self.graph.adjacency_ids.items():
            for neighbor_id in neighbor_ids:
                counts[(node_id, neighbor_id)] += 1

        asymmetric = []
        for (node_u, node_v), count in counts.items():
            if counts[(node_v, node_u)] != count:
                asymmetric.append((node_u, node_v))
        return asymmetric

    def is_connected(self, node_u: int, node_v: int) -> bool:
        """Check if two nodes are connected via any path.

        Uses BFS to determine reachability.

        Args:
            node_u: Start node
            node_v: Target node

        Returns:
            True if there exists a path from node_u to node_v
        """
        if node_u not in self.graph.nodes or node_v not in self.graph.nodes:
            return False

        return self._bfs_path_length(node_u, node_v) >= 0

    def count_components(self) -> int:
        """Count connected components.

        Returns:
            Number of components (0 for an empty graph)
        """
        seen: Set[int] = set()
        components = 0

        for start in self.graph.nodes:
            if start in seen:
                continue

            components += 1
            queue: deque = deque([start])
            seen.add(start)
            while queue:
                current = queue.popleft()
                for neighbor in self.graph.get_neighbors(current):
                    if neighbor not in seen:
                        seen.add(neighbor)
                        queue.append(neighbor)

        return components

    def compute_average_path_length(
        self, sample_size: int = 100, rng: Optional[np.random.Generator] = None
    ) -> float:
        """Compute average shortest path length between random node pairs.

        This is a graph health metric - shorter average path length indicates
        better small-world properties.

        Args:
            sample_size: Number of random node pairs to sample
            rng: Random generator for sampling pairs

        Returns:
            Average path length, or -1.0 if no connected pair was sampled
        """
        size = self.graph.size()
        if size < 2:
            return -1.0

        if rng is None:
            rng = np.random.default_rng()

        total_length = 0
        count = 0

        for _ in range(sample_size):
            node_u = int(rng.integers(size))
            node_v = int(rng.integers(size))

            if node_u == node_v:
                continue

            path_length = self._bfs_path_length(node_u, node_v)
            if path_length > 0:
                total_length += path_length
                count += 1

        return total_length / count if count > 0 else -1.0

    def _bfs_path_length(self, start: int, target: int) -> int:
        """Compute shortest path length between two nodes using BFS.

        Returns:
            Path length, or -1 if no path exists
        """
        if start == target:
            return 0

        visited: Set[int] = {start}
        queue: deque = deque([(start, 0)])  # (node, distance)

        while queue:
            current, distance = queue.popleft()

            for neighbor in self.graph.get_neighbors(current):
                if neighbor == target:
                    return distance + 1
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append((neighbor, distance + 1))

        return -1

    def validate(self) -> List[str]:
        """Run the structural checks.

        Returns:
            Human-readable problems; empty when the graph is valid
        """
        problems = []

        for node_id, neighbor_id in self.find_dangling_edges():
            problems.append(f"edge {node_id} -> {neighbor_id} references a missing node")

        for node_id, neighbor_id in self.find_asymmetric_edges():
            problems.append(f"edge {node_id} -> {neighbor_id} has no matching reverse edge")

        expected_ids = set(range(self.graph.size()))
        if set(self.graph.nodes) != expected_ids:
            problems.append("stored node ids are not exactly 0..size-1")

        return problems

    def get_graph_statistics(self) -> Dict[str, float]:
        """Compute overall graph statistics.

        Returns:
            Dictionary with graph metrics (node_count, avg_degree, etc.)
        """
        if self.graph.size() == 0:
            return {
                "node_count": 0,
                "edge_count": 0,
                "avg_degree": 0.0,
                "min_node_degree": 0,
                "max_node_degree": 0,
                "components": 0,
            }

        degrees = [len(self.graph.get_neighbors(node)) for node in self.graph.nodes]
        total_edges = sum(degrees) // 2  # Each edge counted twice

        return {
            "node_count": len(degrees),
            "edge_count": total_edges,
            "avg_degree": sum(degrees) / len(degrees),
            "min_node_degree": min(degrees),
            "max_node_degree": max(degrees),
            "components": self.count_components(),
        }
