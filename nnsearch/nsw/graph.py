"""
NSW graph data structures.

This module defines the storage behind the navigable small-world index:
- VectorNode: a stored vector and its id
- NSWGraph: all nodes plus the adjacency map (id -> neighbor ids)

The graph is flat (a single layer) and undirected: every edge is recorded
in both endpoints' adjacency lists. It is a pure container; deciding which
edges to add is the builder's job.
"""

from typing import Dict, List, Optional
import numpy as np
import numpy.typing as npt

from nnsearch.exceptions import DimensionMismatchError, InvalidInputError

Vector = npt.NDArray[np.float32]


class VectorNode:
    """
    A single stored vector.

    The vector is copied and marked read-only, so a node never changes
    after it has been added to the graph.
    """

    __slots__ = ("id", "vector")

    def __init__(self, node_id: int, vector: Vector) -> None:
        """
        Create a node.

        Args:
            node_id: Unique identifier for this node
            vector: The vector data (1D array, copied as float32)
        """
        self.id = node_id
        self.vector = np.array(vector, dtype=np.float32)
        self.vector.setflags(write=False)

    def __repr__(self) -> str:
        return f"VectorNode(id={self.id}, dim={len(self.vector)})"


class NSWGraph:
    """
    Container for the navigable small-world graph.

    Node ids are assigned sequentially from 0, so the stored ids are always
    exactly 0..size()-1. Nodes and edges are only ever added.
    """

    def __init__(self, dimension: int) -> None:
        """
        Initialize an empty graph.

        Args:
            dimension: Dimensionality of vectors to store
        """
        if dimension < 1:
            raise InvalidInputError(f"dimension must be >= 1, got {dimension}")

        self.dimension = dimension

        # Storage for all nodes
        self.nodes: Dict[int, VectorNode] = {}

        # Neighbor lists in insertion order: {node_id: [neighbor_id, ...]}
        self.adjacency_ids: Dict[int, List[int]] = {}

    def check_dimension(self, vector: Vector) -> None:
        """Raise DimensionMismatchError if the vector doesn't fit this graph."""
        if len(vector) != self.dimension:
            raise DimensionMismatchError(self.dimension, len(vector))

    def add_node(self, vector: Vector) -> int:
        """
        Store a new node (without connecting it).

        Args:
            vector: Vector data for the node

        Returns:
            The ID assigned to the new node (the graph size before the call)
        """
        self.check_dimension(vector)

        node_id = len(self.nodes)
        self.nodes[node_id] = VectorNode(node_id, vector)
        return node_id

    def get_node(self, node_id: int) -> Optional[VectorNode]:
        """
        Retrieve a node by its ID.

        Returns:
            The VectorNode, or None if not found
        """
        return self.nodes.get(node_id)

    def add_edge(self, node_id: int, neighbor_id: int) -> None:
        """
        Create a bidirectional connection between two stored nodes.

        The same edge may be added twice; neighbor lists are not deduplicated.

        Args:
            node_id: First node ID
            neighbor_id: Second node ID

        Raises:
            InvalidInputError: If either node is not stored
        """
        if node_id not in self.nodes or neighbor_id not in self.nodes:
            raise InvalidInputError(f"Node not found: {node_id} or {neighbor_id}")

        self.adjacency_ids.setdefault(node_id, []).append(neighbor_id)
        self.adjacency_ids.setdefault(neighbor_id, []).append(node_id)

    def get_neighbors(self, node_id: int) -> List[int]:
        """
        Get the neighbor IDs of a node (empty if it has no edges).
        """
        return self.adjacency_ids.get(node_id, [])

    def adjacency(self) -> Dict[int, List[int]]:
        """Return a copy of the adjacency map."""
        return {node_id: list(ids) for node_id, ids in self.adjacency_ids.items()}

    def size(self) -> int:
        """
        Get the total number of nodes in the graph.
        """
        return len(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        return f"NSWGraph(nodes={self.size()}, dim={self.dimension})"
