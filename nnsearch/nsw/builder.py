"""
NSW graph construction and insertion logic.

This module handles adding new vectors to the NSW graph. The insertion
algorithm:
1. Validates the vector against the graph dimension (nothing changes on error)
2. Finds the min_degree approximate nearest neighbors among the nodes
   already stored, using the same greedy search that answers queries
3. Stores the new node with id = current graph size
4. Connects the new node to each neighbor in both directions

Early nodes are connected to everything that exists (the search falls back to
an exhaustive scan while the graph has at most min_degree nodes); later nodes
link to their approximate neighborhood, which gives the graph its mix of
short-range and long-range edges.
"""

import logging
import numpy as np
import numpy.typing as npt

from nnsearch.exceptions import InvalidInputError
from nnsearch.nsw.graph import NSWGraph
from nnsearch.nsw.searcher import NSWSearcher

Vector = npt.NDArray[np.float32]

logger = logging.getLogger(__name__)


class NSWBuilder:
    """
    Handles insertion of nodes into the NSW graph.
    """

    def __init__(self, graph: NSWGraph, searcher: NSWSearcher, min_degree: int = 4) -> None:
        """
        Initialize builder with a graph to operate on.

        Args:
            graph: The NSWGraph to insert nodes into
            searcher: Searcher over the same graph, used to find neighbors
            min_degree: Number of neighbors wired to each new node
        """
        if min_degree < 1:
            raise InvalidInputError(f"min_degree must be >= 1, got {min_degree}")
        if searcher.graph is not graph:
            raise InvalidInputError("searcher must operate on the same graph")

        self.graph = graph
        self.searcher = searcher
        self.min_degree = min_degree

    def insert(self, vector: Vector) -> int:
        """
        Insert a new vector into the graph.

        Args:
            vector: Vector data for the new node

        Returns:
            The ID assigned to the new node

        Raises:
            DimensionMismatchError: If the vector doesn't match the graph
        """
        vector = np.asarray(vector, dtype=np.float32)
        self.graph.check_dimension(vector)

        # Special case: first node has no one to connect to
        if self.graph.size() == 0:
            return self.graph.add_node(vector)

        # The new node isn't stored yet, so it can't find itself
        neighbors = self.searcher.search(vector, self.min_degree).ids

        node_id = self.graph.add_node(vector)
        for neighbor_id in neighbors:
            self.graph.add_edge(node_id, neighbor_id)

        logger.debug("Inserted node %d with %d neighbors", node_id, len(neighbors))
        return node_id
