"""
Metrics for evaluating NSW search quality.

This module provides functions to:
- Compute exact ground truth via brute force search
- Compute recall@k (fraction of ground truth neighbors retrieved)
- Compute reciprocal rank of the first correct neighbor
"""

from typing import List, Tuple, Union
import numpy as np

from nnsearch.nsw.distance import DistanceMetric, get_metric
from nnsearch.nsw.utils import rank_by_distance


def compute_recall_at_k(
    retrieved_ids: List[int],
    ground_truth_ids: List[int],
    k: int = 10
) -> float:
    """
    Compute recall@k: fraction of ground truth neighbors retrieved.

    Args:
        retrieved_ids: IDs returned by search (ordered by relevance)
        ground_truth_ids: True k-nearest neighbor IDs
        k: Number of neighbors to consider

    Returns:
        Recall@k value between 0.0 (no correct neighbors) and 1.0 (all correct)

    Example:
        >>> retrieved = [1, 2, 3, 99, 98]
        >>> ground_truth = [1, 2, 3, 4, 5]
        >>> compute_recall_at_k(retrieved, ground_truth, k=5)
        0.6  # Found 3 out of 5 correct neighbors
    """
    retrieved_set = set(retrieved_ids[:k])
    ground_truth_set = set(ground_truth_ids[:k])

    correct_retrievals = len(retrieved_set & ground_truth_set)

    return correct_retrievals / k if k > 0 else 0.0


def compute_ground_truth_brute_force(
    query_vector: np.ndarray,
    all_vectors: np.ndarray,
    k: int = 10,
    metric: Union[str, DistanceMetric] = "euclidean",
) -> Tuple[List[int], List[float]]:
    """
    Compute exact k-NN via brute force (slow but exact).

    Ties are broken by row index, matching the order the indexes use.

    Args:
        query_vector: Query vector (1D array, shape: [dim])
        all_vectors: All database vectors (2D array, shape: [n_vectors, dim])
        k: Number of neighbors to find
        metric: Distance metric name or instance

    Returns:
        Tuple of (neighbor_ids, distances), both sorted by distance ascending

    Complexity:
        O(n * dim) where n = number of vectors
    """
    distance = get_metric(metric)
    distances = [distance.compute(query_vector, vector) for vector in all_vectors]
    ranked = rank_by_distance(list(range(len(distances))), distances, k=k)

    return [node_id for node_id, _ in ranked], [dist for _, dist in ranked]


def compute_mean_reciprocal_rank(
    retrieved_ids: List[int],
    ground_truth_ids: List[int]
) -> float:
    """
    Compute the reciprocal rank of the first correct result for one query.

    Args:
        retrieved_ids: IDs returned by search (ordered)
        ground_truth_ids: True k-nearest neighbor IDs

    Returns:
        1/rank of first correct result, or 0 if none found

    Example:
        >>> compute_mean_reciprocal_rank([99, 98, 1, 2], [1, 2, 3, 4])
        0.333...  # 1/3
    """
    ground_truth_set = set(ground_truth_ids)

    for rank, retrieved_id in enumerate(retrieved_ids, start=1):
        if retrieved_id in ground_truth_set:
            return 1.0 / rank

    return 0.0
