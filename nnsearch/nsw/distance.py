"""
Distance metrics for vector comparisons.

This module provides functions to measure how different two vectors are, and
small metric classes that wrap them so an index can hold one metric for its
whole lifetime. The NSW engine never looks inside a metric: it only needs
compute(a, b) to be symmetric, non-negative and zero for identical vectors.

Available metrics:
- euclidean: straight-line (L2) distance, the default
- hamming: number of differing bits (non-zero values count as 1)
- cosine: 1 - cosine similarity, useful for text embeddings
"""

from typing import Dict, Type, Union
import numpy as np
import numpy.typing as npt

from nnsearch.exceptions import DimensionMismatchError, InvalidInputError

Vector = npt.NDArray[np.float32]


def check_same_length(v1: Vector, v2: Vector) -> None:
    """
    Raise DimensionMismatchError unless both vectors have the same length.

    Args:
        v1: First vector
        v2: Second vector
    """
    if len(v1) != len(v2):
        raise DimensionMismatchError(len(v1), len(v2))


def euclidean_distance(v1: Vector, v2: Vector) -> float:
    """
    Compute the Euclidean (L2) distance between two vectors.

    Args:
        v1: First vector (1D numpy array)
        v2: Second vector (1D numpy array)

    Returns:
        Distance >= 0 (0 means identical)

    Example:
        >>> euclidean_distance(np.array([0.1, 0.2]), np.array([0.3, 0.4]))
        0.28284...
    """
    check_same_length(v1, v2)
    diff = np.asarray(v1, dtype=np.float64) - np.asarray(v2, dtype=np.float64)
    return float(np.sqrt(np.dot(diff, diff)))


def hamming_distance(v1: Vector, v2: Vector) -> float:
    """
    Count the positions where two bit vectors differ.

    Values are read as bits: zero is 0, anything else is 1.

    Args:
        v1: First bit vector
        v2: Second bit vector

    Returns:
        Number of differing positions, as a float
    """
    check_same_length(v1, v2)
    bits1 = np.asarray(v1) != 0
    bits2 = np.asarray(v2) != 0
    return float(np.count_nonzero(bits1 != bits2))


def cosine_similarity(v1: Vector, v2: Vector) -> float:
    """
    Compute cosine similarity between two vectors.

    Cosine similarity measures the cosine of the angle between two vectors.
    It ranges from -1 (opposite directions) to 1 (same direction).

    Args:
        v1: First vector (1D numpy array)
        v2: Second vector (1D numpy array)

    Returns:
        Similarity score between -1 and 1 (higher means more similar)
    """
    check_same_length(v1, v2)
    dot_product = np.dot(v1, v2)

    norm_v1 = np.linalg.norm(v1)
    norm_v2 = np.linalg.norm(v2)

    # Zero vectors have no direction
    if norm_v1 == 0.0 or norm_v2 == 0.0:
        return 0.0

    return float(dot_product / (norm_v1 * norm_v2))


def cosine_distance(v1: Vector, v2: Vector) -> float:
    """
    Compute cosine distance (1 - cosine_similarity).

    Ranges from 0 (same direction) to 2 (opposite directions). Rounding can
    produce tiny negative values for identical vectors, so the result is
    clipped at 0.
    """
    return max(0.0, 1.0 - cosine_similarity(v1, v2))


class DistanceMetric:
    """
    A pairwise distance chosen once when an index is created.

    Subclasses implement compute(). Instances are also callable, so a metric
    can be passed anywhere a plain distance function is expected.
    """

    name = "base"

    def compute(self, v1: Vector, v2: Vector) -> float:
        raise NotImplementedError

    def __call__(self, v1: Vector, v2: Vector) -> float:
        return self.compute(v1, v2)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class EuclideanDistance(DistanceMetric):
    name = "euclidean"

    def compute(self, v1: Vector, v2: Vector) -> float:
        return euclidean_distance(v1, v2)


class HammingDistance(DistanceMetric):
    name = "hamming"

    def compute(self, v1: Vector, v2: Vector) -> float:
        return hamming_distance(v1, v2)


class CosineDistance(DistanceMetric):
    name = "cosine"

    def compute(self, v1: Vector, v2: Vector) -> float:
        return cosine_distance(v1, v2)


METRICS: Dict[str, Type[DistanceMetric]] = {
    EuclideanDistance.name: EuclideanDistance,
    HammingDistance.name: HammingDistance,
    CosineDistance.name: CosineDistance,
}


def get_metric(metric: Union[str, DistanceMetric]) -> DistanceMetric:
    """
    Resolve a metric name (or pass through a metric instance).

    Args:
        metric: "euclidean", "hamming", "cosine" (any case) or a DistanceMetric

    Returns:
        A DistanceMetric instance

    Raises:
        InvalidInputError: If the name is not a known metric
    """
    if isinstance(metric, DistanceMetric):
        return metric

    metric_cls = METRICS.get(str(metric).lower())
    if metric_cls is None:
        raise InvalidInputError(
            f"Unknown metric '{metric}' (expected one of {sorted(METRICS)})"
        )
    return metric_cls()
