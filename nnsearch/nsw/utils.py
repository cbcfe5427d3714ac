"""
Utility functions shared by the NSW engine and the brute-force index.

- Vector conversion: turn client input into 1D float32 arrays
- Ranking: order ids by (distance, id) so equal distances stay deterministic
- Data generation: random matrices for tests, examples and benchmarks
"""

from typing import List, Optional, Sequence, Tuple
import numpy as np
import numpy.typing as npt

from nnsearch.exceptions import InvalidInputError

Vector = npt.NDArray[np.float32]


def as_vector(values: Sequence[float]) -> Vector:
    """
    Convert a sequence of numbers into a 1D float32 numpy array.

    Args:
        values: List, tuple or numpy array of numbers

    Returns:
        1D float32 array (a new array, the input is never aliased)

    Raises:
        InvalidInputError: If the input is not one-dimensional
    """
    vector = np.array(values, dtype=np.float32)
    if vector.ndim != 1:
        raise InvalidInputError(
            f"Expected a 1D vector, got an array with shape {vector.shape}"
        )
    return vector


def rank_by_distance(
    ids: Sequence[int], distances: Sequence[float], k: Optional[int] = None
) -> List[Tuple[int, float]]:
    """
    Order ids by ascending distance, breaking ties by id.

    Args:
        ids: Node IDs
        distances: Distances parallel to ids (lower = closer)
        k: Keep only the first k entries (None keeps all)

    Returns:
        List of (node_id, distance) tuples, closest first

    Example:
        >>> rank_by_distance([10, 20, 30, 40], [0.5, 0.2, 0.8, 0.2], k=2)
        [(20, 0.2), (40, 0.2)]
    """
    if len(ids) == 0:
        return []

    ranked = sorted(zip(distances, ids))
    if k is not None:
        ranked = ranked[:k]

    return [(int(node_id), float(dist)) for dist, node_id in ranked]


def generate_matrix(
    num: int, dim: int, rng: Optional[np.random.Generator] = None
) -> npt.NDArray[np.float32]:
    """
    Generate a (num, dim) matrix of uniform [0, 1) float32 values.

    Args:
        num: Number of rows (vectors)
        dim: Number of columns (dimensionality)
        rng: Random generator (a fresh unseeded one if not given)

    Returns:
        Array of shape (num, dim)
    """
    if rng is None:
        rng = np.random.default_rng()
    return rng.random((num, dim), dtype=np.float32)
