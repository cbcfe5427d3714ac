"""
Locality-sensitive hashing projectors.

These are independent of the NSW graph and serve hashing-based retrieval:
- RandomProjection: project dense vectors to a lower dimension with a
  Gaussian random matrix (approximately preserves Euclidean distances)
- MinHash: signatures for sets of item indices; the fraction of matching
  signature positions estimates the Jaccard similarity of two sets

Both default to seed 46 so the same parameters always produce the same hash
functions.
"""

from typing import Iterable, Sequence
import numpy as np
import numpy.typing as npt

from nnsearch.exceptions import DimensionMismatchError, InvalidInputError

DEFAULT_SEED = 46


class Hasher:
    """Base class: turn an input sequence into a fixed-length hash."""

    def to_hash(self, values: Sequence) -> np.ndarray:
        raise NotImplementedError


class RandomProjection(Hasher):
    """
    Gaussian random projection from src_dim to trg_dim dimensions.
    """

    def __init__(self, src_dim: int, trg_dim: int, seed: int = DEFAULT_SEED) -> None:
        """
        Args:
            src_dim: Dimensionality of input vectors
            trg_dim: Dimensionality of projected vectors
            seed: Seed for the projection matrix
        """
        if src_dim < 1 or trg_dim < 1:
            raise InvalidInputError("src_dim and trg_dim must be >= 1")

        self.src_dim = src_dim
        self.trg_dim = trg_dim
        rng = np.random.default_rng(seed)
        self.rand_mat = rng.standard_normal((src_dim, trg_dim)).astype(np.float32)

    def to_hash(self, values: Sequence[float]) -> npt.NDArray[np.float32]:
        """
        Project a vector.

        Args:
            values: Vector of length src_dim

        Returns:
            Projected vector of length trg_dim
        """
        vector = np.asarray(values, dtype=np.float32)
        if len(vector) != self.src_dim:
            raise DimensionMismatchError(self.src_dim, len(vector))
        return vector @ self.rand_mat


class MinHash(Hasher):
    """
    MinHash signatures over sets of item indices in [0, dim).

    Each of the k hash functions is a random permutation of 1..dim; the hash
    of a set is the smallest permuted value among its members.
    """

    def __init__(self, k: int, dim: int, seed: int = DEFAULT_SEED) -> None:
        """
        Args:
            k: Number of hash functions (signature length)
            dim: Size of the item universe
            seed: Seed for the permutations
        """
        if k < 1 or dim < 1:
            raise InvalidInputError("k and dim must be >= 1")

        self.k = k
        self.dim = dim
        rng = np.random.default_rng(seed)
        # Row i holds permutation i, shifted to 1..dim
        self.pi_mat = np.stack([rng.permutation(dim) + 1 for _ in range(k)])

    def to_hash(self, values: Iterable[int]) -> npt.NDArray[np.int64]:
        """
        Compute the signature of a set of item indices.

        Args:
            values: Item indices, each in [0, dim)

        Returns:
            Signature of length k (all entries are dim for an empty set)
        """
        members = np.zeros(self.dim, dtype=bool)
        for item in values:
            if not 0 <= item < self.dim:
                raise InvalidInputError(f"Item {item} is outside [0, {self.dim})")
            members[item] = True

        permuted = np.where(members, self.pi_mat, self.dim)
        return permuted.min(axis=1).astype(np.int64)


def estimate_jaccard(signature1: Sequence[int], signature2: Sequence[int]) -> float:
    """
    Estimate Jaccard similarity from two MinHash signatures.

    Returns:
        Fraction of positions where the signatures agree
    """
    if len(signature1) != len(signature2):
        raise DimensionMismatchError(len(signature1), len(signature2))
    if len(signature1) == 0:
        return 0.0
    return float(np.mean(np.asarray(signature1) == np.asarray(signature2)))
