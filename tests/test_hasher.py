"""
Tests for the LSH projectors.

These check output shapes, reproducibility for a fixed seed, input validation,
and that MinHash signatures estimate Jaccard similarity.
"""

import numpy as np
import pytest
from nnsearch.exceptions import DimensionMismatchError, InvalidInputError
from nnsearch.hasher import MinHash, RandomProjection, estimate_jaccard


def test_random_projection_output_length():
    """Projecting a 5D vector to 3D gives 3 values"""
    projection = RandomProjection(5, 3)

    hashed = projection.to_hash([1.0, 2.0, 3.0, 4.0, 5.0])

    assert hashed.shape == (3,)


def test_random_projection_is_reproducible():
    """Same seed, same projection matrix"""
    v = [0.5, -1.0, 2.0, 0.0]

    assert np.allclose(RandomProjection(4, 2).to_hash(v), RandomProjection(4, 2).to_hash(v))
    assert not np.allclose(
        RandomProjection(4, 2, seed=1).rand_mat, RandomProjection(4, 2, seed=2).rand_mat
    )


def test_random_projection_is_linear():
    """Projection of a sum is the sum of projections"""
    projection = RandomProjection(3, 2)
    a = np.array([1.0, 0.0, 2.0])
    b = np.array([0.5, 1.0, -1.0])

    assert np.allclose(
        projection.to_hash(a + b), projection.to_hash(a) + projection.to_hash(b), atol=1e-5
    )


def test_random_projection_dimension_mismatch():
    """Input must have src_dim values"""
    with pytest.raises(DimensionMismatchError):
        RandomProjection(5, 3).to_hash([1.0, 2.0])


def test_minhash_output_length():
    """Signature length equals the number of hash functions"""
    minhash = MinHash(k=3, dim=5)

    signature = minhash.to_hash([1, 2, 4])

    assert len(signature) == 3
    assert all(1 <= value <= 5 for value in signature)


def test_minhash_empty_set():
    """An empty set hashes to dim everywhere"""
    minhash = MinHash(k=4, dim=6)

    assert list(minhash.to_hash([])) == [6, 6, 6, 6]


def test_minhash_identical_sets_match():
    """Order and repetition don't matter"""
    minhash = MinHash(k=16, dim=10)

    assert list(minhash.to_hash([1, 5, 7])) == list(minhash.to_hash([7, 1, 5, 5]))
    assert estimate_jaccard(minhash.to_hash([1, 5, 7]), minhash.to_hash([7, 1, 5])) == 1.0


def test_minhash_item_out_of_range():
    """Items must index into the universe"""
    with pytest.raises(InvalidInputError):
        MinHash(k=2, dim=5).to_hash([5])


def test_minhash_estimates_jaccard():
    """{1, 2, 4} and {1, 3} have Jaccard 1/4"""
    minhash = MinHash(k=3000, dim=5)

    estimate = estimate_jaccard(minhash.to_hash([1, 2, 4]), minhash.to_hash([1, 3]))

    assert abs(estimate - 0.25) < 0.05


def test_estimate_jaccard_length_mismatch():
    """Signatures must have the same length"""
    with pytest.raises(DimensionMismatchError):
        estimate_jaccard([1, 2], [1])
