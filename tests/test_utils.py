"""
Tests for NSW utility functions.

These tests verify helper functions used by the engine and indexes:
- Vector conversion
- Ranking by (distance, id)
- Random matrix generation
"""

import numpy as np
import pytest
from nnsearch.exceptions import InvalidInputError
from nnsearch.nsw.utils import as_vector, generate_matrix, rank_by_distance


def test_as_vector_converts_lists():
    """Lists become 1D float32 arrays"""
    vector = as_vector([1, 2, 3])

    assert vector.dtype == np.float32
    assert vector.shape == (3,)


def test_as_vector_copies():
    """The input array is never aliased"""
    source = np.array([1.0, 2.0], dtype=np.float32)
    vector = as_vector(source)

    source[0] = 5.0
    assert vector[0] == 1.0


def test_as_vector_rejects_matrices():
    """2D input is not a vector"""
    with pytest.raises(InvalidInputError):
        as_vector([[1.0, 2.0], [3.0, 4.0]])


def test_rank_by_distance():
    """Closest first, ties broken by id"""
    ranked = rank_by_distance([10, 20, 30, 40], [0.5, 0.2, 0.8, 0.2], k=2)

    assert ranked == [(20, 0.2), (40, 0.2)]


def test_rank_by_distance_keeps_all_without_k():
    """Without k every id is returned"""
    ranked = rank_by_distance([3, 1, 2], [0.3, 0.1, 0.2])

    assert [node_id for node_id, _ in ranked] == [1, 2, 3]


def test_rank_by_distance_no_candidates():
    """No candidates -> empty ranking"""
    assert rank_by_distance([], [], k=3) == []


def test_generate_matrix():
    """Shape, dtype and value range"""
    matrix = generate_matrix(5, 10, rng=np.random.default_rng(0))

    assert matrix.shape == (5, 10)
    assert matrix.dtype == np.float32
    assert np.all((matrix >= 0.0) & (matrix < 1.0))


def test_generate_matrix_reproducible():
    """Same seed, same matrix"""
    a = generate_matrix(4, 3, rng=np.random.default_rng(1))
    b = generate_matrix(4, 3, rng=np.random.default_rng(1))

    assert np.array_equal(a, b)
