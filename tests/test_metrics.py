"""
Unit tests for metrics module.

Tests recall@k, reciprocal rank and ground truth functions.
"""

import numpy as np
from nnsearch.metrics import (
    compute_ground_truth_brute_force,
    compute_mean_reciprocal_rank,
    compute_recall_at_k,
)


class TestRecallAtK:
    """Tests for recall@k computation."""

    def test_perfect_recall(self):
        """Perfect retrieval should give recall=1.0"""
        assert compute_recall_at_k([1, 2, 3, 4, 5], [1, 2, 3, 4, 5], k=5) == 1.0

    def test_partial_recall(self):
        """3/5 correct should give recall=0.6"""
        assert compute_recall_at_k([1, 2, 3, 99, 98], [1, 2, 3, 4, 5], k=5) == 0.6

    def test_zero_recall(self):
        """No correct retrievals should give recall=0.0"""
        assert compute_recall_at_k([9, 8], [1, 2], k=2) == 0.0

    def test_short_retrieval_counts_against_recall(self):
        """A partial result can't reach full recall"""
        assert compute_recall_at_k([1], [1, 2], k=2) == 0.5


class TestGroundTruth:
    """Tests for brute force ground truth."""

    def test_basic_ground_truth(self):
        """Closest rows come first"""
        query = np.array([1.0, 0.0, 0.0])
        database = np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.9, 0.1, 0.0]])

        ids, dists = compute_ground_truth_brute_force(query, database, k=2)

        assert ids == [0, 2]
        assert dists[0] == 0.0
        assert dists == sorted(dists)

    def test_k_larger_than_database(self):
        """All rows come back when k exceeds the database size"""
        database = np.eye(3)

        ids, _ = compute_ground_truth_brute_force(np.zeros(3), database, k=10)

        assert ids == [0, 1, 2]

    def test_hamming_metric(self):
        """Ground truth honours the requested metric"""
        database = np.array([[0, 0, 0], [1, 1, 0], [1, 0, 0]])

        ids, dists = compute_ground_truth_brute_force(
            np.array([1, 1, 1]), database, k=3, metric="hamming"
        )

        assert ids == [1, 2, 0]
        assert dists == [1.0, 2.0, 3.0]


class TestReciprocalRank:
    """Tests for reciprocal rank."""

    def test_first_position(self):
        """Correct first result gives 1.0"""
        assert compute_mean_reciprocal_rank([1, 9], [1]) == 1.0

    def test_third_position(self):
        """First correct at rank 3 gives 1/3"""
        assert np.isclose(compute_mean_reciprocal_rank([99, 98, 1, 2], [1, 2, 3, 4]), 1 / 3)

    def test_no_match(self):
        """No correct result gives 0.0"""
        assert compute_mean_reciprocal_rank([7, 8], [1, 2]) == 0.0
