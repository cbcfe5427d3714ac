"""Quick start guide for nnsearch.

This example shows the minimal code needed to:
1. Build an NSW index from random vectors
2. Search it for approximate nearest neighbors
3. Compare the results against exact brute-force search
"""

import numpy as np

from nnsearch import NSWIndex, NaiveKnnIndex
from nnsearch.metrics import compute_recall_at_k
from nnsearch.nsw.utils import generate_matrix


def main():
    print("=" * 60)
    print("nnsearch Quick Start")
    print("=" * 60)

    # Step 1: Create synthetic dataset
    print("\n1. Creating dataset...")
    rng = np.random.default_rng(42)
    vectors = generate_matrix(1000, 32, rng=rng)
    print(f"   Created {len(vectors)} vectors of dimension {vectors.shape[1]}")

    # Step 2: Build NSW index (and an exact baseline)
    print("\n2. Building NSW index...")
    index = NSWIndex(dimension=32, trial=5, min_degree=8, seed=42)
    index.add_batch(vectors)

    baseline = NaiveKnnIndex(dimension=32)
    baseline.add_batch(vectors)

    stats = index.get_statistics()
    print(f"   Indexed {stats['total_vectors']} vectors")
    print(f"   Average degree: {stats['avg_degree']:.1f}, components: {stats['components']}")

    # Step 3: Query and measure recall
    print("\n3. Searching...")
    queries = generate_matrix(50, 32, rng=rng)
    recalls = []
    for query in queries:
        approx = index.search(query, k=10)
        exact = baseline.search(query, k=10)
        recalls.append(compute_recall_at_k(approx.ids, exact.ids, k=10))

    print(f"   Mean recall@10 over {len(queries)} queries: {np.mean(recalls):.3f}")

    result = index.search(queries[0], k=5)
    print("\n   Top 5 for the first query:")
    for node_id, distance in result.items():
        print(f"     id={node_id:4d}  distance={distance:.4f}")


if __name__ == "__main__":
    main()
