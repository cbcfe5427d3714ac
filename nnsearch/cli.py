"""Command-line front end.

Usage:
    nnsearch index vectors.npy --min-degree 8
    nnsearch search vectors.npy queries.txt -k 5 --seed 42

Vectors are read from a .npy file or a whitespace-delimited text file (one
vector per row). Nothing is written to disk: `index` builds the graph and
prints its statistics, `search` builds the graph and prints one JSON line per
query row.
"""

from typing import List, Optional
import argparse
import json
import logging
import sys
import numpy as np

from nnsearch import __version__
from nnsearch.config import NSWConfig
from nnsearch.index import NSWIndex

logger = logging.getLogger(__name__)


def load_matrix(path: str) -> np.ndarray:
    """Load a 2D float32 matrix from a .npy or text file."""
    if path.endswith(".npy"):
        matrix = np.load(path)
    else:
        matrix = np.loadtxt(path, ndmin=2)

    matrix = np.asarray(matrix, dtype=np.float32)
    if matrix.ndim == 1:
        matrix = matrix.reshape(1, -1)
    if matrix.ndim != 2:
        raise ValueError(f"{path}: expected a 2D matrix, got shape {matrix.shape}")
    return matrix


def build_index(vectors: np.ndarray, args: argparse.Namespace) -> NSWIndex:
    config = NSWConfig(
        trial=args.trial,
        min_degree=args.min_degree,
        metric=args.metric,
        seed=args.seed,
        config_name="cli",
    )
    index = NSWIndex.from_config(dimension=vectors.shape[1], config=config)
    index.add_batch(vectors)
    return index


def run_index(args: argparse.Namespace) -> int:
    vectors = load_matrix(args.input)
    index = build_index(vectors, args)
    print(json.dumps(index.get_statistics(), indent=2))
    return 0


def run_search(args: argparse.Namespace) -> int:
    vectors = load_matrix(args.input)
    queries = load_matrix(args.query)
    index = build_index(vectors, args)

    for row, query in enumerate(queries):
        result = index.search(query, k=args.k)
        print(json.dumps({
            "query": row,
            "ids": result.ids,
            "distances": result.distances,
            "partial": result.is_partial,
        }))
    return 0


def _add_index_options(parser: argparse.ArgumentParser) -> None:
    defaults = NSWConfig()
    parser.add_argument("--metric", default=defaults.metric,
                        help="distance metric: euclidean, hamming or cosine")
    parser.add_argument("--trial", type=int, default=defaults.trial,
                        help="random restarts per search")
    parser.add_argument("--min-degree", type=int, default=defaults.min_degree,
                        help="neighbors wired to each inserted vector")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for entry-point selection")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nnsearch", description="Nearest neighbor search on a navigable small-world graph"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    index_parser = subparsers.add_parser("index", help="build an index and print graph statistics")
    index_parser.add_argument("input", help="path to input vector file")
    _add_index_options(index_parser)
    index_parser.set_defaults(func=run_index)

    search_parser = subparsers.add_parser("search", help="build an index and answer queries")
    search_parser.add_argument("input", help="path to input vector file")
    search_parser.add_argument("query", help="path to query vector file")
    search_parser.add_argument("-k", type=int, default=10, help="neighbors per query")
    _add_index_options(search_parser)
    search_parser.set_defaults(func=run_search)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except (OSError, ValueError) as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"nnsearch: error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
