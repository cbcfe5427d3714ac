"""Tests for the command-line front end."""

import json

import numpy as np
import pytest
from nnsearch.cli import build_parser, load_matrix, main


@pytest.fixture
def vector_file(tmp_path, collinear_vectors):
    path = tmp_path / "vectors.npy"
    np.save(path, np.array(collinear_vectors, dtype=np.float32))
    return str(path)


def test_load_matrix_text(tmp_path):
    """Whitespace-delimited text loads as a 2D float32 matrix"""
    path = tmp_path / "vectors.txt"
    path.write_text("0.1 0.2\n0.3 0.4\n")

    matrix = load_matrix(str(path))

    assert matrix.shape == (2, 2)
    assert matrix.dtype == np.float32


def test_load_matrix_single_row(tmp_path):
    """A single text row is still a matrix"""
    path = tmp_path / "query.txt"
    path.write_text("0.1 0.1\n")

    assert load_matrix(str(path)).shape == (1, 2)


def test_index_command_prints_statistics(vector_file, capsys):
    """index prints graph statistics as JSON"""
    assert main(["index", vector_file, "--seed", "0"]) == 0

    stats = json.loads(capsys.readouterr().out)
    assert stats["total_vectors"] == 6
    assert stats["dimension"] == 2
    assert stats["components"] == 1


def test_search_command(vector_file, tmp_path, capsys):
    """search prints one JSON line per query"""
    query_path = tmp_path / "queries.txt"
    query_path.write_text("0.1 0.1\n0.1 0.8\n")

    assert main(["search", vector_file, str(query_path), "-k", "2", "--seed", "0"]) == 0

    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert [line["query"] for line in lines] == [0, 1]
    assert lines[0]["ids"] == [0, 1]
    assert lines[1]["ids"] == [5, 4]
    assert not lines[0]["partial"]


def test_search_command_dimension_mismatch(vector_file, tmp_path, capsys):
    """A query of the wrong length is an error, not a crash"""
    query_path = tmp_path / "queries.txt"
    query_path.write_text("0.1 0.1 0.1\n")

    assert main(["search", vector_file, str(query_path)]) == 1
    assert "Inconsistent length" in capsys.readouterr().err


def test_missing_input_file(tmp_path, capsys):
    """Missing files are reported on stderr"""
    assert main(["index", str(tmp_path / "missing.npy")]) == 1
    assert "error" in capsys.readouterr().err


def test_parser_defaults():
    """Index options default to the config defaults"""
    args = build_parser().parse_args(["search", "a.npy", "b.npy"])

    assert args.k == 10
    assert args.trial == 3
    assert args.min_degree == 4
    assert args.metric == "euclidean"
