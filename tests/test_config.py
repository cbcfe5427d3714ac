"""Tests for NSWConfig validation, presets and JSON round trips."""

import pytest
from nnsearch.config import NSWConfig, get_default_config, get_high_recall_config
from nnsearch.exceptions import InvalidInputError


def test_default_config():
    """Defaults match the documented values"""
    config = get_default_config()

    assert config.trial == 3
    assert config.min_degree == 4
    assert config.metric == "euclidean"
    assert config.seed is None
    assert config.config_name == "default"


def test_high_recall_config():
    """High recall preset uses more restarts and denser wiring"""
    default = get_default_config()
    config = get_high_recall_config()

    assert config.trial > default.trial
    assert config.min_degree > default.min_degree


@pytest.mark.parametrize(
    "kwargs",
    [
        {"trial": 0},
        {"min_degree": 0},
        {"metric": "manhattan"},
        {"seed": -1},
    ],
)
def test_invalid_values_rejected(kwargs):
    """Out-of-range values raise InvalidInputError"""
    with pytest.raises(InvalidInputError):
        NSWConfig(**kwargs)


def test_metric_name_normalized():
    """Metric names are stored lower-case"""
    assert NSWConfig(metric="Hamming").metric == "hamming"


def test_json_round_trip(tmp_path):
    """Saving and loading a config preserves every field"""
    config = NSWConfig(trial=5, min_degree=8, metric="cosine", seed=3, config_name="tuned")
    path = tmp_path / "config.json"

    config.to_json(str(path))
    loaded = NSWConfig.from_json(str(path))

    assert loaded == config


def test_from_dict_validates():
    """from_dict goes through the same validation"""
    with pytest.raises(InvalidInputError):
        NSWConfig.from_dict({"trial": -2})


def test_repr_mentions_parameters():
    """repr shows the name and main parameters"""
    text = repr(NSWConfig(trial=2, min_degree=6))

    assert "trial=2" in text
    assert "min_degree=6" in text
