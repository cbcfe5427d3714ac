"""Configuration for NSW indexes.

Usage:
    from nnsearch import NSWIndex, NSWConfig

    # Default config
    index = NSWIndex(dimension=128)

    # Custom config
    config = NSWConfig(trial=5, min_degree=8, seed=42)
    index = NSWIndex.from_config(dimension=128, config=config)

    # From file
    config = NSWConfig.from_json("my_config.json")
    index = NSWIndex.from_config(dimension=128, config=config)
"""

from typing import Dict, Any, Optional
import json
from dataclasses import dataclass, asdict

from nnsearch.exceptions import InvalidInputError
from nnsearch.nsw.distance import METRICS


@dataclass
class NSWConfig:
    """Configuration for an NSW index.

    Hyperparameters:
        trial: Random restarts per search (higher = better recall, slower)
        min_degree: Neighbors wired to each inserted vector
        metric: Distance metric name ("euclidean", "hamming" or "cosine")
        seed: Seed for entry-point selection (None = fresh entropy)
    """

    trial: int = 3
    min_degree: int = 4
    metric: str = "euclidean"
    seed: Optional[int] = None

    # Metadata
    config_name: str = "default"

    def __post_init__(self):
        """Validate configuration."""
        if self.trial < 1:
            raise InvalidInputError("trial must be >= 1")

        if self.min_degree < 1:
            raise InvalidInputError("min_degree must be >= 1")

        self.metric = str(self.metric).lower()
        if self.metric not in METRICS:
            raise InvalidInputError(f"metric must be one of {sorted(METRICS)}")

        if self.seed is not None and self.seed < 0:
            raise InvalidInputError("seed must be non-negative")

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def to_json(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'NSWConfig':
        """Load configuration from dictionary."""
        return cls(**config_dict)

    @classmethod
    def from_json(cls, filepath: str) -> 'NSWConfig':
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            config_dict = json.load(f)
        return cls.from_dict(config_dict)

    def __repr__(self) -> str:
        return (
            f"NSWConfig("
            f"{self.config_name}, "
            f"metric={self.metric}, "
            f"trial={self.trial}, "
            f"min_degree={self.min_degree})"
        )


# Preset configurations

def get_default_config() -> NSWConfig:
    """Default configuration (recommended)."""
    return NSWConfig(config_name="default")


def get_high_recall_config() -> NSWConfig:
    """More restarts and denser wiring.

    Slower to build and query, noticeably better recall on clustered data.
    """
    return NSWConfig(
        config_name="high_recall",
        trial=8,
        min_degree=12,
    )
