"""
Configuration dataclasses for diagram comparison.
"""

import json
from dataclasses import asdict, dataclass
from typing import Any

import numpy as np


def _convert_to_native(obj: Any) -> Any:
    """Convert numpy types to native Python types for JSON serialization."""
    if isinstance(obj, dict):
        return {k: _convert_to_native(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_convert_to_native(v) for v in obj]
    elif isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    else:
        return obj


@dataclass
class BottleneckConfig:
    """
    Bottleneck distance configuration.

    Parameters
    ----------
    e : float
        Tolerance. 0 for the exact distance.
    dimension : int
        Homology dimension read from interval files. -1 reads all.
    infinite_bar_substitute : float
        Death value given to infinite intervals. -1 drops them.

    Example
    -------
    >>> config = BottleneckConfig(e=0.01, dimension=1)
    >>> config.save("bottleneck.json")
    """

    e: float = 0.0
    dimension: int = -1
    infinite_bar_substitute: float = -1.0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return _convert_to_native(asdict(self))

    def save(self, path: str) -> None:
        """Save configuration to JSON file."""
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> "BottleneckConfig":
        """Load configuration from JSON file."""
        with open(path) as f:
            d = json.load(f)

        config = cls()
        for k, v in d.items():
            if not hasattr(config, k):
                raise KeyError(f"Unknown configuration key: '{k}'")
            setattr(config, k, v)
        return config
