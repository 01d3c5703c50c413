"""Configuration dataclasses and presets."""

from bottleneckpy.config.dataclasses import BottleneckConfig
from bottleneckpy.config.presets import Presets

__all__ = [
    "BottleneckConfig",
    "Presets",
]
