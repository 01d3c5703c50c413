"""Threshold matching and bottleneck distance."""

from bottleneckpy.matching.bottleneck import (
    bottleneck_distance,
    bottleneck_distance_approx,
    bottleneck_distance_exact,
    compare_persistence_files,
)
from bottleneckpy.matching.graph_matching import GraphMatching

__all__ = [
    "GraphMatching",
    "bottleneck_distance",
    "bottleneck_distance_exact",
    "bottleneck_distance_approx",
    "compare_persistence_files",
]
