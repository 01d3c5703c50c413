"""
bottleneckpy - bottleneck distance between persistence diagrams

This package compares two persistence diagrams by searching the smallest
threshold at which their points can be perfectly matched. The innermost
queries go through a grid-bucketed planar neighbors finder that returns,
and removes, some registered point within the threshold of a query point.

Key Features:
- Planar neighbors finder with add/remove/contains/pull operations
- Persistence graph with diagonal projections
- Hopcroft-Karp style layered augmenting paths
- Exact and approximate bottleneck distance
- Persistence interval file reading

Example:
    >>> from bottleneckpy import bottleneck_distance
    >>> bottleneck_distance([(0.0, 2.0), (1.0, 3.0)], [(0.0, 2.2)])
    1.0
"""

__version__ = "0.1.0"

from bottleneckpy.config import BottleneckConfig, Presets
from bottleneckpy.diagrams.graph import PersistenceGraph, PointSets
from bottleneckpy.io.persistence import read_persistence_intervals_in_one_dimension_from_file
from bottleneckpy.matching.bottleneck import bottleneck_distance, compare_persistence_files
from bottleneckpy.matching.graph_matching import GraphMatching
from bottleneckpy.neighbors.planar import (
    NULL_POINT_INDEX,
    AbstractPlanarNeighborsFinder,
    NaivePlanarNeighborsFinder,
    PlanarNeighborsFinder,
)

__all__ = [
    # Version
    "__version__",
    # Neighbors
    "NULL_POINT_INDEX",
    "AbstractPlanarNeighborsFinder",
    "NaivePlanarNeighborsFinder",
    "PlanarNeighborsFinder",
    # Point sources
    "PointSets",
    "PersistenceGraph",
    # Matching
    "GraphMatching",
    "bottleneck_distance",
    "compare_persistence_files",
    # I/O
    "read_persistence_intervals_in_one_dimension_from_file",
    # Config
    "BottleneckConfig",
    "Presets",
]
