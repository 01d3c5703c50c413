"""Neighbor search utilities."""

from bottleneckpy.neighbors.layered import LayeredNeighborsFinder, NeighborsFinder
from bottleneckpy.neighbors.planar import (
    NULL_POINT_INDEX,
    AbstractPlanarNeighborsFinder,
    NaivePlanarNeighborsFinder,
    PlanarNeighborsFinder,
)

__all__ = [
    "NULL_POINT_INDEX",
    "AbstractPlanarNeighborsFinder",
    "NaivePlanarNeighborsFinder",
    "PlanarNeighborsFinder",
    "NeighborsFinder",
    "LayeredNeighborsFinder",
]
