"""Point sources built from coordinates and persistence diagrams."""

from bottleneckpy.diagrams.graph import PersistenceGraph, PlanarPointSource, PointSets

__all__ = ["PlanarPointSource", "PointSets", "PersistenceGraph"]
