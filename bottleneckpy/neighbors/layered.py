"""
Neighbor finders over a persistence graph.

NeighborsFinder splits the V side of a PersistenceGraph into diagonal
projections, which are all at distance 0 from each other, and real points,
which go to a planar grid finder. LayeredNeighborsFinder keeps one
NeighborsFinder per layer of the breadth-first search used by the matching.
"""

from typing import List

from bottleneckpy.neighbors.planar import NULL_POINT_INDEX, PlanarNeighborsFinder


class NeighborsFinder:
    """
    Find V points near to U points of a persistence graph.

    Parameters
    ----------
    graph : PersistenceGraph
        Point source with diagonal bookkeeping.
    r : float
        Near distance.
    """

    def __init__(self, graph, r: float):
        self.graph = graph
        self.r = r
        self.planar_neighbors_finder = PlanarNeighborsFinder(graph, r)
        # insertion-ordered set of V projections
        self.projections: dict[int, None] = {}

    def add(self, v_point_index: int) -> None:
        if self.graph.on_the_v_diagonal(v_point_index):
            self.projections[v_point_index] = None
        else:
            self.planar_neighbors_finder.add(v_point_index)

    def pull_near(self, u_point_index: int) -> int:
        g = self.graph
        if g.on_the_u_diagonal(u_point_index) and self.projections:
            v_point_index = next(iter(self.projections))
            del self.projections[v_point_index]
            return v_point_index
        c = g.corresponding_point_in_v(u_point_index)
        if c in self.projections and g.distance(u_point_index, c) <= self.r:
            del self.projections[c]
            return c
        return self.planar_neighbors_finder.pull_near(u_point_index)

    def pull_all_near(self, u_point_index: int) -> List[int]:
        all_pull = []
        last_pull = self.pull_near(u_point_index)
        while last_pull != NULL_POINT_INDEX:
            all_pull.append(last_pull)
            last_pull = self.pull_near(u_point_index)
        return all_pull


class LayeredNeighborsFinder:
    """NeighborsFinder per BFS layer."""

    def __init__(self, graph, r: float):
        self.graph = graph
        self.r = r
        self.neighbors_finder: List[NeighborsFinder] = []

    def add(self, v_point_index: int, vlayer: int) -> None:
        for _ in range(len(self.neighbors_finder), vlayer + 1):
            self.neighbors_finder.append(NeighborsFinder(self.graph, self.r))
        self.neighbors_finder[vlayer].add(v_point_index)

    def pull_near(self, u_point_index: int, vlayer: int) -> int:
        if vlayer >= len(self.neighbors_finder):
            return NULL_POINT_INDEX
        return self.neighbors_finder[vlayer].pull_near(u_point_index)

    def vlayers_number(self) -> int:
        return len(self.neighbors_finder)
