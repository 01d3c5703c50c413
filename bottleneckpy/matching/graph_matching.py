"""
Maximum matching in the threshold graph of a persistence graph.

A U point and a V point are adjacent when their distance is at most r.
Augmenting paths are found in phases, Hopcroft-Karp style: a breadth-first
layering from the unmatched U points, then depth-first searches that pull
their next V point from the neighbor finder of the following layer.
"""

from typing import List, Tuple

from bottleneckpy.neighbors.layered import LayeredNeighborsFinder, NeighborsFinder
from bottleneckpy.neighbors.planar import NULL_POINT_INDEX


class GraphMatching:
    """
    Matching between the U and V points of a persistence graph.

    Parameters
    ----------
    graph : PersistenceGraph
        Point cloud to match.

    Example
    -------
    >>> g = PersistenceGraph([(0.0, 2.0)], [(0.0, 2.5)])
    >>> m = GraphMatching(g)
    >>> m.set_r(0.5)
    >>> while m.multi_augment():
    ...     pass
    >>> m.perfect()
    True
    """

    def __init__(self, graph):
        self.graph = graph
        self.r = 0.0
        self.v_to_u = [NULL_POINT_INDEX] * graph.size()
        # insertion-ordered set
        self.unmatched_in_u: dict[int, None] = dict.fromkeys(range(graph.size()))

    def copy(self) -> "GraphMatching":
        m = GraphMatching.__new__(GraphMatching)
        m.graph = self.graph
        m.r = self.r
        m.v_to_u = list(self.v_to_u)
        m.unmatched_in_u = dict(self.unmatched_in_u)
        return m

    def set_r(self, r: float) -> None:
        """Set the near distance. Existing matched pairs are kept."""
        self.r = r

    def perfect(self) -> bool:
        return not self.unmatched_in_u

    def matched_pairs(self) -> List[Tuple[int, int]]:
        """(u, v) pairs of the current matching, ordered by v."""
        return [(u, v) for v, u in enumerate(self.v_to_u) if u != NULL_POINT_INDEX]

    def multi_augment(self) -> bool:
        """
        Run one phase of augmentations.

        Returns
        -------
        bool
            Whether at least one augmenting path was found.
        """
        if self.perfect():
            return False
        layered_nf = self.layering()
        vlayers = layered_nf.vlayers_number()
        max_depth = vlayers * 2 - 1
        # Disjoint augmenting paths each use at least vlayers - 1 matched
        # edges, so a perfect matching is out of reach when they cannot all
        # fit in the current matching.
        if max_depth < 0 or len(self.unmatched_in_u) * vlayers > self.graph.size():
            return False
        successful = False
        for u_point_index in list(self.unmatched_in_u):
            # augment has side effects and must run for every start point
            successful = self.augment(layered_nf, u_point_index, max_depth) or successful
        return successful

    def layering(self) -> LayeredNeighborsFinder:
        """Breadth-first layers of V points, up to the nearest exposed one."""
        u_vertices = list(self.unmatched_in_u)
        nf = NeighborsFinder(self.graph, self.r)
        for v_point_index in range(self.graph.size()):
            nf.add(v_point_index)
        layered_nf = LayeredNeighborsFinder(self.graph, self.r)
        layer = 0
        while u_vertices:
            v_vertices = []
            for u_point_index in u_vertices:
                for v_point_index in nf.pull_all_near(u_point_index):
                    layered_nf.add(v_point_index, layer)
                    v_vertices.append(v_point_index)
            u_vertices = []
            end = False
            for v_point_index in v_vertices:
                if self.v_to_u[v_point_index] == NULL_POINT_INDEX:
                    end = True
                else:
                    u_vertices.append(self.v_to_u[v_point_index])
            if end:
                break
            layer += 1
        return layered_nf

    def augment(self, layered_nf: LayeredNeighborsFinder, u_start_index: int, max_depth: int) -> bool:
        """
        Search an augmenting path from an unmatched U point and apply it.

        The path alternates U and V points; V points have at most one
        successor (their matched U point), so backtracking from a U point
        drops two entries at once.
        """
        path = [u_start_index]
        while True:
            if len(path) > max_depth:
                del path[-2:]
            if not path:
                return False
            path.append(layered_nf.pull_near(path[-1], len(path) // 2))
            while path[-1] == NULL_POINT_INDEX:
                del path[-2:]
                if not path:
                    return False
                path.pop()
                path.append(layered_nf.pull_near(path[-1], len(path) // 2))
            path.append(self.v_to_u[path[-1]])
            if path[-1] == NULL_POINT_INDEX:
                break
        # path[-2] is an exposed V point
        path.pop()
        self._update(path)
        return True

    def _update(self, path: List[int]) -> None:
        del self.unmatched_in_u[path[0]]
        for k in range(0, len(path), 2):
            self.v_to_u[path[k + 1]] = path[k]
