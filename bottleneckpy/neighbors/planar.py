"""
Planar neighbor finders for threshold matching.

A planar neighbors finder holds a dynamic set of V point indices and answers
"give me some V point within distance r of this U point" queries, removing
the point it returns. Only integer indices are stored; coordinates and
distances are read from an external point source on every use.

Implements:
- AbstractPlanarNeighborsFinder: the operation set shared by all finders
- NaivePlanarNeighborsFinder: square grid buckets of side r, 3x3 scan
"""

import math
from abc import ABC, abstractmethod
from typing import List, Tuple

NULL_POINT_INDEX = -1


class AbstractPlanarNeighborsFinder(ABC):
    """
    Finder of V points near (within distance r) to query U points.

    V points have to be added manually using their index. A neighbor pulled
    is automatically removed, but points can also be removed manually.

    Parameters
    ----------
    r : float
        Near distance. Fixed for the lifetime of the finder.
    """

    def __init__(self, r: float):
        r = float(r)
        if not (math.isfinite(r) and r > 0):
            raise ValueError(f"Near distance must be positive and finite, got {r}")
        self._r = r

    @property
    def r(self) -> float:
        """Near distance."""
        return self._r

    @abstractmethod
    def add(self, v_point_index: int) -> None:
        """A point added will be possibly pulled."""

    @abstractmethod
    def remove(self, v_point_index: int) -> None:
        """A point manually removed will no longer be possibly pulled."""

    @abstractmethod
    def contains(self, v_point_index: int) -> bool:
        """Can the point given as parameter be returned?"""

    @abstractmethod
    def pull_near(self, u_point_index: int) -> int:
        """
        Provide and remove a V point near to the given U point.

        Returns
        -------
        int
            Index of the pulled V point, or NULL_POINT_INDEX if there isn't
            such a point.
        """

    def pull_all_near(self, u_point_index: int) -> List[int]:
        """
        Provide and remove all the V points near to the given U point.

        Returns
        -------
        list of int
            Pulled V point indices, in the order they were removed.
        """
        all_pull = []
        last_pull = self.pull_near(u_point_index)
        while last_pull != NULL_POINT_INDEX:
            all_pull.append(last_pull)
            last_pull = self.pull_near(u_point_index)
        return all_pull


class NaivePlanarNeighborsFinder(AbstractPlanarNeighborsFinder):
    """
    Grid-bucketed planar neighbors finder.

    The plane is cut into square cells of side r. Each cell keeps the V point
    indices whose coordinates fall in it, in insertion order. A query scans
    the 3x3 block of cells around the query point and returns the first
    candidate within distance r (first fit, not nearest).

    Parameters
    ----------
    points : PlanarPointSource
        Object providing ``get_u_point``, ``get_v_point`` and ``distance``.
        Coordinates must not change while the finder is in use.
    r : float
        Near distance, also the grid cell side.

    Examples
    --------
    >>> from bottleneckpy.diagrams import PointSets
    >>> points = PointSets([[0.3, 0.3]], [[0.2, 0.2], [5.0, 5.0]])
    >>> finder = NaivePlanarNeighborsFinder(points, r=1.0)
    >>> finder.add(0)
    >>> finder.add(1)
    >>> finder.pull_near(0)
    0
    >>> finder.pull_near(0)
    -1

    Notes
    -----
    Cell coordinates are truncated toward zero, so the cells touching the
    axes are twice as wide as the others. Points within distance r of each
    other still land in the same or adjacent cells.
    """

    def __init__(self, points, r: float):
        super().__init__(r)
        self.points = points
        self._grid: dict[Tuple[int, int], List[int]] = {}

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._grid.values())

    def _key(self, point) -> Tuple[int, int]:
        return (int(point[0] / self._r), int(point[1] / self._r))

    def _get_v_key(self, v_point_index: int) -> Tuple[int, int]:
        return self._key(self.points.get_v_point(v_point_index))

    def add(self, v_point_index: int) -> None:
        self._grid.setdefault(self._get_v_key(v_point_index), []).append(v_point_index)

    def remove(self, v_point_index: int) -> None:
        key = self._get_v_key(v_point_index)
        bucket = self._grid.get(key)
        if bucket is None or v_point_index not in bucket:
            return
        self._erase(key, bucket, v_point_index)

    def contains(self, v_point_index: int) -> bool:
        if v_point_index == NULL_POINT_INDEX:
            return False
        bucket = self._grid.get(self._get_v_key(v_point_index))
        return bucket is not None and v_point_index in bucket

    def pull_near(self, u_point_index: int) -> int:
        i0, j0 = self._key(self.points.get_u_point(u_point_index))
        distance = self.points.distance
        for i in (i0 - 1, i0, i0 + 1):
            for j in (j0 - 1, j0, j0 + 1):
                bucket = self._grid.get((i, j))
                if bucket is None:
                    continue
                for v_point_index in bucket:
                    if distance(u_point_index, v_point_index) <= self._r:
                        self._erase((i, j), bucket, v_point_index)
                        return v_point_index
        return NULL_POINT_INDEX

    def _erase(self, key, bucket, v_point_index):
        # list.remove drops the first entry equal to the index
        bucket.remove(v_point_index)
        if not bucket:
            del self._grid[key]


PlanarNeighborsFinder = NaivePlanarNeighborsFinder
