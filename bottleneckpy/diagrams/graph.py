"""
Point sources for planar neighbor finders.

A point source maps U and V point indices to planar coordinates and
provides the distance between a U point and a V point.

Provides:
- PointSets: two plain coordinate arrays with a chosen metric
- PersistenceGraph: the bipartite point cloud of two persistence diagrams
"""

from typing import Literal, Protocol, Sequence, Tuple

import numpy as np


class PlanarPointSource(Protocol):
    """Coordinates and U-to-V distances for neighbor finders."""

    def get_u_point(self, u_point_index: int) -> Tuple[float, float]: ...

    def get_v_point(self, v_point_index: int) -> Tuple[float, float]: ...

    def distance(self, u_point_index: int, v_point_index: int) -> float: ...


def _as_points(coords, name: str) -> np.ndarray:
    arr = np.asarray(coords, dtype=np.float64)
    if arr.size == 0:
        return np.empty((0, 2), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"{name} must have shape (n, 2), got {arr.shape}")
    return arr


class PointSets:
    """
    Two planar point sets U and V.

    Parameters
    ----------
    u_coords : array-like
        U point coordinates of shape (n_u, 2).
    v_coords : array-like
        V point coordinates of shape (n_v, 2).
    metric : {"euclidean", "chebyshev"}, default="euclidean"
        Distance between a U point and a V point.

    Examples
    --------
    >>> points = PointSets([[0.0, 0.0]], [[3.0, 4.0]])
    >>> points.distance(0, 0)
    5.0
    """

    def __init__(
        self,
        u_coords,
        v_coords,
        metric: Literal["euclidean", "chebyshev"] = "euclidean",
    ):
        if metric not in ("euclidean", "chebyshev"):
            raise ValueError(f"Unknown metric: '{metric}'. Use 'euclidean' or 'chebyshev'.")
        self.u_coords = _as_points(u_coords, "u_coords")
        self.v_coords = _as_points(v_coords, "v_coords")
        self.metric = metric

    @property
    def n_u(self) -> int:
        return self.u_coords.shape[0]

    @property
    def n_v(self) -> int:
        return self.v_coords.shape[0]

    def get_u_point(self, u_point_index: int) -> Tuple[float, float]:
        x, y = self.u_coords[u_point_index]
        return float(x), float(y)

    def get_v_point(self, v_point_index: int) -> Tuple[float, float]:
        x, y = self.v_coords[v_point_index]
        return float(x), float(y)

    def distance(self, u_point_index: int, v_point_index: int) -> float:
        ux, uy = self.get_u_point(u_point_index)
        vx, vy = self.get_v_point(v_point_index)
        if self.metric == "chebyshev":
            return max(abs(ux - vx), abs(uy - vy))
        return float(np.hypot(ux - vx, uy - vy))


class PersistenceGraph:
    """
    Bipartite point cloud built from two persistence diagrams.

    U holds the points of the first diagram followed by the diagonal
    projections of the points of the second one. V holds the points of the
    second diagram followed by the projections of the first one. Both sides
    therefore have ``size()`` points, and a perfect matching between them at
    threshold r exists iff the bottleneck distance is at most r.

    Parameters
    ----------
    diagram1, diagram2 : sequence of (birth, death)
        Finite persistence pairs.
    e : float, default=0.0
        Pairs with ``death - birth <= e`` are ignored.

    Examples
    --------
    >>> g = PersistenceGraph([(0.0, 2.0)], [(0.0, 2.5)])
    >>> g.size()
    2
    >>> g.distance(0, 0)
    0.5
    """

    def __init__(self, diagram1: Sequence, diagram2: Sequence, e: float = 0.0):
        self.e = e
        self.u = self._build(diagram1, e, "diagram1")
        self.v = self._build(diagram2, e, "diagram2")
        self.u_size = self.u.shape[0]
        self.v_size = self.v.shape[0]

    @staticmethod
    def _build(diagram, e: float, name: str) -> np.ndarray:
        points = _as_points(diagram, name)
        if not np.all(np.isfinite(points)):
            raise ValueError(f"{name} contains non-finite coordinates")
        return points[points[:, 1] - points[:, 0] > e]

    def size(self) -> int:
        return self.u_size + self.v_size

    def on_the_u_diagonal(self, u_point_index: int) -> bool:
        return u_point_index >= self.u_size

    def on_the_v_diagonal(self, v_point_index: int) -> bool:
        return v_point_index >= self.v_size

    def corresponding_point_in_u(self, v_point_index: int) -> int:
        if self.on_the_v_diagonal(v_point_index):
            return v_point_index - self.v_size
        return v_point_index + self.u_size

    def corresponding_point_in_v(self, u_point_index: int) -> int:
        if self.on_the_u_diagonal(u_point_index):
            return u_point_index - self.u_size
        return u_point_index + self.v_size

    def get_u_point(self, u_point_index: int) -> Tuple[float, float]:
        if not self.on_the_u_diagonal(u_point_index):
            x, y = self.u[u_point_index]
            return float(x), float(y)
        x, y = self.v[u_point_index - self.u_size]
        m = float(x + y) / 2
        return m, m

    def get_v_point(self, v_point_index: int) -> Tuple[float, float]:
        if not self.on_the_v_diagonal(v_point_index):
            x, y = self.v[v_point_index]
            return float(x), float(y)
        x, y = self.u[v_point_index - self.v_size]
        m = float(x + y) / 2
        return m, m

    def distance(self, u_point_index: int, v_point_index: int) -> float:
        # any two projections can be matched along the diagonal
        if self.on_the_u_diagonal(u_point_index) and self.on_the_v_diagonal(v_point_index):
            return 0.0
        ux, uy = self.get_u_point(u_point_index)
        vx, vy = self.get_v_point(v_point_index)
        return max(abs(ux - vx), abs(uy - vy))

    def distance_to_diagonal(self, u_point_index: int) -> float:
        if self.on_the_u_diagonal(u_point_index):
            return 0.0
        x, y = self.u[u_point_index]
        return float(y - x) / 2

    def _all_u_points(self) -> np.ndarray:
        m = self.v.sum(axis=1, keepdims=True) / 2
        return np.vstack([self.u, np.hstack([m, m])])

    def _all_v_points(self) -> np.ndarray:
        m = self.u.sum(axis=1, keepdims=True) / 2
        return np.vstack([self.v, np.hstack([m, m])])

    def distance_matrix(self) -> np.ndarray:
        """
        Full U x V distance matrix.

        Returns
        -------
        np.ndarray
            Matrix of shape (size, size) with ``D[u, v] == distance(u, v)``.
        """
        pu = self._all_u_points()
        pv = self._all_v_points()
        D = np.maximum(
            np.abs(pu[:, 0:1] - pv[:, 0].reshape(1, -1)),
            np.abs(pu[:, 1:2] - pv[:, 1].reshape(1, -1)),
        )
        D[self.u_size:, self.v_size:] = 0.0
        return D

    def sorted_distances(self) -> np.ndarray:
        """
        Candidate values for the bottleneck distance.

        Returns
        -------
        np.ndarray
            Sorted unique values among 0, every U-to-V distance and every
            U-to-diagonal distance.
        """
        to_diagonal = np.concatenate([(self.u[:, 1] - self.u[:, 0]) / 2, np.zeros(self.v_size)])
        return np.unique(np.concatenate([[0.0], to_diagonal, self.distance_matrix().ravel()]))

    def diameter_bound(self) -> float:
        """Upper bound on the bottleneck distance: span of all coordinates."""
        coords = np.concatenate([self.u.ravel(), self.v.ravel()])
        if coords.size == 0:
            return 0.0
        return float(coords.max() - coords.min())
