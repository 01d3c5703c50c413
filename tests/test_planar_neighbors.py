"""Tests for the planar neighbors finder."""

import numpy as np
import pytest
from scipy.spatial import cKDTree

from bottleneckpy.diagrams.graph import PointSets
from bottleneckpy.neighbors.planar import (
    NULL_POINT_INDEX,
    AbstractPlanarNeighborsFinder,
    NaivePlanarNeighborsFinder,
    PlanarNeighborsFinder,
)


class DictPointSource:
    """Minimal point source backed by dictionaries."""

    def __init__(self, u, v):
        self.u = u
        self.v = v

    def get_u_point(self, u_point_index):
        return self.u[u_point_index]

    def get_v_point(self, v_point_index):
        return self.v[v_point_index]

    def distance(self, u_point_index, v_point_index):
        (ux, uy), (vx, vy) = self.u[u_point_index], self.v[v_point_index]
        return float(np.hypot(ux - vx, uy - vy))


def make_finder(u, v, r=1.0, metric="euclidean"):
    return NaivePlanarNeighborsFinder(PointSets(u, v, metric=metric), r)


class TestConstruction:
    """Tests for finder construction."""

    def test_radius(self):
        finder = make_finder([[0.0, 0.0]], [[1.0, 1.0]], r=2.5)
        assert finder.r == 2.5

    @pytest.mark.parametrize("r", [0.0, -1.0, np.inf, np.nan])
    def test_invalid_radius(self, r):
        """Test non-positive or non-finite radius raises error."""
        with pytest.raises(ValueError):
            make_finder([[0.0, 0.0]], [[1.0, 1.0]], r=r)

    def test_abstract_not_instantiable(self):
        with pytest.raises(TypeError):
            AbstractPlanarNeighborsFinder(1.0)

    def test_default_implementation(self):
        assert PlanarNeighborsFinder is NaivePlanarNeighborsFinder

    def test_starts_empty(self):
        finder = make_finder([[0.0, 0.0]], [[0.1, 0.1]])
        assert len(finder) == 0
        assert not finder.contains(0)
        assert finder.pull_near(0) == NULL_POINT_INDEX


class TestRegistration:
    """Tests for add, remove and contains."""

    def test_add_remove_symmetry(self):
        finder = make_finder([[0.0, 0.0]], [[0.5, 0.5], [3.0, 3.0]])

        assert not finder.contains(0)
        finder.add(0)
        assert finder.contains(0)
        assert not finder.contains(1)
        finder.remove(0)
        assert not finder.contains(0)
        assert len(finder) == 0

    def test_remove_absent_is_noop(self):
        finder = make_finder([[0.0, 0.0]], [[0.5, 0.5], [0.6, 0.6]])
        finder.add(0)

        finder.remove(1)

        assert finder.contains(0)
        assert len(finder) == 1

    def test_remove_keeps_bucket_neighbors(self):
        """Test removing one point leaves the others of its bucket."""
        finder = make_finder([[0.5, 0.5]], [[0.2, 0.2], [0.4, 0.4], [0.6, 0.6]])
        for v in range(3):
            finder.add(v)

        finder.remove(1)

        assert finder.contains(0)
        assert not finder.contains(1)
        assert finder.contains(2)
        assert finder.pull_all_near(0) == [0, 2]

    def test_contains_null_index(self):
        finder = make_finder([[0.0, 0.0]], [[0.5, 0.5]])
        finder.add(0)
        assert finder.contains(NULL_POINT_INDEX) is False

    def test_duplicate_add_first_match(self):
        """Test a doubly added point needs two removals."""
        finder = make_finder([[0.0, 0.0]], [[0.5, 0.5]])
        finder.add(0)
        finder.add(0)
        assert len(finder) == 2

        finder.remove(0)
        assert finder.contains(0)
        assert len(finder) == 1

        finder.remove(0)
        assert not finder.contains(0)

    def test_duplicate_coordinates(self):
        """Test distinct indices at the same coordinates are kept apart."""
        finder = make_finder([[1.0, 1.0]], [[1.5, 1.5], [1.5, 1.5]])
        finder.add(0)
        finder.add(1)

        finder.remove(1)

        assert finder.contains(0)
        assert finder.pull_near(0) == 0
        assert finder.pull_near(0) == NULL_POINT_INDEX


class TestPullNear:
    """Tests for pull_near."""

    def test_near_and_far(self):
        finder = make_finder([[0.3, 0.3]], [[0.2, 0.2], [5.0, 5.0]], r=1.0)
        finder.add(0)
        finder.add(1)

        assert finder.pull_near(0) == 0
        assert finder.pull_near(0) == NULL_POINT_INDEX
        assert not finder.contains(0)
        assert finder.contains(1)

    def test_pulled_point_removed(self):
        finder = make_finder([[0.0, 0.0]], [[0.1, 0.0]])
        finder.add(0)

        v = finder.pull_near(0)

        assert v == 0
        assert not finder.contains(v)
        assert len(finder) == 0

    def test_radius_inclusive(self):
        """Test a point exactly at distance r is near."""
        finder = make_finder([[0.0, 0.0]], [[2.0, 0.0]], r=2.0)
        finder.add(0)
        assert finder.pull_near(0) == 0

    def test_first_fit_in_bucket(self):
        """Test the first stored candidate wins over a nearer one."""
        finder = make_finder([[0.1, 0.1]], [[0.7, 0.7], [0.1, 0.1]], r=1.0)
        finder.add(0)
        finder.add(1)

        assert finder.pull_near(0) == 0
        assert finder.pull_near(0) == 1

    def test_scan_order_across_buckets(self):
        """Test buckets are visited row-major around the query bucket."""
        # keys: v0 -> (1, 0), v1 -> (0, 0), v2 -> (0, 1); query -> (0, 0)
        finder = make_finder(
            [[0.9, 0.9]], [[1.2, 0.5], [0.5, 0.5], [0.5, 1.2]], r=1.0
        )
        for v in range(3):
            finder.add(v)

        assert finder.pull_all_near(0) == [1, 2, 0]

    def test_adjacent_bucket(self):
        finder = make_finder([[0.95, 0.5]], [[1.05, 0.5]], r=0.5)
        finder.add(0)
        assert finder.pull_near(0) == 0

    def test_skips_far_candidate_in_same_bucket(self):
        finder = make_finder([[0.05, 0.05]], [[0.95, 0.95], [0.5, 0.5]], r=1.0)
        finder.add(0)
        finder.add(1)

        assert finder.pull_near(0) == 1
        assert finder.contains(0)

    def test_chebyshev_metric(self):
        finder = make_finder([[0.0, 0.0]], [[0.9, 0.9]], r=1.0, metric="chebyshev")
        finder.add(0)
        assert finder.pull_near(0) == 0

    def test_custom_point_source(self):
        points = DictPointSource({7: (0.0, 0.0)}, {3: (0.5, 0.0), 4: (4.0, 0.0)})
        finder = NaivePlanarNeighborsFinder(points, 1.0)
        finder.add(3)
        finder.add(4)

        assert finder.pull_near(7) == 3
        assert finder.pull_near(7) == NULL_POINT_INDEX
        assert finder.contains(4)


class TestNegativeCoordinates:
    """Tests for bucket keys truncated toward zero."""

    def test_key_truncates_toward_zero(self):
        finder = make_finder([[0.0, 0.0]], [[-0.5, 0.5], [0.5, -0.5], [-1.5, -2.5]])
        assert finder._get_v_key(0) == (0, 0)
        assert finder._get_v_key(1) == (0, 0)
        assert finder._get_v_key(2) == (-1, -2)

    def test_query_across_origin(self):
        finder = make_finder([[-0.4, 0.0]], [[0.4, 0.0]], r=1.0)
        finder.add(0)
        assert finder.pull_near(0) == 0

    def test_same_bucket_but_too_far(self):
        """Test points in the wide cell around zero are still distance checked."""
        finder = make_finder([[-0.9, 0.0]], [[0.9, 0.0]], r=1.0)
        finder.add(0)
        assert finder.pull_near(0) == NULL_POINT_INDEX
        assert finder.contains(0)

    def test_negative_adjacent_bucket(self):
        finder = make_finder([[-1.5, -1.5]], [[-0.8, -0.8]], r=1.0)
        finder.add(0)
        assert finder.pull_near(0) == 0


class TestPullAllNear:
    """Tests for pull_all_near."""

    def test_empty_result(self):
        finder = make_finder([[0.0, 0.0]], [[9.0, 9.0]])
        finder.add(0)
        assert finder.pull_all_near(0) == []
        assert finder.contains(0)

    def test_two_near_points(self):
        finder = make_finder([[0.9, 0.4]], [[1.2, 0.3], [0.5, 0.5]], r=1.0)
        finder.add(0)
        finder.add(1)

        pulled = finder.pull_all_near(0)

        assert pulled == [1, 0]
        assert len(finder) == 0

    def test_exhaustion(self):
        """Test no near point remains after pull_all_near."""
        finder = make_finder(
            [[0.0, 0.0]], [[0.1, 0.0], [0.0, 0.2], [-0.3, -0.3], [3.0, 0.0]]
        )
        for v in range(4):
            finder.add(v)

        pulled = finder.pull_all_near(0)

        assert sorted(pulled) == [0, 1, 2]
        assert finder.pull_near(0) == NULL_POINT_INDEX
        assert finder.contains(3)

    @pytest.mark.parametrize("metric", ["euclidean", "chebyshev"])
    def test_matches_brute_force(self, metric):
        """Test pull_all_near returns exactly the registered points within r."""
        rng = np.random.default_rng(42)
        u = rng.uniform(-5, 5, size=(40, 2))
        v = rng.uniform(-5, 5, size=(200, 2))
        points = PointSets(u, v, metric=metric)
        finder = NaivePlanarNeighborsFinder(points, 0.8)
        for j in range(len(v)):
            finder.add(j)

        remaining = set(range(len(v)))
        for i in range(len(u)):
            expected = {j for j in remaining if points.distance(i, j) <= 0.8}
            pulled = finder.pull_all_near(i)

            assert len(pulled) == len(set(pulled))
            assert set(pulled) == expected
            remaining -= expected

        assert len(finder) == len(remaining)
        assert all(finder.contains(j) for j in remaining)

    def test_agrees_with_kdtree(self):
        """Test the grid finds the same neighborhood as scipy's KD-tree."""
        rng = np.random.default_rng(0)
        v = rng.uniform(-3, 3, size=(300, 2))
        u = np.array([[0.25, -0.75]])
        finder = make_finder(u, v, r=1.0)
        for j in range(len(v)):
            finder.add(j)

        expected = cKDTree(v).query_ball_point(u[0], r=1.0)

        assert sorted(finder.pull_all_near(0)) == sorted(expected)
