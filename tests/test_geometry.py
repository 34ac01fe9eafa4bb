"""Tests for the geometry kernel."""

import numpy as np
import pytest

from wedgematch.geometry import (
    average, intersection, pairwise_distances, path_length, squared_distance, unit,
)


class TestDistances:
    """Tests for squared distances."""

    def test_squared_distance(self):
        assert squared_distance([0, 0], [3, 4]) == 25.0
        assert squared_distance([1.5, -2], [1.5, -2]) == 0.0

    def test_pairwise_matrix(self):
        """Matrix is symmetric with a zero diagonal."""
        points = [[0, 0], [3, 4], [6, 8]]

        dists = pairwise_distances(points)

        assert dists.shape == (3, 3)
        assert np.all(np.diag(dists) == 0)
        assert np.allclose(dists, dists.T)
        assert dists[0, 2] == pytest.approx(100.0)

    def test_path_length_sums_squared_steps(self):
        assert path_length([[0, 0], [1, 0], [1, 2]]) == pytest.approx(5.0)
        assert path_length([[4, 4]]) == 0.0


class TestAverage:
    """Tests for the centroid helper."""

    def test_empty_is_undefined(self):
        assert average([]) is None

    def test_single_point(self):
        assert np.array_equal(average([[2.5, -1.0]]), [2.5, -1.0])

    def test_mean(self):
        assert np.allclose(average([[0, 0], [2, 0], [2, 2], [0, 2]]), [1, 1])


class TestUnit:
    """Tests for normalization."""

    def test_zero_vector_stays_zero(self):
        assert np.array_equal(unit([0.0, 0.0]), [0.0, 0.0])

    def test_unit_length(self):
        assert np.allclose(unit([3.0, 4.0]), [0.6, 0.8])


class TestIntersection:
    """Tests for tangent-line intersection."""

    def test_crossing_lines(self):
        point = intersection([0, 0], [1, 1], [2, 0], [1, 1])

        assert np.allclose(point, [1, 1])

    def test_parallel_lines_return_centroid(self):
        """Parallel lines fall back to the exact average of the points."""
        pts = [[0.0, 0.0], [1.0, 0.0], [0.0, 1.0], [1.0, 1.0]]

        point = intersection(*pts)

        assert np.array_equal(point, np.mean(pts, axis=0))

    def test_distant_intersection_returns_centroid(self):
        """Nearly parallel lines meet far away; the centroid is used instead."""
        pts = [[0.0, 0.0], [1.0, 0.0], [0.0, 1.0], [1.0, 1.01]]

        point = intersection(*pts)

        assert np.allclose(point, np.mean(pts, axis=0))

    def test_degenerate_tangent(self):
        """A repeated first point gives no direction; centroid is used."""
        pts = [[0.0, 0.0], [0.0, 0.0], [1.0, 0.05], [2.0, 0.0]]

        point = intersection(*pts)

        assert np.allclose(point, [0.75, 0.0125])

    def test_wedge_side_apex(self):
        """End tangents of a concave side cross above its midpoint."""
        point = intersection([0, 0], [3, 1], [7, 1], [10, 0])

        assert np.allclose(point, [5.0, 5.0 / 3.0])
