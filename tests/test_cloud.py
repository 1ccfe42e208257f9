"""
Tests for point clouds.
"""

import numpy as np
import pytest

from cova.topology.cloud import Cloud


class TestCloud:
    def test_shape_and_read_only(self):
        cloud = Cloud([[0, 0], [3, 4]])
        assert len(cloud) == 2
        assert cloud.ambient_dimension == 2
        assert cloud.points.dtype == np.float64
        with pytest.raises(ValueError):
            cloud.points[0, 0] = 1.0

    def test_input_is_copied(self):
        pts = np.zeros((2, 2))
        cloud = Cloud(pts)
        pts[0, 0] = 5.0
        assert cloud[0][0] == 0.0

    def test_one_dimensional_input(self):
        cloud = Cloud([0.0, 1.5, 4.0])
        assert cloud.points.shape == (3, 1)
        assert cloud.distance(0, 2) == pytest.approx(4.0)

    def test_empty(self):
        cloud = Cloud([])
        assert cloud.is_empty()
        assert len(cloud) == 0
        assert cloud.distance_matrix().shape == (0, 0)
        assert cloud.diameter() == 0.0

    def test_single_point_in_zero_dimensions(self):
        cloud = Cloud([[]])
        assert len(cloud) == 1
        assert cloud.ambient_dimension == 0
        assert not cloud.is_empty()

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            Cloud(np.ones((2, 2, 2)))

    def test_distance_matrix(self):
        cloud = Cloud([[0, 0], [3, 4], [0, 4]])
        d = cloud.distance_matrix()
        assert d.shape == (3, 3)
        assert np.allclose(d, d.T)
        assert d[0, 1] == pytest.approx(5.0)
        assert d[1, 2] == pytest.approx(3.0)
        assert cloud.diameter() == pytest.approx(5.0)

    def test_metric(self):
        cloud = Cloud([[0, 0], [3, 4]], metric="cityblock")
        assert cloud.distance(0, 1) == pytest.approx(7.0)
        assert cloud.distance(-1, 0) == pytest.approx(7.0)
