"""Unit tests for point-cloud fitting routines.

Tests cover:
- OBB fitting for 1, 2, 3 and N points
- OBB to RSS conversion
- kIOS sphere fitting
- k-DOP and AABB of point clouds
"""

import math

import numpy as np
import pytest


class TestFitOBB:
    """Tests for fit_obb."""

    def test_single_point(self):
        """Test one point gives a degenerate box at the point."""
        from src.shapebounds.bounds.fitting import fit_obb

        obb = fit_obb([[1.0, 2.0, 3.0]])
        assert np.allclose(obb.center, [1.0, 2.0, 3.0])
        assert np.array_equal(obb.extents, [0.0, 0.0, 0.0])

    def test_segment(self):
        """Test two points give a box along the segment."""
        from src.shapebounds.bounds.fitting import fit_obb

        obb = fit_obb([[0.0, 0.0, 0.0], [3.0, 4.0, 0.0]])
        assert np.allclose(obb.center, [1.5, 2.0, 0.0])
        assert np.allclose(obb.extents, [2.5, 0.0, 0.0], atol=1e-12)
        assert np.allclose(np.abs(obb.axes[:, 0]), [0.6, 0.8, 0.0])

    def test_triangle(self):
        """Test three points give a flat box with axis 0 on the longest edge."""
        from src.shapebounds.bounds.fitting import fit_obb

        obb = fit_obb([[0.0, 0.0, 0.0], [4.0, 0.0, 0.0], [1.0, 1.0, 0.0]])
        assert np.allclose(np.abs(obb.axes[:, 0]), [1.0, 0.0, 0.0])
        assert np.allclose(np.abs(obb.axes[:, 2]), [0.0, 0.0, 1.0])
        assert np.allclose(obb.extents, [2.0, 0.5, 0.0], atol=1e-12)

    def test_collinear_triangle(self):
        """Test three collinear points fall back to a segment frame."""
        from src.shapebounds.bounds.fitting import fit_obb

        obb = fit_obb([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [3.0, 0.0, 0.0]])
        assert np.allclose(np.abs(obb.axes[:, 0]), [1.0, 0.0, 0.0])
        assert np.allclose(obb.extents, [1.5, 0.0, 0.0], atol=1e-12)

    def test_rotated_box_corners(self, random_transforms):
        """Test covariance axes recover a rotated box exactly."""
        from src.shapebounds.bounds.fitting import fit_obb
        from src.shapebounds.geometry.shapes import Box
        from src.shapebounds.geometry.vertices import sample_vertices

        box = Box(half_extents=(1.0, 2.0, 3.0))
        for tf in random_transforms:
            obb = fit_obb(sample_vertices(box, tf))
            assert obb.volume == pytest.approx(48.0, rel=1e-9)
            assert np.allclose(obb.center, tf.translation)
            assert np.allclose(obb.extents, [3.0, 2.0, 1.0])
            assert abs(np.linalg.det(obb.axes) - 1.0) < 1e-9

    def test_contains_random_cloud(self, rng):
        from src.shapebounds.bounds.fitting import fit_obb

        points = rng.normal(size=(50, 3)) * (3.0, 1.0, 0.2)
        assert fit_obb(points).contains(points)


class TestRSSFromOBB:
    """Tests for rss_from_obb."""

    def test_contains_box_corners(self, rng, random_transforms):
        """Test the RSS contains every corner of the OBB it came from."""
        from src.shapebounds.bounds.fitting import fit_obb, rss_from_obb
        from src.shapebounds.geometry.shapes import Box
        from src.shapebounds.geometry.vertices import sample_vertices

        box = Box(half_extents=(0.5, 2.0, 1.0))
        for tf in random_transforms:
            corners = sample_vertices(box, tf)
            rss = rss_from_obb(fit_obb(corners))
            assert rss.contains(corners)
            assert np.allclose(rss.half_lengths, [2.0, 1.0])
            assert rss.radius == pytest.approx(0.5)

    def test_axes_are_right_handed(self):
        from src.shapebounds.bounds.fitting import rss_from_obb
        from src.shapebounds.bounds.volumes import OBB

        rss = rss_from_obb(OBB(center=(0, 0, 0), axes=np.eye(3), extents=(1.0, 3.0, 2.0)))
        assert np.allclose(rss.axes[:, 0], [0.0, 1.0, 0.0])
        assert np.allclose(rss.axes[:, 1], [0.0, 0.0, 1.0])
        assert abs(np.linalg.det(rss.axes) - 1.0) < 1e-12

    def test_fit_rss_contains_points(self, rng):
        from src.shapebounds.bounds.fitting import fit_rss

        points = rng.normal(size=(40, 3))
        assert fit_rss(points).contains(points)


class TestFitKIOSSpheres:
    """Tests for fit_kios_spheres."""

    def test_needle_uses_five_spheres(self):
        """Test a needle-like cloud gets five spheres, all containing it."""
        from src.shapebounds.bounds.fitting import fit_kios_spheres, fit_obb

        points = np.array(
            [[x, y, z] for x in (-4.0, 4.0) for y in (-1.0, 1.0) for z in (-0.5, 0.5)]
        )
        spheres = fit_kios_spheres(points, fit_obb(points))
        assert len(spheres) == 5
        for sphere in spheres:
            assert sphere.contains(points)

    def test_slab_uses_three_spheres(self):
        from src.shapebounds.bounds.fitting import fit_kios_spheres, fit_obb

        points = np.array(
            [[x, y, z] for x in (-4.0, 4.0) for y in (-3.5, 3.5) for z in (-0.5, 0.5)]
        )
        assert len(fit_kios_spheres(points, fit_obb(points))) == 3

    def test_central_sphere_radius(self):
        """Test the first sphere sits at the OBB center with the farthest-point radius."""
        from src.shapebounds.bounds.fitting import fit_kios_spheres, fit_obb

        points = np.array([[1.0, 1.0, 1.0], [-1.0, -1.0, -1.0], [1.0, -1.0, 1.0], [-1.0, 1.0, -1.0]])
        obb = fit_obb(points)
        spheres = fit_kios_spheres(points, obb)
        assert np.allclose(spheres[0].center, obb.center)
        assert spheres[0].radius == pytest.approx(math.sqrt(3.0))


class TestFitKDOPAndAABB:
    """Tests for fit_kdop and fit_aabb."""

    def test_kdop_of_points(self):
        from src.shapebounds.bounds.fitting import fit_kdop

        points = np.array([[0.0, 0.0, 0.0], [1.0, 2.0, 3.0]])
        kdop = fit_kdop(points, 16)
        assert np.allclose(kdop.max_distances, [1.0, 2.0, 3.0, 3.0, 4.0, 5.0, 0.0, 0.0])
        assert np.allclose(kdop.min_distances, [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, -1.0, -2.0])

    def test_aabb_of_points(self):
        from src.shapebounds.bounds.fitting import fit_aabb

        aabb = fit_aabb([[0.0, 5.0, -1.0], [2.0, -1.0, 1.0], [1.0, 0.0, 0.0]])
        assert np.array_equal(aabb.min, [0.0, -1.0, -1.0])
        assert np.array_equal(aabb.max, [2.0, 5.0, 1.0])
        assert aabb.volume == pytest.approx(24.0)
