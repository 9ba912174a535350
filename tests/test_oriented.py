"""Unit tests for oriented bounds: OBB, RSS, OBBRSS and kIOS.

Tests cover:
- Frames and extents of each primitive
- Containment of the true shape surface under random transforms
- kIOS sphere counts
"""

import math

import numpy as np
import pytest

ORIENTED_KINDS = ("obb", "rss", "obbrss", "kios")


class TestOBB:
    """Tests for OBB bounds."""

    def test_box_follows_transform(self, random_transforms):
        """Test a box OBB is its own frame placed by the transform."""
        from src.shapebounds.bounds.compute import compute_bound
        from src.shapebounds.geometry.shapes import Box

        box = Box(half_extents=(1.0, 2.0, 3.0))
        for tf in random_transforms:
            bv = compute_bound(box, tf, "obb")
            assert np.allclose(bv.center, tf.translation)
            assert np.allclose(bv.axes, tf.rotation)
            assert np.allclose(bv.extents, [1.0, 2.0, 3.0])

    def test_sphere_keeps_identity_axes(self, random_transforms):
        """Test a sphere OBB is axis aligned with extents r."""
        from src.shapebounds.bounds.compute import compute_bound
        from src.shapebounds.geometry.shapes import Sphere

        for tf in random_transforms:
            bv = compute_bound(Sphere(radius=1.5), tf, "obb")
            assert np.array_equal(bv.axes, np.eye(3))
            assert np.allclose(bv.extents, 1.5)

    def test_capsule_extents(self):
        """Test a capsule OBB adds the radius along its axis."""
        from src.shapebounds.bounds.compute import compute_bound
        from src.shapebounds.geometry.shapes import Capsule

        bv = compute_bound(Capsule(radius=0.5, length=3.0), kind="obb")
        assert np.allclose(bv.extents, [0.5, 0.5, 2.0])

    def test_cylinder_and_cone_extents(self):
        """Test cylinder and cone OBBs are tight along every local axis."""
        from src.shapebounds.bounds.compute import compute_bound
        from src.shapebounds.geometry.shapes import Cone, Cylinder

        assert np.allclose(compute_bound(Cylinder(radius=1.0, length=4.0), kind="obb").extents, [1.0, 1.0, 2.0])
        assert np.allclose(compute_bound(Cone(radius=1.0, length=4.0), kind="obb").extents, [1.0, 1.0, 2.0])

    def test_triangle_is_flat(self, bounded_shapes, random_transforms):
        """Test a triangle OBB has zero thickness along the face normal."""
        from src.shapebounds.bounds.compute import compute_bound

        for tf in random_transforms:
            bv = compute_bound(bounded_shapes["triangle"], tf, "obb")
            assert bv.extents[2] == pytest.approx(0.0, abs=1e-12)
            assert abs(np.linalg.det(bv.axes) - 1.0) < 1e-9

    def test_convex_box_corners_fit_exactly(self, random_transforms):
        """Test a convex box gets its own volume back from the covariance fit."""
        from src.shapebounds.bounds.compute import compute_bound
        from src.shapebounds.geometry.shapes import Box, Convex
        from src.shapebounds.geometry.vertices import local_vertices

        corners = local_vertices(Box(half_extents=(1.0, 2.0, 3.0)))
        for tf in random_transforms:
            bv = compute_bound(Convex(points=corners), tf, "obb")
            assert bv.volume == pytest.approx(48.0, rel=1e-9)

    def test_convex_axes_follow_rotation(self, rot_z_90):
        """Test point-list OBB axes are rotated along with the shape."""
        from src.shapebounds.bounds.compute import compute_bound
        from src.shapebounds.core.transform import Transform
        from src.shapebounds.geometry.shapes import Convex

        points = [(-2.0, 0.0, 0.0), (2.0, 0.0, 0.0), (0.0, 0.5, 0.0), (0.0, -0.5, 0.1)]
        local = compute_bound(Convex(points=points), kind="obb")
        world = compute_bound(Convex(points=points), Transform(rotation=rot_z_90), "obb")
        assert np.allclose(world.axes, rot_z_90 @ local.axes)
        assert np.allclose(world.extents, local.extents)
        # The long axis now runs along world y
        assert abs(world.axes[1, 0]) == pytest.approx(1.0)


class TestRSS:
    """Tests for RSS bounds."""

    def test_sphere_is_exact(self):
        """Test a sphere RSS is a point swept by the radius."""
        from src.shapebounds.bounds.compute import compute_bound
        from src.shapebounds.geometry.shapes import Sphere

        bv = compute_bound(Sphere(radius=2.0), kind="rss")
        assert np.array_equal(bv.half_lengths, [0.0, 0.0])
        assert bv.radius == 2.0

    def test_capsule_is_exact(self, random_transforms):
        """Test a capsule RSS is its segment swept by the radius."""
        from src.shapebounds.bounds.compute import compute_bound
        from src.shapebounds.geometry.shapes import Capsule

        for tf in random_transforms:
            bv = compute_bound(Capsule(radius=0.5, length=3.0), tf, "rss")
            assert np.allclose(bv.half_lengths, [1.5, 0.0])
            assert bv.radius == 0.5
            assert np.allclose(bv.axes[:, 0], tf.rotation[:, 2])

    def test_box_rectangle_spans_largest_faces(self):
        """Test a box RSS spans the two largest extents and sweeps the smallest."""
        from src.shapebounds.bounds.compute import compute_bound
        from src.shapebounds.geometry.shapes import Box

        bv = compute_bound(Box(half_extents=(1.0, 3.0, 2.0)), kind="rss")
        assert np.allclose(bv.half_lengths, [3.0, 2.0])
        assert bv.radius == pytest.approx(1.0)
        assert abs(np.linalg.det(bv.axes) - 1.0) < 1e-12

    def test_box_dimensions(self):
        """Test width, height and depth of a box RSS."""
        from src.shapebounds.bounds.compute import compute_bound
        from src.shapebounds.geometry.shapes import Box

        bv = compute_bound(Box(half_extents=(1.0, 3.0, 2.0)), kind="rss")
        assert bv.width == pytest.approx(8.0)
        assert bv.height == pytest.approx(6.0)
        assert bv.depth == pytest.approx(2.0)

    def test_obbrss_combines_both(self, bounded_shapes):
        """Test OBBRSS holds the separately computed OBB and RSS."""
        from src.shapebounds.bounds.compute import compute_bound

        for shape in bounded_shapes.values():
            combined = compute_bound(shape, kind="obbrss")
            obb = compute_bound(shape, kind="obb")
            rss = compute_bound(shape, kind="rss")
            assert np.allclose(combined.obb.extents, obb.extents)
            assert np.allclose(combined.rss.half_lengths, rss.half_lengths)
            assert combined.rss.radius == pytest.approx(rss.radius)


class TestKIOS:
    """Tests for kIOS bounds."""

    def test_sphere_is_single_exact_sphere(self, random_transforms):
        """Test a sphere kIOS is the sphere itself."""
        from src.shapebounds.bounds.compute import compute_bound
        from src.shapebounds.geometry.shapes import Sphere

        for tf in random_transforms:
            bv = compute_bound(Sphere(radius=1.5), tf, "kios")
            assert bv.num_spheres == 1
            assert bv.spheres[0].radius == 1.5
            assert np.allclose(bv.spheres[0].center, tf.translation)

    def test_cube_uses_one_sphere(self):
        """Test a cube gets one sphere through its corners."""
        from src.shapebounds.bounds.compute import compute_bound
        from src.shapebounds.geometry.shapes import Box

        bv = compute_bound(Box(half_extents=(1.0, 1.0, 1.0)), kind="kios")
        assert bv.num_spheres == 1
        assert bv.spheres[0].radius == pytest.approx(math.sqrt(3.0))

    @pytest.mark.parametrize(
        "half, count",
        [
            ((4.0, 1.0, 1.0), 5),
            ((1.0, 4.0, 1.0), 5),
            ((4.0, 4.0, 1.0), 3),
            ((1.0, 1.2, 1.4), 1),
        ],
    )
    def test_sphere_count_follows_elongation(self, half, count):
        """Test elongated boxes get 3 or 5 spheres."""
        from src.shapebounds.bounds.compute import compute_bound
        from src.shapebounds.geometry.shapes import Box

        bv = compute_bound(Box(half_extents=half), kind="kios")
        assert bv.num_spheres == count

    def test_every_sphere_contains_samples(self, bounded_shapes, random_transforms):
        """Test each fitted kIOS sphere contains every sampled vertex."""
        from src.shapebounds.bounds.compute import compute_bound
        from src.shapebounds.geometry.vertices import sample_vertices

        for name, shape in bounded_shapes.items():
            if name == "sphere":
                # Exact sphere; its circumscribing samples lie outside it
                continue
            for tf in random_transforms:
                bv = compute_bound(shape, tf, "kios")
                assert bv.num_spheres in (1, 3, 5)
                pts = sample_vertices(shape, tf)
                for sphere in bv.spheres:
                    assert sphere.contains(pts, tol=1e-9)


class TestContainment:
    """Tests that oriented bounds contain the true shape."""

    @pytest.mark.parametrize("kind", ORIENTED_KINDS)
    def test_contains_surface(self, bounded_shapes, random_transforms, surface_points, kind):
        """Test every bound contains points on the shape's surface."""
        from src.shapebounds.bounds.compute import compute_bound

        for name, shape in bounded_shapes.items():
            local = surface_points(shape)
            for tf in random_transforms:
                bv = compute_bound(shape, tf, kind)
                assert bv.contains(tf.apply(local), tol=1e-9), f"{kind} of {name}"
