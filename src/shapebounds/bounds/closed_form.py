"""Closed-form bounds for bounded primitives.

AABB of a linear-extent shape:
    A shape whose local bound is a box of half-extents e, dilated by a sphere
    of radius r_s, maps under x' = R x + T to world half-ranges

        h_i = sum_j |R(i, j)| * e_j + r_s

    (interval arithmetic on the rotated box; the sphere term is rotation
    invariant). The per-shape (e, r_s) are:

        Box        (half_extents, 0)
        Sphere     (0, radius)
        Ellipsoid  (radii, 0)
        Capsule    ((0, 0, L/2), radius)
        Cone       ((radius, radius, L/2), 0)
        Cylinder   ((radius, radius, L/2), 0)

    For the ellipsoid this bounds its true support along world axis i,
    sqrt(sum_j (R(i, j) e_j)^2), from above; it is exact when R is a
    signed permutation.

OBB, RSS and kIOS follow the shape's local frame rotated by the transform.
k-DOPs and the kIOS spheres are fitted to the sampled vertices.
"""

import numpy as np

from src.shapebounds.bounds.fitting import (
    fit_kdop,
    fit_kios_spheres,
    fit_obb,
    rss_from_obb,
)
from src.shapebounds.bounds.volumes import AABB, KIOS, OBB, OBBRSS, RSS, BoundingSphere
from src.shapebounds.core.transform import Transform
from src.shapebounds.core.vector import DTYPE, frame_from_columns
from src.shapebounds.geometry.shapes import ShapeKind, shape_kind
from src.shapebounds.geometry.vertices import sample_vertices

# Shapes whose AABB is T +/- (|R| e + r_s)
LINEAR_EXTENT_KINDS = frozenset(
    {
        ShapeKind.BOX,
        ShapeKind.SPHERE,
        ShapeKind.ELLIPSOID,
        ShapeKind.CAPSULE,
        ShapeKind.CONE,
        ShapeKind.CYLINDER,
    }
)

# Local frame with the shape's z axis first: columns (z, x, y)
_AXIAL_FRAME = frame_from_columns(
    np.array([0.0, 0.0, 1.0]),
    np.array([1.0, 0.0, 0.0]),
    np.array([0.0, 1.0, 0.0]),
)


def linear_extents(shape) -> tuple[np.ndarray, float]:
    """Return the local half-extents and isotropic radius term of a shape.

    Args:
        shape: A shape whose kind is in LINEAR_EXTENT_KINDS.

    Returns:
        Tuple (e, r_s) such that the world AABB half-range is |R| e + r_s.

    Raises:
        ValueError: For any other shape kind.
    """
    kind = shape_kind(shape)
    if kind == ShapeKind.BOX:
        return np.array(shape.half_extents, dtype=DTYPE), 0.0
    if kind == ShapeKind.SPHERE:
        return np.zeros(3, dtype=DTYPE), float(shape.radius)
    if kind == ShapeKind.ELLIPSOID:
        return np.array(shape.radii, dtype=DTYPE), 0.0
    if kind == ShapeKind.CAPSULE:
        return np.array([0.0, 0.0, 0.5 * shape.length], dtype=DTYPE), float(shape.radius)
    if kind in (ShapeKind.CONE, ShapeKind.CYLINDER):
        r = float(shape.radius)
        return np.array([r, r, 0.5 * shape.length], dtype=DTYPE), 0.0
    raise ValueError(f"{type(shape).__name__} has no closed-form linear extents.")


# =============================================================================
# AABB
# =============================================================================


def aabb_linear(shape, tf: Transform) -> AABB:
    """AABB of a linear-extent shape (Box, Sphere, Ellipsoid, Capsule, Cone, Cylinder)."""
    extents, radius = linear_extents(shape)
    half = np.abs(tf.rotation) @ extents + radius
    return AABB(min=tf.translation - half, max=tf.translation + half)


def aabb_points(shape, tf: Transform) -> AABB:
    """AABB of a point-list shape (Convex, Triangle): min/max of transformed points."""
    return AABB.from_points(tf.apply(shape.points))


# =============================================================================
# OBB
# =============================================================================


def obb_bounded(shape, tf: Transform) -> OBB:
    """OBB of a bounded shape.

    Box, Ellipsoid, Capsule, Cone and Cylinder keep their local frame rotated
    by the transform. The sphere keeps identity axes. Point-list shapes are
    fitted in their local frame and then re-oriented.
    """
    kind = shape_kind(shape)
    R = tf.rotation
    T = tf.translation

    if kind == ShapeKind.SPHERE:
        r = float(shape.radius)
        return OBB(center=T, axes=np.eye(3, dtype=DTYPE), extents=(r, r, r))
    if kind == ShapeKind.BOX:
        return OBB(center=T, axes=R, extents=shape.half_extents)
    if kind == ShapeKind.ELLIPSOID:
        return OBB(center=T, axes=R, extents=shape.radii)
    if kind == ShapeKind.CAPSULE:
        r = float(shape.radius)
        return OBB(center=T, axes=R, extents=(r, r, 0.5 * shape.length + r))
    if kind in (ShapeKind.CONE, ShapeKind.CYLINDER):
        r = float(shape.radius)
        return OBB(center=T, axes=R, extents=(r, r, 0.5 * shape.length))
    if kind in (ShapeKind.CONVEX, ShapeKind.TRIANGLE):
        local = fit_obb(shape.points)
        return OBB(center=tf.apply(local.center), axes=R @ local.axes, extents=local.extents)
    raise ValueError(f"{type(shape).__name__} is not a bounded shape.")


# =============================================================================
# RSS / OBBRSS
# =============================================================================


def rss_bounded(shape, tf: Transform) -> RSS:
    """RSS of a bounded shape.

    Sphere, Capsule, Cone and Cylinder have exact or axis-aligned forms; the
    rectangle of an axial shape runs along its z axis. Every other shape goes
    through its OBB.
    """
    kind = shape_kind(shape)
    T = tf.translation

    if kind == ShapeKind.SPHERE:
        return RSS(center=T, axes=np.eye(3, dtype=DTYPE), half_lengths=(0.0, 0.0), radius=shape.radius)
    if kind == ShapeKind.CAPSULE:
        return RSS(
            center=T,
            axes=tf.rotation @ _AXIAL_FRAME,
            half_lengths=(0.5 * shape.length, 0.0),
            radius=shape.radius,
        )
    if kind in (ShapeKind.CONE, ShapeKind.CYLINDER):
        # Rectangle covers the z-x cross-section; the sweep covers y
        return RSS(
            center=T,
            axes=tf.rotation @ _AXIAL_FRAME,
            half_lengths=(0.5 * shape.length, shape.radius),
            radius=shape.radius,
        )
    return rss_from_obb(obb_bounded(shape, tf))


def obbrss_bounded(shape, tf: Transform) -> OBBRSS:
    return OBBRSS(obb=obb_bounded(shape, tf), rss=rss_bounded(shape, tf))


# =============================================================================
# kIOS
# =============================================================================


def kios_bounded(shape, tf: Transform) -> KIOS:
    """kIOS of a bounded shape: its OBB plus spheres fitted to its samples."""
    obb = obb_bounded(shape, tf)
    if shape_kind(shape) == ShapeKind.SPHERE:
        return KIOS(obb=obb, spheres=(BoundingSphere(center=tf.translation, radius=shape.radius),))
    return KIOS(obb=obb, spheres=fit_kios_spheres(sample_vertices(shape, tf), obb))


# =============================================================================
# k-DOP
# =============================================================================


def kdop_bounded(shape, tf: Transform, k: int):
    """k-DOP of a bounded shape from the support of its sampled vertices."""
    return fit_kdop(sample_vertices(shape, tf), k)
