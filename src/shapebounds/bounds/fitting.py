"""Point-cloud bounding-volume fitting.

Generic routines that bound a set of points rather than a specific shape.
The bound computer uses them for convex polytopes, triangles, and wherever a
shape is represented by its sampled vertices.

OBB fitting:
    1 point   degenerate box at the point
    2 points  axis 0 along the segment
    3 points  axis 0 along the longest edge, axis 2 along the face normal
    N points  principal axes of the covariance matrix (eigenvectors sorted
              by decreasing eigenvalue), made right-handed

Once the axes are fixed, the center and extents come from the min/max
projections of the points onto each axis.

kIOS sphere fitting:
    The central sphere sits at the OBB center with radius equal to the
    farthest point. For elongated OBBs (extent[0] > KIOS_RATIO * extent[2])
    two more spheres are placed on either side along axis 2, and for
    needle-like OBBs (also extent[0] > KIOS_RATIO * extent[1]) another pair
    along axis 1. The offset places each extra sphere so that a sphere of
    radius r1 = sqrt(r0^2 - e2^2) / sin(A) would cross the box faces at
    angle A; its actual radius is then the farthest-point distance from its
    center, so every sphere contains every point.
"""

import math

import numpy as np

from src.shapebounds.bounds.volumes import (
    AABB,
    KDOP,
    OBB,
    RSS,
    BoundingSphere,
    kdop_directions,
)
from src.shapebounds.core.vector import (
    DTYPE,
    Mat3,
    build_onb_from_normal,
    frame_from_columns,
    normalize,
    right_handed,
)

# Elongation ratio above which kIOS uses 3 (or 5) spheres instead of 1
KIOS_RATIO = 1.5

# Half-angle A at which the extra kIOS spheres meet the box faces
KIOS_INV_SIN_A = 2.0
KIOS_COS_A = math.sqrt(3.0) / 2.0


def principal_axes(points: np.ndarray) -> Mat3:
    """Compute right-handed principal axes of a point cloud.

    Args:
        points: Array of shape (N, 3).

    Returns:
        3x3 matrix whose columns are the covariance eigenvectors sorted by
        decreasing eigenvalue.
    """
    centered = points - points.mean(axis=0)
    covariance = centered.T @ centered / max(points.shape[0], 1)
    # eigh returns eigenvalues in ascending order
    _, eigenvectors = np.linalg.eigh(covariance)
    return right_handed(eigenvectors[:, ::-1])


def _triangle_axes(points: np.ndarray) -> Mat3:
    """Axes for three points: longest edge, in-plane perpendicular, face normal."""
    edges = np.array(
        [points[1] - points[0], points[2] - points[1], points[0] - points[2]],
        dtype=DTYPE,
    )
    lengths = np.einsum("ij,ij->i", edges, edges)
    longest = int(np.argmax(lengths))
    u = normalize(edges[longest])
    w = normalize(np.cross(edges[0], edges[1]))
    if not np.any(w):
        # Collinear points: any frame containing the line
        return _segment_axes(u)
    v = np.cross(w, u)
    return frame_from_columns(u, v, w)


def _segment_axes(direction: np.ndarray) -> Mat3:
    """Axes with axis 0 along ``direction``."""
    if not np.any(direction):
        return np.eye(3, dtype=DTYPE)
    tangent, bitangent, normal = build_onb_from_normal(direction)
    return frame_from_columns(normal, tangent, bitangent)


def obb_with_axes(points: np.ndarray, axes: Mat3) -> OBB:
    """Build the tightest OBB around ``points`` with the given axes."""
    proj = points @ axes
    lo = proj.min(axis=0)
    hi = proj.max(axis=0)
    center = axes @ (0.5 * (lo + hi))
    return OBB(center=center, axes=axes, extents=0.5 * (hi - lo))


def fit_obb(points) -> OBB:
    """Fit an oriented bounding box to a point cloud.

    Args:
        points: Array of shape (N, 3) with N >= 1.

    Returns:
        An OBB containing every point.
    """
    pts = np.asarray(points, dtype=DTYPE)
    n = pts.shape[0]
    if n == 1:
        return OBB(center=pts[0], axes=np.eye(3, dtype=DTYPE), extents=np.zeros(3, dtype=DTYPE))
    if n == 2:
        axes = _segment_axes(normalize(pts[1] - pts[0]))
    elif n == 3:
        axes = _triangle_axes(pts)
    else:
        axes = principal_axes(pts)
    return obb_with_axes(pts, axes)


def rss_from_obb(obb: OBB) -> RSS:
    """Convert an OBB into a containing RSS.

    The rectangle spans the two axes with the largest extents and the sweep
    radius equals the smallest extent. Every corner (e0, e1, e2) of the box is
    then at distance e2 from the rectangle corner (e0, e1, 0).
    """
    order = np.argsort(-obb.extents, kind="stable")
    axes = right_handed(obb.axes[:, order])
    extents = obb.extents[order]
    return RSS(
        center=obb.center,
        axes=axes,
        half_lengths=extents[:2],
        radius=float(extents[2]),
    )


def fit_rss(points) -> RSS:
    """Fit a rectangle-swept sphere to a point cloud via its fitted OBB."""
    return rss_from_obb(fit_obb(points))


def _max_distance(points: np.ndarray, center: np.ndarray) -> float:
    return float(np.sqrt(np.max(np.einsum("ij,ij->i", points - center, points - center))))


def fit_kios_spheres(points, obb: OBB) -> tuple[BoundingSphere, ...]:
    """Fit the kIOS sphere set for ``points`` around a precomputed OBB.

    Args:
        points: Array of shape (N, 3).
        obb: An OBB containing the points.

    Returns:
        Tuple of 1, 3 or 5 BoundingSphere, each containing every point.
    """
    pts = np.asarray(points, dtype=DTYPE)
    # Elongation is judged on axes sorted by decreasing extent
    order = np.argsort(-obb.extents, kind="stable")
    axes = obb.axes[:, order]
    extent = obb.extents[order]
    center = obb.center
    r0 = _max_distance(pts, center)

    if extent[0] > KIOS_RATIO * extent[2]:
        num_spheres = 5 if extent[0] > KIOS_RATIO * extent[1] else 3
    else:
        num_spheres = 1

    spheres = [BoundingSphere(center=center, radius=r0)]
    if num_spheres == 1:
        return tuple(spheres)

    r10 = math.sqrt(max(r0 * r0 - extent[2] * extent[2], 0.0)) * KIOS_INV_SIN_A
    delta = axes[:, 2] * (r10 * KIOS_COS_A - extent[2])
    for c in (center - delta, center + delta):
        spheres.append(BoundingSphere(center=c, radius=_max_distance(pts, c)))

    if num_spheres == 5:
        reach = r10 * r10 - extent[0] * extent[0] - extent[2] * extent[2]
        delta = axes[:, 1] * (math.sqrt(max(reach, 0.0)) - extent[1])
        for c in (center - delta, center + delta):
            spheres.append(BoundingSphere(center=c, radius=_max_distance(pts, c)))

    return tuple(spheres)


def fit_kdop(points, k: int) -> KDOP:
    """Compute the k-DOP of a point cloud.

    Each direction's maximum is the largest projection of any point onto it
    and its minimum the smallest.
    """
    pts = np.asarray(points, dtype=DTYPE)
    proj = pts @ kdop_directions(k).T
    return KDOP(k=k, distances=np.concatenate((proj.min(axis=0), proj.max(axis=0))))


def fit_aabb(points) -> AABB:
    """Compute the AABB of a point cloud."""
    return AABB.from_points(points)
