"""Representative vertex sets for bounded primitives.

Generic fitting routines (kIOS spheres, k-DOP support distances, point-cloud
OBB fitting) work on point clouds rather than shape-specific formulas. This
module produces, for each bounded primitive, a small fixed set of points whose
convex hull contains the primitive:

    Box       8 corners
    Sphere    12 vertices of a circumscribing icosahedron
    Ellipsoid the same icosahedron scaled per axis
    Capsule   36 points: an icosahedron around each cap center plus a
              circumscribing hexagon at each cap equator
    Cone      7 points: circumscribing base hexagon plus the apex
    Cylinder  12 points: circumscribing hexagons at both caps
    Convex    its own points
    Triangle  its 3 vertices

The icosahedron with vertices at the cyclic permutations of (0, +/-e, +/-phi*e)
has edge length 2e and inradius e * (sqrt(27) + sqrt(15)) / 6, where phi is the
golden ratio. Choosing e = 6r / (sqrt(27) + sqrt(15)) makes the inradius equal
r, so the icosahedron circumscribes the sphere. A hexagon circumscribing a
circle of radius r has circumradius 2r / sqrt(3).

All points are returned in world space after applying the transform.

Example:
    >>> from src.shapebounds.core.transform import Transform
    >>> from src.shapebounds.geometry.shapes import Cylinder
    >>> from src.shapebounds.geometry.vertices import sample_vertices
    >>> pts = sample_vertices(Cylinder(radius=1.0, length=2.0), Transform.identity())
    >>> pts.shape
    (12, 3)
"""

import math

import numpy as np

from src.shapebounds.core.transform import Transform
from src.shapebounds.core.vector import DTYPE
from src.shapebounds.geometry.shapes import ShapeKind, shape_kind

# Golden ratio
PHI = (1.0 + math.sqrt(5.0)) / 2.0

# Icosahedron half-edge per unit inradius
ICOSAHEDRON_SCALE = 6.0 / (math.sqrt(27.0) + math.sqrt(15.0))

# Hexagon circumradius per unit inradius
HEXAGON_SCALE = 2.0 / math.sqrt(3.0)


def _icosahedron(a: float, b: float) -> np.ndarray:
    """Return the 12 icosahedron vertices (0, +/-a, +/-b) and cyclic permutations."""
    return np.array(
        [
            [0.0, a, b],
            [0.0, -a, b],
            [0.0, a, -b],
            [0.0, -a, -b],
            [a, b, 0.0],
            [-a, b, 0.0],
            [a, -b, 0.0],
            [-a, -b, 0.0],
            [b, 0.0, a],
            [b, 0.0, -a],
            [-b, 0.0, a],
            [-b, 0.0, -a],
        ],
        dtype=DTYPE,
    )


def _hexagon(radius: float, z: float) -> np.ndarray:
    """Return the 6 vertices of the hexagon circumscribing a circle of ``radius`` at height z."""
    r2 = radius * HEXAGON_SCALE
    c = 0.5 * r2
    return np.array(
        [
            [r2, 0.0, z],
            [c, radius, z],
            [-c, radius, z],
            [-r2, 0.0, z],
            [-c, -radius, z],
            [c, -radius, z],
        ],
        dtype=DTYPE,
    )


def local_vertices(shape) -> np.ndarray:
    """Compute the representative points of a bounded shape in its local frame.

    Args:
        shape: A bounded catalogue shape.

    Returns:
        Array of shape (N, 3).

    Raises:
        ValueError: If the shape is a half-space or plane (no finite vertex set).
    """
    kind = shape_kind(shape)

    if kind == ShapeKind.BOX:
        a, b, c = shape.half_extents
        return np.array(
            [
                [a, b, c],
                [a, b, -c],
                [a, -b, c],
                [a, -b, -c],
                [-a, b, c],
                [-a, b, -c],
                [-a, -b, c],
                [-a, -b, -c],
            ],
            dtype=DTYPE,
        )

    if kind == ShapeKind.SPHERE:
        edge = shape.radius * ICOSAHEDRON_SCALE
        return _icosahedron(edge, PHI * edge)

    if kind == ShapeKind.ELLIPSOID:
        # Unit-sphere icosahedron stretched along each axis
        return _icosahedron(ICOSAHEDRON_SCALE, PHI * ICOSAHEDRON_SCALE) * shape.radii

    if kind == ShapeKind.CAPSULE:
        hl = 0.5 * shape.length
        edge = shape.radius * ICOSAHEDRON_SCALE
        cap = _icosahedron(edge, PHI * edge)
        offset = np.array([0.0, 0.0, hl], dtype=DTYPE)
        return np.concatenate(
            (
                cap + offset,
                cap - offset,
                _hexagon(shape.radius, hl),
                _hexagon(shape.radius, -hl),
            )
        )

    if kind == ShapeKind.CONE:
        hl = 0.5 * shape.length
        apex = np.array([[0.0, 0.0, hl]], dtype=DTYPE)
        return np.concatenate((_hexagon(shape.radius, -hl), apex))

    if kind == ShapeKind.CYLINDER:
        hl = 0.5 * shape.length
        return np.concatenate((_hexagon(shape.radius, -hl), _hexagon(shape.radius, hl)))

    if kind in (ShapeKind.CONVEX, ShapeKind.TRIANGLE):
        return np.array(shape.points, dtype=DTYPE)

    raise ValueError(f"{type(shape).__name__} is unbounded and has no vertex set.")


def sample_vertices(shape, transform: Transform) -> np.ndarray:
    """Compute the representative points of a bounded shape in world space.

    Args:
        shape: A bounded catalogue shape.
        transform: Local-to-world transform of the shape.

    Returns:
        Array of shape (N, 3); N depends only on the shape kind (and on the
        point count for Convex).

    Raises:
        ValueError: If the shape is a half-space or plane.
    """
    return transform.apply(local_vertices(shape))
