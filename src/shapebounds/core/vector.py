"""Vector utilities for bounding-volume computation.

This module provides the small set of 3D vector helpers shared by the shape
catalogue, the vertex sampler and the bound computer. Everything operates on
NumPy arrays of the library-wide floating type ``DTYPE``.

Example:
    >>> from src.shapebounds.core.vector import vec3, build_onb_from_normal
    >>> n = vec3(0.0, 0.0, 1.0)
    >>> tangent, bitangent, normal = build_onb_from_normal(n)
"""

import numpy as np
import numpy.typing as npt

# Library-wide floating type used for all points, vectors and bounds
DTYPE = np.float64

Vec3 = npt.NDArray[np.float64]
Mat3 = npt.NDArray[np.float64]


def vec3(x: float, y: float, z: float) -> Vec3:
    """Create a 3D vector.

    Args:
        x: X component.
        y: Y component.
        z: Z component.

    Returns:
        A (3,) array of ``DTYPE``.
    """
    return np.array([x, y, z], dtype=DTYPE)


def as_vec3(v) -> Vec3:
    """Convert a sequence of three numbers to a vector, copying it."""
    arr = np.array(v, dtype=DTYPE)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {arr.shape}")
    return arr


def as_points(points) -> npt.NDArray[np.float64]:
    """Convert a point or a sequence of points to an (N, 3) array."""
    arr = np.array(points, dtype=DTYPE)
    if arr.ndim == 1:
        arr = arr.reshape(1, 3)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"Expected points of shape (N, 3), got {arr.shape}")
    return arr


def as_mat3(m) -> Mat3:
    """Convert a nested sequence to a 3x3 matrix, copying it."""
    arr = np.array(m, dtype=DTYPE)
    if arr.shape != (3, 3):
        raise ValueError(f"Expected a 3x3 matrix, got shape {arr.shape}")
    return arr


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return float(np.linalg.norm(v))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
        If v is zero-length, returns a zero vector.
    """
    n = np.linalg.norm(v)
    if n == 0.0:
        return np.zeros(3, dtype=DTYPE)
    return v / n


def build_onb_from_normal(normal: Vec3) -> tuple[Vec3, Vec3, Vec3]:
    """Build an orthonormal basis from a normal vector.

    Creates a local coordinate frame where the normal is the z-axis. The
    result is deterministic for a given normal, so bounds derived from it
    are reproducible.

    Args:
        normal: The unit normal.

    Returns:
        A tuple (tangent, bitangent, normal) forming a right-handed
        orthonormal basis.
    """
    # Choose a vector not parallel to normal
    a = vec3(1.0, 0.0, 0.0)
    if abs(normal[0]) > 0.9:
        a = vec3(0.0, 1.0, 0.0)
    tangent = normalize(np.cross(a, normal))
    bitangent = np.cross(normal, tangent)
    return tangent, bitangent, np.asarray(normal, dtype=DTYPE)


def frame_from_columns(x_axis: Vec3, y_axis: Vec3, z_axis: Vec3) -> Mat3:
    """Stack three axis vectors as the columns of a 3x3 matrix."""
    return np.column_stack((x_axis, y_axis, z_axis)).astype(DTYPE)


def right_handed(axes: Mat3) -> Mat3:
    """Return axes with the third column replaced by col0 x col1."""
    out = np.array(axes, dtype=DTYPE)
    out[:, 2] = np.cross(out[:, 0], out[:, 1])
    return out
