"""Batched AABB refit for moving primitives.

When primitives move, tree-refit logic needs fresh leaf AABBs for many shapes
at once. Every linear-extent shape (Box, Sphere, Ellipsoid, Capsule, Cone,
Cylinder) has the closed-form AABB

    T +/- (|R| e + r_s)

so a whole batch is evaluated by one parallel Taichi kernel over preallocated
fields. Shapes without a closed form (Convex, Triangle, Halfspace, Plane) go
through compute_bound one by one.

Taichi must be initialized before this module is imported because the fields
are allocated at import time.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.shapebounds.bounds.refit import refit_aabbs
    >>> mins, maxs = refit_aabbs(shapes, transforms)
"""

import logging

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.shapebounds.bounds.closed_form import LINEAR_EXTENT_KINDS, linear_extents
from src.shapebounds.bounds.compute import compute_bound
from src.shapebounds.bounds.volumes import AABB, BVKind
from src.shapebounds.core.vector import DTYPE
from src.shapebounds.geometry.shapes import shape_kind

logger = logging.getLogger(__name__)

# Maximum number of primitives per refit batch (fields are preallocated)
MAX_PRIMITIVES = 4096

# Per-primitive inputs: Structure of Arrays layout for parallel access
_rotations = ti.Matrix.field(3, 3, dtype=ti.f64, shape=MAX_PRIMITIVES)
_translations = ti.Vector.field(3, dtype=ti.f64, shape=MAX_PRIMITIVES)
_extents = ti.Vector.field(3, dtype=ti.f64, shape=MAX_PRIMITIVES)
_radii = ti.field(dtype=ti.f64, shape=MAX_PRIMITIVES)

# Per-primitive outputs
_aabb_min = ti.Vector.field(3, dtype=ti.f64, shape=MAX_PRIMITIVES)
_aabb_max = ti.Vector.field(3, dtype=ti.f64, shape=MAX_PRIMITIVES)


@ti.kernel
def _refit_kernel(n: ti.i32):
    """Compute T +/- (|R| e + r_s) for the first n primitives."""
    for i in range(n):
        R = _rotations[i]
        e = _extents[i]
        half = ti.Vector([0.0, 0.0, 0.0], dt=ti.f64)
        for a in ti.static(range(3)):
            s = _radii[i]
            for b in ti.static(range(3)):
                s += ti.abs(R[a, b]) * e[b]
            half[a] = s
        _aabb_min[i] = _translations[i] - half
        _aabb_max[i] = _translations[i] + half


def _upload(rotations: np.ndarray, translations: np.ndarray, extents: np.ndarray, radii: np.ndarray) -> None:
    """Copy a batch into the preallocated fields (padded to MAX_PRIMITIVES)."""
    n = rotations.shape[0]
    padded_rot = np.zeros((MAX_PRIMITIVES, 3, 3), dtype=DTYPE)
    padded_vec = np.zeros((MAX_PRIMITIVES, 3), dtype=DTYPE)
    padded_rad = np.zeros(MAX_PRIMITIVES, dtype=DTYPE)

    padded_rot[:n] = rotations
    _rotations.from_numpy(padded_rot)

    padded_vec[:n] = translations
    _translations.from_numpy(padded_vec)

    padded_vec[:n] = extents
    _extents.from_numpy(padded_vec)

    padded_rad[:n] = radii
    _radii.from_numpy(padded_rad)


def refit_aabbs(shapes, transforms) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """Recompute world AABBs for a batch of primitives.

    Args:
        shapes: Sequence of catalogue shapes.
        transforms: Sequence of Transforms, one per shape.

    Returns:
        Tuple (mins, maxs) of arrays with shape (N, 3). Row i equals
        compute_bound(shapes[i], transforms[i], BVKind.AABB).

    Raises:
        ValueError: If the sequences differ in length or the batch exceeds
            MAX_PRIMITIVES.
    """
    shapes = list(shapes)
    transforms = list(transforms)
    if len(shapes) != len(transforms):
        raise ValueError(f"Got {len(shapes)} shapes but {len(transforms)} transforms")
    if len(shapes) > MAX_PRIMITIVES:
        raise ValueError(f"Maximum number of primitives ({MAX_PRIMITIVES}) exceeded")

    n = len(shapes)
    mins = np.zeros((n, 3), dtype=DTYPE)
    maxs = np.zeros((n, 3), dtype=DTYPE)
    if n == 0:
        return mins, maxs

    closed = [i for i, s in enumerate(shapes) if shape_kind(s) in LINEAR_EXTENT_KINDS]
    fallback = [i for i in range(n) if shape_kind(shapes[i]) not in LINEAR_EXTENT_KINDS]
    logger.debug("Refitting %d AABBs (%d in kernel, %d per shape)", n, len(closed), len(fallback))

    if closed:
        m = len(closed)
        rotations = np.empty((m, 3, 3), dtype=DTYPE)
        translations = np.empty((m, 3), dtype=DTYPE)
        extents = np.empty((m, 3), dtype=DTYPE)
        radii = np.empty(m, dtype=DTYPE)
        for j, i in enumerate(closed):
            rotations[j] = transforms[i].rotation
            translations[j] = transforms[i].translation
            extents[j], radii[j] = linear_extents(shapes[i])

        _upload(rotations, translations, extents, radii)
        _refit_kernel(m)
        mins[closed] = _aabb_min.to_numpy()[:m]
        maxs[closed] = _aabb_max.to_numpy()[:m]

    for i in fallback:
        bv: AABB = compute_bound(shapes[i], transforms[i], BVKind.AABB)
        mins[i] = bv.min
        maxs[i] = bv.max

    return mins, maxs
