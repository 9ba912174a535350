"""Bounds of half-spaces and planes.

Half-spaces and planes are unbounded, so every bounding volume kind degenerates:

    AABB    +/-inf except along a world axis parallel to the normal
    OBB     axes from the normal; zero thickness for a plane
    RSS     rectangle in the plane, infinite half-lengths
    OBBRSS  composed from the two above
    kIOS    the OBB plus one sphere of infinite radius
    k-DOP   +/-inf except along a support direction parallel to the normal

All routines first move the surface into world space with transform_implicit.

Alignment is tested with exact floating equality: a normal that is only
approximately parallel to an axis or support direction gets the fully
unbounded fallback. The fallback is always conservative.
"""

import logging
import math

import numpy as np

from src.shapebounds.bounds.volumes import (
    AABB,
    KDOP,
    KIOS,
    OBB,
    OBBRSS,
    RSS,
    BoundingSphere,
    kdop_directions,
)
from src.shapebounds.core.transform import Transform
from src.shapebounds.core.vector import DTYPE, build_onb_from_normal, frame_from_columns
from src.shapebounds.geometry.implicit import transform_implicit
from src.shapebounds.geometry.shapes import Plane

logger = logging.getLogger(__name__)

INF = math.inf


def _is_plane(shape) -> bool:
    return isinstance(shape, Plane)


def _world_frame(shape, tf: Transform):
    """Return (transformed surface, point on it, tangent, bitangent)."""
    moved = transform_implicit(shape, tf)
    n = moved.normal
    tangent, bitangent, _ = build_onb_from_normal(n)
    # n d lies on the local surface, so R (n d) + T lies on the moved one
    point = tf.apply(shape.normal * shape.offset)
    return moved, point, tangent, bitangent


def parallel_factor(normal: np.ndarray, direction: np.ndarray) -> float | None:
    """Return c with normal == c * direction exactly, or None.

    The test is exact: components where ``direction`` is zero must be exactly
    0.0, and normal[i] * direction[i] must be the same value for every
    non-zero component (direction entries are 0 or +/-1).

    Args:
        normal: The unit normal.
        direction: An unnormalized support direction with entries in {-1, 0, 1}.

    Returns:
        The factor c, or None when the vectors are not exactly parallel.
    """
    c = None
    for n_i, u_i in zip(normal, direction):
        if u_i == 0.0:
            if n_i != 0.0:
                return None
            continue
        value = n_i * u_i
        if c is None:
            c = value
        elif value != c:
            return None
    if c is None or c == 0.0:
        return None
    return float(c)


# =============================================================================
# AABB
# =============================================================================


def aabb_implicit(shape, tf: Transform) -> AABB:
    """AABB of a half-space or plane.

    Only a normal exactly parallel to a world axis tightens the box: for a
    half-space the max (n = +e_i) or min (n = -e_i) bound along that axis, for
    a plane both.
    """
    moved = transform_implicit(shape, tf)
    n = moved.normal
    d = moved.offset
    lo = np.full(3, -INF, dtype=DTYPE)
    hi = np.full(3, INF, dtype=DTYPE)

    for axis in range(3):
        others = [i for i in range(3) if i != axis]
        if n[others[0]] == 0.0 and n[others[1]] == 0.0 and n[axis] != 0.0:
            if _is_plane(shape):
                lo[axis] = hi[axis] = d / n[axis]
            elif n[axis] > 0.0:
                hi[axis] = d
            else:
                lo[axis] = -d
            break
    else:
        logger.debug("%s normal %s is not axis aligned; AABB is unbounded", type(shape).__name__, n)

    return AABB(min=lo, max=hi)


# =============================================================================
# OBB / RSS / OBBRSS / kIOS
# =============================================================================


def obb_implicit(shape, tf: Transform) -> OBB:
    """OBB of a half-space or plane.

    Axes are (n', t, b) with t, b a canonical completion of the world normal.
    A plane has zero extent along n'; a half-space is unbounded along every axis.
    The half-space keeps infinite extent along n' too, since it reaches to -inf
    along the normal and a zero or finite extent would not contain it.
    """
    moved, point, tangent, bitangent = _world_frame(shape, tf)
    axes = frame_from_columns(moved.normal, tangent, bitangent)
    if _is_plane(shape):
        extents = (0.0, INF, INF)
    else:
        extents = (INF, INF, INF)
    return OBB(center=point, axes=axes, extents=extents)


def rss_implicit(shape, tf: Transform) -> RSS:
    """RSS of a half-space or plane.

    The rectangle lies in the surface (axes t, b) with infinite half-lengths
    and axis 2 along the normal. A plane needs no sweep radius; a half-space
    an infinite one.
    """
    moved, point, tangent, bitangent = _world_frame(shape, tf)
    axes = frame_from_columns(tangent, bitangent, moved.normal)
    radius = 0.0 if _is_plane(shape) else INF
    return RSS(center=point, axes=axes, half_lengths=(INF, INF), radius=radius)


def obbrss_implicit(shape, tf: Transform) -> OBBRSS:
    return OBBRSS(obb=obb_implicit(shape, tf), rss=rss_implicit(shape, tf))


def kios_implicit(shape, tf: Transform) -> KIOS:
    obb = obb_implicit(shape, tf)
    return KIOS(obb=obb, spheres=(BoundingSphere(center=obb.center, radius=INF),))


# =============================================================================
# k-DOP
# =============================================================================


def kdop_implicit(shape, tf: Transform, k: int) -> KDOP:
    """k-DOP of a half-space or plane.

    Starts fully unbounded and tightens the first support direction u that
    the world normal is exactly parallel to, n' = c u. Along u the surface
    satisfies u . x = (n' . x) / c = c |u|^2 d' (using |n'| = 1). A half-space
    bounds the max slot when c > 0 and the min slot when c < 0; a plane
    fixes both.
    """
    moved = transform_implicit(shape, tf)
    n = moved.normal
    d = moved.offset
    directions = kdop_directions(k)
    half = k // 2
    distances = np.concatenate((np.full(half, -INF, dtype=DTYPE), np.full(half, INF, dtype=DTYPE)))

    for slot, u in enumerate(directions):
        c = parallel_factor(n, u)
        if c is None:
            continue
        value = c * d * float(np.dot(u, u))
        if _is_plane(shape):
            distances[slot] = distances[half + slot] = value
        elif c > 0.0:
            distances[half + slot] = value
        else:
            distances[slot] = value
        break
    else:
        logger.debug(
            "%s normal %s is not parallel to any KDOP<%d> direction; KDOP is unbounded",
            type(shape).__name__,
            n,
            k,
        )

    return KDOP(k=k, distances=distances)
