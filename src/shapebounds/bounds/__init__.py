"""Bounding-volume module.

This module computes and converts bounding volumes:

Components:
    volumes: AABB, OBB, RSS, OBBRSS, kIOS and k-DOP value types
    fitting: Point-cloud fitting (covariance OBB, RSS, kIOS spheres, k-DOP)
    closed_form: Per-shape closed-form bounds for bounded primitives
    implicit: Degenerate bounds for half-spaces and planes
    compute: The (shape kind, bound kind) dispatch table
    construct: Re-wrapping a bound as an oriented Box
    refit: Batched AABB refit in a Taichi kernel

Bounds are computed as:
    bv = compute_bound(shape, transform, kind)
"""

from .compute import BOUND_TABLE, compute_bound
from .construct import construct_box
from .fitting import fit_aabb, fit_kdop, fit_kios_spheres, fit_obb, fit_rss, rss_from_obb
from .volumes import (
    AABB,
    KDOP,
    KDOP_DIRECTIONS,
    KIOS,
    OBB,
    OBBRSS,
    RSS,
    BoundingSphere,
    BoundingVolume,
    BVKind,
    kdop_directions,
)

# Note: refit is NOT imported here because it allocates Taichi fields at import
# time. Import it from src.shapebounds.bounds.refit after ti.init().

__all__ = [
    "AABB",
    "OBB",
    "RSS",
    "OBBRSS",
    "KIOS",
    "KDOP",
    "KDOP_DIRECTIONS",
    "BoundingSphere",
    "BoundingVolume",
    "BVKind",
    "kdop_directions",
    "BOUND_TABLE",
    "compute_bound",
    "construct_box",
    "fit_aabb",
    "fit_obb",
    "fit_rss",
    "fit_kdop",
    "fit_kios_spheres",
    "rss_from_obb",
]
