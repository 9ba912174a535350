"""Bounding volumes for convex primitives under rigid transforms.

This package is the leaf-level geometric kernel of a broad-phase collision
system. For a fixed catalogue of primitives it provides:
- Representative vertex sampling (exact corners or icosahedron/hexagon hulls)
- Rigid transform of half-spaces and planes
- Closed-form AABB, OBB, RSS, OBBRSS, kIOS and k-DOP bounds per shape
- Reconstruction of any bound as an oriented Box
- Batched AABB refit on Taichi

Subpackages:
    core: Vector helpers and rigid transforms
    geometry: Shape catalogue, vertex sampler, implicit-surface transform
    bounds: Bounding-volume types, fitting, dispatch and box reconstruction

Example:
    >>> from src.shapebounds import BVKind, Capsule, Transform, compute_bound
    >>> tf = Transform.from_translation((0.0, 0.0, 2.0))
    >>> obb = compute_bound(Capsule(radius=0.5, length=2.0), tf, BVKind.OBB)
"""

from .bounds import (
    AABB,
    KDOP,
    KIOS,
    OBB,
    OBBRSS,
    RSS,
    BoundingSphere,
    BVKind,
    compute_bound,
    construct_box,
)
from .core import Transform
from .geometry import (
    Box,
    Capsule,
    Cone,
    Convex,
    Cylinder,
    Ellipsoid,
    Halfspace,
    Plane,
    ShapeKind,
    Sphere,
    Triangle,
    sample_vertices,
    transform_implicit,
    validate_shape,
)

__version__ = "0.1.0"

__all__ = [
    "Transform",
    "Box",
    "Sphere",
    "Ellipsoid",
    "Capsule",
    "Cone",
    "Cylinder",
    "Convex",
    "Triangle",
    "Halfspace",
    "Plane",
    "ShapeKind",
    "validate_shape",
    "sample_vertices",
    "transform_implicit",
    "AABB",
    "OBB",
    "RSS",
    "OBBRSS",
    "KIOS",
    "KDOP",
    "BoundingSphere",
    "BVKind",
    "compute_bound",
    "construct_box",
]
