"""Bound computer: dispatch from (shape kind, bounding-volume kind) to a routine.

Every (ShapeKind, BVKind) pair has exactly one entry in ``BOUND_TABLE``; the
table is checked for completeness at import time, so a new shape or bound kind
cannot be added without a routine for every partner.

Example:
    >>> from src.shapebounds.bounds.compute import compute_bound
    >>> from src.shapebounds.core.transform import Transform
    >>> from src.shapebounds.geometry.shapes import Box
    >>> aabb = compute_bound(Box((1, 1, 1)), Transform.identity(), "aabb")
    >>> aabb.min, aabb.max
"""

from collections.abc import Callable
from functools import partial

from src.shapebounds.bounds.closed_form import (
    LINEAR_EXTENT_KINDS,
    aabb_linear,
    aabb_points,
    kdop_bounded,
    kios_bounded,
    obb_bounded,
    obbrss_bounded,
    rss_bounded,
)
from src.shapebounds.bounds.implicit import (
    aabb_implicit,
    kdop_implicit,
    kios_implicit,
    obb_implicit,
    obbrss_implicit,
    rss_implicit,
)
from src.shapebounds.bounds.volumes import KDOP_SIZE, BVKind, BoundingVolume
from src.shapebounds.core.transform import Transform
from src.shapebounds.geometry.shapes import ShapeKind, shape_kind

BoundRoutine = Callable[..., BoundingVolume]

_IMPLICIT_KINDS = (ShapeKind.HALFSPACE, ShapeKind.PLANE)
_POINT_LIST_KINDS = (ShapeKind.CONVEX, ShapeKind.TRIANGLE)


def _build_table() -> dict[tuple[ShapeKind, BVKind], BoundRoutine]:
    table: dict[tuple[ShapeKind, BVKind], BoundRoutine] = {}

    for shape in ShapeKind:
        if shape in _IMPLICIT_KINDS:
            table[shape, BVKind.AABB] = aabb_implicit
            table[shape, BVKind.OBB] = obb_implicit
            table[shape, BVKind.RSS] = rss_implicit
            table[shape, BVKind.OBBRSS] = obbrss_implicit
            table[shape, BVKind.KIOS] = kios_implicit
            for bv, k in KDOP_SIZE.items():
                table[shape, bv] = partial(kdop_implicit, k=k)
            continue

        if shape in LINEAR_EXTENT_KINDS:
            table[shape, BVKind.AABB] = aabb_linear
        elif shape in _POINT_LIST_KINDS:
            table[shape, BVKind.AABB] = aabb_points
        table[shape, BVKind.OBB] = obb_bounded
        table[shape, BVKind.RSS] = rss_bounded
        table[shape, BVKind.OBBRSS] = obbrss_bounded
        table[shape, BVKind.KIOS] = kios_bounded
        for bv, k in KDOP_SIZE.items():
            table[shape, bv] = partial(kdop_bounded, k=k)

    missing = [(s.name, b.name) for s in ShapeKind for b in BVKind if (s, b) not in table]
    if missing:
        raise RuntimeError(f"Bound table is missing routines for {missing}")
    return table


BOUND_TABLE = _build_table()


def compute_bound(shape, transform: Transform | None = None, kind: BVKind | str = BVKind.AABB) -> BoundingVolume:
    """Compute a bounding volume of a shape under a rigid transform.

    Args:
        shape: Any catalogue shape, in its local frame.
        transform: Local-to-world transform (identity when omitted).
        kind: Requested bounding-volume kind, as a BVKind or its name
            (case-insensitive, e.g. "obb", "kdop16").

    Returns:
        A freshly built bounding volume of the requested kind.

    Raises:
        TypeError: If ``shape`` is not a catalogue shape.
        ValueError: If ``kind`` is not a bounding-volume kind.
    """
    routine = BOUND_TABLE[shape_kind(shape), BVKind.parse(kind)]
    if transform is None:
        transform = Transform.identity()
    return routine(shape, transform)
