"""Box reconstruction: re-wrap a bounding volume as an ordinary Box shape.

construct_box(bv) returns a Box and the transform placing it:

    AABB            half-extents (max - min) / 2, identity rotation, at the center
    KDOP            half-extents from the x/y/z slabs, identity rotation, at their center
    OBB             its extents and axes, at its center
    RSS             half-extents (l0 + r, l1 + r, r), its axes, at its center
    OBBRSS, KIOS    from their OBB

construct_box(bv, parent) expresses the result in the parent frame. Only the
axis-aligned kinds (AABB, KDOP) are composed with the parent; the oriented
kinds (OBB, RSS, OBBRSS, KIOS) already carry absolute centers and axes and
are returned unchanged. Callers rely on either convention, so this asymmetry
is kept as-is.

Unbounded slabs (from half-spaces and planes) are placed so the transform
stays finite: an axis with both bounds infinite is centered at 0, and an axis
with one infinite bound is centered at its finite bound. The half-extent on
such an axis is infinite.
"""

import numpy as np

from src.shapebounds.bounds.volumes import AABB, KDOP, KIOS, OBB, OBBRSS, RSS
from src.shapebounds.core.transform import Transform
from src.shapebounds.core.vector import DTYPE
from src.shapebounds.geometry.shapes import Box


def _box_from_obb(obb: OBB) -> tuple[Box, Transform]:
    return Box(half_extents=obb.extents), Transform(rotation=obb.axes, translation=obb.center)


def _slab_center(lo: np.ndarray, hi: np.ndarray) -> np.ndarray:
    """Midpoint of each [lo, hi] slab, kept finite for unbounded slabs."""
    center = np.zeros(3, dtype=DTYPE)
    for i in range(3):
        lo_finite = np.isfinite(lo[i])
        hi_finite = np.isfinite(hi[i])
        if lo_finite and hi_finite:
            center[i] = 0.5 * (lo[i] + hi[i])
        elif lo_finite:
            center[i] = lo[i]
        elif hi_finite:
            center[i] = hi[i]
    return center


def _local_box(bv) -> tuple[Box, Transform, bool]:
    """Return (box, local transform, composes_with_parent)."""
    if isinstance(bv, AABB):
        center = _slab_center(bv.min, bv.max)
        return Box(half_extents=0.5 * bv.size), Transform.from_translation(center), True
    if isinstance(bv, KDOP):
        half = 0.5 * np.array([bv.width, bv.height, bv.depth], dtype=DTYPE)
        center = _slab_center(bv.min_distances[:3], bv.max_distances[:3])
        return Box(half_extents=half), Transform.from_translation(center), True
    if isinstance(bv, OBB):
        return (*_box_from_obb(bv), False)
    if isinstance(bv, (OBBRSS, KIOS)):
        return (*_box_from_obb(bv.obb), False)
    if isinstance(bv, RSS):
        half = 0.5 * np.array([bv.width, bv.height, bv.depth], dtype=DTYPE)
        return Box(half_extents=half), Transform(rotation=bv.axes, translation=bv.center), False
    raise TypeError(f"Unsupported bounding volume type: {type(bv).__name__}")


def construct_box(bv, parent: Transform | None = None) -> tuple[Box, Transform]:
    """Approximate a bounding volume by an oriented box.

    Args:
        bv: Any bounding volume produced by compute_bound.
        parent: Optional frame the bound is expressed in. Applied to AABB and
            KDOP results only (see module docstring).

    Returns:
        Tuple (box, transform) placing the box over the bound.

    Raises:
        TypeError: If ``bv`` is not a bounding volume.
    """
    box, local, composes = _local_box(bv)
    if parent is not None and composes:
        return box, parent * local
    return box, local
