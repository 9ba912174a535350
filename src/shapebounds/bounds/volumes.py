"""Bounding-volume value types.

Every bounding volume is a frozen dataclass of NumPy arrays, freshly built by
the bound computer and owned by the caller:

    AABB    axis-aligned box, min/max corners
    OBB     oriented box, center + axes (columns) + half-extents
    RSS     rectangle swept by a sphere, center + axes + 2 half-lengths + radius
    OBBRSS  an OBB and an RSS computed independently
    KIOS    an OBB plus 1, 3 or 5 bounding spheres (the bound is their intersection)
    KDOP    k/2 slabs along fixed support directions, k in {16, 18, 24}

Unbounded extents are represented with IEEE infinity.

Example:
    >>> from src.shapebounds.bounds.volumes import AABB
    >>> box = AABB(min=(-1, -1, -1), max=(1, 1, 1))
    >>> box.volume
    8.0
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Union

import numpy as np

from src.shapebounds.core.vector import DTYPE, Mat3, Vec3, as_mat3, as_points, as_vec3

# Tolerance used by the contains() helpers
CONTAINS_TOLERANCE = 1e-9


class BVKind(IntEnum):
    """Enumeration of supported bounding-volume kinds."""

    AABB = 0
    OBB = 1
    RSS = 2
    OBBRSS = 3
    KIOS = 4
    KDOP16 = 5
    KDOP18 = 6
    KDOP24 = 7

    @classmethod
    def parse(cls, kind: BVKind | str) -> BVKind:
        """Convert a BVKind or a case-insensitive kind name to a BVKind.

        Raises:
            ValueError: If ``kind`` does not name a bounding-volume kind.
        """
        if isinstance(kind, cls):
            return kind
        if isinstance(kind, str):
            try:
                return cls[kind.strip().upper()]
            except KeyError:
                pass
        raise ValueError(f"Unknown bounding volume kind: {kind!r}")


# Unnormalized support directions for each k-DOP size
_KDOP_DIRECTIONS_16 = (
    (1, 0, 0),
    (0, 1, 0),
    (0, 0, 1),
    (1, 1, 0),
    (1, 0, 1),
    (0, 1, 1),
    (1, -1, 0),
    (1, 0, -1),
)
_KDOP_DIRECTIONS_18 = _KDOP_DIRECTIONS_16 + ((0, 1, -1),)
_KDOP_DIRECTIONS_24 = _KDOP_DIRECTIONS_18 + (
    (1, 1, -1),
    (1, -1, 1),
    (-1, 1, 1),
)

KDOP_DIRECTIONS: dict[int, np.ndarray] = {
    16: np.array(_KDOP_DIRECTIONS_16, dtype=DTYPE),
    18: np.array(_KDOP_DIRECTIONS_18, dtype=DTYPE),
    24: np.array(_KDOP_DIRECTIONS_24, dtype=DTYPE),
}

KDOP_SIZE: dict[BVKind, int] = {
    BVKind.KDOP16: 16,
    BVKind.KDOP18: 18,
    BVKind.KDOP24: 24,
}


def kdop_directions(k: int) -> np.ndarray:
    """Return the (k/2, 3) array of support directions for a k-DOP.

    Raises:
        ValueError: If k is not 16, 18 or 24.
    """
    try:
        return KDOP_DIRECTIONS[k]
    except KeyError:
        raise ValueError(f"Unsupported k-DOP size {k}; expected 16, 18 or 24") from None


@dataclass(frozen=True, eq=False)
class AABB:
    """Axis-aligned bounding box.

    Attributes:
        min: Minimum corner; min <= max componentwise.
        max: Maximum corner.
    """

    min: Vec3
    max: Vec3

    kind: ClassVar[BVKind] = BVKind.AABB

    def __post_init__(self) -> None:
        object.__setattr__(self, "min", as_vec3(self.min))
        object.__setattr__(self, "max", as_vec3(self.max))

    @classmethod
    def from_points(cls, points) -> AABB:
        """Build the tightest AABB around a set of points."""
        pts = as_points(points)
        return cls(min=pts.min(axis=0), max=pts.max(axis=0))

    @property
    def center(self) -> Vec3:
        return 0.5 * (self.min + self.max)

    @property
    def size(self) -> Vec3:
        return self.max - self.min

    @property
    def width(self) -> float:
        return float(self.max[0] - self.min[0])

    @property
    def height(self) -> float:
        return float(self.max[1] - self.min[1])

    @property
    def depth(self) -> float:
        return float(self.max[2] - self.min[2])

    @property
    def volume(self) -> float:
        return float(np.prod(self.size))

    def contains(self, points, tol: float = CONTAINS_TOLERANCE) -> bool:
        """Check whether every point lies inside the box (within ``tol``)."""
        pts = as_points(points)
        return bool(np.all(pts >= self.min - tol) and np.all(pts <= self.max + tol))

    def contains_box(self, other: AABB, tol: float = CONTAINS_TOLERANCE) -> bool:
        """Check whether ``other`` lies inside this box (within ``tol``)."""
        return bool(np.all(other.min >= self.min - tol) and np.all(other.max <= self.max + tol))


@dataclass(frozen=True, eq=False)
class OBB:
    """Oriented bounding box.

    Attributes:
        center: Box center in world space.
        axes: 3x3 matrix whose columns are the orthonormal box axes.
        extents: Non-negative half-extents along each axis.
    """

    center: Vec3
    axes: Mat3
    extents: Vec3

    kind: ClassVar[BVKind] = BVKind.OBB

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", as_vec3(self.center))
        object.__setattr__(self, "axes", as_mat3(self.axes))
        object.__setattr__(self, "extents", as_vec3(self.extents))

    @property
    def volume(self) -> float:
        return float(np.prod(2.0 * self.extents))

    def local_coordinates(self, points) -> np.ndarray:
        """Express world points in the box frame (relative to the center)."""
        return (as_points(points) - self.center) @ self.axes

    def contains(self, points, tol: float = CONTAINS_TOLERANCE) -> bool:
        """Check whether every point lies inside the box (within ``tol``)."""
        local = self.local_coordinates(points)
        return bool(np.all(np.abs(local) <= self.extents + tol))


@dataclass(frozen=True, eq=False)
class RSS:
    """Rectangle swept by a sphere.

    The rectangle lies in the plane spanned by axes 0 and 1, centered at
    ``center`` with half side lengths ``half_lengths``; the volume is every
    point within ``radius`` of the rectangle.

    Attributes:
        center: Rectangle center in world space.
        axes: 3x3 matrix whose columns are the orthonormal frame axes.
        half_lengths: Rectangle half side lengths along axes 0 and 1.
        radius: Sweep radius.
    """

    center: Vec3
    axes: Mat3
    half_lengths: np.ndarray
    radius: float

    kind: ClassVar[BVKind] = BVKind.RSS

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", as_vec3(self.center))
        object.__setattr__(self, "axes", as_mat3(self.axes))
        half_lengths = np.array(self.half_lengths, dtype=DTYPE)
        if half_lengths.shape != (2,):
            raise ValueError(f"RSS half_lengths must have 2 entries, got {half_lengths.shape}")
        object.__setattr__(self, "half_lengths", half_lengths)
        object.__setattr__(self, "radius", float(self.radius))

    @property
    def width(self) -> float:
        return float(2.0 * (self.half_lengths[0] + self.radius))

    @property
    def height(self) -> float:
        return float(2.0 * (self.half_lengths[1] + self.radius))

    @property
    def depth(self) -> float:
        return float(2.0 * self.radius)

    def contains(self, points, tol: float = CONTAINS_TOLERANCE) -> bool:
        """Check whether every point lies within ``radius`` of the rectangle."""
        local = (as_points(points) - self.center) @ self.axes
        # Clamp onto the rectangle, then measure the remaining offset
        clamped = np.clip(local[:, :2], -self.half_lengths, self.half_lengths)
        offset = local.copy()
        offset[:, :2] -= clamped
        dist = np.linalg.norm(offset, axis=1)
        return bool(np.all(dist <= self.radius + tol))


@dataclass(frozen=True, eq=False)
class OBBRSS:
    """An OBB and an RSS computed independently from the same shape."""

    obb: OBB
    rss: RSS

    kind: ClassVar[BVKind] = BVKind.OBBRSS

    def contains(self, points, tol: float = CONTAINS_TOLERANCE) -> bool:
        return self.obb.contains(points, tol) and self.rss.contains(points, tol)


@dataclass(frozen=True, eq=False)
class BoundingSphere:
    """A sphere used by kIOS."""

    center: Vec3
    radius: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", as_vec3(self.center))
        object.__setattr__(self, "radius", float(self.radius))

    def contains(self, points, tol: float = CONTAINS_TOLERANCE) -> bool:
        dist = np.linalg.norm(as_points(points) - self.center, axis=1)
        return bool(np.all(dist <= self.radius + tol))


@dataclass(frozen=True, eq=False)
class KIOS:
    """k inflated spheres: an OBB plus up to five bounding spheres.

    Every sphere contains the whole shape, so the bound is the intersection
    of the OBB with all spheres.

    Attributes:
        obb: Oriented box around the shape.
        spheres: Tuple of 1, 3 or 5 BoundingSphere.
    """

    obb: OBB
    spheres: tuple[BoundingSphere, ...]

    kind: ClassVar[BVKind] = BVKind.KIOS

    def __post_init__(self) -> None:
        object.__setattr__(self, "spheres", tuple(self.spheres))

    @property
    def num_spheres(self) -> int:
        return len(self.spheres)

    def contains(self, points, tol: float = CONTAINS_TOLERANCE) -> bool:
        return self.obb.contains(points, tol) and all(s.contains(points, tol) for s in self.spheres)


@dataclass(frozen=True, eq=False)
class KDOP:
    """k-discrete-oriented polytope.

    ``distances`` holds k entries: entry i (i < k/2) is the minimum projection
    along support direction i and entry k/2 + i the maximum projection.

    Attributes:
        k: Number of planes, 16, 18 or 24.
        distances: Array of k signed distances (may be +/-inf).
    """

    k: int
    distances: np.ndarray

    def __post_init__(self) -> None:
        k = int(self.k)
        kdop_directions(k)
        distances = np.array(self.distances, dtype=DTYPE)
        if distances.shape != (k,):
            raise ValueError(f"KDOP<{k}> needs {k} distances, got shape {distances.shape}")
        object.__setattr__(self, "k", k)
        object.__setattr__(self, "distances", distances)

    @property
    def kind(self) -> BVKind:
        return BVKind[f"KDOP{self.k}"]

    @property
    def num_directions(self) -> int:
        return self.k // 2

    @property
    def directions(self) -> np.ndarray:
        return kdop_directions(self.k)

    @property
    def min_distances(self) -> np.ndarray:
        return self.distances[: self.num_directions]

    @property
    def max_distances(self) -> np.ndarray:
        return self.distances[self.num_directions :]

    @property
    def center(self) -> Vec3:
        """Center of the x/y/z slabs."""
        return 0.5 * (self.min_distances[:3] + self.max_distances[:3])

    @property
    def width(self) -> float:
        return float(self.max_distances[0] - self.min_distances[0])

    @property
    def height(self) -> float:
        return float(self.max_distances[1] - self.min_distances[1])

    @property
    def depth(self) -> float:
        return float(self.max_distances[2] - self.min_distances[2])

    def contains(self, points, tol: float = CONTAINS_TOLERANCE) -> bool:
        """Check whether every point lies inside all slabs (within ``tol``)."""
        proj = as_points(points) @ self.directions.T
        return bool(
            np.all(proj >= self.min_distances - tol) and np.all(proj <= self.max_distances + tol)
        )


BoundingVolume = Union[AABB, OBB, RSS, OBBRSS, KIOS, KDOP]
