"""Shape catalogue: the closed set of convex primitives.

Each primitive is a frozen dataclass expressed in its own local frame and
carrying a ``kind`` tag. Bound computation dispatches on that tag rather than
on class hierarchy, so the catalogue is closed: adding a primitive means adding
a ShapeKind member and a row for it in every dispatch table.

Local-frame conventions:
    - Box, Ellipsoid, Sphere are centered at the origin.
    - Capsule, Cone, Cylinder have their axis along local z and span
      z in [-length/2, length/2]. The cone's base disc is at -length/2 and its
      apex at +length/2.
    - Halfspace is the region n . x <= d; Plane is the set n . x = d.

Example:
    >>> from src.shapebounds.geometry.shapes import Box, Capsule
    >>> box = Box(half_extents=(1.0, 2.0, 3.0))
    >>> capsule = Capsule(radius=0.5, length=2.0)
    >>> capsule.volume()
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Union

import numpy as np

from src.shapebounds.core.vector import DTYPE, Vec3, as_points, as_vec3

# Tolerance used by validate_shape when checking that normals are unit length
NORMAL_TOLERANCE = 1e-6


class ShapeKind(IntEnum):
    """Enumeration of supported primitive kinds."""

    BOX = 0
    SPHERE = 1
    ELLIPSOID = 2
    CAPSULE = 3
    CONE = 4
    CYLINDER = 5
    CONVEX = 6
    TRIANGLE = 7
    HALFSPACE = 8
    PLANE = 9


@dataclass(frozen=True, eq=False)
class Box:
    """An axis-aligned box centered at the local origin.

    Attributes:
        half_extents: Half side lengths along local x, y, z (all positive).
    """

    half_extents: Vec3

    kind: ClassVar[ShapeKind] = ShapeKind.BOX
    is_bounded: ClassVar[bool] = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "half_extents", as_vec3(self.half_extents))

    @classmethod
    def from_sides(cls, x: float, y: float, z: float) -> Box:
        """Create a box from full side lengths."""
        return cls(half_extents=(0.5 * x, 0.5 * y, 0.5 * z))

    @property
    def sides(self) -> Vec3:
        """Full side lengths."""
        return 2.0 * self.half_extents

    def volume(self) -> float:
        return float(np.prod(self.sides))


@dataclass(frozen=True, eq=False)
class Sphere:
    """A sphere centered at the local origin."""

    radius: float

    kind: ClassVar[ShapeKind] = ShapeKind.SPHERE
    is_bounded: ClassVar[bool] = True

    def volume(self) -> float:
        return 4.0 / 3.0 * math.pi * self.radius**3


@dataclass(frozen=True, eq=False)
class Ellipsoid:
    """An axis-aligned ellipsoid centered at the local origin.

    Attributes:
        radii: Semi-axis lengths along local x, y, z (all positive).
    """

    radii: Vec3

    kind: ClassVar[ShapeKind] = ShapeKind.ELLIPSOID
    is_bounded: ClassVar[bool] = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "radii", as_vec3(self.radii))

    def volume(self) -> float:
        return 4.0 / 3.0 * math.pi * float(np.prod(self.radii))


@dataclass(frozen=True, eq=False)
class Capsule:
    """A segment of ``length`` along local z swept by a sphere of ``radius``."""

    radius: float
    length: float

    kind: ClassVar[ShapeKind] = ShapeKind.CAPSULE
    is_bounded: ClassVar[bool] = True

    def volume(self) -> float:
        r = self.radius
        return math.pi * r * r * self.length + 4.0 / 3.0 * math.pi * r**3


@dataclass(frozen=True, eq=False)
class Cone:
    """A cone along local z: base disc at -length/2, apex at +length/2."""

    radius: float
    length: float

    kind: ClassVar[ShapeKind] = ShapeKind.CONE
    is_bounded: ClassVar[bool] = True

    def volume(self) -> float:
        return math.pi * self.radius * self.radius * self.length / 3.0


@dataclass(frozen=True, eq=False)
class Cylinder:
    """A cylinder along local z with caps at z = +/- length/2."""

    radius: float
    length: float

    kind: ClassVar[ShapeKind] = ShapeKind.CYLINDER
    is_bounded: ClassVar[bool] = True

    def volume(self) -> float:
        return math.pi * self.radius * self.radius * self.length


@dataclass(frozen=True, eq=False)
class Convex:
    """A convex polytope given by its vertex list.

    The hull itself is not computed here; callers supply the points.

    Attributes:
        points: Array of shape (N, 3) with N >= 1.
    """

    points: np.ndarray

    kind: ClassVar[ShapeKind] = ShapeKind.CONVEX
    is_bounded: ClassVar[bool] = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", as_points(self.points))

    @property
    def num_points(self) -> int:
        return int(self.points.shape[0])


@dataclass(frozen=True, eq=False)
class Triangle:
    """A triangle with vertices a, b, c."""

    a: Vec3
    b: Vec3
    c: Vec3

    kind: ClassVar[ShapeKind] = ShapeKind.TRIANGLE
    is_bounded: ClassVar[bool] = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "a", as_vec3(self.a))
        object.__setattr__(self, "b", as_vec3(self.b))
        object.__setattr__(self, "c", as_vec3(self.c))

    @property
    def points(self) -> np.ndarray:
        """Vertices as a (3, 3) array, one row per vertex."""
        return np.stack((self.a, self.b, self.c)).astype(DTYPE)

    def area(self) -> float:
        return 0.5 * float(np.linalg.norm(np.cross(self.b - self.a, self.c - self.a)))

    def volume(self) -> float:
        return 0.0


@dataclass(frozen=True, eq=False)
class Halfspace:
    """The region n . x <= d.

    Attributes:
        normal: Unit outward normal n.
        offset: Signed offset d.
    """

    normal: Vec3
    offset: float

    kind: ClassVar[ShapeKind] = ShapeKind.HALFSPACE
    is_bounded: ClassVar[bool] = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "normal", as_vec3(self.normal))
        object.__setattr__(self, "offset", float(self.offset))

    def signed_distance(self, point) -> float:
        """Distance of ``point`` to the boundary plane, negative inside."""
        return float(np.dot(self.normal, as_vec3(point)) - self.offset)

    def volume(self) -> float:
        return math.inf


@dataclass(frozen=True, eq=False)
class Plane:
    """The two-sided plane n . x = d.

    Attributes:
        normal: Unit normal n.
        offset: Signed offset d.
    """

    normal: Vec3
    offset: float

    kind: ClassVar[ShapeKind] = ShapeKind.PLANE
    is_bounded: ClassVar[bool] = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "normal", as_vec3(self.normal))
        object.__setattr__(self, "offset", float(self.offset))

    def signed_distance(self, point) -> float:
        """Signed distance of ``point`` to the plane."""
        return float(np.dot(self.normal, as_vec3(point)) - self.offset)

    def volume(self) -> float:
        return 0.0


Shape = Union[Box, Sphere, Ellipsoid, Capsule, Cone, Cylinder, Convex, Triangle, Halfspace, Plane]

SHAPE_TYPES: tuple[type, ...] = (
    Box,
    Sphere,
    Ellipsoid,
    Capsule,
    Cone,
    Cylinder,
    Convex,
    Triangle,
    Halfspace,
    Plane,
)


def shape_kind(shape) -> ShapeKind:
    """Return the kind tag of a shape.

    Raises:
        TypeError: If ``shape`` is not one of the catalogue types.
    """
    if not isinstance(shape, SHAPE_TYPES):
        raise TypeError(f"Unsupported shape type: {type(shape).__name__}")
    return shape.kind


def validate_shape(shape) -> None:
    """Check the catalogue invariants of a shape.

    Bound computation assumes pre-validated input and never calls this; use
    it where shapes enter the system.

    Args:
        shape: The shape to check.

    Raises:
        TypeError: If ``shape`` is not a catalogue type.
        ValueError: If a size parameter is not strictly positive, a normal is
            not unit length, a point list is empty, or a value is not finite.
    """
    kind = shape_kind(shape)

    if kind == ShapeKind.BOX:
        _check_positive("Box half extent", shape.half_extents)
    elif kind == ShapeKind.SPHERE:
        _check_positive("Sphere radius", [shape.radius])
    elif kind == ShapeKind.ELLIPSOID:
        _check_positive("Ellipsoid radius", shape.radii)
    elif kind in (ShapeKind.CAPSULE, ShapeKind.CONE, ShapeKind.CYLINDER):
        name = type(shape).__name__
        _check_positive(f"{name} radius", [shape.radius])
        _check_positive(f"{name} length", [shape.length])
    elif kind in (ShapeKind.CONVEX, ShapeKind.TRIANGLE):
        points = shape.points
        if points.shape[0] == 0:
            raise ValueError(f"{type(shape).__name__} has no points.")
        if not np.all(np.isfinite(points)):
            raise ValueError(f"{type(shape).__name__} has non-finite coordinates.")
    else:
        norm = float(np.linalg.norm(shape.normal))
        if abs(norm - 1.0) > NORMAL_TOLERANCE:
            raise ValueError(f"{type(shape).__name__} normal has length {norm}, expected 1.")
        if not math.isfinite(shape.offset):
            raise ValueError(f"{type(shape).__name__} offset = {shape.offset} is not finite.")


def _check_positive(label: str, values) -> None:
    for i, value in enumerate(values):
        if not math.isfinite(value) or value <= 0.0:
            raise ValueError(f"{label} {i} = {value} must be positive and finite.")
