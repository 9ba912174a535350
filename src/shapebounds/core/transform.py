"""Rigid transforms (rotation + translation).

A Transform maps local coordinates to world coordinates:
    x' = R x + T

where R is an orthonormal 3x3 rotation matrix (determinant +1) and T is a
translation vector. Transforms compose like functions: ``(a * b).apply(p)``
equals ``a.apply(b.apply(p))``.

Example:
    >>> import math
    >>> from src.shapebounds.core.transform import Transform
    >>> tf = Transform.from_axis_angle((0, 0, 1), math.pi / 2, translation=(1, 0, 0))
    >>> tf.apply((1.0, 0.0, 0.0))  # approximately (1, 1, 0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from src.shapebounds.core.vector import (
    DTYPE,
    Mat3,
    Vec3,
    as_mat3,
    as_points,
    as_vec3,
    normalize,
)


@dataclass(frozen=True, eq=False)
class Transform:
    """A rigid transform.

    Attributes:
        rotation: Orthonormal 3x3 rotation matrix. Columns are the local
            axes expressed in world space.
        translation: Translation vector (3,).
    """

    rotation: Mat3 = field(default_factory=lambda: np.eye(3, dtype=DTYPE))
    translation: Vec3 = field(default_factory=lambda: np.zeros(3, dtype=DTYPE))

    def __post_init__(self) -> None:
        object.__setattr__(self, "rotation", as_mat3(self.rotation))
        object.__setattr__(self, "translation", as_vec3(self.translation))

    @classmethod
    def identity(cls) -> Transform:
        """Create the identity transform."""
        return cls()

    @classmethod
    def from_translation(cls, translation) -> Transform:
        """Create a translation-only transform."""
        return cls(translation=translation)

    @classmethod
    def from_rotation(cls, rotation, translation=(0.0, 0.0, 0.0)) -> Transform:
        """Create a transform from a rotation matrix and optional translation."""
        return cls(rotation=rotation, translation=translation)

    @classmethod
    def from_axis_angle(cls, axis, angle: float, translation=(0.0, 0.0, 0.0)) -> Transform:
        """Create a transform rotating by ``angle`` radians about ``axis``.

        Uses Rodrigues' rotation formula:
            R = I + sin(a) K + (1 - cos(a)) K^2

        where K is the cross-product matrix of the unit axis.

        Args:
            axis: Rotation axis (need not be normalized).
            angle: Rotation angle in radians (right-hand rule).
            translation: Optional translation applied after the rotation.

        Returns:
            A new Transform.
        """
        k = normalize(as_vec3(axis))
        kx = np.array(
            [
                [0.0, -k[2], k[1]],
                [k[2], 0.0, -k[0]],
                [-k[1], k[0], 0.0],
            ],
            dtype=DTYPE,
        )
        rotation = np.eye(3, dtype=DTYPE) + math.sin(angle) * kx + (1.0 - math.cos(angle)) * (kx @ kx)
        return cls(rotation=rotation, translation=translation)

    def apply(self, points) -> np.ndarray:
        """Transform a point or an array of points (rotate, then translate).

        Args:
            points: A (3,) point or an (N, 3) array of points.

        Returns:
            Array of the same shape in the target frame.
        """
        arr = np.asarray(points, dtype=DTYPE)
        if arr.ndim == 1:
            return self.rotation @ as_vec3(arr) + self.translation
        return as_points(arr) @ self.rotation.T + self.translation

    def rotate(self, vectors) -> np.ndarray:
        """Rotate a vector or an array of vectors, ignoring translation."""
        arr = np.asarray(vectors, dtype=DTYPE)
        if arr.ndim == 1:
            return self.rotation @ as_vec3(arr)
        return as_points(arr) @ self.rotation.T

    def compose(self, other: Transform) -> Transform:
        """Return the transform applying ``other`` first, then ``self``."""
        return Transform(
            rotation=self.rotation @ other.rotation,
            translation=self.rotation @ other.translation + self.translation,
        )

    def __mul__(self, other: Transform) -> Transform:
        if not isinstance(other, Transform):
            return NotImplemented
        return self.compose(other)

    def inverse(self) -> Transform:
        """Return the inverse transform (R^T, -R^T T)."""
        rt = self.rotation.T
        return Transform(rotation=rt, translation=-(rt @ self.translation))

    def is_close(self, other: Transform, atol: float = 1e-9) -> bool:
        """Check whether two transforms agree within ``atol``."""
        return bool(
            np.allclose(self.rotation, other.rotation, atol=atol)
            and np.allclose(self.translation, other.translation, atol=atol)
        )
