"""Rigid transform of implicit surfaces (half-spaces and planes).

Half-spaces and planes have no finite vertex set, so they are moved by
transforming their (normal, offset) representation directly.

Suppose the surface is n . x <= d (or n . x = d). Under x' = R x + T the point
x = R^T (x' - T), so

    n . R^T (x' - T) = (R n) . x' - (R n) . T

and the transformed surface is n' . x' <= d' with

    n' = R n
    d' = d + n' . T
"""

import numpy as np

from src.shapebounds.core.transform import Transform
from src.shapebounds.geometry.shapes import Halfspace, Plane


def transform_implicit(shape, transform: Transform):
    """Apply a rigid transform to a half-space or plane.

    Args:
        shape: A Halfspace or Plane.
        transform: The rigid transform.

    Returns:
        A new shape of the same type in the target frame.

    Raises:
        ValueError: If ``shape`` is not a Halfspace or Plane.
    """
    if not isinstance(shape, (Halfspace, Plane)):
        raise ValueError(
            f"transform_implicit expects a Halfspace or Plane, got {type(shape).__name__}"
        )
    n = transform.rotation @ shape.normal
    d = shape.offset + float(np.dot(n, transform.translation))
    return type(shape)(normal=n, offset=d)
