"""Core math module.

Components:
    vector: 3D vector helpers and the library-wide floating type
    transform: Rigid transforms (rotation + translation)
"""

from .transform import Transform
from .vector import (
    DTYPE,
    as_mat3,
    as_points,
    as_vec3,
    build_onb_from_normal,
    frame_from_columns,
    length,
    normalize,
    right_handed,
    vec3,
)

__all__ = [
    "DTYPE",
    "Transform",
    "vec3",
    "as_vec3",
    "as_points",
    "as_mat3",
    "length",
    "normalize",
    "build_onb_from_normal",
    "frame_from_columns",
    "right_handed",
]
