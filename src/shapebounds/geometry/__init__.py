"""Geometry module for the primitive catalogue.

This module provides the convex primitives bounded by the library:

Components:
    shapes: Box, Sphere, Ellipsoid, Capsule, Cone, Cylinder, Convex,
        Triangle, Halfspace and Plane, tagged by ShapeKind
    vertices: Representative point sets for bounded primitives
    implicit: Rigid transform of half-spaces and planes

Shapes are described in their local frame; a Transform places them in the
world:
    points = sample_vertices(shape, transform)
"""

from .implicit import transform_implicit
from .shapes import (
    SHAPE_TYPES,
    Box,
    Capsule,
    Cone,
    Convex,
    Cylinder,
    Ellipsoid,
    Halfspace,
    Plane,
    Shape,
    ShapeKind,
    Sphere,
    Triangle,
    shape_kind,
    validate_shape,
)
from .vertices import local_vertices, sample_vertices

__all__ = [
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
    "Shape",
    "ShapeKind",
    "SHAPE_TYPES",
    "shape_kind",
    "validate_shape",
    "local_vertices",
    "sample_vertices",
    "transform_implicit",
]
