"""Pytest configuration for shapebounds tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import math

import numpy as np
import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. Double precision
    matches the NumPy path so refit results compare tightly.
    """
    ti.init(arch=ti.cpu, default_fp=ti.f64)
    yield


@pytest.fixture
def rng():
    """Deterministic random generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def bounded_shapes():
    """One instance of every bounded primitive, keyed by name."""
    from src.shapebounds.geometry.shapes import (
        Box,
        Capsule,
        Cone,
        Convex,
        Cylinder,
        Ellipsoid,
        Sphere,
        Triangle,
    )

    return {
        "box": Box(half_extents=(1.0, 2.0, 0.5)),
        "sphere": Sphere(radius=1.5),
        "ellipsoid": Ellipsoid(radii=(1.0, 0.5, 2.0)),
        "capsule": Capsule(radius=0.5, length=3.0),
        "cone": Cone(radius=1.0, length=2.0),
        "cylinder": Cylinder(radius=0.75, length=2.5),
        "convex": Convex(
            points=[
                (0.0, 0.0, 0.0),
                (2.0, 0.0, 0.0),
                (0.0, 1.0, 0.0),
                (0.0, 0.0, 3.0),
                (1.0, 1.0, 1.0),
            ]
        ),
        "triangle": Triangle((0.0, 0.0, 0.0), (2.0, 0.0, 0.0), (0.0, 1.0, 0.5)),
    }


@pytest.fixture
def random_transforms(rng):
    """A handful of random rigid transforms."""
    from src.shapebounds.core.transform import Transform

    return [
        Transform.from_axis_angle(
            rng.normal(size=3),
            rng.uniform(0.0, 2.0 * math.pi),
            translation=rng.normal(size=3) * 3.0,
        )
        for _ in range(6)
    ]


@pytest.fixture
def surface_points(rng):
    """Return a function producing points on the true surface of a shape.

    The points are in the shape's local frame. For a cone the convex hull of
    the points is the cone itself (base circle plus apex).
    """
    from src.shapebounds.geometry.shapes import ShapeKind

    def unit_vectors(n):
        v = rng.normal(size=(n, 3))
        return v / np.linalg.norm(v, axis=1, keepdims=True)

    def circle(radius, z, n=24):
        theta = np.linspace(0.0, 2.0 * math.pi, n, endpoint=False)
        return np.column_stack((radius * np.cos(theta), radius * np.sin(theta), np.full(n, z)))

    def generate(shape, n=64):
        kind = shape.kind
        if kind == ShapeKind.BOX:
            signs = np.array([[sx, sy, sz] for sx in (-1, 1) for sy in (-1, 1) for sz in (-1, 1)])
            return signs * shape.half_extents
        if kind == ShapeKind.SPHERE:
            return unit_vectors(n) * shape.radius
        if kind == ShapeKind.ELLIPSOID:
            return unit_vectors(n) * shape.radii
        if kind == ShapeKind.CAPSULE:
            hl = 0.5 * shape.length
            top = unit_vectors(n) * shape.radius + (0.0, 0.0, hl)
            bottom = unit_vectors(n) * shape.radius - (0.0, 0.0, hl)
            return np.concatenate((top, bottom))
        if kind == ShapeKind.CONE:
            hl = 0.5 * shape.length
            return np.concatenate((circle(shape.radius, -hl), [[0.0, 0.0, hl]]))
        if kind == ShapeKind.CYLINDER:
            hl = 0.5 * shape.length
            return np.concatenate((circle(shape.radius, -hl), circle(shape.radius, hl)))
        return np.array(shape.points)

    return generate


# Exact rotation of +90 degrees about z: x -> y, y -> -x
ROT_Z_90 = np.array(
    [
        [0.0, -1.0, 0.0],
        [1.0, 0.0, 0.0],
        [0.0, 0.0, 1.0],
    ]
)


@pytest.fixture
def rot_z_90():
    """Exact 90 degree rotation about z (no round-off in the matrix)."""
    return ROT_Z_90.copy()
