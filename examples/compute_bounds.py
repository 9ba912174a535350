#!/usr/bin/env python3
"""Compute and print the bounding volumes of a transformed primitive.

This script builds one primitive, places it with a rotation about an axis and
a translation, and prints every requested bounding volume together with the
box reconstructed from it. With --batch it also refits the AABBs of a random
batch of primitives on Taichi and checks them against the per-shape results.

Usage:
    python -m examples.compute_bounds [options]

Options:
    --shape SHAPE       Primitive to bound (default: box)
    --kind KIND         Bounding volume kind, or "all" (default: all)
    --axis X Y Z        Rotation axis (default: 0 0 1)
    --angle DEGREES     Rotation angle in degrees (default: 30)
    --translate X Y Z   Translation (default: 0 0 0)
    --batch N           Also refit N random primitives on Taichi (default: 0)
    --arch ARCH         Taichi backend for --batch: cpu or gpu (default: cpu)
    --verbose           Enable debug logging

Example:
    python -m examples.compute_bounds --shape capsule --kind obb --angle 45
"""

from __future__ import annotations

import argparse
import logging
import math
import sys

import numpy as np

from src.shapebounds import (
    BVKind,
    Box,
    Capsule,
    Cone,
    Convex,
    Cylinder,
    Ellipsoid,
    Halfspace,
    Plane,
    Sphere,
    Transform,
    Triangle,
    compute_bound,
    construct_box,
    validate_shape,
)

SHAPES = {
    "box": lambda: Box(half_extents=(1.0, 0.5, 0.25)),
    "sphere": lambda: Sphere(radius=1.0),
    "ellipsoid": lambda: Ellipsoid(radii=(1.0, 0.5, 0.25)),
    "capsule": lambda: Capsule(radius=0.5, length=2.0),
    "cone": lambda: Cone(radius=0.5, length=2.0),
    "cylinder": lambda: Cylinder(radius=0.5, length=2.0),
    "convex": lambda: Convex(points=[(0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1)]),
    "triangle": lambda: Triangle((0, 0, 0), (1, 0, 0), (0, 1, 0)),
    "halfspace": lambda: Halfspace(normal=(0, 0, 1), offset=0.5),
    "plane": lambda: Plane(normal=(0, 0, 1), offset=0.5),
}


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Compute bounding volumes of a transformed primitive.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--shape",
        choices=sorted(SHAPES),
        default="box",
        help="Primitive to bound (default: box)",
    )
    parser.add_argument(
        "--kind",
        type=str,
        default="all",
        help="Bounding volume kind, e.g. aabb, obb, kdop16, or 'all' (default: all)",
    )
    parser.add_argument(
        "--axis",
        type=float,
        nargs=3,
        default=(0.0, 0.0, 1.0),
        help="Rotation axis (default: 0 0 1)",
    )
    parser.add_argument(
        "--angle",
        type=float,
        default=30.0,
        help="Rotation angle in degrees (default: 30)",
    )
    parser.add_argument(
        "--translate",
        type=float,
        nargs=3,
        default=(0.0, 0.0, 0.0),
        help="Translation (default: 0 0 0)",
    )
    parser.add_argument(
        "--batch",
        type=int,
        default=0,
        help="Also refit N random primitives on Taichi (default: 0)",
    )
    parser.add_argument(
        "--arch",
        choices=["cpu", "gpu"],
        default="cpu",
        help="Taichi backend for --batch (default: cpu)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args()


def format_bound(bv) -> str:
    """Format a bounding volume's fields on one line per field."""
    lines = [type(bv).__name__]
    for name, value in vars(bv).items():
        if isinstance(value, np.ndarray):
            value = np.array2string(value, precision=4, suppress_small=True)
        lines.append(f"  {name}: {value}")
    return "\n".join(lines)


def run_batch(count: int, arch: str) -> int:
    """Refit a random batch on Taichi and compare with compute_bound.

    Returns:
        Process exit code (0 when every AABB matches).
    """
    import taichi as ti

    ti.init(arch=ti.gpu if arch == "gpu" else ti.cpu, default_fp=ti.f64)

    from src.shapebounds.bounds.refit import refit_aabbs

    rng = np.random.default_rng(0)
    names = sorted(SHAPES)
    shapes = [SHAPES[names[i % len(names)]]() for i in range(count)]
    transforms = [
        Transform.from_axis_angle(rng.normal(size=3), rng.uniform(0, 2 * math.pi), rng.normal(size=3))
        for _ in range(count)
    ]

    mins, maxs = refit_aabbs(shapes, transforms)
    mismatches = 0
    for i, (shape, tf) in enumerate(zip(shapes, transforms)):
        bv = compute_bound(shape, tf, BVKind.AABB)
        if not (np.allclose(mins[i], bv.min) and np.allclose(maxs[i], bv.max)):
            mismatches += 1
    print(f"Refit {count} AABBs on {arch}: {mismatches} mismatches")
    return 1 if mismatches else 0


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    shape = SHAPES[args.shape]()
    try:
        validate_shape(shape)
        kinds = list(BVKind) if args.kind == "all" else [BVKind.parse(args.kind)]
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    tf = Transform.from_axis_angle(args.axis, math.radians(args.angle), args.translate)
    for kind in kinds:
        bv = compute_bound(shape, tf, kind)
        box, box_tf = construct_box(bv)
        print(format_bound(bv))
        print(f"  box half extents: {np.array2string(box.half_extents, precision=4)}")
        print(f"  box center: {np.array2string(box_tf.translation, precision=4)}")

    if args.batch > 0:
        return run_batch(args.batch, args.arch)
    return 0


if __name__ == "__main__":
    sys.exit(main())
