"""
Small vector helpers shared by the geometry builders.
"""

import math
import numpy as np

WORLD_AXES = (
    np.array([1.0, 0.0, 0.0]),
    np.array([0.0, 1.0, 0.0]),
    np.array([0.0, 0.0, 1.0]),
)


def clean_coordinate(value: float, tol: float = 1e-12) -> float:
    """Snap values close to zero to exactly 0.0 (also gets rid of -0.0)."""
    if math.isclose(value, 0.0, abs_tol=tol):
        return 0.0
    return float(value)


def tangent_axis(p1: np.ndarray, p2: np.ndarray, p3: np.ndarray) -> np.ndarray:
    """
    Tangent of the 3-point linestring p1, p2, p3 at p2.

    Sum of the incoming and outgoing direction vectors, which bisects
    the angle at p2 when both legs have equal length.
    """
    return (p2 - p1) + (p3 - p2)


def reference_axis(axis: np.ndarray) -> np.ndarray:
    """
    World axis least colinear with ``axis``.

    The cross product of two nearly colinear vectors is close to zero,
    so the axis with the smallest absolute dot product is picked.
    """
    best = WORLD_AXES[0]
    best_dot = math.inf
    for candidate in WORLD_AXES:
        d = abs(float(np.dot(axis, candidate)))
        if d < best_dot:
            best_dot = d
            best = candidate
    return best.copy()
