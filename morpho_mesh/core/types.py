"""
Geometric value types for morphology meshing.
"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np


@dataclass(frozen=True)
class Point3D:
    """
    Point with exact-value equality.

    Frozen so that points compare and hash by coordinate value; the gmsh
    catalog interns points through this.
    """

    x: float
    y: float
    z: float

    @classmethod
    def from_array(cls, arr) -> "Point3D":
        """Build from any 3-sequence (array, tuple, list)."""
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def distance_to(self, other: "Point3D") -> float:
        """Euclidean distance."""
        return float(np.linalg.norm(self.to_array() - other.to_array()))


@dataclass
class Direction3D:
    """
    Unit vector.

    Raises ValueError when built from a zero-length or non-finite vector.
    """

    dx: float
    dy: float
    dz: float

    def __post_init__(self):
        vec = np.array([self.dx, self.dy, self.dz], dtype=float)
        norm = np.linalg.norm(vec)
        if not np.isfinite(norm) or norm < 1e-12:
            raise ValueError(f"Cannot normalize vector {tuple(vec)}")
        self.dx, self.dy, self.dz = (float(v) for v in vec / norm)

    @classmethod
    def from_array(cls, arr) -> "Direction3D":
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def to_array(self) -> np.ndarray:
        return np.array([self.dx, self.dy, self.dz], dtype=float)

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.dx, self.dy, self.dz)

    def cross(self, other: "Direction3D") -> "Direction3D":
        """Normalized cross product; ValueError for colinear inputs."""
        return Direction3D.from_array(np.cross(self.to_array(), other.to_array()))


@dataclass(frozen=True)
class Circle3D:
    """
    Circular cross-section of a tube.

    The axis is the raw (not normalized) orientation of the circle's plane
    normal, as derived from the branch centerline.
    """

    center: Point3D
    radius: float
    axis: Tuple[float, float, float]

    def axis_array(self) -> np.ndarray:
        return np.array(self.axis, dtype=float)


@dataclass(frozen=True)
class Sphere3D:
    """Sphere, used to approximate the soma."""

    center: Point3D
    radius: float
