"""Core data structures for morphology trees."""

from .types import Point3D, Direction3D, Circle3D, Sphere3D
from .tree import BranchType, Branch, MorphoTree
from .result import (
    OperationResult,
    OperationStatus,
    ErrorCode,
    MorphologyError,
    PointNotFoundError,
    GeometryError,
)
from .ids import IDGenerator

__all__ = [
    "Point3D",
    "Direction3D",
    "Circle3D",
    "Sphere3D",
    "BranchType",
    "Branch",
    "MorphoTree",
    "OperationResult",
    "OperationStatus",
    "ErrorCode",
    "MorphologyError",
    "PointNotFoundError",
    "GeometryError",
    "IDGenerator",
]
