"""
Gmsh geometry entities stored in a GmshCatalog.

Entities are immutable; the catalog keeps a copy carrying the assigned id.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..core.types import Point3D


class EntityKind(Enum):
    """Kinds of entities held by the catalog."""
    POINT = "point"
    SEGMENT = "segment"
    ARC = "arc"
    LOOP = "loop"
    VOLUME = "volume"


@dataclass(frozen=True)
class GmshPoint:
    coords: Point3D
    size: Optional[float] = None
    physical: bool = False
    id: int = 0

    @classmethod
    def at(cls, coords, size: Optional[float] = None, physical: bool = False) -> "GmshPoint":
        """Build from a Point3D, an array or a tuple."""
        if not isinstance(coords, Point3D):
            coords = Point3D.from_array(coords)
        return cls(coords=coords, size=size, physical=physical)

    @property
    def key(self) -> Point3D:
        return self.coords


@dataclass(frozen=True)
class GmshSegment:
    """Straight line; `tree_index` tells apart branches of different trees."""

    point1: GmshPoint
    point2: GmshPoint
    branch_id: Optional[int] = None
    tree_index: int = 0
    physical: bool = False
    id: int = 0

    @property
    def key(self) -> Tuple[Point3D, Point3D]:
        return (self.point1.coords, self.point2.coords)


@dataclass(frozen=True)
class GmshArc:
    """Circle arc from point1 to point2 around center (less than pi)."""

    center: GmshPoint
    point1: GmshPoint
    point2: GmshPoint
    physical: bool = False
    id: int = 0

    @property
    def key(self) -> Tuple[Point3D, Point3D, Point3D]:
        return (self.point1.coords, self.center.coords, self.point2.coords)


@dataclass(frozen=True)
class GmshLineLoop:
    """Closed loop of signed line ids; a negative id walks the line backwards."""

    ids: Tuple[int, ...]
    physical: bool = False
    ruled: bool = False
    id: int = 0


@dataclass(frozen=True)
class GmshVolume:
    ids: Tuple[int, ...]
    physical: bool = False
    id: int = 0
