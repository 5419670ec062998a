"""
Deduplicating catalog of gmsh entities.

The catalog assigns the ids that end up in the .geo script:

- points get a dense 1-based id per distinct coordinate;
- segments, arcs and line loops share one id space, so that a signed id
  inside a line loop always resolves to exactly one line element;
- volumes get their own 1-based ids.
"""

from dataclasses import replace
from typing import Dict, Iterable, List, Tuple, Union

from ..core.types import Point3D
from ..core.result import PointNotFoundError
from .entities import (
    EntityKind,
    GmshPoint,
    GmshSegment,
    GmshArc,
    GmshLineLoop,
    GmshVolume,
)

Entity = Union[GmshPoint, GmshSegment, GmshArc, GmshLineLoop, GmshVolume]


class GmshCatalog:
    """
    Entity store for one meshing session.

    Not thread-safe; meant to be filled by a single traversal and then
    handed to the writer.
    """

    def __init__(self):
        self._points: Dict[Point3D, GmshPoint] = {}
        self._segments: Dict[Tuple[Point3D, Point3D], GmshSegment] = {}
        self._arcs: Dict[Tuple[Point3D, Point3D, Point3D], GmshArc] = {}
        self._loops: List[GmshLineLoop] = []
        self._volumes: List[GmshVolume] = []

    def _next_line_element_id(self) -> int:
        return len(self._segments) + len(self._arcs) + len(self._loops) + 1

    def insert_point(self, point: GmshPoint) -> int:
        """
        Insert a point, returning its id.

        A point equal (by coordinates) to one already stored keeps the
        existing id and attributes.
        """
        existing = self._points.get(point.key)
        if existing is not None:
            return existing.id
        stored = replace(point, id=len(self._points) + 1)
        self._points[point.key] = stored
        return stored.id

    def find_point(self, point: Union[GmshPoint, Point3D]) -> int:
        """
        Id of a previously inserted point.

        Raises
        ------
        PointNotFoundError
            If no equal point was inserted
        """
        coords = point.coords if isinstance(point, GmshPoint) else point
        existing = self._points.get(coords)
        if existing is None:
            raise PointNotFoundError(
                f"Impossible to find point {coords.x} {coords.y} {coords.z} "
                "in list of morphology points"
            )
        return existing.id

    def insert_segment(self, segment: GmshSegment) -> int:
        """Insert a segment and its two points, returning the segment id."""
        self.insert_point(segment.point1)
        self.insert_point(segment.point2)

        existing = self._segments.get(segment.key)
        if existing is not None:
            return existing.id
        stored = replace(segment, id=self._next_line_element_id())
        self._segments[segment.key] = stored
        return stored.id

    def insert_arc(self, arc: GmshArc) -> int:
        """Insert an arc and its three points, returning the arc id."""
        self.insert_point(arc.center)
        self.insert_point(arc.point1)
        self.insert_point(arc.point2)

        existing = self._arcs.get(arc.key)
        if existing is not None:
            return existing.id
        stored = replace(arc, id=self._next_line_element_id())
        self._arcs[arc.key] = stored
        return stored.id

    def insert_loop(self, ids: Iterable[int], physical: bool = False, ruled: bool = False) -> int:
        """Store a line loop verbatim; closure is the caller's responsibility."""
        loop = GmshLineLoop(
            ids=tuple(int(i) for i in ids),
            physical=physical,
            ruled=ruled,
            id=self._next_line_element_id(),
        )
        self._loops.append(loop)
        return loop.id

    def insert_volume(self, ids: Iterable[int], physical: bool = False) -> int:
        """Store a volume bounded by the given loops."""
        volume = GmshVolume(
            ids=tuple(int(i) for i in ids),
            physical=physical,
            id=len(self._volumes) + 1,
        )
        self._volumes.append(volume)
        return volume.id

    def _collection(self, kind: EntityKind) -> Iterable[Entity]:
        if kind == EntityKind.POINT:
            return self._points.values()
        if kind == EntityKind.SEGMENT:
            return self._segments.values()
        if kind == EntityKind.ARC:
            return self._arcs.values()
        if kind == EntityKind.LOOP:
            return self._loops
        if kind == EntityKind.VOLUME:
            return self._volumes
        raise ValueError(f"Unknown entity kind: {kind}")

    def list_all(self, kind: EntityKind) -> List[Entity]:
        """All entities of a kind, sorted by id."""
        return sorted(self._collection(kind), key=lambda e: e.id)

    def count(self, kind: EntityKind) -> int:
        return len(self._collection(kind))

    def summary(self) -> Dict[str, int]:
        """Entity counts per kind."""
        return {kind.value: self.count(kind) for kind in EntityKind}
