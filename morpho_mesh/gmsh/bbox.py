"""
Axis-aligned bounding box around everything in a catalog.
"""

from dataclasses import dataclass
from typing import List, Tuple
import numpy as np

from ..core.result import MorphologyError, ErrorCode
from ..geometry.vectors import clean_coordinate
from .catalog import GmshCatalog
from .entities import EntityKind, GmshPoint, GmshSegment

# offset keeps the morphology from touching the box faces
BBOX_OFFSET = 20.0
BBOX_POINT_SIZE = 100.0


@dataclass(frozen=True)
class BoundingBox:
    """Ids of the entities making up a bounding box."""

    min_corner: Tuple[float, float, float]
    max_corner: Tuple[float, float, float]
    point_ids: Tuple[int, ...]
    segment_ids: Tuple[int, ...]
    loop_ids: Tuple[int, ...]
    volume_id: int


def add_bounding_box(
    catalog: GmshCatalog,
    offset: float = BBOX_OFFSET,
    point_size: float = BBOX_POINT_SIZE,
) -> BoundingBox:
    """
    Enclose all cataloged points in a box volume.

    Parameters
    ----------
    catalog : GmshCatalog
        Catalog holding the morphology; the box is added to it
    offset : float
        Margin added on every side
    point_size : float
        Mesh size hint of the corner points

    Returns
    -------
    BoundingBox
        Corner coordinates and ids of the new entities

    Raises
    ------
    MorphologyError
        If the catalog holds no point
    """
    points = catalog.list_all(EntityKind.POINT)
    if not points:
        raise MorphologyError("Cannot bound an empty catalog", ErrorCode.EMPTY_CATALOG)

    coords = np.array([
        [clean_coordinate(v) for v in p.coords.to_tuple()] for p in points
    ])
    minp = coords.min(axis=0) - offset
    maxp = coords.max(axis=0) + offset

    corners = [
        (minp[0], minp[1], minp[2]),
        (maxp[0], minp[1], minp[2]),
        (maxp[0], maxp[1], minp[2]),
        (minp[0], maxp[1], minp[2]),
        (minp[0], minp[1], maxp[2]),
        (maxp[0], minp[1], maxp[2]),
        (maxp[0], maxp[1], maxp[2]),
        (minp[0], maxp[1], maxp[2]),
    ]
    pnts = [GmshPoint.at(np.array(c), size=point_size, physical=True) for c in corners]
    point_ids = tuple(catalog.insert_point(p) for p in pnts)

    # bottom ring, verticals, top ring
    edges: List[Tuple[int, int]] = []
    edges += [(i, (i + 1) % 4) for i in range(4)]
    edges += [(i, i + 4) for i in range(4)]
    edges += [(i + 4, (i + 1) % 4 + 4) for i in range(4)]
    s = [
        catalog.insert_segment(GmshSegment(pnts[a], pnts[b], physical=True))
        for a, b in edges
    ]

    faces = [
        [s[0], s[1], s[2], s[3]],
        [s[3], s[4], -s[11], -s[7]],
        [-s[0], s[4], s[8], -s[5]],
        [-s[1], s[5], s[9], -s[6]],
        [s[2], s[7], -s[10], -s[6]],
        [s[8], s[9], s[10], s[11]],
    ]
    loop_ids = tuple(catalog.insert_loop(f, physical=True, ruled=True) for f in faces)
    volume_id = catalog.insert_volume(loop_ids, physical=True)

    return BoundingBox(
        min_corner=tuple(float(v) for v in minp),
        max_corner=tuple(float(v) for v in maxp),
        point_ids=point_ids,
        segment_ids=tuple(s),
        loop_ids=loop_ids,
        volume_id=volume_id,
    )
