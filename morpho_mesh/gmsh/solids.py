"""
Boundary-representation builders: sphere, circle, disk and truncated pipe.

Every builder inserts its primitives into a GmshCatalog and returns the ids
of the loops or volumes it closed. Shared boundaries (the circle between two
consecutive pipe sections, the lateral edges between neighbouring patches)
resolve to the same catalog ids because the catalog interns segments and
arcs by their end points.
"""

import warnings
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import numpy as np

from ..core.types import Circle3D, Sphere3D, Direction3D
from ..core.result import GeometryError, ErrorCode
from ..geometry.vectors import reference_axis
from .catalog import GmshCatalog
from .entities import GmshPoint, GmshSegment, GmshArc

CIRCLE_TOLERANCE = 1e-4


@dataclass(frozen=True)
class CircleBoundary:
    """Center, four boundary points at 90 degrees and the arcs joining them."""

    center: GmshPoint
    points: Tuple[GmshPoint, GmshPoint, GmshPoint, GmshPoint]
    arc_ids: Tuple[int, int, int, int]


def build_sphere(catalog: GmshCatalog, sphere: Sphere3D) -> int:
    """
    Approximate a sphere by eight curved triangles.

    The six axis-extremal points are joined by quarter-circle arcs around
    the sphere center; every octant is closed by one ruled loop of three
    arcs.

    Parameters
    ----------
    catalog : GmshCatalog
        Catalog to fill
    sphere : Sphere3D
        Sphere to approximate

    Returns
    -------
    volume_id : int
        Id of the volume enclosed by the eight loops
    """
    c = sphere.center.to_array()
    r = sphere.radius

    def extremal(offset):
        return GmshPoint.at(c + np.asarray(offset, dtype=float), physical=True)

    xpoints = (extremal((-r, 0, 0)), extremal((r, 0, 0)))
    ypoints = (extremal((0, -r, 0)), extremal((0, r, 0)))
    zpoints = (extremal((0, 0, -r)), extremal((0, 0, r)))
    center = GmshPoint.at(sphere.center)

    line_loops = []
    for x in xpoints:
        for y in ypoints:
            xy_id = catalog.insert_arc(GmshArc(center, x, y, physical=True))
            for z in zpoints:
                xz_id = catalog.insert_arc(GmshArc(center, x, z, physical=True))
                yz_id = catalog.insert_arc(GmshArc(center, y, z, physical=True))

                line_loops.append(
                    catalog.insert_loop([xy_id, yz_id, -xz_id], physical=True, ruled=True)
                )

    return catalog.insert_volume(line_loops)


def check_points_on_circle(
    radius: float,
    center: GmshPoint,
    points: Sequence[GmshPoint],
    tolerance: float = CIRCLE_TOLERANCE,
) -> None:
    """Raise GeometryError unless every point lies at ``radius`` from center."""
    for p in points:
        new_radius = p.coords.distance_to(center.coords)
        if not abs(new_radius - radius) <= tolerance:
            raise GeometryError(
                f"Invalid circle generation point {p.coords.to_tuple()} is not on circle of "
                f"center {center.coords.to_tuple()} radius {radius} != {new_radius}",
                ErrorCode.INVALID_CIRCLE,
            )


def build_circle(
    catalog: GmshCatalog,
    circle: Circle3D,
    tolerance: float = CIRCLE_TOLERANCE,
) -> CircleBoundary:
    """
    Build a circle of arbitrary orientation from four quarter arcs.

    Two orthonormal in-plane directions are derived from the circle axis by
    crossing it with the least colinear world axis, then crossing again.

    Raises
    ------
    GeometryError
        If the axis cannot be normalized or a boundary point misses the
        requested radius
    """
    center = GmshPoint.at(circle.center)
    catalog.insert_point(center)

    try:
        axis = Direction3D.from_array(circle.axis_array())
    except ValueError as e:
        raise GeometryError(
            f"Invalid circle axis {circle.axis} at center {circle.center.to_tuple()}: {e}",
            ErrorCode.INVALID_CIRCLE,
        ) from e

    unit_vec = Direction3D.from_array(reference_axis(axis.to_array()))
    normal_vec = unit_vec.cross(axis)
    orig_vec = normal_vec.cross(axis)

    c = circle.center.to_array()
    r = circle.radius
    offsets = (
        normal_vec.to_array() * r,
        orig_vec.to_array() * r,
        normal_vec.to_array() * -r,
        orig_vec.to_array() * -r,
    )

    points = tuple(GmshPoint.at(c + offset, physical=True) for offset in offsets)
    for p in points:
        catalog.insert_point(p)

    check_points_on_circle(r, center, points, tolerance)

    arc_ids = tuple(
        catalog.insert_arc(GmshArc(center, points[i], points[(i + 1) % 4]))
        for i in range(4)
    )
    return CircleBoundary(center=center, points=points, arc_ids=arc_ids)


def build_disk(
    catalog: GmshCatalog,
    circle: Circle3D,
    is_capping: bool,
    tolerance: float = CIRCLE_TOLERANCE,
) -> Tuple[CircleBoundary, List[int]]:
    """
    Build a circle with four spokes to its center.

    Parameters
    ----------
    catalog : GmshCatalog
        Catalog to fill
    circle : Circle3D
        Cross-section to build
    is_capping : bool
        Also close the disk with four pie-slice loops
    tolerance : float
        Radius tolerance forwarded to build_circle

    Returns
    -------
    boundary : CircleBoundary
        The circle's points and arcs, for lateral stitching
    surfaces : List[int]
        Ids of the pie-slice loops, empty unless capping
    """
    boundary = build_circle(catalog, circle, tolerance)

    spoke_ids = [
        catalog.insert_segment(GmshSegment(point, boundary.center, physical=True))
        for point in boundary.points
    ]

    surfaces = []
    if is_capping:
        for i in range(4):
            next_id = (i + 1) % 4
            ids = [boundary.arc_ids[i], spoke_ids[next_id], -spoke_ids[i]]
            surfaces.append(catalog.insert_loop(ids, physical=True, ruled=True))
    return boundary, surfaces


def build_pipe_surfaces(
    catalog: GmshCatalog,
    near: CircleBoundary,
    far: CircleBoundary,
) -> List[int]:
    """Stitch two circles with four ruled quad patches."""
    res = []
    for i in range(4):
        next_id = (i + 1) % 4
        line_id1 = catalog.insert_segment(
            GmshSegment(near.points[i], far.points[i], physical=True)
        )
        line_id2 = catalog.insert_segment(
            GmshSegment(near.points[next_id], far.points[next_id], physical=True)
        )
        ids = [near.arc_ids[i], line_id2, -far.arc_ids[i], -line_id1]
        res.append(catalog.insert_loop(ids, physical=True, ruled=True))
    return res


def build_tube(
    catalog: GmshCatalog,
    cross_sections: Sequence[Circle3D],
    tolerance: float = CIRCLE_TOLERANCE,
) -> Optional[int]:
    """
    Build a truncated pipe through consecutive cross-sections.

    The first and last cross-sections are capped; every consecutive pair is
    stitched laterally, and all surfaces are closed into one volume.

    Returns
    -------
    volume_id : int or None
        Id of the pipe volume, None when fewer than two cross-sections
        were given
    """
    if len(cross_sections) < 2:
        warnings.warn(
            f"skip pipe with {len(cross_sections)} cross-section(s), nothing to connect",
            UserWarning,
            stacklevel=2,
        )
        return None

    volume_ids: List[int] = []
    last = len(cross_sections) - 1
    for i in range(last):
        near, near_caps = build_disk(catalog, cross_sections[i], i == 0, tolerance)
        volume_ids.extend(near_caps)

        far, far_caps = build_disk(catalog, cross_sections[i + 1], i + 1 == last, tolerance)
        volume_ids.extend(far_caps)

        volume_ids.extend(build_pipe_surfaces(catalog, near, far))

    return catalog.insert_volume(volume_ids, physical=True)
