"""Gmsh geometry catalog, builders and writers."""

from .entities import EntityKind, GmshPoint, GmshSegment, GmshArc, GmshLineLoop, GmshVolume
from .catalog import GmshCatalog
from .solids import (
    CircleBoundary,
    build_sphere,
    build_circle,
    build_disk,
    build_pipe_surfaces,
    build_tube,
    check_points_on_circle,
    CIRCLE_TOLERANCE,
)
from .bbox import BoundingBox, add_bounding_box
from .writer import render_geo, render_dmg, pack_segments, packed_segment_ids
from .construct import build_wireframe, build_solid, build_point_cloud

__all__ = [
    "EntityKind",
    "GmshPoint",
    "GmshSegment",
    "GmshArc",
    "GmshLineLoop",
    "GmshVolume",
    "GmshCatalog",
    "CircleBoundary",
    "build_sphere",
    "build_circle",
    "build_disk",
    "build_pipe_surfaces",
    "build_tube",
    "check_points_on_circle",
    "CIRCLE_TOLERANCE",
    "BoundingBox",
    "add_bounding_box",
    "render_geo",
    "render_dmg",
    "pack_segments",
    "packed_segment_ids",
    "build_wireframe",
    "build_solid",
    "build_point_cloud",
]
