"""
morpho-mesh - convert branching 3D morphologies into gmsh geometry

A morphology tree (branches of points with per-point radius, linked to
their parent) is turned into boundary-representation primitives held in a
deduplicating catalog, then written as a gmsh .geo script and optionally a
.dmg classification file.

Export modes:
- wireframe: the centerline of every branch as lines, optionally embedded
  in a bounding box volume
- solid: a sphere for the soma and a truncated-cone pipe volume per branch
- point_cloud: the raw branch points

Example Usage:
    import numpy as np
    from morpho_mesh import MorphoTree, BranchType, export_gmsh

    tree = MorphoTree(metadata={"name": "neuron"})
    soma = tree.add_branch(BranchType.SOMA, np.zeros((1, 3)), np.array([1.0]))
    tree.add_branch(
        BranchType.NEURITE,
        np.array([[2.0, 0, 0], [3.0, 0, 0], [4.0, 0, 0]]),
        np.array([0.5, 0.5, 0.5]),
        parent_id=soma.id,
    )

    result = export_gmsh(tree, "neuron.geo", mode="solid")
"""

__version__ = "0.1.0"

from .core.types import Point3D, Direction3D, Circle3D, Sphere3D
from .core.tree import BranchType, Branch, MorphoTree
from .core.result import (
    OperationResult,
    OperationStatus,
    ErrorCode,
    MorphologyError,
    PointNotFoundError,
    GeometryError,
)

from .geometry.branch import polyline_of, circle_pipe_of, soma_sphere_of

from .gmsh.entities import EntityKind, GmshPoint, GmshSegment, GmshArc
from .gmsh.catalog import GmshCatalog
from .gmsh.bbox import add_bounding_box
from .gmsh.construct import build_wireframe, build_solid, build_point_cloud
from .gmsh.writer import render_geo, render_dmg

from .params.options import ExportOptions
from .params.presets import get_preset, list_presets
from .params.validation import validate_options

from .adapters.networkx_adapter import to_networkx_graph, validate_tree

from .io.serialize import save_json, load_json

from .api.export import GmshExporter, export_gmsh

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
    "polyline_of",
    "circle_pipe_of",
    "soma_sphere_of",
    "EntityKind",
    "GmshPoint",
    "GmshSegment",
    "GmshArc",
    "GmshCatalog",
    "add_bounding_box",
    "build_wireframe",
    "build_solid",
    "build_point_cloud",
    "render_geo",
    "render_dmg",
    "ExportOptions",
    "get_preset",
    "list_presets",
    "validate_options",
    "to_networkx_graph",
    "validate_tree",
    "save_json",
    "load_json",
    "GmshExporter",
    "export_gmsh",
]
