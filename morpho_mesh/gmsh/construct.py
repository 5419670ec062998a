"""
Tree traversals filling a GmshCatalog.
"""

from typing import Dict, List, Optional

from ..core.tree import MorphoTree, Branch
from ..core.types import Circle3D, Sphere3D
from ..geometry.branch import polyline_of, circle_pipe_of, soma_sphere_of
from .catalog import GmshCatalog
from .entities import EntityKind, GmshPoint, GmshSegment
from .solids import build_sphere, build_tube, CIRCLE_TOLERANCE


def build_wireframe(
    catalog: GmshCatalog,
    tree: MorphoTree,
    single_soma: bool = False,
    tree_index: int = 0,
) -> int:
    """
    Add the centerline of every branch as physical segments.

    Parameters
    ----------
    catalog : GmshCatalog
        Catalog to fill
    tree : MorphoTree
        Morphology to convert
    single_soma : bool
        Do not draw the soma's own polyline
    tree_index : int
        Position of the tree in the export, stored on its segments

    Returns
    -------
    n_segments : int
        Number of segment insertions
    """
    n_segments = 0
    for branch in tree.iter_depth_first():
        if single_soma and branch.is_soma():
            continue
        linestring = polyline_of(tree, branch)
        if len(linestring) < 2:
            continue

        for i in range(len(linestring) - 1):
            dist = linestring[i].distance_to(linestring[i + 1])
            p1 = GmshPoint(linestring[i], size=dist, physical=True)

            if i < len(linestring) - 2:
                dist = linestring[i + 1].distance_to(linestring[i + 2])
            p2 = GmshPoint(linestring[i + 1], size=dist, physical=True)

            catalog.insert_segment(GmshSegment(
                p1, p2, branch_id=branch.id, tree_index=tree_index, physical=True,
            ))
            n_segments += 1
    return n_segments


def build_solid(
    catalog: GmshCatalog,
    tree: MorphoTree,
    joint_spheres: bool = False,
    cache: Optional[Dict[int, List[Circle3D]]] = None,
    tolerance: float = CIRCLE_TOLERANCE,
) -> List[int]:
    """
    Add the soma sphere and one truncated pipe per non-root branch.

    Parameters
    ----------
    catalog : GmshCatalog
        Catalog to fill
    tree : MorphoTree
        Morphology to convert
    joint_spheres : bool
        Also put a sphere at the last point of every non-soma branch
    cache : dict, optional
        Circle pipe cache shared across the session
    tolerance : float
        Radius tolerance of the circle construction

    Returns
    -------
    volume_ids : List[int]
        Ids of every volume created, in creation order
    """
    if cache is None:
        cache = {}
    volume_ids: List[int] = []
    for root in tree.roots():
        _build_solid_branch(catalog, tree, root, joint_spheres, cache, tolerance, volume_ids)
    return volume_ids


def _build_solid_branch(catalog, tree, branch: Branch, joint_spheres, cache, tolerance, volume_ids):
    if branch.is_soma():
        volume_ids.append(build_sphere(catalog, soma_sphere_of(branch)))
    elif joint_spheres and branch.get_size() > 0:
        last = branch.get_size() - 1
        sphere = Sphere3D(branch.get_point(last), float(branch.radii[last]))
        volume_ids.append(build_sphere(catalog, sphere))

    for child in tree.get_children(branch):
        pipe = circle_pipe_of(tree, child, cache)
        volume_id = build_tube(catalog, pipe, tolerance)
        if volume_id is not None:
            volume_ids.append(volume_id)
        _build_solid_branch(catalog, tree, child, joint_spheres, cache, tolerance, volume_ids)


def build_point_cloud(catalog: GmshCatalog, tree: MorphoTree) -> int:
    """Add every branch point, with its radius as size hint. Returns the point count."""
    for branch in tree.iter_depth_first():
        for point, radius in zip(branch.points, branch.radii):
            catalog.insert_point(GmshPoint.at(point, size=float(radius), physical=True))
    return catalog.count(EntityKind.POINT)
