"""
Per-branch geometry: rendered centerline, circle pipe and soma sphere.
"""

import warnings
from typing import Dict, List, Optional
import numpy as np

from ..core.tree import MorphoTree, Branch
from ..core.types import Point3D, Circle3D, Sphere3D
from ..core.result import MorphologyError, GeometryError, ErrorCode
from .vectors import tangent_axis

DUPLICATE_POINT_TOLERANCE = 1e-9


def soma_sphere_of(branch: Branch) -> Sphere3D:
    """
    Approximate a soma branch by a sphere.

    Parameters
    ----------
    branch : Branch
        Soma branch

    Returns
    -------
    Sphere3D
        For a single point, the sphere at that point with the point's
        radius. Otherwise the gravity center of the points, with the
        mean distance of the points to that center as radius.

    Raises
    ------
    MorphologyError
        If the branch has no points
    """
    size = branch.get_size()
    if size == 0:
        raise MorphologyError(f"invalid branch {branch.id} : null size", ErrorCode.EMPTY_SOMA)

    if size == 1:
        return Sphere3D(branch.get_point(0), float(branch.radii[0]))

    center = branch.points.mean(axis=0)
    radius = float(np.linalg.norm(branch.points - center, axis=1).mean())
    return Sphere3D(Point3D.from_array(center), radius)


def polyline_of(tree: MorphoTree, branch: Branch) -> List[Point3D]:
    """
    Rendered centerline of a branch.

    The parent's soma center (or the parent's last point) is prepended so
    that consecutive branches connect. A result of length <= 1 has nothing
    to draw.
    """
    res: List[Point3D] = []

    parent = tree.get_parent(branch)
    if parent is not None:
        if parent.is_soma():
            res.append(soma_sphere_of(parent).center)
        elif parent.get_size() > 0:
            res.append(parent.get_point(parent.get_size() - 1))

    res.extend(Point3D.from_array(p) for p in branch.points)
    return res


def circle_pipe_of(
    tree: MorphoTree,
    branch: Branch,
    cache: Optional[Dict[int, List[Circle3D]]] = None,
) -> List[Circle3D]:
    """
    Sequence of oriented cross-sections following a branch.

    Parameters
    ----------
    tree : MorphoTree
        Tree owning the branch
    branch : Branch
        Branch to follow; must have a parent
    cache : dict, optional
        Pipes already computed in this session, keyed by branch id. Parent
        pipes are looked up and stored here as well.

    Returns
    -------
    pipe : List[Circle3D]
        Seed cross-section inherited from the parent, then one cross-section
        per branch point. Points duplicating the previous center are skipped
        with a warning, so the pipe may be shorter than the branch.

    Raises
    ------
    MorphologyError
        If the branch has no parent
    GeometryError
        If the parent pipe is empty
    """
    if cache is not None and branch.id in cache:
        return cache[branch.id]

    res: List[Circle3D] = []
    size = branch.get_size()
    if size < 1:
        return res

    parent = tree.get_parent(branch)
    if parent is None:
        raise MorphologyError(
            f"Unable to compute circle pipe of branch {branch.id} without parent informations",
            ErrorCode.MISSING_PARENT,
        )

    if parent.is_soma():
        sphere = soma_sphere_of(parent)
        axis = sphere.center.to_array() - branch.points[0]
        res.append(Circle3D(sphere.center, sphere.radius, tuple(float(a) for a in axis)))
    else:
        parent_pipe = circle_pipe_of(tree, parent, cache)
        if len(parent_pipe) < 1:
            raise GeometryError(
                f"Invalid parent circle pipe for branch {branch.id}, requires at least "
                "parent to have circle pipe >= 1 circle element",
                ErrorCode.EMPTY_PARENT_PIPE,
            )
        res.append(parent_pipe[-1])

    for i in range(size):
        prev_center = res[-1].center.to_array()
        center = branch.points[i]

        if i < size - 1:
            axis = tangent_axis(prev_center, center, branch.points[i + 1])
        else:
            axis = prev_center - center

        if np.allclose(prev_center, center, rtol=DUPLICATE_POINT_TOLERANCE,
                       atol=DUPLICATE_POINT_TOLERANCE):
            warnings.warn(
                f"skip point, duplicated point in morphology detected {tuple(prev_center)} and "
                f"{tuple(center)} in branch {branch.id}, on point id {i}",
                UserWarning,
                stacklevel=2,
            )
            continue

        res.append(Circle3D(
            Point3D.from_array(center),
            float(branch.radii[i]),
            tuple(float(a) for a in axis),
        ))

    if cache is not None:
        cache[branch.id] = res
    return res
