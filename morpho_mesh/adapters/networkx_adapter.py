"""
Adapter for converting a MorphoTree to a NetworkX graph.

The branch graph is used to check the tree's topology before a
conversion starts.
"""

import networkx as nx
import numpy as np
from ..core.tree import MorphoTree
from ..core.result import OperationResult, OperationStatus, ErrorCode


def to_networkx_graph(tree: MorphoTree) -> nx.DiGraph:
    """
    Convert MorphoTree to a directed branch graph.

    The resulting graph has one node per branch with attributes:
    - 'branch_type': str type tag
    - 'size': int number of points
    - 'length': float centerline length of the branch's own points
    - 'mean_radius': float mean radius (0.0 for an empty branch)

    and one edge parent -> child for every declared parent link.

    Parameters
    ----------
    tree : MorphoTree
        The morphology to convert

    Returns
    -------
    G : nx.DiGraph
        NetworkX graph representation
    """
    G = nx.DiGraph()

    for branch_id, branch in tree.branches.items():
        if branch.get_size() > 1:
            length = float(np.linalg.norm(np.diff(branch.points, axis=0), axis=1).sum())
        else:
            length = 0.0
        mean_radius = float(branch.radii.mean()) if branch.get_size() else 0.0

        G.add_node(
            branch_id,
            branch_type=branch.branch_type.value,
            size=branch.get_size(),
            length=length,
            mean_radius=mean_radius,
        )

    for branch_id, branch in tree.branches.items():
        if branch.parent_id is not None:
            G.add_edge(branch.parent_id, branch_id)

    return G


def validate_tree(tree: MorphoTree) -> OperationResult:
    """
    Check that a MorphoTree can be converted.

    Errors: empty tree, parent links to unknown branches, parent/children
    lists that disagree, cycles, soma branches without points.
    Warnings: non-positive radii, non-soma branches without points.

    Parameters
    ----------
    tree : MorphoTree
        Tree to check

    Returns
    -------
    OperationResult
        Failure listing every error found, success (possibly with
        warnings) otherwise; metadata holds branch and root counts
    """
    result = OperationResult.success("Morphology tree is valid")

    if len(tree) == 0:
        result.add_error("Tree has no branch", ErrorCode.INVALID_MORPHOLOGY)

    for branch_id, branch in tree.branches.items():
        if branch.parent_id is not None:
            parent = tree.branches.get(branch.parent_id)
            if parent is None:
                result.add_error(
                    f"Branch {branch_id} refers to unknown parent {branch.parent_id}",
                    ErrorCode.BRANCH_NOT_FOUND,
                )
            elif branch_id not in parent.children:
                result.add_error(
                    f"Branch {branch_id} is not listed as child of its parent {branch.parent_id}",
                    ErrorCode.INVALID_MORPHOLOGY,
                )

        for child_id in branch.children:
            child = tree.branches.get(child_id)
            if child is None:
                result.add_error(
                    f"Branch {branch_id} lists unknown child {child_id}",
                    ErrorCode.BRANCH_NOT_FOUND,
                )
            elif child.parent_id != branch_id:
                result.add_error(
                    f"Child {child_id} of branch {branch_id} has parent {child.parent_id}",
                    ErrorCode.INVALID_MORPHOLOGY,
                )

        if branch.get_size() == 0:
            if branch.is_soma():
                result.add_error(f"Soma branch {branch_id} has no point", ErrorCode.EMPTY_SOMA)
            else:
                result.add_warning(f"Branch {branch_id} has no point")
        elif np.any(branch.radii <= 0):
            result.add_warning(f"Branch {branch_id} has non-positive radii")

    if not result.errors and len(tree) > 0:
        G = to_networkx_graph(tree)
        if not nx.is_forest(G):
            result.add_error("Branch links contain a cycle", ErrorCode.INVALID_MORPHOLOGY)
        result.metadata["num_branches"] = G.number_of_nodes()
        result.metadata["num_roots"] = sum(1 for n in G.nodes if G.in_degree(n) == 0)

    if result.errors:
        result.status = OperationStatus.FAILURE
        result.message = f"Morphology tree is invalid ({len(result.errors)} error(s))"

    return result
