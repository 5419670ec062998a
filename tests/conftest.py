import pytest
import numpy as np
from pathlib import Path
import tempfile

from morpho_mesh.core.tree import MorphoTree, BranchType


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def soma_only_tree():
    """Single soma branch made of one point."""
    tree = MorphoTree(metadata={"name": "soma_only"})
    tree.add_branch(BranchType.SOMA, [[0.0, 0.0, 0.0]], [1.0])
    return tree


@pytest.fixture
def two_branch_tree():
    """Soma at the origin (radius 1) with one straight child along x."""
    tree = MorphoTree(metadata={"name": "two_branch"})
    soma = tree.add_branch(BranchType.SOMA, [[0.0, 0.0, 0.0]], [1.0])
    tree.add_branch(
        BranchType.NEURITE,
        np.array([[2.0, 0.0, 0.0], [3.0, 0.0, 0.0], [4.0, 0.0, 0.0]]),
        np.array([0.5, 0.5, 0.5]),
        parent_id=soma.id,
    )
    return tree


@pytest.fixture
def three_level_tree():
    """Soma, a child along x, and a grandchild turning towards y."""
    tree = MorphoTree(metadata={"name": "three_level"})
    soma = tree.add_branch(BranchType.SOMA, [[0.0, 0.0, 0.0]], [1.0])
    child = tree.add_branch(
        BranchType.NEURITE,
        [[2.0, 0.0, 0.0], [3.0, 0.0, 0.0]],
        [0.5, 0.4],
        parent_id=soma.id,
    )
    tree.add_branch(
        BranchType.NEURITE,
        [[3.0, 1.0, 0.0], [3.0, 2.0, 0.0]],
        [0.3, 0.2],
        parent_id=child.id,
    )
    return tree
