"""
Tests for the morphology tree, its networkx adapter and JSON serialization.
"""

import pytest
import numpy as np

from morpho_mesh.core.tree import MorphoTree, BranchType, Branch
from morpho_mesh.core.types import Point3D, Direction3D
from morpho_mesh.core.result import MorphologyError, ErrorCode
from morpho_mesh.adapters import to_networkx_graph, validate_tree
from morpho_mesh.io import save_json, load_json


def test_add_branch_links_parent(two_branch_tree):
    soma = two_branch_tree.get_branch(0)
    child = two_branch_tree.get_branch(1)

    assert soma.children == [1]
    assert two_branch_tree.get_parent(child) is soma
    assert two_branch_tree.get_children(soma) == [child]
    assert two_branch_tree.get_parent(soma) is None
    assert len(two_branch_tree) == 2


def test_add_branch_unknown_parent():
    tree = MorphoTree()
    with pytest.raises(MorphologyError) as exc_info:
        tree.add_branch(BranchType.NEURITE, [[0.0, 0.0, 0.0]], [1.0], parent_id=42)
    assert exc_info.value.code == ErrorCode.BRANCH_NOT_FOUND


def test_add_branch_explicit_ids():
    tree = MorphoTree()
    tree.add_branch(BranchType.SOMA, [[0.0, 0.0, 0.0]], [1.0], branch_id=10)
    nxt = tree.add_branch(BranchType.NEURITE, [[1.0, 0.0, 0.0]], [1.0], parent_id=10)

    assert nxt.id == 11
    with pytest.raises(MorphologyError):
        tree.add_branch(BranchType.NEURITE, [[1.0, 0.0, 0.0]], [1.0], branch_id=10)


def test_get_branch_unknown():
    with pytest.raises(MorphologyError):
        MorphoTree().get_branch(0)


def test_branch_length_mismatch():
    with pytest.raises(ValueError):
        Branch(id=0, branch_type=BranchType.NEURITE, points=[[0.0, 0.0, 0.0]], radii=[1.0, 2.0])


def test_branch_accessors(two_branch_tree):
    child = two_branch_tree.get_branch(1)

    assert child.get_id() == 1
    assert child.get_type() == BranchType.NEURITE
    assert child.get_size() == 3
    assert child.get_point(2) == Point3D(4.0, 0.0, 0.0)
    np.testing.assert_allclose(child.get_distances(), [0.5, 0.5, 0.5])
    assert not child.is_soma()


def test_depth_first_order(three_level_tree):
    soma = three_level_tree.get_branch(0)
    sibling = three_level_tree.add_branch(
        BranchType.NEURITE, [[-2.0, 0.0, 0.0]], [0.5], parent_id=soma.id,
    )

    order = [b.id for b in three_level_tree.iter_depth_first()]
    assert order == [0, 1, 2, sibling.id]
    assert [b.id for b in three_level_tree.roots()] == [0]


def test_direction_normalized():
    d = Direction3D.from_array(np.array([3.0, 0.0, 4.0]))
    assert d.to_tuple() == pytest.approx((0.6, 0.0, 0.8))

    with pytest.raises(ValueError):
        Direction3D.from_array(np.zeros(3))


def test_to_networkx_graph(three_level_tree):
    G = to_networkx_graph(three_level_tree)

    assert G.number_of_nodes() == 3
    assert list(G.edges()) == [(0, 1), (1, 2)]
    assert G.nodes[0]["branch_type"] == "soma"
    assert G.nodes[1]["length"] == pytest.approx(1.0)
    assert G.nodes[2]["mean_radius"] == pytest.approx(0.25)


def test_validate_tree_ok(three_level_tree):
    result = validate_tree(three_level_tree)

    assert result.is_success()
    assert result.warnings == []
    assert result.metadata["num_branches"] == 3
    assert result.metadata["num_roots"] == 1


def test_validate_tree_empty():
    result = validate_tree(MorphoTree())
    assert result.is_failure()
    assert "INVALID_MORPHOLOGY" in result.error_codes


def test_validate_tree_warnings(two_branch_tree):
    two_branch_tree.add_branch(BranchType.NEURITE, np.zeros((0, 3)), [], parent_id=1)
    two_branch_tree.add_branch(BranchType.NEURITE, [[5.0, 0.0, 0.0]], [0.0], parent_id=1)

    result = validate_tree(two_branch_tree)
    assert result.is_success()
    assert len(result.warnings) == 2


def test_validate_tree_cycle(two_branch_tree):
    soma = two_branch_tree.get_branch(0)
    soma.parent_id = 1
    two_branch_tree.get_branch(1).children.append(0)

    result = validate_tree(two_branch_tree)
    assert result.is_failure()
    assert any("cycle" in e for e in result.errors)


def test_validate_tree_broken_links(two_branch_tree):
    two_branch_tree.get_branch(0).children.append(99)

    result = validate_tree(two_branch_tree)
    assert result.is_failure()
    assert "BRANCH_NOT_FOUND" in result.error_codes


def test_json_roundtrip(three_level_tree, temp_dir):
    path = temp_dir / "tree.json"
    save_json(three_level_tree, path)
    loaded = load_json(path)

    assert len(loaded) == len(three_level_tree)
    assert loaded.metadata == {"name": "three_level"}
    for branch in three_level_tree.iter_depth_first():
        other = loaded.get_branch(branch.id)
        assert other.branch_type == branch.branch_type
        assert other.parent_id == branch.parent_id
        assert other.children == branch.children
        np.testing.assert_array_equal(other.points, branch.points)
        np.testing.assert_array_equal(other.radii, branch.radii)

    added = loaded.add_branch(BranchType.NEURITE, [[9.0, 9.0, 9.0]], [1.0], parent_id=2)
    assert added.id == 3


def test_load_json_rejects_unknown_schema(temp_dir):
    path = temp_dir / "tree.json"
    path.write_text('{"schema_version": "2.0", "branches": {}}')

    with pytest.raises(ValueError, match="schema version"):
        load_json(path)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
