"""
Basic example of using the morpho-mesh package.

This example demonstrates:
1. Building a small morphology tree in memory
2. Exporting it as a gmsh wireframe embedded in a bounding box
3. Reading the results
"""

import numpy as np

from morpho_mesh import MorphoTree, BranchType, export_gmsh, get_preset

print("Building morphology tree...")

tree = MorphoTree(metadata={"name": "y_neuron"})
soma = tree.add_branch(BranchType.SOMA, np.zeros((1, 3)), np.array([5.0]))
trunk = tree.add_branch(
    BranchType.NEURITE,
    np.array([[10.0, 0.0, 0.0], [20.0, 0.0, 0.0], [30.0, 0.0, 0.0]]),
    np.array([2.0, 1.8, 1.6]),
    parent_id=soma.id,
)
for side in (1.0, -1.0):
    tree.add_branch(
        BranchType.NEURITE,
        np.array([[40.0, 8.0 * side, 0.0], [50.0, 16.0 * side, 0.0]]),
        np.array([1.2, 1.0]),
        parent_id=trunk.id,
    )

result = export_gmsh(tree, "y_neuron.geo", options=get_preset("wireframe_bbox"))

print("\n=== Export Results ===")
print(f"Status: {result.status.value}")
print(f"Message: {result.message}")
for key in ("num_points", "num_segments", "num_loops", "num_volumes"):
    print(f"{key}: {result.metadata.get(key)}")
print(f"Files: {result.metadata.get('geo_path')}, {result.metadata.get('dmg_path')}")

for warning in result.warnings:
    print(f"Warning: {warning}")
