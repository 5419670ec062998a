"""
Advanced example using individual functions from the morpho-mesh package.

This example demonstrates:
1. Checking a morphology with the networkx adapter
2. Building a solid catalog step by step
3. Rendering the .geo and .dmg text without the exporter session
4. Saving the tree to JSON
"""

import numpy as np

from morpho_mesh import MorphoTree, BranchType, save_json, validate_tree
from morpho_mesh.gmsh import GmshCatalog, EntityKind, build_solid, render_geo, render_dmg
from morpho_mesh.geometry import circle_pipe_of

tree = MorphoTree(metadata={"name": "spiral"})
soma = tree.add_branch(BranchType.SOMA, np.zeros((1, 3)), np.array([3.0]))

t = np.linspace(0.0, 2.0 * np.pi, 12)
points = np.column_stack([6.0 + 4.0 * np.cos(t), 4.0 * np.sin(t), 2.0 * t])
tree.add_branch(BranchType.NEURITE, points, np.linspace(1.0, 0.4, len(t)), parent_id=soma.id)

print("Checking morphology...")
check = validate_tree(tree)
print(f"{check.message}: {check.metadata}")

pipes = {}
for branch in tree.iter_depth_first():
    if tree.get_parent(branch) is not None:
        print(f"Branch {branch.id}: {len(circle_pipe_of(tree, branch, pipes))} cross-sections")

print("Building solid catalog...")
catalog = GmshCatalog()
volume_ids = build_solid(catalog, tree, cache=pipes)
print(f"Volumes: {volume_ids}")
print(f"Catalog: {catalog.summary()}")
print(f"Physical loops: {sum(1 for l in catalog.list_all(EntityKind.LOOP) if l.physical)}")

with open("spiral.geo", "w") as f:
    f.write(render_geo(catalog, source="spiral"))
with open("spiral.dmg", "w") as f:
    f.write(render_dmg(catalog))

save_json(tree, "spiral.json")
print("Saved spiral.geo, spiral.dmg and spiral.json")
