"""
Core morphology tree data structures.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Any, Sequence
import numpy as np

from .types import Point3D
from .ids import IDGenerator
from .result import MorphologyError, ErrorCode


class BranchType(Enum):
    """Branch type tag."""
    SOMA = "soma"
    NEURITE = "neurite"


@dataclass
class Branch:
    """
    Branch of a morphology tree.

    Holds an ordered point sequence with a parallel per-point radius
    sequence. Parent and children are branch ids resolved through the
    owning MorphoTree.
    """

    id: int
    branch_type: BranchType
    points: np.ndarray
    radii: np.ndarray
    parent_id: Optional[int] = None
    children: List[int] = field(default_factory=list)

    def __post_init__(self):
        self.points = np.asarray(self.points, dtype=float).reshape(-1, 3)
        self.radii = np.asarray(self.radii, dtype=float).reshape(-1)
        if len(self.points) != len(self.radii):
            raise ValueError(
                f"Branch {self.id}: {len(self.points)} points but {len(self.radii)} radii"
            )

    def get_id(self) -> int:
        return self.id

    def get_type(self) -> BranchType:
        return self.branch_type

    def get_points(self) -> np.ndarray:
        return self.points

    def get_distances(self) -> np.ndarray:
        """Per-point radius."""
        return self.radii

    def get_size(self) -> int:
        return len(self.points)

    def get_point(self, index: int) -> Point3D:
        return Point3D.from_array(self.points[index])

    def is_soma(self) -> bool:
        return self.branch_type == BranchType.SOMA

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "branch_type": self.branch_type.value,
            "points": self.points.tolist(),
            "radii": self.radii.tolist(),
            "parent_id": self.parent_id,
            "children": list(self.children),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Branch":
        """Create from dictionary."""
        return cls(
            id=d["id"],
            branch_type=BranchType(d["branch_type"]),
            points=d["points"],
            radii=d["radii"],
            parent_id=d.get("parent_id"),
            children=list(d.get("children", [])),
        )


class MorphoTree:
    """
    Morphology tree: an arena of branches indexed by id.

    The tree owns every branch; parent/child relations are plain id
    lookups into the arena.
    """

    def __init__(self, metadata: Optional[Dict[str, Any]] = None):
        """
        Initialize an empty tree.

        Parameters
        ----------
        metadata : dict, optional
            Tree metadata (name, source file, units, etc.)
        """
        self.branches: Dict[int, Branch] = {}
        self.metadata = metadata or {}
        self.id_gen = IDGenerator()

    def __len__(self) -> int:
        return len(self.branches)

    def add_branch(
        self,
        branch_type: BranchType,
        points: Sequence[Sequence[float]],
        radii: Sequence[float],
        parent_id: Optional[int] = None,
        branch_id: Optional[int] = None,
    ) -> Branch:
        """
        Add a branch to the tree and link it to its parent.

        Parameters
        ----------
        branch_type : BranchType
            Type tag of the new branch
        points : array-like, shape (N, 3)
            Branch points
        radii : array-like, shape (N,)
            Radius at each point
        parent_id : int, optional
            Parent branch id; None for a root
        branch_id : int, optional
            Explicit id; allocated from the tree's generator when omitted

        Returns
        -------
        branch : Branch
            The new branch
        """
        if parent_id is not None and parent_id not in self.branches:
            raise MorphologyError(
                f"Parent branch {parent_id} not in tree", ErrorCode.BRANCH_NOT_FOUND
            )
        if branch_id is None:
            branch_id = self.id_gen.next_id()
        elif branch_id in self.branches:
            raise MorphologyError(f"Branch {branch_id} already exists")
        self.id_gen.observe(branch_id)

        branch = Branch(
            id=branch_id,
            branch_type=branch_type,
            points=points,
            radii=radii,
            parent_id=parent_id,
        )
        self.branches[branch_id] = branch
        if parent_id is not None:
            self.branches[parent_id].children.append(branch_id)
        return branch

    def get_branch(self, branch_id: int) -> Branch:
        """Get branch by ID."""
        branch = self.branches.get(branch_id)
        if branch is None:
            raise MorphologyError(
                f"Branch {branch_id} not in tree", ErrorCode.BRANCH_NOT_FOUND
            )
        return branch

    def get_parent(self, branch: Branch) -> Optional[Branch]:
        """Get the parent of a branch, None for a root."""
        if branch.parent_id is None:
            return None
        return self.get_branch(branch.parent_id)

    def get_children(self, branch: Branch) -> List[Branch]:
        """Get the children of a branch in insertion order."""
        return [self.get_branch(c) for c in branch.children]

    def roots(self) -> List[Branch]:
        """Parentless branches, sorted by id."""
        return [self.branches[bid] for bid in sorted(self.branches)
                if self.branches[bid].parent_id is None]

    def iter_depth_first(self) -> Iterator[Branch]:
        """Pre-order depth-first iteration from every root."""
        stack = list(reversed(self.roots()))
        while stack:
            branch = stack.pop()
            yield branch
            stack.extend(reversed(self.get_children(branch)))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "schema_version": "1.0",
            "branches": {bid: b.to_dict() for bid, b in self.branches.items()},
            "metadata": self.metadata,
            "id_gen_state": self.id_gen.get_state(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "MorphoTree":
        """Create from dictionary."""
        tree = cls(metadata=d.get("metadata", {}))

        for bid, branch_dict in d["branches"].items():
            tree.branches[int(bid)] = Branch.from_dict(branch_dict)
            tree.id_gen.observe(int(bid))

        if "id_gen_state" in d:
            tree.id_gen.set_state(d["id_gen_state"])

        return tree
