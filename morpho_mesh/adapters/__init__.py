"""
Adapters between morpho_mesh trees and other graph libraries.
"""

from .networkx_adapter import to_networkx_graph, validate_tree

__all__ = [
    "to_networkx_graph",
    "validate_tree",
]
