"""
JSON files for morphology trees.

Layout: ``{"schema_version": "1.0", "branches": {id: branch}, "metadata": ...,
"id_gen_state": ...}`` as produced by MorphoTree.to_dict.
"""

import json
from pathlib import Path
from typing import Union
from ..core.tree import MorphoTree

SCHEMA_VERSION = "1.0"


def save_json(
    tree: MorphoTree,
    filepath: Union[str, Path],
    indent: int = 2,
) -> None:
    """
    Write a morphology tree as JSON.

    Parameters
    ----------
    tree : MorphoTree
        Tree to save
    filepath : str or Path
        Destination file
    indent : int
        JSON indentation level

    Example
    -------
    >>> from morpho_mesh import save_json
    >>> save_json(tree, "neuron.json")
    """
    Path(filepath).write_text(json.dumps(tree.to_dict(), indent=indent))


def load_json(filepath: Union[str, Path]) -> MorphoTree:
    """
    Read a morphology tree written by save_json.

    Raises
    ------
    ValueError
        If the file declares another schema version

    Example
    -------
    >>> from morpho_mesh import load_json
    >>> tree = load_json("neuron.json")
    """
    data = json.loads(Path(filepath).read_text())

    version = data.get("schema_version", SCHEMA_VERSION)
    if version != SCHEMA_VERSION:
        raise ValueError(f"Unsupported schema version: {version}")

    return MorphoTree.from_dict(data)
