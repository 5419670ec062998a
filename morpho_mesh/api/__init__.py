"""High-level API for exporting morphologies to gmsh."""

from .export import GmshExporter, export_gmsh

__all__ = [
    "GmshExporter",
    "export_gmsh",
]
