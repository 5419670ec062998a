"""Branch geometry derivation."""

from .branch import soma_sphere_of, polyline_of, circle_pipe_of, DUPLICATE_POINT_TOLERANCE
from .vectors import clean_coordinate, tangent_axis, reference_axis

__all__ = [
    "soma_sphere_of",
    "polyline_of",
    "circle_pipe_of",
    "DUPLICATE_POINT_TOLERANCE",
    "clean_coordinate",
    "tangent_axis",
    "reference_axis",
]
