"""Export options, presets and validation."""

from .options import ExportOptions, MODES
from .presets import (
    wireframe,
    wireframe_bbox,
    wireframe_packed,
    solid,
    solid_dmg,
    point_cloud,
    get_preset,
    list_presets,
    PRESETS,
)

from .validation import (
    validate_options,
    validate_and_warn,
    OPTION_BOUNDS,
)

__all__ = [
    "ExportOptions",
    "MODES",
    # Presets
    "wireframe",
    "wireframe_bbox",
    "wireframe_packed",
    "solid",
    "solid_dmg",
    "point_cloud",
    "get_preset",
    "list_presets",
    "PRESETS",
    # Validation
    "validate_options",
    "validate_and_warn",
    "OPTION_BOUNDS",
]
