"""Named export option presets.

Each preset matches one of the usual ways of feeding a morphology to gmsh.
"""

from .options import ExportOptions


def wireframe() -> ExportOptions:
    """Centerline segments only."""
    return ExportOptions(mode="wireframe")


def wireframe_bbox() -> ExportOptions:
    """
    Centerline embedded in a bounding box volume.

    Writes the .dmg file as well, for meshers that classify the box
    faces and the embedded lines.
    """
    return ExportOptions(mode="wireframe", bounding_box=True, write_dmg=True)


def wireframe_packed() -> ExportOptions:
    """Centerline with one polyline per branch run."""
    return ExportOptions(mode="wireframe", packed=True)


def solid() -> ExportOptions:
    """Soma sphere and tapered pipe volumes."""
    return ExportOptions(mode="solid")


def solid_dmg() -> ExportOptions:
    """Solid mode plus the .dmg classification file."""
    return ExportOptions(mode="solid", write_dmg=True)


def point_cloud() -> ExportOptions:
    """Every branch point, sized by its radius."""
    return ExportOptions(mode="point_cloud", point_sizes=True)


PRESETS = {
    "wireframe": wireframe,
    "wireframe_bbox": wireframe_bbox,
    "wireframe_packed": wireframe_packed,
    "solid": solid,
    "solid_dmg": solid_dmg,
    "point_cloud": point_cloud,
}


def get_preset(name: str) -> ExportOptions:
    """
    Get an option preset by name.

    Parameters
    ----------
    name : str
        Preset name (e.g., "wireframe", "solid_dmg")

    Returns
    -------
    ExportOptions
        Fresh options instance

    Raises
    ------
    ValueError
        If preset name is not recognized
    """
    if name not in PRESETS:
        available = ", ".join(PRESETS.keys())
        raise ValueError(f"Unknown preset '{name}'. Available: {available}")

    return PRESETS[name]()


def list_presets() -> list:
    """List all available preset names."""
    return list(PRESETS.keys())
