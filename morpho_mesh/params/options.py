"""Export options for the gmsh conversion."""

from dataclasses import dataclass, asdict, fields

MODES = ("wireframe", "solid", "point_cloud")


@dataclass
class ExportOptions:
    """
    Options of one gmsh export session.

    Attributes
    ----------
    mode : str
        "wireframe" (centerline segments), "solid" (sphere and pipe
        volumes) or "point_cloud" (raw branch points)
    write_dmg : bool
        Also write the .dmg classification file
    bounding_box : bool
        Enclose the wireframe in a box volume and embed the lines in it
    packed : bool
        Merge chained segments of a branch into one polyline
    single_soma : bool
        Skip the soma's own polyline in wireframe mode
    joint_spheres : bool
        Add a sphere at the end of every non-soma branch in solid mode
    point_sizes : bool
        Write point size hints as mesh characteristic lengths
    bbox_offset : float
        Margin between the morphology and the bounding box
    bbox_point_size : float
        Size hint of the bounding box corners
    circle_tolerance : float
        Allowed deviation of circle points from the requested radius
    verbose : bool
        Print progress messages
    """
    mode: str = "wireframe"
    write_dmg: bool = False
    bounding_box: bool = False
    packed: bool = False
    single_soma: bool = False
    joint_spheres: bool = False
    point_sizes: bool = False
    bbox_offset: float = 20.0
    bbox_point_size: float = 100.0
    circle_tolerance: float = 1e-4
    verbose: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "ExportOptions":
        """Create from dictionary, ignoring unknown keys."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in names})
