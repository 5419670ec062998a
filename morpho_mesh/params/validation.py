"""Export option validation with bounds checking."""

from typing import List, Tuple
from .options import ExportOptions, MODES


OPTION_BOUNDS = {
    "bbox_offset": (0.0, 1e6, "units"),
    "bbox_point_size": (1e-6, 1e6, "units"),
    "circle_tolerance": (1e-12, 1.0, "units"),
}


def validate_options(options: ExportOptions) -> Tuple[bool, List[str]]:
    """
    Validate ExportOptions against bounds and mode constraints.

    Parameters
    ----------
    options : ExportOptions
        Options to validate

    Returns
    -------
    is_valid : bool
        True if all options are valid
    warnings : list of str
        List of validation warnings/errors
    """
    warnings = []

    if options.mode not in MODES:
        warnings.append(
            f"mode = '{options.mode}' is not one of {', '.join(MODES)}"
        )

    for name, (min_val, max_val, unit) in OPTION_BOUNDS.items():
        value = getattr(options, name)
        if value < min_val:
            warnings.append(f"{name} = {value} {unit} is below minimum {min_val} {unit}")
        elif value > max_val:
            warnings.append(f"{name} = {value} {unit} exceeds maximum {max_val} {unit}")

    if options.mode != "wireframe":
        if options.bounding_box:
            warnings.append("bounding_box is only supported in wireframe mode")
        if options.packed:
            warnings.append("packed is only supported in wireframe mode")
        if options.single_soma:
            warnings.append("single_soma is only supported in wireframe mode")

    if options.mode != "solid" and options.joint_spheres:
        warnings.append("joint_spheres is only supported in solid mode")

    is_valid = len(warnings) == 0
    return is_valid, warnings


def validate_and_warn(options: ExportOptions) -> ExportOptions:
    """
    Validate options and print warnings.

    Returns the same options, for chaining.
    """
    is_valid, warnings = validate_options(options)

    if not is_valid:
        print(f"[validate_and_warn] Option validation warnings ({len(warnings)}):")
        for warning in warnings:
            print(f"  - {warning}")

    return options
