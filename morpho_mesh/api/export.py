"""
Exporter session converting morphology trees to gmsh files.

One GmshExporter owns one catalog. Files are written only once the whole
conversion and rendering succeeded.
"""

import dataclasses
import warnings
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from ..core.tree import MorphoTree
from ..core.types import Circle3D
from ..core.result import (
    OperationResult,
    ErrorCode,
    MorphologyError,
    GeometryError,
)
from ..adapters.networkx_adapter import validate_tree
from ..gmsh.catalog import GmshCatalog
from ..gmsh.entities import EntityKind
from ..gmsh.bbox import BoundingBox, add_bounding_box
from ..gmsh.construct import build_wireframe, build_solid, build_point_cloud
from ..gmsh.writer import render_geo, render_dmg, packed_segment_ids
from ..params.options import ExportOptions
from ..params.validation import validate_options


class GmshExporter:
    """
    Conversion session from morphology trees to a .geo script.

    Parameters
    ----------
    trees : MorphoTree or sequence of MorphoTree
        Morphologies to convert into the same catalog
    options : ExportOptions, optional
        Export options (wireframe defaults when omitted)
    source : str, optional
        Name written in the script header; defaults to the first tree's
        metadata "name", or "memory"

    Example
    -------
    >>> exporter = GmshExporter(tree, ExportOptions(mode="solid"))
    >>> result = exporter.export("neuron.geo")
    >>> result.metadata["num_volumes"]
    2
    """

    def __init__(
        self,
        trees: Union[MorphoTree, Sequence[MorphoTree]],
        options: Optional[ExportOptions] = None,
        source: Optional[str] = None,
    ):
        if isinstance(trees, MorphoTree):
            trees = [trees]
        self.trees: List[MorphoTree] = list(trees)
        self.options = options if options is not None else ExportOptions()

        if source is None:
            source = "memory"
            if self.trees:
                source = str(self.trees[0].metadata.get("name", source))
        self.source = source

        self.catalog: Optional[GmshCatalog] = None
        self.bounding_box: Optional[BoundingBox] = None
        self._pipes: List[Dict[int, List[Circle3D]]] = []

    def _log(self, func: str, message: str) -> None:
        if self.options.verbose:
            print(f"[GmshExporter.{func}] {message}")

    def build(self) -> GmshCatalog:
        """
        Fill a fresh catalog according to the export mode.

        Returns
        -------
        GmshCatalog
            The populated catalog, also kept on ``self.catalog``

        Raises
        ------
        MorphologyError, GeometryError
            On any structural or numeric failure
        """
        opts = self.options
        catalog = GmshCatalog()
        self.bounding_box = None
        self._pipes = []

        if opts.mode == "wireframe":
            self._log("build", "convert morphology tree to gmsh set of wireframe geometries")
            for index, tree in enumerate(self.trees):
                build_wireframe(catalog, tree, single_soma=opts.single_soma, tree_index=index)
            if opts.bounding_box:
                self._log("build", "add bounding box")
                self.bounding_box = add_bounding_box(
                    catalog, offset=opts.bbox_offset, point_size=opts.bbox_point_size,
                )
        elif opts.mode == "solid":
            self._log("build", "convert morphology tree to gmsh set of solid geometries")
            for tree in self.trees:
                # branch ids restart in every tree
                pipes: Dict[int, List[Circle3D]] = {}
                self._pipes.append(pipes)
                build_solid(
                    catalog,
                    tree,
                    joint_spheres=opts.joint_spheres,
                    cache=pipes,
                    tolerance=opts.circle_tolerance,
                )
        elif opts.mode == "point_cloud":
            self._log("build", "convert morphology tree to gmsh point cloud")
            for tree in self.trees:
                build_point_cloud(catalog, tree)
        else:
            raise ValueError(f"Unknown export mode: {opts.mode}")

        self._log("build", f"catalog: {catalog.summary()}")
        self.catalog = catalog
        return catalog

    def _embedding(self) -> Optional[Tuple[List[int], int]]:
        if self.bounding_box is None:
            return None
        box_ids = set(self.bounding_box.segment_ids)
        if self.options.packed:
            line_ids = packed_segment_ids(self.catalog)
        else:
            line_ids = [s.id for s in self.catalog.list_all(EntityKind.SEGMENT)]
        return [i for i in line_ids if i not in box_ids], self.bounding_box.volume_id

    def render(self) -> Tuple[str, Optional[str]]:
        """
        Render the catalog, building it first if needed.

        Returns
        -------
        geo : str
            The .geo script
        dmg : str or None
            The .dmg file content when ``write_dmg`` is set
        """
        if self.catalog is None:
            self.build()

        geo = render_geo(
            self.catalog,
            source=self.source,
            packed=self.options.packed,
            embed=self._embedding(),
            point_sizes=self.options.point_sizes,
        )
        dmg = render_dmg(self.catalog) if self.options.write_dmg else None
        return geo, dmg

    def export(
        self,
        output_path: Union[str, Path],
        dmg_path: Optional[Union[str, Path]] = None,
    ) -> OperationResult:
        """
        Convert and write the output files.

        Parameters
        ----------
        output_path : str or Path
            Destination of the .geo script
        dmg_path : str or Path, optional
            Destination of the .dmg file; defaults to ``output_path`` with a
            .dmg suffix. Only used when ``write_dmg`` is set.

        Returns
        -------
        OperationResult
            Success with entity counts, mode and written paths in metadata,
            or failure with error codes; nothing is written on failure
        """
        is_valid, option_errors = validate_options(self.options)
        if not is_valid:
            result = OperationResult.failure("Invalid export options")
            for error in option_errors:
                result.add_error(error, ErrorCode.INVALID_PARAMETER)
            return result

        for tree in self.trees:
            check = validate_tree(tree)
            if check.is_failure():
                return OperationResult.failure(
                    f"Cannot export invalid morphology: {check.message}",
                    errors=list(check.errors),
                    error_codes=list(check.error_codes),
                    warnings=list(check.warnings),
                )

        self._log("export", f"export {len(self.trees)} tree(s) in {self.options.mode} mode")

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            try:
                self.catalog = None
                geo, dmg = self.render()
            except (MorphologyError, GeometryError) as e:
                result = OperationResult.failure(
                    f"Gmsh export failed: {e}",
                    error_codes=[e.code.value, ErrorCode.GMSH_EXPORT_FAILED.value],
                )
                result.errors.append(str(e))
                for w in caught:
                    result.add_warning(str(w.message))
                return result

        output_path = Path(output_path)
        files = [(output_path, geo)]
        written = {"geo_path": str(output_path)}
        if dmg is not None:
            dmg_path = Path(dmg_path) if dmg_path is not None else output_path.with_suffix(".dmg")
            files.append((dmg_path, dmg))
            written["dmg_path"] = str(dmg_path)

        try:
            _write_all(files)
        except OSError as e:
            return OperationResult.failure(
                f"Cannot write gmsh output: {e}",
                errors=[str(e)],
                error_codes=[ErrorCode.GMSH_EXPORT_FAILED.value],
            )
        for path, _ in files:
            self._log("export", f"wrote {path}")

        counts = {f"num_{kind}s": n for kind, n in self.catalog.summary().items()}
        metadata = {
            "mode": self.options.mode,
            "source": self.source,
            **written,
            **counts,
        }
        if self.bounding_box is not None:
            metadata["bbox_volume_id"] = self.bounding_box.volume_id

        if caught:
            result = OperationResult.partial_success(
                f"Exported {self.options.mode} geometry with {len(caught)} warning(s)",
                metadata=metadata,
            )
            for w in caught:
                result.add_warning(str(w.message))
        else:
            result = OperationResult.success(
                f"Exported {self.options.mode} geometry to {output_path}",
                metadata=metadata,
            )
        return result


def _write_all(files: List[Tuple[Path, str]]) -> None:
    """
    Write every file or none of them.

    Contents go to temporary siblings first and are moved in place once all
    of them are written. On error, temporaries and files already moved are
    removed before the OSError propagates.
    """
    staged: List[Tuple[Path, Path]] = []
    moved: List[Path] = []
    try:
        for path, text in files:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp = path.with_name(path.name + ".tmp")
            staged.append((tmp, path))
            tmp.write_text(text)
        for tmp, path in staged:
            tmp.replace(path)
            moved.append(path)
    except OSError:
        for tmp, _ in staged:
            if tmp.is_file():
                tmp.unlink()
        for path in moved:
            path.unlink()
        raise


def export_gmsh(
    trees: Union[MorphoTree, Sequence[MorphoTree]],
    output_path: Union[str, Path],
    options: Optional[ExportOptions] = None,
    **overrides,
) -> OperationResult:
    """
    Convert morphology trees and write the gmsh files in one call.

    Parameters
    ----------
    trees : MorphoTree or sequence of MorphoTree
        Morphologies to convert
    output_path : str or Path
        Destination of the .geo script
    options : ExportOptions, optional
        Base options, left untouched
    **overrides
        ExportOptions fields replaced on a copy of ``options``

    Returns
    -------
    OperationResult
        Outcome of GmshExporter.export

    Example
    -------
    >>> result = export_gmsh(tree, "neuron.geo", mode="wireframe", bounding_box=True)
    """
    if options is None:
        options = ExportOptions()
    try:
        options = dataclasses.replace(options, **overrides)
    except TypeError as e:
        return OperationResult.failure(
            f"Invalid export option: {e}",
            errors=[str(e)],
            error_codes=[ErrorCode.INVALID_PARAMETER.value],
        )
    return GmshExporter(trees, options).export(output_path)
