"""
Serialization of a GmshCatalog to the gmsh .geo script and .dmg files.

Every collection is written in id order, so rendering the same catalog
twice produces identical text.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from ..geometry.vectors import clean_coordinate
from .catalog import GmshCatalog
from .entities import EntityKind, GmshSegment

GMSH_HEADER = (
    "/***************************************************************\n"
    " * gmsh file generated by morpho-mesh\n"
    "****************************************************************/\n\n"
)


def format_number(value: float) -> str:
    """Compact float formatting, integers without a trailing '.0'."""
    return format(clean_coordinate(value), ".12g")


def _join(values: Iterable) -> str:
    return ", ".join(str(v) for v in values)


def format_physicals(entities: Iterable, name: str, tag: str) -> str:
    """Physical group line for the physical entities, empty when none is."""
    ids = [e.id for e in entities if e.physical]
    if not ids:
        return ""
    return f'Physical {name}("{tag}") = {{ {_join(ids)} }};\n'


def format_header(source: str) -> str:
    return GMSH_HEADER + f"// converted to GEO format from {source}\n"


def format_points(catalog: GmshCatalog, point_sizes: bool = False) -> str:
    """Point statements, sorted by id, followed by the physical group."""
    out = ["\n", "// export morphology points \n", "h=1;\n"]
    all_points = catalog.list_all(EntityKind.POINT)
    for p in all_points:
        coords = _join(format_number(v) for v in p.coords.to_tuple())
        if point_sizes and p.size is not None:
            coords += f", {format_number(p.size)}*h"
        out.append(f"Point({p.id}) = {{{coords}}};\n")
    out.append("\n")
    out.append(format_physicals(all_points, "Point", "Points"))
    out.append("\n")
    return "".join(out)


def pack_segments(segments: Sequence[GmshSegment]) -> List[List[GmshSegment]]:
    """
    Group id-ordered segments into polylines.

    A segment extends the current group when it starts where the group's
    last segment ends and both belong to the same branch of the same tree.
    Segments without a branch id are never packed.
    """
    groups: List[List[GmshSegment]] = []
    for seg in segments:
        if groups:
            back = groups[-1][-1]
            if (back.branch_id is not None
                    and (back.tree_index, back.branch_id) == (seg.tree_index, seg.branch_id)
                    and back.point2.coords == seg.point1.coords):
                groups[-1].append(seg)
                continue
        groups.append([seg])
    return groups


def format_segments(catalog: GmshCatalog, packed: bool = False) -> str:
    """
    Line statements.

    Packed polylines keep the id of their first segment, which keeps them
    disjoint from arc and loop ids.
    """
    out = ["\n"]
    all_segments = catalog.list_all(EntityKind.SEGMENT)

    if packed:
        out.append("// export morphology segments packed \n")
        groups = pack_segments(all_segments)
        for group in groups:
            ids = [catalog.find_point(group[0].point1)]
            ids.extend(catalog.find_point(seg.point2) for seg in group)
            out.append(f"Line({group[0].id}) = {{{_join(ids)}}};\n")
        out.append("\n")
        out.append(format_physicals([g[0] for g in groups], "Line", "Segments"))
    else:
        out.append("// export morphology segments  \n")
        for seg in all_segments:
            out.append(
                f"Line({seg.id}) = {{{catalog.find_point(seg.point1)}, "
                f"{catalog.find_point(seg.point2)}}};\n"
            )
        out.append("\n")
        out.append(format_physicals(all_segments, "Line", "Segments"))

    out.append("\n")
    return "".join(out)


def packed_segment_ids(catalog: GmshCatalog) -> List[int]:
    """Ids of the lines written by the packed segment export."""
    return [g[0].id for g in pack_segments(catalog.list_all(EntityKind.SEGMENT))]


def format_arcs(catalog: GmshCatalog) -> str:
    out = ["\n", "// export morphology arc-circle \n"]
    all_arcs = catalog.list_all(EntityKind.ARC)
    for arc in all_arcs:
        out.append(
            f"Circle({arc.id}) = {{{catalog.find_point(arc.point1)}, "
            f"{catalog.find_point(arc.center)}, {catalog.find_point(arc.point2)}}};\n"
        )
    out.append("\n")
    out.append(format_physicals(all_arcs, "Line", "Circles"))
    out.append("\n")
    return "".join(out)


def format_loops(catalog: GmshCatalog) -> str:
    """Line loops, each followed by its ruled surface when flagged."""
    out = ["\n", "// export line_looop \n"]
    all_loops = catalog.list_all(EntityKind.LOOP)
    for loop in all_loops:
        out.append(f"Line Loop({loop.id}) = {{{_join(loop.ids)}}};\n")
        if loop.ruled:
            out.append(f"Ruled Surface({loop.id}) = {{{loop.id}}};\n")
    out.append("\n")
    out.append(format_physicals(all_loops, "Surface", "Surfaces"))
    out.append("\n")
    return "".join(out)


def format_volumes(catalog: GmshCatalog) -> str:
    """One surface loop and one volume per catalog volume."""
    out = ["\n", "// export volumes \n"]
    for vol in catalog.list_all(EntityKind.VOLUME):
        out.append(f"Surface Loop({vol.id}) = {{{_join(vol.ids)}}};\n")
        out.append(f"Volume({vol.id}) = {{{vol.id}}};\n")
        if vol.physical:
            out.append(f"Physical Volume({vol.id}) = {{{vol.id}}};\n")
    out.append("\n\n")
    return "".join(out)


def format_embedding(segment_ids: Sequence[int], volume_id: int) -> str:
    """
    Embed lines in a volume so the mesher keeps them inside it.

    Contiguous ids are written as a range, anything else as a list.
    """
    ids = sorted(segment_ids)
    if not ids:
        return ""
    if len(ids) > 1 and ids == list(range(ids[0], ids[-1] + 1)):
        id_range = f"{ids[0]}:{ids[-1]}"
    else:
        id_range = _join(ids)
    return f"For s In {{{id_range}}}\n  Line{{s}} In Volume{{{volume_id}}};\nEndFor"


def render_geo(
    catalog: GmshCatalog,
    source: str = "memory",
    packed: bool = False,
    embed: Optional[Tuple[Sequence[int], int]] = None,
    point_sizes: bool = False,
) -> str:
    """
    Render a catalog as a gmsh .geo script.

    Parameters
    ----------
    catalog : GmshCatalog
        Populated catalog
    source : str
        Name of the morphology, written in the header
    packed : bool
        Merge chained same-branch segments into polylines
    embed : tuple, optional
        ``(segment_ids, volume_id)`` to embed the lines in the volume
    point_sizes : bool
        Write the mesh size hint of points that carry one

    Returns
    -------
    str
        Script text
    """
    parts = [
        format_header(source),
        format_points(catalog, point_sizes=point_sizes),
    ]
    if catalog.count(EntityKind.SEGMENT):
        parts.append(format_segments(catalog, packed=packed))
    if catalog.count(EntityKind.ARC):
        parts.append(format_arcs(catalog))
    if catalog.count(EntityKind.LOOP):
        parts.append(format_loops(catalog))
    if catalog.count(EntityKind.VOLUME):
        parts.append(format_volumes(catalog))
    if embed is not None:
        parts.append(format_embedding(*embed))
    return "".join(parts)


def _format_signed_refs(entity_id: int, ids: Sequence[int]) -> str:
    out = [f"{entity_id} 1\n", f" {len(ids)}\n"]
    for ref in ids:
        orientation = 1 if ref > 0 else 0
        out.append(f"  {abs(ref)} {orientation}\n")
    return "".join(out)


def render_dmg(catalog: GmshCatalog) -> str:
    """
    Render the physical entities as a .dmg classification file.

    The header counts physical volumes, surfaces, lines (segments and arcs)
    and points; signed references carry 1 for forward and 0 for reversed
    orientation.
    """
    points = [p for p in catalog.list_all(EntityKind.POINT) if p.physical]
    segments = [s for s in catalog.list_all(EntityKind.SEGMENT) if s.physical]
    arcs = [a for a in catalog.list_all(EntityKind.ARC) if a.physical]
    loops = [l for l in catalog.list_all(EntityKind.LOOP) if l.physical]
    volumes = [v for v in catalog.list_all(EntityKind.VOLUME) if v.physical]

    out = [
        f"{len(volumes)} {len(loops)} {len(segments) + len(arcs)} {len(points)}\n",
        "0 0 0\n0 0 0\n",
    ]
    for p in points:
        coords = " ".join(format_number(v) for v in p.coords.to_tuple())
        out.append(f"{p.id} {coords}\n")
    for seg in segments:
        out.append(f"{seg.id} {catalog.find_point(seg.point1)} {catalog.find_point(seg.point2)}\n")
    for arc in arcs:
        out.append(f"{arc.id} {catalog.find_point(arc.point1)} {catalog.find_point(arc.point2)}\n")
    for loop in loops:
        out.append(_format_signed_refs(loop.id, loop.ids))
    for vol in volumes:
        out.append(_format_signed_refs(vol.id, vol.ids))
    return "".join(out)
