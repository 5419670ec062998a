"""
Tests for the .geo and .dmg writers.
"""

import pytest

from morpho_mesh.core.types import Point3D, Sphere3D
from morpho_mesh.gmsh.catalog import GmshCatalog
from morpho_mesh.gmsh.entities import EntityKind, GmshPoint, GmshSegment
from morpho_mesh.gmsh.construct import build_wireframe, build_solid
from morpho_mesh.gmsh.solids import build_sphere
from morpho_mesh.gmsh.writer import (
    render_geo,
    render_dmg,
    format_number,
    format_embedding,
    pack_segments,
    packed_segment_ids,
)


def _chain(catalog, coords, branch_id=None, physical=True, tree_index=0):
    pts = [GmshPoint.at(c, physical=physical) for c in coords]
    return [
        catalog.insert_segment(GmshSegment(
            a, b, branch_id=branch_id, tree_index=tree_index, physical=physical,
        ))
        for a, b in zip(pts, pts[1:])
    ]


def test_format_number():
    assert format_number(2.0) == "2"
    assert format_number(-1e-15) == "0"
    assert format_number(0.5) == "0.5"
    assert format_number(1.0 / 3.0) == "0.333333333333"


def test_render_geo_wireframe(two_branch_tree):
    catalog = GmshCatalog()
    build_wireframe(catalog, two_branch_tree)
    geo = render_geo(catalog, source="two_branch")

    assert "// converted to GEO format from two_branch" in geo
    assert "h=1;" in geo
    assert "Point(1) = {0, 0, 0};" in geo
    assert "Point(4) = {4, 0, 0};" in geo
    assert 'Physical Point("Points") = { 1, 2, 3, 4 };' in geo
    assert "Line(1) = {1, 2};" in geo
    assert "Line(3) = {3, 4};" in geo
    assert 'Physical Line("Segments") = { 1, 2, 3 };' in geo
    assert "Circle(" not in geo
    assert "Line Loop(" not in geo
    assert "Volume(" not in geo


def test_render_geo_point_sizes(two_branch_tree):
    catalog = GmshCatalog()
    build_wireframe(catalog, two_branch_tree)
    geo = render_geo(catalog, point_sizes=True)

    # size hint of a point is the length of the segment leaving it
    assert "Point(1) = {0, 0, 0, 2*h};" in geo
    assert "Point(2) = {2, 0, 0, 1*h};" in geo
    assert "Point(4) = {4, 0, 0, 1*h};" in geo


def test_render_geo_is_deterministic(three_level_tree):
    texts = []
    for _ in range(2):
        catalog = GmshCatalog()
        build_solid(catalog, three_level_tree)
        texts.append(render_geo(catalog, source="three_level"))
    assert texts[0] == texts[1]


def test_render_geo_solid_sections():
    catalog = GmshCatalog()
    build_sphere(catalog, Sphere3D(Point3D(0.0, 0.0, 0.0), 1.0))
    geo = render_geo(catalog)

    assert geo.count("Circle(") == 12
    assert geo.count("Line Loop(") == 8
    assert geo.count("Ruled Surface(") == 8
    assert 'Physical Line("Circles")' in geo
    assert 'Physical Surface("Surfaces")' in geo
    assert "Surface Loop(1) = {" in geo
    assert "Volume(1) = {1};" in geo
    # the sphere volume itself is not physical
    assert "Physical Volume" not in geo
    assert "export morphology segments" not in geo


def test_pack_segments_same_branch():
    catalog = GmshCatalog()
    _chain(catalog, [(0, 0, 0), (1, 0, 0), (2, 0, 0)], branch_id=7)
    _chain(catalog, [(2, 0, 0), (2, 1, 0)], branch_id=8)

    groups = pack_segments(catalog.list_all(EntityKind.SEGMENT))
    assert [len(g) for g in groups] == [2, 1]
    assert packed_segment_ids(catalog) == [1, 3]

    geo = render_geo(catalog, packed=True)
    assert "Line(1) = {1, 2, 3};" in geo
    assert "Line(3) = {3, 4};" in geo
    assert "Line(2)" not in geo
    assert 'Physical Line("Segments") = { 1, 3 };' in geo


def test_pack_segments_without_branch():
    """Segments that belong to no branch stay separate."""
    catalog = GmshCatalog()
    _chain(catalog, [(0, 0, 0), (1, 0, 0), (2, 0, 0)])

    assert [len(g) for g in pack_segments(catalog.list_all(EntityKind.SEGMENT))] == [1, 1]


def test_pack_segments_keeps_trees_apart():
    """Equal branch ids of two trees never chain together."""
    catalog = GmshCatalog()
    _chain(catalog, [(0, 0, 0), (1, 0, 0)], branch_id=1, tree_index=0)
    _chain(catalog, [(1, 0, 0), (2, 0, 0)], branch_id=1, tree_index=1)

    assert [len(g) for g in pack_segments(catalog.list_all(EntityKind.SEGMENT))] == [1, 1]
    assert packed_segment_ids(catalog) == [1, 2]


def test_format_embedding():
    assert format_embedding([3, 1, 2], 7) == (
        "For s In {1:3}\n  Line{s} In Volume{7};\nEndFor"
    )
    assert format_embedding([1, 5], 2) == (
        "For s In {1, 5}\n  Line{s} In Volume{2};\nEndFor"
    )
    assert format_embedding([4], 1).startswith("For s In {4}")
    assert format_embedding([], 1) == ""


def test_render_geo_embedding(two_branch_tree):
    catalog = GmshCatalog()
    build_wireframe(catalog, two_branch_tree)
    geo = render_geo(catalog, embed=([1, 2, 3], 1))

    assert geo.endswith("For s In {1:3}\n  Line{s} In Volume{1};\nEndFor")


def test_render_dmg_wireframe(two_branch_tree):
    catalog = GmshCatalog()
    build_wireframe(catalog, two_branch_tree)
    dmg = render_dmg(catalog)

    lines = dmg.splitlines()
    assert lines[0] == "0 0 3 4"
    assert lines[1] == "0 0 0"
    assert lines[2] == "0 0 0"
    assert lines[3] == "1 0 0 0"
    assert lines[7] == "1 1 2"
    assert lines[9] == "3 3 4"
    assert len(lines) == 10


def test_render_dmg_signed_references():
    catalog = GmshCatalog()
    ids = _chain(catalog, [(0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 0)])
    loop_id = catalog.insert_loop([ids[0], -ids[1], ids[2]], physical=True)
    catalog.insert_volume([loop_id], physical=True)

    dmg = render_dmg(catalog)
    assert dmg.splitlines()[0] == "1 1 3 3"
    assert f"{loop_id} 1\n 3\n  1 1\n  2 0\n  3 1\n" in dmg
    assert dmg.endswith(f"1 1\n 1\n  {loop_id} 1\n")


def test_render_dmg_skips_non_physical():
    catalog = GmshCatalog()
    _chain(catalog, [(0, 0, 0), (1, 0, 0)], physical=False)

    assert render_dmg(catalog) == "0 0 0 0\n0 0 0\n0 0 0\n"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
