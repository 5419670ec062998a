"""
Tests for the deduplicating gmsh entity catalog.
"""

import pytest

from morpho_mesh.core.types import Point3D
from morpho_mesh.core.result import PointNotFoundError, MorphologyError
from morpho_mesh.gmsh.catalog import GmshCatalog
from morpho_mesh.gmsh.entities import EntityKind, GmshPoint, GmshSegment, GmshArc


def _pt(x, y, z, **kwargs):
    return GmshPoint.at((x, y, z), **kwargs)


def test_point_interning():
    """Equal points share one id and keep the first attributes."""
    catalog = GmshCatalog()

    first = catalog.insert_point(_pt(1, 2, 3, size=0.5, physical=True))
    again = catalog.insert_point(_pt(1, 2, 3, size=9.0))
    other = catalog.insert_point(_pt(3, 2, 1))

    assert first == 1
    assert again == 1
    assert other == 2
    assert catalog.count(EntityKind.POINT) == 2

    stored = catalog.list_all(EntityKind.POINT)[0]
    assert stored.size == 0.5
    assert stored.physical


def test_point_ids_are_dense():
    catalog = GmshCatalog()
    for i in range(10):
        catalog.insert_point(_pt(i, 0, 0))
        catalog.insert_point(_pt(i, 0, 0))

    ids = [p.id for p in catalog.list_all(EntityKind.POINT)]
    assert ids == list(range(1, 11))


def test_segment_inserts_its_points():
    catalog = GmshCatalog()
    seg_id = catalog.insert_segment(GmshSegment(_pt(0, 0, 0), _pt(1, 0, 0)))

    assert seg_id == 1
    assert catalog.count(EntityKind.POINT) == 2
    assert catalog.find_point(Point3D(1.0, 0.0, 0.0)) == 2


def test_duplicate_segment_does_not_consume_an_id():
    catalog = GmshCatalog()
    a, b, c = _pt(0, 0, 0), _pt(1, 0, 0), _pt(2, 0, 0)

    assert catalog.insert_segment(GmshSegment(a, b)) == 1
    assert catalog.insert_segment(GmshSegment(a, b)) == 1
    assert catalog.insert_segment(GmshSegment(b, c)) == 2
    assert catalog.count(EntityKind.SEGMENT) == 2


def test_reversed_segment_is_distinct():
    """Segments are ordered pairs."""
    catalog = GmshCatalog()
    a, b = _pt(0, 0, 0), _pt(1, 0, 0)

    assert catalog.insert_segment(GmshSegment(a, b)) == 1
    assert catalog.insert_segment(GmshSegment(b, a)) == 2


def test_line_elements_share_one_id_space():
    """Segments, arcs and loops never reuse an id; volumes count apart."""
    catalog = GmshCatalog()
    center, p1, p2 = _pt(0, 0, 0), _pt(1, 0, 0), _pt(0, 1, 0)

    seg_id = catalog.insert_segment(GmshSegment(p1, center))
    arc_id = catalog.insert_arc(GmshArc(center, p1, p2))
    same_arc = catalog.insert_arc(GmshArc(center, p1, p2))
    loop_id = catalog.insert_loop([seg_id, arc_id])
    other_seg = catalog.insert_segment(GmshSegment(p2, center))
    volume_id = catalog.insert_volume([loop_id])

    assert (seg_id, arc_id, loop_id, other_seg) == (1, 2, 3, 4)
    assert same_arc == arc_id
    assert volume_id == 1


def test_loops_are_stored_verbatim():
    catalog = GmshCatalog()
    first = catalog.insert_loop([1, -2, 3], physical=True, ruled=True)
    second = catalog.insert_loop([1, -2, 3])

    assert first != second
    loops = catalog.list_all(EntityKind.LOOP)
    assert loops[0].ids == (1, -2, 3)
    assert loops[0].ruled and loops[0].physical
    assert not loops[1].ruled


def test_find_point_miss_raises():
    catalog = GmshCatalog()
    catalog.insert_point(_pt(0, 0, 0))

    with pytest.raises(PointNotFoundError, match="Impossible to find point"):
        catalog.find_point(Point3D(1.0, 1.0, 1.0))

    # also usable as a plain lookup error
    with pytest.raises(KeyError):
        catalog.find_point(_pt(5, 5, 5))
    with pytest.raises(MorphologyError):
        catalog.find_point(_pt(5, 5, 5))


def test_list_all_sorted_by_id():
    catalog = GmshCatalog()
    catalog.insert_segment(GmshSegment(_pt(5, 0, 0), _pt(4, 0, 0)))
    catalog.insert_segment(GmshSegment(_pt(1, 0, 0), _pt(0, 0, 0)))

    for kind in EntityKind:
        ids = [e.id for e in catalog.list_all(kind)]
        assert ids == sorted(ids)


def test_summary_counts():
    catalog = GmshCatalog()
    catalog.insert_segment(GmshSegment(_pt(0, 0, 0), _pt(1, 0, 0)))

    summary = catalog.summary()
    assert summary == {"point": 2, "segment": 1, "arc": 0, "loop": 0, "volume": 0}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
