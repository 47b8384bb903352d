import numpy as np
import pytest
from shapely.geometry import Point, Polygon

from geobound.bounded_input import BoundedPointSet
from geobound.errors import InsufficientPoints, InvalidBoundingRegion, TessellationFailed
from geobound.geometry import ExtentSummary
from geobound.tessellation import (
    EnclosingRegion,
    TessellationSettings,
    enclosing_region,
    tessellate,
    voronoi_in_region,
)

SQUARE = [[-0.5, -0.5], [1.5, -0.5], [1.5, 1.5], [-0.5, 1.5], [-0.5, -0.5]]


def test_enclosing_region_adds_extents():
    bound = ExtentSummary(min_x=-1.0, max_x=1.0, min_y=0.0, max_y=3.0)
    points = ExtentSummary(min_x=10.0, max_x=14.0, min_y=-2.0, max_y=0.0)
    r = enclosing_region(bound, points)

    assert (r.centre_x, r.centre_y) == (12.0, -1.0)
    assert (r.width, r.height) == (6.0, 5.0)
    assert r.bounds == (9.0, -3.5, 15.0, 1.5)


def test_single_site_cell_is_the_whole_region():
    region = EnclosingRegion(centre_x=0.0, centre_y=0.0, width=4.0, height=2.0)
    cells = voronoi_in_region(np.array([[0.5, 0.2]]), region, TessellationSettings())

    assert len(cells) == 1
    assert np.isclose(Polygon(cells[0]).area, 8.0)
    assert Polygon(cells[0]).bounds == pytest.approx((-2.0, -1.0, 2.0, 1.0))


def test_cells_partition_region_in_site_order():
    region = EnclosingRegion(centre_x=0.5, centre_y=0.5, width=3.0, height=3.0)
    sites = np.array([[0, 0], [1, 0], [0, 1], [1, 1]], dtype=np.float64)
    cells = voronoi_in_region(sites, region, TessellationSettings(reflection_diagonals=False))

    expected = [
        (-1.0, -1.0, 0.5, 0.5),
        (0.5, -1.0, 2.0, 0.5),
        (-1.0, 0.5, 0.5, 2.0),
        (0.5, 0.5, 2.0, 2.0),
    ]
    assert sum(Polygon(c).area for c in cells) == pytest.approx(9.0)
    for c, bounds in zip(cells, expected):
        assert Polygon(c).bounds == pytest.approx(bounds)


def test_voronoi_in_region_rejects_sites_outside():
    region = EnclosingRegion(centre_x=0.0, centre_y=0.0, width=1.0, height=1.0)
    with pytest.raises(TessellationFailed):
        voronoi_in_region(np.array([[2.0, 0.0]]), region, TessellationSettings())


def test_tessellate_returns_one_cell_per_unique_site():
    ps = BoundedPointSet.from_sequences([[0, 0], [1, 0], [0, 0], [0, 1], [1, 1]], SQUARE)
    cells = tessellate(ps, ps.bounding_polygon())

    assert [c.site.as_tuple() for c in cells] == [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.0, 1.0)]
    for c in cells:
        assert Polygon(c.polygon).contains(Point(c.site.as_tuple()))
        assert Polygon(c.polygon).bounds[0] >= -1.0 - 1e-9
        assert Polygon(c.polygon).bounds[2] <= 2.0 + 1e-9


def test_tessellate_without_valid_points():
    ps = BoundedPointSet.from_sequences([[float("nan"), 0.0]], SQUARE)
    with pytest.raises(InsufficientPoints):
        tessellate(ps, ps.bounding_polygon())


def test_tessellate_with_empty_bound():
    ps = BoundedPointSet.from_sequences([[0.0, 0.0]], SQUARE)
    with pytest.raises(InvalidBoundingRegion):
        tessellate(ps, Polygon())


def test_tessellate_flat_region_fails():
    # collinear bound and a single site leave a zero-height region
    ps = BoundedPointSet.from_sequences([[0.0, 0.0]], [[0, 0], [1, 0], [2, 0]])
    with pytest.raises(TessellationFailed):
        tessellate(ps, ps.bounding_polygon())


def test_mirror_reflects_across_sides_and_corners():
    region = EnclosingRegion(centre_x=1.0, centre_y=0.0, width=2.0, height=4.0)  # x 0..2, y -2..2
    sites = np.array([[0.5, 1.0]])

    sides = region.mirror(sites, diagonals=False)
    assert sorted(map(tuple, sides.tolist())) == [(-0.5, 1.0), (0.5, -5.0), (0.5, 3.0), (3.5, 1.0)]

    full = region.mirror(sites)
    assert full.shape == (8, 2)
    assert (-0.5, -5.0) in set(map(tuple, full.tolist()))
    assert (3.5, 3.0) in set(map(tuple, full.tolist()))


def test_mirror_keeps_site_blocks_together():
    region = EnclosingRegion(centre_x=0.0, centre_y=0.0, width=2.0, height=2.0)
    sites = np.array([[0.1, 0.2], [-0.3, 0.4], [0.0, 0.0]])
    assert region.mirror(sites).shape == (24, 2)
