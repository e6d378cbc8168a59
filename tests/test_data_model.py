"""Tests for the cell/edge model, regions and the region container."""

import pytest

from gridregions.regions.data_model import (
    CellCoord, CellSide, GridEdge, Region, RegionContainer, RegionContext,
    random_region_color, sorted_edges,
)
from gridregions.settings.grid_settings import GridSettings


class TestCellSide:
    """Test side enumeration helpers."""

    @pytest.mark.parametrize("side,opposite", [
        (CellSide.TOP, CellSide.BOTTOM),
        (CellSide.BOTTOM, CellSide.TOP),
        (CellSide.LEFT, CellSide.RIGHT),
        (CellSide.RIGHT, CellSide.LEFT),
    ])
    def test_opposite(self, side, opposite):
        assert side.opposite() == opposite
        assert side.opposite().opposite() == side

    def test_offsets_point_away_from_cell(self):
        assert CellSide.TOP.offset == (0, 1)
        assert CellSide.BOTTOM.offset == (0, -1)
        assert CellSide.LEFT.offset == (-1, 0)
        assert CellSide.RIGHT.offset == (1, 0)


class TestCellCoord:
    """Test grid coordinates."""

    def test_value_equality_and_hash(self):
        assert CellCoord(2, 3) == CellCoord(2, 3)
        assert len({CellCoord(2, 3), CellCoord(2, 3), CellCoord(3, 2)}) == 2

    def test_neighbor(self):
        c = CellCoord(0, 0)
        assert c.neighbor(CellSide.TOP) == CellCoord(0, 1)
        assert c.neighbor(CellSide.RIGHT) == CellCoord(1, 0)
        assert c.neighbor(CellSide.BOTTOM) == CellCoord(0, -1)
        assert c.neighbor(CellSide.LEFT) == CellCoord(-1, 0)

    def test_neighbors4(self):
        assert CellCoord(5, 5).neighbors4() == [
            CellCoord(6, 5), CellCoord(4, 5), CellCoord(5, 6), CellCoord(5, 4),
        ]

    def test_ordering_is_x_then_y(self):
        cells = [CellCoord(1, 0), CellCoord(0, 5), CellCoord(0, 1)]
        assert sorted(cells) == [CellCoord(0, 1), CellCoord(0, 5), CellCoord(1, 0)]


class TestGridEdge:
    """Test edge geometry."""

    def test_equality_needs_both_fields(self):
        assert GridEdge(CellCoord(0, 0), CellSide.TOP) == GridEdge(CellCoord(0, 0), CellSide.TOP)
        assert GridEdge(CellCoord(0, 0), CellSide.TOP) != GridEdge(CellCoord(0, 0), CellSide.LEFT)
        assert GridEdge(CellCoord(0, 0), CellSide.TOP) != GridEdge(CellCoord(0, 1), CellSide.TOP)

    def test_facing_edge(self):
        edge = GridEdge(CellCoord(0, 0), CellSide.TOP)
        assert edge.neighbor_cell() == CellCoord(0, 1)
        assert edge.facing_edge() == GridEdge(CellCoord(0, 1), CellSide.BOTTOM)
        assert edge.facing_edge().facing_edge() == edge

    def test_world_vertices(self):
        cell = CellCoord(1, 2)
        size = 2.0
        assert GridEdge(cell, CellSide.TOP).world_vertices(size) == ((2.0, 6.0), (4.0, 6.0))
        assert GridEdge(cell, CellSide.BOTTOM).world_vertices(size) == ((2.0, 4.0), (4.0, 4.0))
        assert GridEdge(cell, CellSide.LEFT).world_vertices(size) == ((2.0, 4.0), (2.0, 6.0))
        assert GridEdge(cell, CellSide.RIGHT).world_vertices(size) == ((4.0, 4.0), (4.0, 6.0))

    def test_midpoint(self):
        cell = CellCoord(0, 0)
        assert GridEdge(cell, CellSide.TOP).midpoint(1.0) == (0.5, 1.0)
        assert GridEdge(cell, CellSide.BOTTOM).midpoint(1.0) == (0.5, 0.0)
        assert GridEdge(cell, CellSide.LEFT).midpoint(1.0) == (0.0, 0.5)
        assert GridEdge(cell, CellSide.RIGHT).midpoint(1.0) == (1.0, 0.5)

    def test_corner_points_trace_cell_clockwise(self):
        cell = CellCoord(0, 0)
        order = [CellSide.LEFT, CellSide.TOP, CellSide.RIGHT, CellSide.BOTTOM]
        segments = [GridEdge(cell, side).corner_points() for side in order]
        # each segment ends where the next begins
        for (_, end), (start, _) in zip(segments, segments[1:] + segments[:1]):
            assert end == start
        assert [s[0] for s in segments] == [(0, 0), (0, 1), (1, 1), (1, 0)]

    def test_sorted_edges(self):
        edges = [
            GridEdge(CellCoord(1, 0), CellSide.TOP),
            GridEdge(CellCoord(0, 0), CellSide.RIGHT),
            GridEdge(CellCoord(0, 0), CellSide.TOP),
        ]
        assert sorted_edges(edges) == [edges[2], edges[1], edges[0]]


class TestRegion:
    """Test region cell sets and perimeter recomputation."""

    def test_new_region_is_empty(self):
        region = Region(name="Empty")
        assert region.is_empty
        assert region.perimeter_edges == []
        assert region.bounds() is None

    def test_perimeter_follows_every_mutation(self):
        region = Region.create("Room", cells=[CellCoord(0, 0)])
        assert len(region.perimeter_edges) == 4

        region.add_cells([CellCoord(1, 0)])
        assert len(region.perimeter_edges) == 6
        assert not region.has_perimeter_edge(GridEdge(CellCoord(0, 0), CellSide.RIGHT))

        region.remove_cells([CellCoord(1, 0)])
        assert len(region.perimeter_edges) == 4
        assert region.has_perimeter_edge(GridEdge(CellCoord(0, 0), CellSide.RIGHT))

        region.set_cells([])
        assert region.perimeter_edges == []

    def test_duplicate_cells_collapse(self):
        region = Region.create("Room", cells=[CellCoord(0, 0), CellCoord(0, 0)])
        assert len(region) == 1

    def test_bounds(self):
        region = Region.create("Room", cells=[CellCoord(-1, 2), CellCoord(3, 0)])
        assert region.bounds() == (CellCoord(-1, 0), CellCoord(3, 2))

    def test_regions_compare_by_identity(self):
        a = Region.create("A", cells=[CellCoord(0, 0)])
        b = Region.create("A", cells=[CellCoord(0, 0)])
        assert a != b
        assert a.id != b.id
        assert a == a


class TestRegionContainer:
    """Test the caller-owned region collection."""

    def test_create_and_lookup(self):
        container = RegionContainer()
        kitchen = container.create_region("Kitchen")
        kitchen.set_cells([CellCoord(0, 0), CellCoord(1, 0)])
        hall = container.create_region("Hall", color=(0.5, 0.5, 0.5))
        hall.set_cells([CellCoord(0, 1)])

        assert container.region_at_cell(CellCoord(1, 0)) is kitchen
        assert container.region_at_cell(CellCoord(0, 1)) is hall
        assert container.region_at_cell(CellCoord(5, 5)) is None
        assert container.get_region(hall.id) is hall
        assert hall.color == (0.5, 0.5, 0.5)

    def test_add_and_remove(self):
        container = RegionContainer()
        region = Region.create("Loose")
        assert container.add_region(region)
        assert not container.add_region(region)
        assert len(container) == 1
        assert container.remove_region(region)
        assert not container.remove_region(region)
        assert len(container) == 0

    def test_context_uses_grid_validity(self):
        container = RegionContainer()
        context = container.context(GridSettings(cell_size=1.0, width=2, height=2))
        assert context.is_valid_cell(CellCoord(1, 1))
        assert not context.is_valid_cell(CellCoord(2, 0))

    def test_context_without_grid_accepts_everything(self):
        context = RegionContainer().context()
        assert isinstance(context, RegionContext)
        assert context.is_valid_cell(CellCoord(-1000, 1000))

    def test_random_color_is_in_range(self):
        import random
        rng = random.Random(42)
        for _ in range(20):
            color = random_region_color(rng)
            assert len(color) == 3
            assert all(0.0 <= c <= 1.0 for c in color)
            assert max(color) >= 0.7
