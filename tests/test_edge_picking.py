"""Tests for picking the perimeter edge under a world-space point."""

import pytest

from gridregions.geometry.edge_picking import (
    closest_point_on_segment, distance_to_edge, find_edge_near_point,
)
from gridregions.regions.data_model import CellCoord, CellSide, GridEdge, Region


class TestSegmentDistance:
    """Test point/segment helpers."""

    def test_projection_is_clamped(self):
        assert closest_point_on_segment((5.0, 1.0), (0.0, 0.0), (2.0, 0.0)) == (2.0, 0.0)
        assert closest_point_on_segment((-1.0, 1.0), (0.0, 0.0), (2.0, 0.0)) == (0.0, 0.0)
        assert closest_point_on_segment((1.0, 1.0), (0.0, 0.0), (2.0, 0.0)) == (1.0, 0.0)

    def test_degenerate_segment(self):
        assert closest_point_on_segment((3.0, 4.0), (1.0, 1.0), (1.0, 1.0)) == (1.0, 1.0)

    def test_distance_to_edge(self):
        edge = GridEdge(CellCoord(0, 0), CellSide.TOP)
        assert distance_to_edge((0.5, 1.25), edge, 1.0) == pytest.approx(0.25)


class TestFindEdgeNearPoint:
    """Test hover lookup across regions."""

    def test_finds_top_edge(self):
        region = Region.create("Room", cells=[CellCoord(0, 0)])
        hit = find_edge_near_point((0.5, 1.05), [region], cell_size=1.0)
        assert hit == (region, GridEdge(CellCoord(0, 0), CellSide.TOP))

    def test_tolerance_scales_with_cell_size(self):
        region = Region.create("Room", cells=[CellCoord(0, 0)])
        # 0.3 world units from the right edge of a 4-unit cell
        assert find_edge_near_point((4.3, 2.0), [region], cell_size=4.0) is not None
        assert find_edge_near_point((4.3, 2.0), [region], cell_size=1.0) is None

    def test_interior_edges_are_not_picked(self):
        region = Region.create("Room", cells=[CellCoord(0, 0), CellCoord(1, 0)])
        assert find_edge_near_point((1.0, 0.5), [region], cell_size=1.0) is None

    def test_first_region_wins(self):
        left = Region.create("Left", cells=[CellCoord(0, 0)])
        right = Region.create("Right", cells=[CellCoord(1, 0)])
        region, edge = find_edge_near_point((1.0, 0.5), [right, left], cell_size=1.0)
        assert region is right
        assert edge == GridEdge(CellCoord(1, 0), CellSide.LEFT)

    def test_nothing_nearby(self):
        region = Region.create("Room", cells=[CellCoord(0, 0)])
        assert find_edge_near_point((10.0, 10.0), [region], cell_size=1.0) is None
