"""Tests for region painting (cell-set mutation)."""

from gridregions.regions.data_model import CellCoord, CellSide, GridEdge, RegionContainer
from gridregions.regions.painting import apply_cells, rect_cells
from gridregions.settings.grid_settings import GridSettings


def _setup(width=8, height=8):
    container = RegionContainer()
    context = container.context(GridSettings(cell_size=1.0, width=width, height=height))
    return container, context


class TestRectCells:
    """Test rectangle cell expansion."""

    def test_inclusive_and_order_independent(self):
        a = rect_cells(CellCoord(0, 0), CellCoord(2, 1))
        b = rect_cells(CellCoord(2, 1), CellCoord(0, 0))
        assert len(a) == 6
        assert set(a) == set(b)

    def test_single_cell(self):
        assert rect_cells(CellCoord(3, 3), CellCoord(3, 3)) == [CellCoord(3, 3)]


class TestApplyCells:
    """Test adding and removing cells."""

    def test_add_updates_perimeter(self):
        container, context = _setup()
        room = container.create_region("Room")

        result = apply_cells(room, rect_cells(CellCoord(0, 0), CellCoord(1, 1)),
                             container, context)

        assert result.changed == [room]
        assert result.shrunk == []
        assert len(room) == 4
        assert len(room.perimeter_edges) == 8

    def test_invalid_cells_are_skipped(self):
        container, context = _setup(width=2, height=2)
        room = container.create_region("Room")

        result = apply_cells(room, [CellCoord(1, 1), CellCoord(2, 1), CellCoord(-1, 0)],
                             container, context)

        assert room.cells == {CellCoord(1, 1)}
        assert set(result.skipped_cells) == {CellCoord(2, 1), CellCoord(-1, 0)}

    def test_occupied_cells_are_skipped_without_overwrite(self):
        container, context = _setup()
        first = container.create_region("First")
        second = container.create_region("Second")
        apply_cells(first, [CellCoord(0, 0)], container, context)

        result = apply_cells(second, [CellCoord(0, 0), CellCoord(1, 0)], container, context)

        assert first.cells == {CellCoord(0, 0)}
        assert second.cells == {CellCoord(1, 0)}
        assert result.skipped_cells == [CellCoord(0, 0)]
        assert result.changed == [second]

    def test_overwrite_takes_cells_from_other_regions(self):
        container, context = _setup()
        first = container.create_region("First")
        second = container.create_region("Second")
        apply_cells(first, [CellCoord(0, 0), CellCoord(0, 1)], container, context)

        result = apply_cells(second, [CellCoord(0, 0)], container, context, overwrite=True)

        assert first.cells == {CellCoord(0, 1)}
        assert second.cells == {CellCoord(0, 0)}
        assert result.changed == [second, first]
        assert result.shrunk == [first]
        # the shrunk region's perimeter was recomputed
        assert first.has_perimeter_edge(GridEdge(CellCoord(0, 1), CellSide.BOTTOM))

    def test_remove(self):
        container, context = _setup()
        room = container.create_region("Room")
        apply_cells(room, rect_cells(CellCoord(0, 0), CellCoord(2, 0)), container, context)

        result = apply_cells(room, [CellCoord(1, 0)], container, context, add=False)

        assert room.cells == {CellCoord(0, 0), CellCoord(2, 0)}
        assert result.shrunk == [room]
        assert len(room.perimeter_edges) == 8

    def test_no_change(self):
        container, context = _setup()
        room = container.create_region("Room")

        result = apply_cells(room, [CellCoord(4, 4)], container, context, add=False)

        assert result.changed == []
        assert result.shrunk == []
