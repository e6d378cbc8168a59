"""
Grid regions: cell/edge model, perimeters, islands and painting.
"""

from .data_model import (
    CellCoord,
    CellSide,
    GridEdge,
    Region,
    RegionContext,
    RegionContainer,
    random_region_color,
    sorted_edges,
)
from .perimeter import calculate_perimeter_edges, calculate_perimeter_cells
from .islands import (
    get_islands,
    has_multiple_islands,
    island_center_cell,
    island_centers,
    check_region_islands,
)
from .painting import PaintResult, apply_cells, rect_cells

__all__ = [
    'CellCoord',
    'CellSide',
    'GridEdge',
    'Region',
    'RegionContext',
    'RegionContainer',
    'random_region_color',
    'sorted_edges',
    'calculate_perimeter_edges',
    'calculate_perimeter_cells',
    'get_islands',
    'has_multiple_islands',
    'island_center_cell',
    'island_centers',
    'check_region_islands',
    'PaintResult',
    'apply_cells',
    'rect_cells',
]
