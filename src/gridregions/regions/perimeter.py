"""
Perimeter calculation for cell sets.

A cell contributes an edge on every side whose neighbor is not in the set.
Both functions are pure and accept arbitrary cell sets, including empty sets
and cells outside the addressable grid.
"""

from typing import Callable, Iterable, List, Set

from .data_model import CellCoord, CellSide, GridEdge


def calculate_perimeter_edges(cells: Iterable[CellCoord]) -> Set[GridEdge]:
    """Return the boundary edges of a cell set.

    Args:
        cells: Cells of the region (duplicates are ignored)

    Returns:
        Set of GridEdge where the neighbor across the side is absent
    """
    contained = cells if isinstance(cells, (set, frozenset)) else set(cells)
    edges: Set[GridEdge] = set()

    for cell in contained:
        for side in CellSide:
            if cell.neighbor(side) not in contained:
                edges.add(GridEdge(cell, side))

    return edges


def calculate_perimeter_cells(
    cells: Iterable[CellCoord],
    is_valid_cell: Callable[[CellCoord], bool],
) -> List[CellCoord]:
    """Return the cells that touch a valid cell outside the set.

    Cells whose only missing neighbors lie outside the grid (per is_valid_cell)
    are not counted as perimeter cells.

    Returns:
        Perimeter cells sorted by x, then y
    """
    contained = cells if isinstance(cells, (set, frozenset)) else set(cells)
    perimeter = []

    for cell in contained:
        for n in cell.neighbors4():
            if n not in contained and is_valid_cell(n):
                perimeter.append(cell)
                break

    return sorted(perimeter)
