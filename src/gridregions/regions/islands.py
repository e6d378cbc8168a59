"""
Island (4-connected component) detection for cell sets.

Used as a diagnostic only: a region whose cells split into more than one
island is flagged, but never modified.
"""

import logging
from collections import deque
from typing import Iterable, List, Set, Tuple, TYPE_CHECKING

from .data_model import CellCoord, Region, NEIGHBOR_OFFSETS_4
from ..validation.core import (
    Severity, ValidationIssue, ValidationResult, REGION_MULTIPLE_ISLANDS,
)

if TYPE_CHECKING:
    from ..settings.grid_settings import GridSettings

logger = logging.getLogger(__name__)


def get_islands(cells: Iterable[CellCoord]) -> List[Set[CellCoord]]:
    """Partition a cell set into maximal 4-connected components.

    Breadth-first flood fill with offsets (+1,0), (-1,0), (0,+1), (0,-1).
    Each cell is visited once. Islands are emitted in order of their
    smallest cell (x, then y), so the output is deterministic.

    Returns:
        Disjoint cell sets covering the input exactly once
    """
    remaining: Set[CellCoord] = set(cells)
    islands: List[Set[CellCoord]] = []

    for start in sorted(remaining):
        if start not in remaining:
            continue

        island = {start}
        remaining.discard(start)
        queue = deque([start])

        while queue:
            current = queue.popleft()
            for dx, dy in NEIGHBOR_OFFSETS_4:
                n = CellCoord(current.x + dx, current.y + dy)
                if n in remaining:
                    remaining.discard(n)
                    island.add(n)
                    queue.append(n)

        islands.append(island)

    return islands


def has_multiple_islands(cells: Iterable[CellCoord]) -> bool:
    return len(get_islands(cells)) > 1


def island_center_cell(island: Iterable[CellCoord]) -> CellCoord:
    """Average cell of an island, rounded to the nearest cell."""
    cells = list(island)
    cx = sum(c.x for c in cells) / len(cells)
    cy = sum(c.y for c in cells) / len(cells)
    return CellCoord(int(round(cx)), int(round(cy)))


def island_centers(islands: List[Set[CellCoord]],
                   grid: 'GridSettings') -> List[Tuple[float, float]]:
    """World-space marker positions, one per island (cell centres)."""
    return [grid.cell_to_world(island_center_cell(island)) for island in islands if island]


def check_region_islands(region: Region) -> ValidationResult:
    """Flag a region whose cells are not 4-connected.

    Returns:
        ValidationResult with one REGION-001 warning per island when the
        region has more than one island, empty otherwise
    """
    result = ValidationResult()
    islands = get_islands(region.cells)
    logger.debug("Region '%s' has %d island(s)", region.name, len(islands))

    if len(islands) <= 1:
        return result

    for index, island in enumerate(islands):
        result.add_issue(ValidationIssue(
            severity=Severity.WARN,
            code=REGION_MULTIPLE_ISLANDS,
            message=(f"Region '{region.name}' island {index + 1} of {len(islands)} "
                     f"({len(island)} cells) is disconnected"),
            region_id=region.id,
            cell=island_center_cell(island),
        ))

    return result
