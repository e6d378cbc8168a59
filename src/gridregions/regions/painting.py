"""
Cell-set mutation for region painting.

The host editor turns pen strokes and rectangle drags into cell lists;
apply_cells applies them to a region and keeps every touched region's
perimeter in sync. Input gestures themselves are handled by the host.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from .data_model import CellCoord, Region, RegionContainer, RegionContext

logger = logging.getLogger(__name__)


@dataclass
class PaintResult:
    """Regions affected by a paint operation.

    changed: every region whose cell set changed (painted region first)
    shrunk: regions that lost cells; connectors on these need garbage collection
    """
    changed: List[Region] = field(default_factory=list)
    shrunk: List[Region] = field(default_factory=list)
    skipped_cells: List[CellCoord] = field(default_factory=list)

    def _mark(self, region: Region, shrunk: bool):
        if not any(r is region for r in self.changed):
            self.changed.append(region)
        if shrunk and not any(r is region for r in self.shrunk):
            self.shrunk.append(region)


def rect_cells(a: CellCoord, b: CellCoord) -> List[CellCoord]:
    """All cells in the inclusive rectangle spanned by two corner cells."""
    x_min, x_max = min(a.x, b.x), max(a.x, b.x)
    y_min, y_max = min(a.y, b.y), max(a.y, b.y)
    return [CellCoord(x, y)
            for x in range(x_min, x_max + 1)
            for y in range(y_min, y_max + 1)]


def apply_cells(
    region: Region,
    cells: Iterable[CellCoord],
    container: RegionContainer,
    context: RegionContext,
    add: bool = True,
    overwrite: bool = False,
) -> PaintResult:
    """Add cells to or remove cells from a region.

    Args:
        region: Region being painted
        cells: Cells under the stroke
        container: Regions competing for the same grid
        context: Supplies the cell-validity predicate
        add: True to add cells, False to subtract
        overwrite: When adding, take cells away from other regions instead
            of skipping them

    Returns:
        PaintResult describing which regions changed
    """
    result = PaintResult()
    contained = set(region.cells)
    before = len(contained)

    for cell in cells:
        if not context.is_valid_cell(cell):
            result.skipped_cells.append(cell)
            continue

        if not add:
            contained.discard(cell)
            continue

        existing = container.region_at_cell(cell)
        if existing is not None and existing is not region:
            if not overwrite:
                result.skipped_cells.append(cell)
                continue
            existing.remove_cells([cell])
            result._mark(existing, shrunk=True)

        contained.add(cell)

    if contained != region.cells:
        shrunk = not add and len(contained) < before
        region.set_cells(contained)
        result._mark(region, shrunk=shrunk)
        # painted region goes first
        result.changed.sort(key=lambda r: r is not region)

    if result.skipped_cells:
        logger.debug("Skipped %d cell(s) while painting '%s'",
                     len(result.skipped_cells), region.name)

    return result
