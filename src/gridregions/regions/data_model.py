"""
Data model for grid regions.

Defines the core data structures for region painting:
- CellSide: The four sides bounding a cell (TOP, BOTTOM, LEFT, RIGHT)
- CellCoord: Grid position (x, y integers)
- GridEdge: One boundary segment of a cell, identified by (cell, side)
- Region: A named, colored set of cells plus its derived perimeter
- RegionContext: Capabilities the core needs from the caller (cell lookup, validity)
- RegionContainer: Caller-owned collection of regions

Coordinate System:
- +X is RIGHT, +Y is TOP (y-up)
- A cell (x, y) spans world [x*size, (x+1)*size] x [y*size, (y+1)*size]
- Edge endpoints are derived from (cell, side, cell_size) and never stored
"""

from __future__ import annotations

import colorsys
import random
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Callable, Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple,
    TYPE_CHECKING,
)

if TYPE_CHECKING:
    from ..settings.grid_settings import GridSettings

Vec2 = Tuple[float, float]
Color = Tuple[float, float, float]


class CellSide(Enum):
    """Side of a cell."""
    TOP = "top"        # +Y direction
    BOTTOM = "bottom"  # -Y direction
    LEFT = "left"      # -X direction
    RIGHT = "right"    # +X direction

    def opposite(self) -> 'CellSide':
        """Return the opposite side."""
        opposites = {
            CellSide.TOP: CellSide.BOTTOM,
            CellSide.BOTTOM: CellSide.TOP,
            CellSide.LEFT: CellSide.RIGHT,
            CellSide.RIGHT: CellSide.LEFT,
        }
        return opposites[self]

    @property
    def offset(self) -> Tuple[int, int]:
        """Unit offset to the neighboring cell across this side."""
        return _SIDE_OFFSETS[self]


_SIDE_OFFSETS: Dict[CellSide, Tuple[int, int]] = {
    CellSide.TOP: (0, 1),
    CellSide.BOTTOM: (0, -1),
    CellSide.LEFT: (-1, 0),
    CellSide.RIGHT: (1, 0),
}

# Stable ordering used when edges need a deterministic sort
_SIDE_ORDER: Dict[CellSide, int] = {
    CellSide.TOP: 0,
    CellSide.BOTTOM: 1,
    CellSide.LEFT: 2,
    CellSide.RIGHT: 3,
}

# 4-neighborhood in flood-fill order
NEIGHBOR_OFFSETS_4: Tuple[Tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


@dataclass(frozen=True, order=True)
class CellCoord:
    """Grid cell coordinate."""
    x: int
    y: int

    def __add__(self, other: 'CellCoord') -> 'CellCoord':
        return CellCoord(self.x + other.x, self.y + other.y)

    def offset(self, dx: int, dy: int) -> 'CellCoord':
        return CellCoord(self.x + dx, self.y + dy)

    def neighbor(self, side: CellSide) -> 'CellCoord':
        """Get the neighboring cell across the given side."""
        dx, dy = side.offset
        return CellCoord(self.x + dx, self.y + dy)

    def neighbors4(self) -> List['CellCoord']:
        """The four edge-sharing neighbors, in flood-fill order."""
        return [CellCoord(self.x + dx, self.y + dy) for dx, dy in NEIGHBOR_OFFSETS_4]


@dataclass(frozen=True)
class GridEdge:
    """One boundary segment of a unit cell."""
    cell: CellCoord   # The "owner" cell
    side: CellSide    # Which side of the cell

    def sort_key(self) -> Tuple[int, int, int]:
        return (self.cell.x, self.cell.y, _SIDE_ORDER[self.side])

    def neighbor_cell(self) -> CellCoord:
        """The cell on the other side of this edge."""
        return self.cell.neighbor(self.side)

    def facing_edge(self) -> 'GridEdge':
        """The same segment seen from the neighboring cell."""
        return GridEdge(self.neighbor_cell(), self.side.opposite())

    def corner_points(self) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        """Integer lattice endpoints, oriented clockwise around the owning cell.

        Walking every edge of a cell this way traces the cell clockwise
        (y-up), so the cell interior is always on the right of travel.
        """
        x, y = self.cell.x, self.cell.y
        bl, br = (x, y), (x + 1, y)
        tl, tr = (x, y + 1), (x + 1, y + 1)
        if self.side == CellSide.TOP:
            return (tl, tr)
        elif self.side == CellSide.RIGHT:
            return (tr, br)
        elif self.side == CellSide.BOTTOM:
            return (br, bl)
        return (bl, tl)

    def world_vertices(self, cell_size: float) -> Tuple[Vec2, Vec2]:
        """World-space endpoints of the edge.

        Top: (tl, tr), Bottom: (bl, br), Left: (bl, tl), Right: (br, tr).
        """
        x0 = self.cell.x * cell_size
        y0 = self.cell.y * cell_size
        x1 = (self.cell.x + 1) * cell_size
        y1 = (self.cell.y + 1) * cell_size
        if self.side == CellSide.TOP:
            return ((x0, y1), (x1, y1))
        elif self.side == CellSide.BOTTOM:
            return ((x0, y0), (x1, y0))
        elif self.side == CellSide.LEFT:
            return ((x0, y0), (x0, y1))
        return ((x1, y0), (x1, y1))

    def midpoint(self, cell_size: float) -> Vec2:
        """World-space centre of the edge segment."""
        cx = (self.cell.x + 0.5) * cell_size
        cy = (self.cell.y + 0.5) * cell_size
        dx, dy = self.side.offset
        half = cell_size / 2.0
        return (cx + dx * half, cy + dy * half)


def sorted_edges(edges: Iterable[GridEdge]) -> List[GridEdge]:
    """Sort edges by cell (x, then y) and side."""
    return sorted(edges, key=GridEdge.sort_key)


@dataclass(eq=False)
class Region:
    """A named set of cells with a derived perimeter.

    Identity (id, name, color) is opaque to the geometry code. Regions compare
    by identity, so two regions with the same cells are still different regions.

    The perimeter is recomputed by every mutator before it returns, so it
    always equals calculate_perimeter_edges(cells).
    """
    name: str = "New Region"
    color: Color = (1.0, 1.0, 1.0)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    _cells: Set[CellCoord] = field(default_factory=set, repr=False)
    _perimeter: FrozenSet[GridEdge] = field(default=frozenset(), repr=False)
    _perimeter_list: List[GridEdge] = field(default_factory=list, repr=False)

    def __post_init__(self):
        self._cells = set(self._cells)
        self._recompute_perimeter()

    @staticmethod
    def create(name: str, color: Color = (1.0, 1.0, 1.0),
               cells: Optional[Iterable[CellCoord]] = None) -> 'Region':
        """Factory method to create a region with an initial cell set."""
        region = Region(name=name, color=color)
        if cells:
            region.set_cells(cells)
        return region

    @property
    def cells(self) -> FrozenSet[CellCoord]:
        return frozenset(self._cells)

    @property
    def perimeter_edges(self) -> List[GridEdge]:
        """Perimeter edges in a stable (sorted) order."""
        return list(self._perimeter_list)

    @property
    def perimeter(self) -> FrozenSet[GridEdge]:
        return self._perimeter

    @property
    def is_empty(self) -> bool:
        return not self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[CellCoord]:
        return iter(sorted(self._cells))

    def contains_cell(self, cell: CellCoord) -> bool:
        return cell in self._cells

    def has_perimeter_edge(self, edge: GridEdge) -> bool:
        return edge in self._perimeter

    def set_cells(self, cells: Iterable[CellCoord]):
        """Replace the cell set and recompute the perimeter."""
        self._cells = set(cells)
        self._recompute_perimeter()

    def add_cells(self, cells: Iterable[CellCoord]):
        self._cells.update(cells)
        self._recompute_perimeter()

    def remove_cells(self, cells: Iterable[CellCoord]):
        self._cells.difference_update(cells)
        self._recompute_perimeter()

    def bounds(self) -> Optional[Tuple[CellCoord, CellCoord]]:
        """(min, max) cell corners of the region, or None when empty."""
        if not self._cells:
            return None
        xs = [c.x for c in self._cells]
        ys = [c.y for c in self._cells]
        return CellCoord(min(xs), min(ys)), CellCoord(max(xs), max(ys))

    def _recompute_perimeter(self):
        from .perimeter import calculate_perimeter_edges
        perimeter = calculate_perimeter_edges(self._cells)
        self._perimeter = frozenset(perimeter)
        self._perimeter_list = sorted_edges(perimeter)


def _always_valid(cell: CellCoord) -> bool:
    return True


@dataclass(frozen=True)
class RegionContext:
    """Capabilities supplied by the caller.

    The set of regions is owned outside the core; lookups go through
    region_at_cell. is_valid_cell filters cell-set mutation requests.
    """
    region_at_cell: Callable[[CellCoord], Optional[Region]]
    is_valid_cell: Callable[[CellCoord], bool] = _always_valid


def random_region_color(rng: Optional[random.Random] = None) -> Color:
    """Random saturated color, hue/saturation/value in [0.7, 1.0]."""
    rng = rng or random
    h = rng.uniform(0.7, 1.0)
    s = rng.uniform(0.7, 1.0)
    v = rng.uniform(0.7, 1.0)
    return colorsys.hsv_to_rgb(h, s, v)


@dataclass
class RegionContainer:
    """Collection of regions for one grid."""
    _regions: List[Region] = field(default_factory=list)

    @property
    def regions(self) -> Tuple[Region, ...]:
        return tuple(self._regions)

    def __len__(self) -> int:
        return len(self._regions)

    def __iter__(self) -> Iterator[Region]:
        return iter(list(self._regions))

    def create_region(self, name: str = "New Region",
                      color: Optional[Color] = None) -> Region:
        """Create and register an empty region."""
        region = Region(name=name, color=color or random_region_color())
        self._regions.append(region)
        return region

    def add_region(self, region: Region) -> bool:
        """Register an existing region. Returns False if already present."""
        if any(r is region for r in self._regions):
            return False
        self._regions.append(region)
        return True

    def remove_region(self, region: Region) -> bool:
        for i, r in enumerate(self._regions):
            if r is region:
                del self._regions[i]
                return True
        return False

    def get_region(self, region_id: str) -> Optional[Region]:
        for r in self._regions:
            if r.id == region_id:
                return r
        return None

    def region_at_cell(self, cell: CellCoord) -> Optional[Region]:
        """Get the first region containing a given cell, if any."""
        for r in self._regions:
            if r.contains_cell(cell):
                return r
        return None

    def context(self, grid: Optional['GridSettings'] = None) -> RegionContext:
        """Build a RegionContext backed by this container's live regions."""
        if grid is None:
            return RegionContext(region_at_cell=self.region_at_cell)
        return RegionContext(region_at_cell=self.region_at_cell,
                             is_valid_cell=grid.is_valid_cell)
