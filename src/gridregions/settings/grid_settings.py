"""
Grid configuration shared by the region, mesh and connector code.

GridSettings describes the addressable grid (cell size and extent) and
provides the cell-validity predicate used when painting. UVMode selects how
mesh texture coordinates are generated.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from ..regions.data_model import CellCoord


class UVMode(Enum):
    """Texture coordinate generation mode for region meshes."""
    WORLD = "world"  # World position scaled by total grid extent
    LOCAL = "local"  # Normalized to the region bounds (or each cell's quad)

    @staticmethod
    def parse(value: Union[str, 'UVMode']) -> 'UVMode':
        """Parse a UV mode from its value or legacy name.

        Accepts "world"/"local" and "worldUVs"/"localUVs" (case-insensitive).

        Raises:
            ValueError: If the value is not a recognized mode
        """
        if isinstance(value, UVMode):
            return value
        key = str(value).strip().lower()
        if key.endswith("uvs"):
            key = key[:-3]
        for mode in UVMode:
            if mode.value == key:
                return mode
        raise ValueError(f"Unknown UV mode: {value!r}")


@dataclass(frozen=True)
class GridSettings:
    """Addressable grid: cell size in world units and extent in cells."""
    cell_size: float = 1.0
    width: int = 64
    height: int = 64
    origin: CellCoord = CellCoord(0, 0)

    def __post_init__(self):
        if self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {self.width}x{self.height}")

    @property
    def total_world_size(self) -> Tuple[float, float]:
        """World extent of the whole grid (width, height)."""
        return (self.width * self.cell_size, self.height * self.cell_size)

    def is_valid_cell(self, cell: CellCoord) -> bool:
        """Check if a cell lies inside the addressable grid."""
        return (self.origin.x <= cell.x < self.origin.x + self.width and
                self.origin.y <= cell.y < self.origin.y + self.height)

    def cell_to_world(self, cell: CellCoord) -> Tuple[float, float]:
        """Convert to world coordinates (center of cell)."""
        return ((cell.x + 0.5) * self.cell_size,
                (cell.y + 0.5) * self.cell_size)

    def world_to_cell(self, x: float, y: float) -> CellCoord:
        """Convert from world coordinates to cell."""
        return CellCoord(int(x // self.cell_size), int(y // self.cell_size))
