"""
Mesh builder for converting regions to renderable geometry.

Two variants:
- build_region_mesh: traces the perimeter into polygon loops and ear-clips
  each outer loop (one per island). Few vertices, one face per island.
- build_cell_mesh: one quad per cell. Always valid, used as the fallback when
  a perimeter contains holes or open chains.

Meshes are flat (z = 0) with clockwise triangles (y-up). UVs follow UVMode:
WORLD divides world positions by the total grid extent, LOCAL normalizes to
the region bounding box (polygon mesh) or to each cell's quad (cell mesh).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..geometry.polygon_loops import build_polygon_loops
from ..geometry.triangulation import ear_clip
from ..regions.data_model import Region
from ..settings.grid_settings import GridSettings, UVMode
from ..validation.core import (
    Severity, ValidationIssue, ValidationResult,
    MESH_MALFORMED_POLYGON, MESH_INCOMPLETE_TRIANGULATION, MESH_CELL_FALLBACK,
)

logger = logging.getLogger(__name__)

Vec2 = Tuple[float, float]

# Per-cell quad corners: bl, br, tr, tl
_QUAD_CORNERS: Tuple[Vec2, ...] = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))
# Two clockwise triangles per quad: (bl, tr, br), (bl, tl, tr)
_QUAD_TRIANGLES: Tuple[Tuple[int, int, int], ...] = ((0, 2, 1), (0, 3, 2))


@dataclass
class RegionMesh:
    """Renderable mesh data for a region."""
    # Vertex positions, shape (N, 3), dtype=float32, z = 0
    positions: np.ndarray
    # Texture coordinates, shape (N, 2), dtype=float32
    uvs: np.ndarray
    # Triangle indices, shape (M, 3), dtype=uint32
    indices: np.ndarray
    bounds_min: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    bounds_max: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    name: str = ""
    diagnostics: ValidationResult = field(default_factory=ValidationResult)

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.indices)

    @property
    def is_empty(self) -> bool:
        return len(self.positions) == 0


def _world_uv(x: float, y: float, grid: GridSettings) -> Vec2:
    world_w, world_h = grid.total_world_size
    return (x / world_w if world_w else 0.0, y / world_h if world_h else 0.0)


class RegionMeshBuilder:
    """Accumulates flat polygons and quads into a single mesh."""

    def __init__(self, grid: GridSettings, uv_mode: UVMode = UVMode.WORLD):
        self.grid = grid
        self.uv_mode = UVMode.parse(uv_mode)
        self.diagnostics = ValidationResult()
        self._positions: List[List[float]] = []
        self._uvs: List[List[float]] = []
        self._indices: List[List[int]] = []
        # Region bounds in world space, used for LOCAL polygon UVs
        self._local_bounds: Optional[Tuple[float, float, float, float]] = None

    def clear(self):
        """Clear all mesh data."""
        self._positions.clear()
        self._uvs.clear()
        self._indices.clear()
        self.diagnostics = ValidationResult()
        self._local_bounds = None

    def set_local_bounds(self, min_x: float, min_y: float, max_x: float, max_y: float):
        self._local_bounds = (min_x, min_y, max_x, max_y)

    def _local_uv(self, x: float, y: float) -> Vec2:
        if self._local_bounds is None:
            return (0.0, 0.0)
        min_x, min_y, max_x, max_y = self._local_bounds
        w, h = max_x - min_x, max_y - min_y
        return ((x - min_x) / w if w else 0.0, (y - min_y) / h if h else 0.0)

    def add_polygon(self, points: Sequence[Vec2], region_id: Optional[str] = None) -> bool:
        """Ear-clip a clockwise polygon and append it.

        Returns:
            False if the polygon had fewer than 3 vertices or the
            triangulation was incomplete
        """
        if len(points) < 3:
            logger.warning("Polygon has %d vertices, need at least 3", len(points))
            self.diagnostics.add_issue(ValidationIssue(
                severity=Severity.WARN,
                code=MESH_MALFORMED_POLYGON,
                message=f"Polygon has {len(points)} vertices, need at least 3",
                region_id=region_id,
            ))
            return False

        result = ear_clip(points, clockwise=True)
        if not result.complete:
            logger.warning("Triangulation incomplete: %d of %d triangles",
                           result.triangle_count, len(points) - 2)
            self.diagnostics.add_issue(ValidationIssue(
                severity=Severity.WARN,
                code=MESH_INCOMPLETE_TRIANGULATION,
                message=(f"Triangulation produced {result.triangle_count} of "
                         f"{len(points) - 2} triangles"),
                region_id=region_id,
            ))

        first_idx = len(self._positions)
        for x, y in points:
            self._positions.append([x, y, 0.0])
            if self.uv_mode == UVMode.WORLD:
                u, v = _world_uv(x, y, self.grid)
            else:
                u, v = self._local_uv(x, y)
            self._uvs.append([u, v])

        for a, b, c in result.triangles:
            self._indices.append([first_idx + a, first_idx + b, first_idx + c])

        return result.complete

    def add_cell_quad(self, x: int, y: int):
        """Append one cell as a quad (4 vertices, 2 triangles)."""
        size = self.grid.cell_size
        first_idx = len(self._positions)

        for cx, cy in _QUAD_CORNERS:
            wx = (x + cx) * size
            wy = (y + cy) * size
            self._positions.append([wx, wy, 0.0])
            if self.uv_mode == UVMode.WORLD:
                u, v = _world_uv(wx, wy, self.grid)
            else:
                u, v = cx, cy
            self._uvs.append([u, v])

        for a, b, c in _QUAD_TRIANGLES:
            self._indices.append([first_idx + a, first_idx + b, first_idx + c])

    def build(self, name: str = "") -> RegionMesh:
        """Build the final mesh."""
        if not self._positions:
            return RegionMesh(
                positions=np.zeros((0, 3), dtype=np.float32),
                uvs=np.zeros((0, 2), dtype=np.float32),
                indices=np.zeros((0, 3), dtype=np.uint32),
                name=name,
                diagnostics=self.diagnostics,
            )

        positions = np.array(self._positions, dtype=np.float32)
        uvs = np.array(self._uvs, dtype=np.float32)
        if self._indices:
            indices = np.array(self._indices, dtype=np.uint32)
        else:
            indices = np.zeros((0, 3), dtype=np.uint32)

        bounds_min = tuple(float(v) for v in positions.min(axis=0))
        bounds_max = tuple(float(v) for v in positions.max(axis=0))

        return RegionMesh(
            positions=positions,
            uvs=uvs,
            indices=indices,
            bounds_min=bounds_min,
            bounds_max=bounds_max,
            name=name,
            diagnostics=self.diagnostics,
        )


def _empty_region_mesh(region: Region, builder: RegionMeshBuilder) -> RegionMesh:
    logger.warning("Region '%s' has no cells, nothing to mesh", region.name)
    builder.diagnostics.add_issue(ValidationIssue(
        severity=Severity.FAIL,
        code=MESH_MALFORMED_POLYGON,
        message=f"Region '{region.name}' has no cells",
        region_id=region.id,
    ))
    return builder.build(name=f"{region.name}_Mesh")


def build_cell_mesh(region: Region, grid: GridSettings,
                    uv_mode: UVMode = UVMode.WORLD) -> RegionMesh:
    """Build a mesh with one quad per cell, cells in sorted order."""
    builder = RegionMeshBuilder(grid, uv_mode)
    if region.is_empty:
        return _empty_region_mesh(region, builder)

    for cell in sorted(region.cells):
        builder.add_cell_quad(cell.x, cell.y)
    return builder.build(name=f"{region.name}_Mesh")


def build_region_mesh(region: Region, grid: GridSettings,
                      uv_mode: UVMode = UVMode.WORLD) -> RegionMesh:
    """Build a polygon mesh for a region from its perimeter.

    Each island's outer loop is ear-clipped. If the perimeter has holes or
    does not close, the per-cell mesh is returned instead with a MESH-003
    warning attached. Incomplete triangulations are kept as best-effort
    results with a MESH-002 warning.
    """
    builder = RegionMeshBuilder(grid, uv_mode)
    if region.is_empty:
        return _empty_region_mesh(region, builder)

    loops = build_polygon_loops(region.perimeter_edges, grid.cell_size)

    if any(loop.is_hole or not loop.closed for loop in loops):
        logger.warning("Region '%s' perimeter has holes or open chains, using cell mesh",
                       region.name)
        mesh = build_cell_mesh(region, grid, uv_mode)
        mesh.diagnostics.add_issue(ValidationIssue(
            severity=Severity.WARN,
            code=MESH_CELL_FALLBACK,
            message=f"Region '{region.name}' has holes, meshed per cell",
            region_id=region.id,
        ))
        return mesh

    min_cell, max_cell = region.bounds()
    size = grid.cell_size
    builder.set_local_bounds(min_cell.x * size, min_cell.y * size,
                             (max_cell.x + 1) * size, (max_cell.y + 1) * size)

    for loop in loops:
        builder.add_polygon(loop.points, region_id=region.id)

    return builder.build(name=f"{region.name}_Mesh")
