"""
Grid region geometry and connectivity.

Partition a uniform grid into named regions, derive their boundaries, mesh
them, and keep door/window connectors between adjacent regions consistent as
regions are edited.

Public API:
    - CellCoord, CellSide, GridEdge, Region, RegionContainer, RegionContext
    - calculate_perimeter_edges, get_islands, check_region_islands
    - build_polygon_loops, build_polygon_loop, ear_clip, triangulate_polygon
    - build_region_mesh, build_cell_mesh, RegionMesh
    - ConnectorType, RegionConnector, ConnectorContainer, ConnectorGraph
    - GridSettings, UVMode
"""

from .regions import (
    CellCoord,
    CellSide,
    GridEdge,
    Region,
    RegionContext,
    RegionContainer,
    calculate_perimeter_edges,
    calculate_perimeter_cells,
    get_islands,
    has_multiple_islands,
    check_region_islands,
    apply_cells,
    rect_cells,
    PaintResult,
)
from .geometry import (
    PolygonLoop,
    build_polygon_loops,
    build_polygon_loop,
    TriangulationResult,
    ear_clip,
    triangulate_polygon,
    find_edge_near_point,
)
from .mesh import RegionMesh, build_region_mesh, build_cell_mesh
from .connectors import (
    ConnectorType,
    ResolvedNeighbor,
    RegionConnector,
    ConnectorContainer,
    ConnectorGraph,
    resolve_neighbor,
)
from .settings import GridSettings, UVMode
from .validation import Severity, ValidationIssue, ValidationResult

__all__ = [
    'CellCoord',
    'CellSide',
    'GridEdge',
    'Region',
    'RegionContext',
    'RegionContainer',
    'calculate_perimeter_edges',
    'calculate_perimeter_cells',
    'get_islands',
    'has_multiple_islands',
    'check_region_islands',
    'apply_cells',
    'rect_cells',
    'PaintResult',
    'PolygonLoop',
    'build_polygon_loops',
    'build_polygon_loop',
    'TriangulationResult',
    'ear_clip',
    'triangulate_polygon',
    'find_edge_near_point',
    'RegionMesh',
    'build_region_mesh',
    'build_cell_mesh',
    'ConnectorType',
    'ResolvedNeighbor',
    'RegionConnector',
    'ConnectorContainer',
    'ConnectorGraph',
    'resolve_neighbor',
    'GridSettings',
    'UVMode',
    'Severity',
    'ValidationIssue',
    'ValidationResult',
]

__version__ = '1.0.0'
