"""
Nearest perimeter edge lookup for a world-space point.

The host maps its cursor into world space; this finds the region edge the
point is hovering over so connectors can be created or cycled there.
"""

import math
from typing import Iterable, Optional, Sequence, Tuple

from ..regions.data_model import GridEdge, Region

Vec2 = Tuple[float, float]


def closest_point_on_segment(point: Sequence[float], a: Sequence[float],
                             b: Sequence[float]) -> Vec2:
    """Project a point onto segment ab, clamped to the segment."""
    abx, aby = b[0] - a[0], b[1] - a[1]
    length_sq = abx * abx + aby * aby
    if length_sq == 0.0:
        return (a[0], a[1])
    t = ((point[0] - a[0]) * abx + (point[1] - a[1]) * aby) / length_sq
    t = max(0.0, min(1.0, t))
    return (a[0] + abx * t, a[1] + aby * t)


def distance_to_edge(point: Sequence[float], edge: GridEdge, cell_size: float) -> float:
    a, b = edge.world_vertices(cell_size)
    cx, cy = closest_point_on_segment(point, a, b)
    return math.hypot(point[0] - cx, point[1] - cy)


def find_edge_near_point(
    point: Sequence[float],
    regions: Iterable[Region],
    cell_size: float,
    tolerance: float = 0.1,
) -> Optional[Tuple[Region, GridEdge]]:
    """Find the first perimeter edge within tolerance of a world point.

    Args:
        point: World-space (x, y)
        regions: Regions to search, in priority order
        cell_size: World size of one cell
        tolerance: Pick distance as a fraction of cell_size

    Returns:
        (region, edge) of the first match, or None
    """
    max_distance = tolerance * cell_size
    for region in regions:
        for edge in region.perimeter_edges:
            if distance_to_edge(point, edge, cell_size) < max_distance:
                return region, edge
    return None
