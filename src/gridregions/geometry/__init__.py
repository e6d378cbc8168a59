"""
Polygon geometry for region boundaries: loop building, triangulation, picking.
"""

from .polygon_loops import PolygonLoop, build_polygon_loops, build_polygon_loop
from .triangulation import (
    TriangulationResult,
    ear_clip,
    triangulate_polygon,
    is_convex,
    point_in_triangle,
    on_segment,
)
from .edge_picking import closest_point_on_segment, distance_to_edge, find_edge_near_point

__all__ = [
    'PolygonLoop',
    'build_polygon_loops',
    'build_polygon_loop',
    'TriangulationResult',
    'ear_clip',
    'triangulate_polygon',
    'is_convex',
    'point_in_triangle',
    'on_segment',
    'closest_point_on_segment',
    'distance_to_edge',
    'find_edge_near_point',
]
