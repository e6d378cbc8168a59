"""
Flat region meshes (positions, UVs, triangle indices) for rendering.
"""

from .region_mesh import RegionMesh, RegionMeshBuilder, build_region_mesh, build_cell_mesh

__all__ = [
    'RegionMesh',
    'RegionMeshBuilder',
    'build_region_mesh',
    'build_cell_mesh',
]
