"""
Grid configuration and persistent editor settings.

RegionSettings (QSettings-backed) lives in .region_settings and is imported
from there, so the geometry code does not load Qt.
"""

from .grid_settings import GridSettings, UVMode

__all__ = [
    'GridSettings',
    'UVMode',
]
