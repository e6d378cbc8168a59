"""
Persistent region editor settings stored in QSettings.

Holds the user's grid and mesh preferences between sessions. Every getter
falls back to the default when the settings backend is unavailable or holds
a value that cannot be used.

Usage:
    from gridregions.settings.region_settings import REGION_SETTINGS

    grid = REGION_SETTINGS.get_grid_settings()
    mode = REGION_SETTINGS.get_uv_mode()

    REGION_SETTINGS.set_uv_mode(UVMode.LOCAL)
    REGION_SETTINGS.reset_to_defaults()
"""

import logging
from typing import Any, Dict, Optional

from PyQt5.QtCore import QSettings

from .grid_settings import GridSettings, UVMode

logger = logging.getLogger(__name__)

ORGANIZATION = "GridRegions"
APPLICATION = "RegionEditor"

DEFAULTS: Dict[str, Any] = {
    "grid/cell_size": 1.0,
    "grid/width": 64,
    "grid/height": 64,
    "mesh/uv_mode": UVMode.WORLD.value,
    "connectors/edge_hover_tolerance": 0.1,
}

MIN_EDGE_HOVER_TOLERANCE = 0.01
MAX_EDGE_HOVER_TOLERANCE = 0.5


class RegionSettings:
    """Region editor settings stored in QSettings.

    Note: QSettings is accessed lazily so importing this module never touches
    the settings backend.
    """

    def __init__(self, path: Optional[str] = None):
        """Initialize region settings.

        Args:
            path: Optional INI file to use instead of the per-user store
        """
        self._path = path
        self._settings = None

    def _get_settings(self) -> QSettings:
        """Get or create the QSettings instance."""
        try:
            if self._settings is not None:
                # Raises if the underlying object was deleted
                self._settings.organizationName()
                return self._settings
        except RuntimeError:
            pass

        if self._path is not None:
            self._settings = QSettings(self._path, QSettings.IniFormat)
        else:
            self._settings = QSettings(ORGANIZATION, APPLICATION)
        return self._settings

    def _get(self, key: str, value_type: type) -> Any:
        default = DEFAULTS[key]
        try:
            value = self._get_settings().value(key, default)
        except RuntimeError:
            return default
        try:
            return value_type(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid setting %s=%r", key, value)
            return default

    def _set(self, key: str, value: Any):
        try:
            self._get_settings().setValue(key, value)
        except RuntimeError:
            # Settings backend not available, ignore
            pass

    def get_cell_size(self) -> float:
        size = self._get("grid/cell_size", float)
        return size if size > 0 else DEFAULTS["grid/cell_size"]

    def set_cell_size(self, size: float):
        if size <= 0:
            raise ValueError(f"cell_size must be positive, got {size}")
        self._set("grid/cell_size", float(size))

    def get_grid_size(self) -> tuple:
        """(width, height) of the grid in cells."""
        width = self._get("grid/width", int)
        height = self._get("grid/height", int)
        return (max(0, width), max(0, height))

    def set_grid_size(self, width: int, height: int):
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")
        self._set("grid/width", int(width))
        self._set("grid/height", int(height))

    def get_uv_mode(self) -> UVMode:
        value = self._get("mesh/uv_mode", str)
        try:
            return UVMode.parse(value)
        except ValueError:
            logger.warning("Unknown stored UV mode %r, using default", value)
            return UVMode.parse(DEFAULTS["mesh/uv_mode"])

    def set_uv_mode(self, mode):
        self._set("mesh/uv_mode", UVMode.parse(mode).value)

    def get_edge_hover_tolerance(self) -> float:
        value = self._get("connectors/edge_hover_tolerance", float)
        return min(MAX_EDGE_HOVER_TOLERANCE, max(MIN_EDGE_HOVER_TOLERANCE, value))

    def set_edge_hover_tolerance(self, tolerance: float):
        tolerance = min(MAX_EDGE_HOVER_TOLERANCE, max(MIN_EDGE_HOVER_TOLERANCE, tolerance))
        self._set("connectors/edge_hover_tolerance", float(tolerance))

    def get_grid_settings(self) -> GridSettings:
        """Build GridSettings from the stored values."""
        width, height = self.get_grid_size()
        return GridSettings(cell_size=self.get_cell_size(), width=width, height=height)

    def get_all(self) -> Dict[str, Any]:
        return {
            "grid/cell_size": self.get_cell_size(),
            "grid/width": self.get_grid_size()[0],
            "grid/height": self.get_grid_size()[1],
            "mesh/uv_mode": self.get_uv_mode().value,
            "connectors/edge_hover_tolerance": self.get_edge_hover_tolerance(),
        }

    def reset_to_defaults(self):
        """Clear all stored values, reverting to defaults."""
        try:
            settings = self._get_settings()
            for key in DEFAULTS:
                settings.remove(key)
        except RuntimeError:
            pass

    def sync(self):
        """Flush pending writes to permanent storage."""
        try:
            self._get_settings().sync()
        except RuntimeError:
            pass


# Global singleton instance
REGION_SETTINGS = RegionSettings()


__all__ = [
    'RegionSettings',
    'REGION_SETTINGS',
    'DEFAULTS',
]
