"""Tests for grid configuration and persistent editor settings."""

import pytest

from gridregions.regions.data_model import CellCoord
from gridregions.settings.grid_settings import GridSettings, UVMode


class TestUVMode:
    """Test UV mode parsing."""

    @pytest.mark.parametrize("value,expected", [
        ("world", UVMode.WORLD),
        ("LOCAL", UVMode.LOCAL),
        ("worldUVs", UVMode.WORLD),
        ("localUVs", UVMode.LOCAL),
        (UVMode.LOCAL, UVMode.LOCAL),
    ])
    def test_parse(self, value, expected):
        assert UVMode.parse(value) == expected

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError):
            UVMode.parse("spherical")


class TestGridSettings:
    """Test grid extent and coordinate conversion."""

    def test_defaults(self):
        grid = GridSettings()
        assert grid.cell_size == 1.0
        assert grid.total_world_size == (64.0, 64.0)

    @pytest.mark.parametrize("size", [0.0, -1.0])
    def test_rejects_non_positive_cell_size(self, size):
        with pytest.raises(ValueError):
            GridSettings(cell_size=size)

    def test_rejects_negative_dimensions(self):
        with pytest.raises(ValueError):
            GridSettings(width=-1)

    def test_is_valid_cell(self):
        grid = GridSettings(width=4, height=3)
        assert grid.is_valid_cell(CellCoord(0, 0))
        assert grid.is_valid_cell(CellCoord(3, 2))
        assert not grid.is_valid_cell(CellCoord(4, 0))
        assert not grid.is_valid_cell(CellCoord(0, 3))
        assert not grid.is_valid_cell(CellCoord(-1, 0))

    def test_world_conversion(self):
        grid = GridSettings(cell_size=2.0)
        assert grid.cell_to_world(CellCoord(1, 0)) == (3.0, 1.0)
        assert grid.world_to_cell(3.9, 0.1) == CellCoord(1, 0)
        assert grid.world_to_cell(-0.5, -0.5) == CellCoord(-1, -1)


class TestRegionSettings:
    """Test QSettings-backed persistence against an INI file."""

    @pytest.fixture
    def settings(self, tmp_path):
        pytest.importorskip("PyQt5")
        from gridregions.settings.region_settings import RegionSettings
        return RegionSettings(path=str(tmp_path / "settings.ini"))

    def test_defaults(self, settings):
        from gridregions.settings.region_settings import DEFAULTS
        assert settings.get_all() == DEFAULTS

    def test_round_trip_values(self, settings):
        settings.set_cell_size(2.5)
        settings.set_grid_size(10, 12)
        settings.set_uv_mode("localUVs")
        settings.sync()

        grid = settings.get_grid_settings()
        assert grid.cell_size == 2.5
        assert (grid.width, grid.height) == (10, 12)
        assert settings.get_uv_mode() == UVMode.LOCAL

    def test_values_survive_reopen(self, tmp_path):
        pytest.importorskip("PyQt5")
        from gridregions.settings.region_settings import RegionSettings
        path = str(tmp_path / "reopen.ini")

        first = RegionSettings(path=path)
        first.set_grid_size(7, 9)
        first.set_uv_mode(UVMode.LOCAL)
        first.sync()

        second = RegionSettings(path=path)
        assert second.get_grid_size() == (7, 9)
        assert second.get_uv_mode() == UVMode.LOCAL

    def test_tolerance_is_clamped(self, settings):
        settings.set_edge_hover_tolerance(5.0)
        assert settings.get_edge_hover_tolerance() == 0.5
        settings.set_edge_hover_tolerance(0.0)
        assert settings.get_edge_hover_tolerance() == 0.01

    def test_invalid_cell_size_raises(self, settings):
        with pytest.raises(ValueError):
            settings.set_cell_size(0)

    def test_reset_to_defaults(self, settings):
        settings.set_cell_size(4.0)
        settings.reset_to_defaults()
        assert settings.get_cell_size() == 1.0
