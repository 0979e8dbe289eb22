"""Tests for the occupancy grid."""

import pytest

from colorflow.grid import CellOccupiedError, Grid, Pixel


class TestGrid:
    def test_empty_grid(self):
        grid = Grid.empty(4, 4)
        assert grid.size == 4
        assert grid.occupied.shape == (4, 4)
        assert grid.placed.shape == (4, 4, 4)
        assert grid.occupied_count == 0
        assert len(grid) == 0
        assert grid.color_index == {}

    def test_place_sets_cell_and_index(self):
        grid = Grid.empty(4, 4)
        pixel = Pixel(color=(255, 0, 0), direction=1.0)
        grid.place((3, 0, 0), (1, 2), pixel)
        assert not grid.is_open((1, 2))
        assert grid.pixel_at((1, 2)) == pixel
        assert grid.location_of((3, 0, 0)) == (1, 2)
        assert grid.color_index == {(3, 0, 0): (1, 2)}
        assert grid.occupied_count == 1
        assert len(grid) == 1

    def test_empty_cell_has_no_pixel(self):
        assert Grid.empty(4, 4).pixel_at((2, 3)) is None

    def test_place_refuses_overwrite(self):
        grid = Grid.empty(4, 4)
        grid.place((0, 0, 0), (0, 0), Pixel(color=(0, 0, 0), direction=0.0))
        with pytest.raises(CellOccupiedError, match="occupied"):
            grid.place((1, 0, 0), (0, 0), Pixel(color=(85, 0, 0), direction=0.0))
        assert grid.pixel_at((0, 0)).color == (0, 0, 0)
        assert grid.location_of((1, 0, 0)) is None

    def test_place_refuses_duplicate_color(self):
        grid = Grid.empty(4, 4)
        grid.place((0, 0, 0), (0, 0), Pixel(color=(0, 0, 0), direction=0.0))
        with pytest.raises(CellOccupiedError, match="already placed"):
            grid.place((0, 0, 0), (1, 1), Pixel(color=(0, 0, 0), direction=0.0))
        assert grid.is_open((1, 1))
        assert len(grid) == 1

    def test_missing_color(self):
        assert Grid.empty(2, 4).location_of((1, 1, 1)) is None

    def test_invalid_size_raises(self):
        with pytest.raises(ValueError):
            Grid.empty(0, 4)

    def test_invalid_axis_size_raises(self):
        with pytest.raises(ValueError):
            Grid.empty(4, 0)
