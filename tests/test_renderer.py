"""Tests for pixel assembly and PNG output."""

import io

import numpy as np
from PIL import Image

from colorflow.config import GrowthConfig
from colorflow.engine import grow
from colorflow.grid import Grid, Pixel
from colorflow.renderer import assemble_pixels, image_filename, render_png, save_png


class TestAssemblePixels:
    def test_shape_and_dtype(self):
        buffer = assemble_pixels(Grid.empty(8, 4))
        assert buffer.shape == (8, 8, 3)
        assert buffer.dtype == np.uint8

    def test_empty_cells_are_background(self):
        buffer = assemble_pixels(Grid.empty(4, 4))
        assert not buffer.any()

    def test_grid_row_maps_to_image_x(self):
        grid = Grid.empty(4, 4)
        grid.place((1, 2, 3), (1, 3), Pixel(color=(10, 20, 30), direction=0.0))
        buffer = assemble_pixels(grid)
        assert tuple(buffer[3, 1]) == (10, 20, 30)
        assert not buffer[1, 3].any()

    def test_does_not_modify_grid(self):
        grid = grow(GrowthConfig(scale=2, num_seeds=1))
        before = dict(grid.color_index)
        assemble_pixels(grid)
        assert grid.color_index == before

    def test_full_run_uses_every_color(self):
        buffer = assemble_pixels(grow(GrowthConfig(scale=2, num_seeds=1)))
        colors = {tuple(px) for px in buffer.reshape(-1, 3)}
        assert len(colors) == 64


class TestRenderPNG:
    def test_render_png_produces_png(self):
        png_bytes = render_png(grow(GrowthConfig(scale=2, num_seeds=1)))
        assert png_bytes[:4] == b"\x89PNG"

    def test_png_decodes_to_buffer(self):
        grid = grow(GrowthConfig(scale=2, num_seeds=2, seed=4))
        image = Image.open(io.BytesIO(render_png(grid)))
        assert image.size == (8, 8)
        assert image.mode == "RGB"
        assert np.array_equal(np.array(image), assemble_pixels(grid))


class TestFiles:
    def test_image_filename(self):
        config = GrowthConfig(scale=7, spread=0.15, num_seeds=20, seed=0)
        assert image_filename(config) == "img-7-0.15-20-0.png"

    def test_save_png(self, tmp_path):
        grid = grow(GrowthConfig(scale=2, num_seeds=1))
        path = save_png(grid, tmp_path / "out.png")
        assert path.exists()
        assert path.read_bytes() == render_png(grid)
