"""Raster output for grown grids.

Grid rows map to image columns (x) and grid columns to image rows (y).
Empty cells stay black.
"""

from __future__ import annotations

import io
from pathlib import Path

import numpy as np
import structlog
from PIL import Image

from .config import GrowthConfig
from .grid import Grid

logger = structlog.get_logger(__name__)

BACKGROUND = (0, 0, 0)


def assemble_pixels(grid: Grid) -> np.ndarray:
    """Copy a grid into an RGB pixel buffer.

    Args:
        grid: Grid to read. It is not modified.

    Returns:
        ``uint8`` array of shape ``(size, size, 3)`` indexed ``[y, x]``.
    """
    buffer = np.zeros((grid.size, grid.size, 3), dtype=np.uint8)
    buffer[:, :] = BACKGROUND
    taken = grid.occupied.T
    buffer[taken] = grid.colors.transpose(1, 0, 2)[taken]
    return buffer


def render_png(grid: Grid) -> bytes:
    """Render a grid as PNG bytes."""
    image = Image.fromarray(assemble_pixels(grid))
    out = io.BytesIO()
    image.save(out, format="PNG")
    png_bytes = out.getvalue()

    logger.debug("png_rendered", size=grid.size, bytes=len(png_bytes))
    return png_bytes


def image_filename(config: GrowthConfig) -> str:
    """File name that encodes the run parameters."""
    return f"img-{config.scale}-{config.spread}-{config.num_seeds}-{config.seed}.png"


def save_png(grid: Grid, path: str | Path) -> Path:
    """Render a grid and write it to ``path``.

    The PNG is fully encoded before the file is opened, so a failed
    render leaves nothing on disk.
    """
    png_bytes = render_png(grid)
    path = Path(path)
    path.write_bytes(png_bytes)
    logger.debug("png_saved", path=str(path), bytes=len(png_bytes))
    return path
