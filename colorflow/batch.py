"""Batch driver: one image per scale.

Each combination runs independently. A run that fails validation or
growth is logged and skipped; the remaining scales still run.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog
from pydantic import ValidationError

from .config import DEFAULT_NUM_SEEDS, DEFAULT_SCALES, DEFAULT_SEED, DEFAULT_SPREAD, GrowthConfig
from .engine import GrowthError, grow
from .renderer import image_filename, save_png

logger = structlog.get_logger(__name__)


def run_one(config: GrowthConfig, out_dir: str | Path = ".") -> Path:
    """Grow one image and write it under ``out_dir``."""
    path = Path(out_dir) / image_filename(config)
    logger.info("image_start", filename=path.name)
    grid = grow(config)
    return save_png(grid, path)


def run_batch(
    scales: Iterable[int] = DEFAULT_SCALES,
    spread: float = DEFAULT_SPREAD,
    num_seeds: int = DEFAULT_NUM_SEEDS,
    seed: int = DEFAULT_SEED,
    out_dir: str | Path = ".",
    seed_spacing: bool = True,
) -> list[Path]:
    """Grow and save one image per scale.

    Args:
        scales: Scales to render, in order.
        spread: Angular tolerance shared by every run.
        num_seeds: Seed count shared by every run.
        seed: PRNG seed shared by every run.
        out_dir: Directory for the PNG files (created if missing).
        seed_spacing: Enforce minimum seed spacing.

    Returns:
        Paths of the images that were written.
    """
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for scale in scales:
        try:
            config = GrowthConfig(
                scale=scale,
                spread=spread,
                num_seeds=num_seeds,
                seed=seed,
                seed_spacing=seed_spacing,
            )
        except ValidationError as e:
            logger.error("image_invalid_config", scale=scale, error=str(e))
            continue

        try:
            written.append(run_one(config, out))
        except GrowthError as e:
            logger.error("image_failed", filename=image_filename(config), error=str(e))

    logger.info("batch_finished", written=len(written))
    return written
