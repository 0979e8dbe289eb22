#!/usr/bin/env python3
"""Basic usage example for colorflow.

Grows a few small images and writes them next to this script.

Usage:
    python examples/basic_usage.py
"""

import os
import sys
from pathlib import Path

# Add parent directory to path for direct script execution
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from colorflow.config import GrowthConfig
from colorflow.engine import grow
from colorflow.renderer import image_filename, render_png, save_png

OUT_DIR = Path(__file__).resolve().parent


def example_single_image():
    """Grow one image and report what was placed."""
    print("=" * 60)
    print("Example 1: Single Image")
    print("=" * 60)

    config = GrowthConfig(scale=3, spread=0.15, num_seeds=5, seed=0)
    print(f"  Colors:      {config.total_colors}")
    print(f"  Grid:        {config.grid_size}x{config.grid_size}")

    grid = grow(config)
    print(f"  Placed:      {len(grid)}")

    path = save_png(grid, OUT_DIR / image_filename(config))
    print(f"  Written:     {path.name}")
    print()


def example_spread_sweep():
    """Compare output sizes across spreads (narrow cones branch more)."""
    print("=" * 60)
    print("Example 2: Spread Sweep")
    print("=" * 60)

    for spread in [0.05, 0.15, 0.5, 1.5]:
        config = GrowthConfig(scale=3, spread=spread, num_seeds=5, seed=0)
        png = render_png(grow(config))
        print(f"  Spread {spread:4.2f}: PNG {len(png):6d} bytes")

    print()


def example_seeding_variants():
    """Spaced vs. unspaced seeding."""
    print("=" * 60)
    print("Example 3: Seeding Variants")
    print("=" * 60)

    for spacing in [True, False]:
        config = GrowthConfig(scale=3, num_seeds=20, seed=1, seed_spacing=spacing)
        png = render_png(grow(config))
        print(f"  Spacing {'on ' if spacing else 'off'}: PNG {len(png):6d} bytes")

    print()


if __name__ == "__main__":
    example_single_image()
    example_spread_sweep()
    example_seeding_variants()
    print("All examples completed successfully.")
