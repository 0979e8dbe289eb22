"""Run configuration for color growth.

A GrowthConfig carries the four parameters that define an image
(scale, spread, num_seeds, seed) plus the switches that pick between
the supported placement variants. Validation happens on construction,
so anything past this module can trust the values.
"""

from __future__ import annotations

import math
from typing import Literal

import structlog
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .palette import color_axis_size, grid_size

logger = structlog.get_logger(__name__)

# Reference batch parameters
DEFAULT_SCALES = (7, 8, 9, 10)
DEFAULT_SPREAD = 0.15
DEFAULT_NUM_SEEDS = 20
DEFAULT_SEED = 0

# Upper bound keeps every lattice value within one byte
MAX_SCALE = 16

DEFAULT_MAX_SEED_ATTEMPTS = 100_000


class GrowthConfig(BaseModel):
    """Parameters of a single growth run."""

    model_config = ConfigDict(frozen=True)

    scale: int = Field(
        ...,
        ge=2,
        le=MAX_SCALE,
        description="Lattice scale: scale**2 values per channel, scale**3 pixels per side",
    )
    spread: float = Field(
        default=DEFAULT_SPREAD,
        allow_inf_nan=False,
        description="Angular tolerance (radians) for immediate cell acceptance",
    )
    num_seeds: int = Field(
        default=DEFAULT_NUM_SEEDS,
        ge=1,
        description="Number of colors placed at random before growth starts",
    )
    seed: int = Field(
        default=DEFAULT_SEED,
        ge=0,
        lt=2**64,
        description="PRNG seed",
    )
    seed_spacing: bool = Field(
        default=True,
        description="Keep seeds at least grid_size / (2 * sqrt(num_seeds)) apart on the torus",
    )
    neighbor_bound: Literal["rgb", "lattice"] = Field(
        default="rgb",
        description="Bound for similar-color lookups: [0, 255] or [0, scale**2)",
    )
    max_seed_attempts: int = Field(
        default=DEFAULT_MAX_SEED_ATTEMPTS,
        ge=1,
        description="Location draws allowed per seed before giving up",
    )

    @model_validator(mode="after")
    def _check_seed_count(self) -> GrowthConfig:
        if self.num_seeds > self.total_colors:
            raise ValueError(
                f"num_seeds must be <= scale**6 ({self.total_colors}), got {self.num_seeds}"
            )
        if self.spread <= 0:
            logger.warning(
                "spread_non_positive",
                spread=self.spread,
                note="no cell will be accepted inside the cone",
            )
        return self

    @property
    def axis_size(self) -> int:
        return color_axis_size(self.scale)

    @property
    def grid_size(self) -> int:
        return grid_size(self.scale)

    @property
    def total_colors(self) -> int:
        return self.axis_size**3

    @property
    def min_seed_spacing(self) -> float:
        """Minimum toroidal distance between seeds when spacing is on."""
        return self.grid_size / (2.0 * math.sqrt(self.num_seeds))

    @property
    def neighbor_limit(self) -> int:
        """Largest channel value a similar-color lookup may reach."""
        return 255 if self.neighbor_bound == "rgb" else self.axis_size - 1
