"""Placement engine: grows every lattice color onto the grid.

Growth algorithm:
1. Enumerate the lattice and rank color offsets and grid offsets
2. Shuffle the colors with a PRNG seeded from the config
3. Seed phase: the first ``num_seeds`` colors get a random cell and a
   random heading in ``[0, 2*pi)``
4. Growth phase: every other color
   a. finds its nearest already-placed color via the offset ranking
   b. inherits that color's heading
   c. takes the nearest open cell whose heading lies strictly inside
      ``spread`` of the inherited one; if none does, the open cell
      minimising ``(|angle gap| - spread) * distance``
   d. stores the heading of the chosen offset as its own

Each step reads the state left by the previous ones, so the loop is
strictly sequential. Within a step, both rankings are evaluated in
slices that double in length, which gives the same answer as walking
them one offset at a time but stops as soon as the answer is known.
"""

from __future__ import annotations

import math
from collections.abc import Iterator

import numpy as np
import structlog

from .config import GrowthConfig
from .grid import Grid, Location, Pixel
from .offsets import LocationOffsets, normalize_angle, rank_location_offsets
from .palette import ColorBase, color_base_to_rgb, enumerate_color_bases, rank_color_offsets

logger = structlog.get_logger(__name__)

# Length of the first slice scanned per lookup
FIRST_CHUNK = 64


class GrowthError(RuntimeError):
    """A growth run hit an unrecoverable state."""


class NoSimilarNeighborFound(GrowthError):
    """No offset from a color leads to an already-placed color."""


class NoOpenCellFound(GrowthError):
    """Every ranked grid offset around a neighbor is occupied."""


class SeedPlacementError(GrowthError):
    """A seed could not be given a location within the attempt budget."""


def _chunks(total: int, first: int = FIRST_CHUNK) -> Iterator[tuple[int, int]]:
    """Yield ``(start, stop)`` slices covering ``range(total)``, doubling in length."""
    start = 0
    step = first
    while start < total:
        stop = min(start + step, total)
        yield start, stop
        start = stop
        step *= 2


def toroidal_distance(a: Location, b: Location, size: int) -> float:
    """Euclidean distance between two cells on a torus of side ``size``."""
    total = 0
    for p, q in zip(a, b):
        d = abs(p - q)
        d = min(d, size - d)
        total += d * d
    return math.sqrt(total)


def find_similar_location(
    base: ColorBase,
    grid: Grid,
    color_offsets: np.ndarray,
    limit: int = 255,
) -> Location:
    """Locate the closest already-placed color.

    Args:
        base: Color being placed.
        grid: Current grid; its lattice index says which colors are placed.
        color_offsets: Ranked ``(n, 3)`` offsets, nearest first.
        limit: Largest channel value a candidate may have.

    Returns:
        Cell of the first placed color reached by the ranking.

    Raises:
        NoSimilarNeighborFound: If no offset reaches a placed color.
    """
    offsets = np.asarray(color_offsets).reshape(-1, 3)
    origin = np.asarray(base, dtype=np.int64)
    # Colors past the lattice edge are never placed
    top = min(limit, grid.axis_size - 1)

    for start, stop in _chunks(len(offsets)):
        candidates = offsets[start:stop].astype(np.int64) + origin
        in_bounds = np.flatnonzero(((candidates >= 0) & (candidates <= top)).all(axis=1))
        if in_bounds.size == 0:
            continue
        hits = candidates[in_bounds]
        found = grid.placed[hits[:, 0], hits[:, 1], hits[:, 2]]
        if found.any():
            r, g, b = hits[int(np.argmax(found))].tolist()
            row, col = grid.locations[r, g, b].tolist()
            return (row, col)

    raise NoSimilarNeighborFound(f"no placed color reachable from {base}")


def choose_cell(
    grid: Grid,
    origin: Location,
    direction: float,
    spread: float,
    location_offsets: LocationOffsets,
) -> tuple[Location, float]:
    """Pick the open cell a new color should take next to ``origin``.

    The first open cell whose heading is strictly within ``spread`` of
    ``direction`` wins outright. Without such a cell, the open cell
    with the smallest ``(|gap| - spread) * distance`` wins, earliest
    in ranking order on ties.

    Args:
        grid: Current occupancy.
        origin: Cell of the similar color.
        direction: Inherited heading.
        spread: Angular tolerance in radians.
        location_offsets: Ranked displacements, nearest first.

    Returns:
        Tuple of (chosen cell, heading of the offset that reached it).

    Raises:
        NoOpenCellFound: If every candidate cell is occupied.
    """
    size = grid.size
    origin_row, origin_col = origin

    best_location: Location | None = None
    best_angle = 0.0
    best_cost = math.inf

    for start, stop in _chunks(len(location_offsets)):
        rows = (origin_row + location_offsets.rows[start:stop]) % size
        cols = (origin_col + location_offsets.cols[start:stop]) % size
        is_open = ~grid.occupied[rows, cols]
        if not is_open.any():
            continue

        angles = location_offsets.angles[start:stop]
        gaps = np.abs(normalize_angle(angles - direction))
        inside = is_open & (gaps < spread)
        if inside.any():
            k = int(np.argmax(inside))
            return (int(rows[k]), int(cols[k])), float(angles[k])

        costs = np.where(is_open, (gaps - spread) * location_offsets.distances[start:stop], np.inf)
        k = int(np.argmin(costs))
        if costs[k] < best_cost:
            best_cost = float(costs[k])
            best_location = (int(rows[k]), int(cols[k]))
            best_angle = float(angles[k])

    if best_location is None:
        raise NoOpenCellFound(f"no open cell reachable from {origin}")
    return best_location, best_angle


def _draw_seed_location(
    rng: np.random.Generator,
    grid: Grid,
    seed_locations: list[Location],
    config: GrowthConfig,
) -> Location:
    """Draw random cells until one satisfies the seeding policy."""
    size = config.grid_size
    min_spacing = config.min_seed_spacing

    for _ in range(config.max_seed_attempts):
        location = (int(rng.integers(0, size)), int(rng.integers(0, size)))
        if not grid.is_open(location):
            continue
        if config.seed_spacing and any(
            toroidal_distance(location, other, size) < min_spacing for other in seed_locations
        ):
            continue
        return location

    raise SeedPlacementError(
        f"could not place seed {len(seed_locations) + 1} of {config.num_seeds} "
        f"after {config.max_seed_attempts} attempts"
    )


def place_seeds(
    rng: np.random.Generator,
    grid: Grid,
    seeds: list[ColorBase],
    config: GrowthConfig,
) -> list[Location]:
    """Place seed colors at random cells with random headings.

    Each seed draws its cell first, then a heading in ``[0, 2*pi)``.

    Returns:
        Seed cells in placement order.
    """
    seed_locations: list[Location] = []
    for base in seeds:
        location = _draw_seed_location(rng, grid, seed_locations, config)
        direction = float(rng.uniform(0.0, 2 * math.pi))
        color = color_base_to_rgb(base, config.axis_size)
        grid.place(base, location, Pixel(color=color, direction=direction))
        seed_locations.append(location)

    logger.debug("seeds_placed", count=len(seed_locations))
    return seed_locations


def grow(config: GrowthConfig) -> Grid:
    """Place every lattice color onto a fresh grid.

    Args:
        config: Validated run parameters.

    Returns:
        Fully populated Grid.

    Raises:
        GrowthError: If seeding or growth cannot proceed.
    """
    rng = np.random.default_rng(config.seed)
    axis = config.axis_size

    bases = enumerate_color_bases(config.scale)
    color_offsets = rank_color_offsets(bases)
    location_offsets = rank_location_offsets(config.grid_size)
    shuffled = [bases[i] for i in rng.permutation(len(bases)).tolist()]

    logger.info(
        "growth_started",
        scale=config.scale,
        spread=config.spread,
        num_seeds=config.num_seeds,
        seed=config.seed,
        colors=len(bases),
        grid_size=config.grid_size,
        seed_spacing=config.seed_spacing,
    )

    grid = Grid.empty(config.grid_size, axis)
    place_seeds(rng, grid, shuffled[: config.num_seeds], config)
    limit = config.neighbor_limit

    for base in shuffled[config.num_seeds :]:
        neighbor = find_similar_location(base, grid, color_offsets, limit)
        inherited = float(grid.directions[neighbor])
        location, direction = choose_cell(
            grid, neighbor, inherited, config.spread, location_offsets
        )
        color = color_base_to_rgb(base, axis)
        grid.place(base, location, Pixel(color=color, direction=direction))

    logger.info("growth_finished", scale=config.scale, placed=len(grid))
    return grid
