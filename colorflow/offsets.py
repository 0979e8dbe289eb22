"""Grid displacement ranking for open-cell search.

Offsets are ``(row, col)`` displacements on the toroidal grid, sorted
nearest first. The ranking is held as parallel arrays with each
offset's heading and length precomputed, so the placement loop can
evaluate whole slices of it at once.

Angles follow one convention everywhere: ``atan2(row, col)``, i.e.
the row axis plays y and the column axis plays x.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class LocationOffsets:
    """Ranked grid displacements as parallel arrays.

    Attributes:
        rows: Row displacements (``int64``).
        cols: Column displacements (``int64``).
        angles: Heading of each displacement in ``[-pi, pi]``.
        distances: Euclidean length of each displacement.
    """

    rows: np.ndarray
    cols: np.ndarray
    angles: np.ndarray
    distances: np.ndarray

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, int]]) -> LocationOffsets:
        """Build a table from ``(row, col)`` pairs, keeping their order."""
        if not isinstance(pairs, np.ndarray):
            pairs = list(pairs)
        pairs = np.asarray(pairs, dtype=np.int64).reshape(-1, 2)
        rows = pairs[:, 0].copy()
        cols = pairs[:, 1].copy()
        angles = np.array(
            [offset_angle(r, c) for r, c in zip(rows.tolist(), cols.tolist())], dtype=np.float64
        )
        distances = np.sqrt((rows * rows + cols * cols).astype(np.float64))
        return cls(rows=rows, cols=cols, angles=angles, distances=distances)

    def __len__(self) -> int:
        return len(self.rows)


def offset_angle(row: int, col: int) -> float:
    """Heading of a grid displacement."""
    return math.atan2(row, col)


def normalize_angle(diff):
    """Fold angle differences into ``(-pi, pi]`` with a single 2*pi shift.

    Works on scalars and arrays. Inputs come from subtracting two
    headings that each lie within a 2*pi window, so one shift is enough.
    """
    return np.where(
        diff < -math.pi,
        diff + 2 * math.pi,
        np.where(diff > math.pi, diff - 2 * math.pi, diff),
    )


def rank_location_offsets(size: int) -> LocationOffsets:
    """Enumerate toroidal displacements, nearest first.

    A linear index ``n`` is split into ``i = n % size`` and
    ``j = n // size`` and each pair emits ``(i, j)``, ``(i, -j)``,
    ``(-i, j)`` and ``(-i, -j)``. ``j`` runs up to ``size // 2``
    inclusive, so every cell of the torus is reachable from any origin
    for odd and even sizes alike. Duplicates (e.g. ``-0``) are kept.

    The sort is stable on squared length, so ties keep emission order.

    Args:
        size: Grid side length (>= 1).

    Returns:
        Ranked LocationOffsets table.

    Raises:
        ValueError: If size is not positive.
    """
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")

    n = np.arange(size * (size // 2 + 1), dtype=np.int64)
    i = n % size
    j = n // size
    pairs = np.stack(
        [
            np.stack([i, j], axis=1),
            np.stack([i, -j], axis=1),
            np.stack([-i, j], axis=1),
            np.stack([-i, -j], axis=1),
        ],
        axis=1,
    ).reshape(-1, 2)

    squared = np.sum(pairs**2, axis=1)
    order = np.argsort(squared, kind="stable")
    return LocationOffsets.from_pairs(pairs[order])
