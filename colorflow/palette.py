"""Color lattice enumeration and similarity offsets.

The palette is a cube of side ``scale**2``. Each lattice point is a
ColorBase (three integers); it is rescaled to 8-bit RGB only when
written into a pixel.

The color offset ranking lists every signed lattice delta, nearest
first. The placement engine walks it to find the closest color that
has already been placed.
"""

from __future__ import annotations

import numpy as np

ColorBase = tuple[int, int, int]
RGB = tuple[int, int, int]

# Sign patterns applied to each base, in emission order
_SIGNS = np.array(
    [
        [1, 1, 1],
        [1, 1, -1],
        [1, -1, 1],
        [1, -1, -1],
        [-1, 1, 1],
        [-1, 1, -1],
        [-1, -1, 1],
        [-1, -1, -1],
    ],
    dtype=np.int64,
)


def color_axis_size(scale: int) -> int:
    """Number of values per color channel before rescaling."""
    return scale**2


def grid_size(scale: int) -> int:
    """Side length of the square output grid."""
    return scale**3


def enumerate_color_bases(scale: int) -> list[ColorBase]:
    """Enumerate every lattice color in index order.

    A linear index ``n`` is split into three base-``S`` digits
    (``S = scale**2``): red is the lowest digit, blue the highest.

    Args:
        scale: Lattice scale (>= 2).

    Returns:
        ``scale**6`` distinct ColorBase tuples.

    Raises:
        ValueError: If scale is below 2.
    """
    if scale < 2:
        raise ValueError(f"scale must be >= 2, got {scale}")

    axis = color_axis_size(scale)
    bases: list[ColorBase] = []
    for n in range(axis**3):
        r = n % axis
        g = (n // axis) % axis
        b = n // axis**2
        bases.append((r, g, b))
    return bases


def color_base_to_rgb(base: ColorBase, axis_size: int) -> RGB:
    """Rescale a lattice color from ``[0, axis_size - 1]`` to ``[0, 255]``.

    Raises:
        ValueError: If axis_size is below 2 (the rescale would divide by zero).
    """
    if axis_size < 2:
        raise ValueError(f"axis_size must be >= 2, got {axis_size}")
    r, g, b = base
    top = axis_size - 1
    return (r * 255 // top, g * 255 // top, b * 255 // top)


def rank_color_offsets(bases: list[ColorBase]) -> np.ndarray:
    """Build the nearest-first table of color deltas.

    Every base contributes its eight sign combinations. The flattened
    table is sorted by squared magnitude with a stable sort, so equal
    magnitudes keep their emission order.

    Args:
        bases: Lattice colors in index order.

    Returns:
        ``int16`` array of shape ``(8 * len(bases), 3)``, non-decreasing
        in squared magnitude.
    """
    if not bases:
        return np.zeros((0, 3), dtype=np.int16)

    coords = np.asarray(bases, dtype=np.int64)
    offsets = (coords[:, None, :] * _SIGNS[None, :, :]).reshape(-1, 3)
    magnitude = np.sum(offsets**2, axis=1)
    order = np.argsort(magnitude, kind="stable")
    # Channel values stay below 256, so deltas fit in int16
    return offsets[order].astype(np.int16)
