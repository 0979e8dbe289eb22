"""Occupancy grid for color placement.

The grid is a square of cells, each either empty or holding a placed
color and its heading. A lattice-shaped index records where every
placed color went. Both only ever grow: a cell is written once and a
color is indexed once.

State lives in numpy arrays so the placement engine can test many
cells or colors per call.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .palette import RGB, ColorBase

Location = tuple[int, int]


class CellOccupiedError(RuntimeError):
    """Raised when a placement targets a cell or color that is already placed."""


@dataclass(frozen=True)
class Pixel:
    """A placed color.

    Attributes:
        color: 8-bit RGB triple.
        direction: Heading (radians) of the branch this color grew along.
    """

    color: RGB
    direction: float


@dataclass(eq=False)
class Grid:
    """Square toroidal grid plus the color -> location index.

    Attributes:
        size: Side length.
        axis_size: Values per color channel of the lattice being placed.
        occupied: ``(size, size)`` bool, True where a cell is taken.
        colors: ``(size, size, 3)`` uint8 RGB of each taken cell.
        directions: ``(size, size)`` float64 heading of each taken cell.
        placed: ``(axis, axis, axis)`` bool, True for placed lattice colors.
        locations: ``(axis, axis, axis, 2)`` int32 cell of each placed color.
    """

    size: int
    axis_size: int
    occupied: np.ndarray = field(repr=False)
    colors: np.ndarray = field(repr=False)
    directions: np.ndarray = field(repr=False)
    placed: np.ndarray = field(repr=False)
    locations: np.ndarray = field(repr=False)
    count: int = 0

    @classmethod
    def empty(cls, size: int, axis_size: int) -> Grid:
        if size < 1:
            raise ValueError(f"grid size must be >= 1, got {size}")
        if axis_size < 1:
            raise ValueError(f"axis_size must be >= 1, got {axis_size}")
        axis = axis_size
        return cls(
            size=size,
            axis_size=axis,
            occupied=np.zeros((size, size), dtype=bool),
            colors=np.zeros((size, size, 3), dtype=np.uint8),
            directions=np.zeros((size, size), dtype=np.float64),
            placed=np.zeros((axis, axis, axis), dtype=bool),
            locations=np.full((axis, axis, axis, 2), -1, dtype=np.int32),
        )

    def __len__(self) -> int:
        return self.count

    @property
    def occupied_count(self) -> int:
        """Number of non-empty cells."""
        return int(self.occupied.sum())

    @property
    def color_index(self) -> dict[ColorBase, Location]:
        """Snapshot of every placed color and its cell."""
        index: dict[ColorBase, Location] = {}
        for r, g, b in np.argwhere(self.placed).tolist():
            row, col = self.locations[r, g, b].tolist()
            index[(r, g, b)] = (row, col)
        return index

    def is_open(self, location: Location) -> bool:
        row, col = location
        return not self.occupied[row, col]

    def pixel_at(self, location: Location) -> Pixel | None:
        row, col = location
        if not self.occupied[row, col]:
            return None
        r, g, b = self.colors[row, col].tolist()
        return Pixel(color=(r, g, b), direction=float(self.directions[row, col]))

    def location_of(self, base: ColorBase) -> Location | None:
        if not self.placed[base]:
            return None
        row, col = self.locations[base].tolist()
        return (row, col)

    def place(self, base: ColorBase, location: Location, pixel: Pixel) -> None:
        """Write a pixel into an empty cell and index its color.

        Raises:
            CellOccupiedError: If the cell is taken or the color was
                already placed.
        """
        row, col = location
        if self.occupied[row, col]:
            raise CellOccupiedError(f"cell {location} is already occupied")
        if self.placed[base]:
            raise CellOccupiedError(f"color {base} already placed at {self.location_of(base)}")
        self.occupied[row, col] = True
        self.colors[row, col] = pixel.color
        self.directions[row, col] = pixel.direction
        self.placed[base] = True
        self.locations[base] = (row, col)
        self.count += 1
