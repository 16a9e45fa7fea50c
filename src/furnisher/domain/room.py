"""Room occupancy grid.

The floor of a rectangular room is discretized into square cells. Every cell
keeps a count of the clearance areas reserving it, whether a fitting occupies
it and a height allowance for fittings standing under a static clearance area,
such as the passage in front of a window.
"""

from __future__ import annotations

import copy
import logging
import math
from typing import Iterable

import numpy as np

from .entities import DEFAULT_WALL_HEIGHT, Door, Wall, Window
from .value_objects import CellState, Direction, Vector2D

__all__ = ["DEFAULT_GRID_CELL_SIZE", "Room"]

logger = logging.getLogger(__name__)

DEFAULT_GRID_CELL_SIZE = 0.1

# Nudge applied to area corners so that corners lying exactly on a cell line
# do not claim the neighbouring cell.
_EPSILON = 1e-5


def _to_centimeters(meters: float) -> int:
    return int(meters * 100 + 1e-6)


class Room:
    """A rectangular room with its static faces and floor occupancy grid.

    Room coordinates have their origin at the room center. The four walls are
    created automatically and face inwards. Door and window clearance areas
    are reserved on construction.

    Attributes:
        width: Extent along X in meters.
        depth: Extent along Y in meters.
        height: Ceiling height in meters.
        grid_cell_size: Edge length of a grid cell in meters.
        walls: The four walls, in the order right, back, left, front.
        doors: Doors of the room.
        windows: Windows of the room.
    """

    def __init__(
        self,
        width: float,
        depth: float,
        height: float = DEFAULT_WALL_HEIGHT,
        grid_cell_size: float = DEFAULT_GRID_CELL_SIZE,
        doors: Iterable[Door] = (),
        windows: Iterable[Window] = (),
    ) -> None:
        if width <= 0 or depth <= 0 or height <= 0:
            raise ValueError("Room dimensions must be positive")
        if grid_cell_size <= 0:
            raise ValueError("Grid cell size must be positive")

        self.width = width
        self.depth = depth
        self.height = height
        self.grid_cell_size = grid_cell_size

        shape = (
            math.ceil(round(width / grid_cell_size, 9)),
            math.ceil(round(depth / grid_cell_size, 9)),
        )
        self._reservations = np.zeros(shape, dtype=np.int32)
        self._occupied = np.zeros(shape, dtype=bool)
        self._max_height = np.zeros(shape, dtype=np.int32)

        self.walls = (
            Wall(Vector2D(width / 2, 0.0), depth, Direction.NEGATIVE_X, height),
            Wall(Vector2D(0.0, depth / 2), width, Direction.NEGATIVE_Y, height),
            Wall(Vector2D(-width / 2, 0.0), depth, Direction.POSITIVE_X, height),
            Wall(Vector2D(0.0, -depth / 2), width, Direction.POSITIVE_Y, height),
        )
        self.doors = tuple(doors)
        self.windows = tuple(windows)

        # Windows go last and pin overlapping door cells to a single
        # reservation, so low fittings may stand there.
        for door in self.doors:
            self.reserve_area(*door.clearance_area())
        for window in self.windows:
            self.reserve_area(*window.clearance_area(), max_height=window.elevation)

        logger.debug(
            f"Created {width}x{depth} room with a {shape[0]}x{shape[1]} grid, "
            f"{len(self.doors)} doors and {len(self.windows)} windows"
        )

    def __repr__(self) -> str:
        return f"Room(width={self.width}, depth={self.depth}, height={self.height})"

    @property
    def grid_shape(self) -> tuple[int, int]:
        """Number of cells along X and Y."""
        return self._occupied.shape

    def clone(self) -> Room:
        """Copy the grid state. Static faces are immutable and shared."""
        room = copy.copy(self)
        room._reservations = self._reservations.copy()
        room._occupied = self._occupied.copy()
        room._max_height = self._max_height.copy()
        return room

    def cell_index(self, position: Vector2D) -> tuple[int, int]:
        """Map a floor position to the indices of the cell containing it."""
        return (
            self._index(position.x + self.width / 2, 0),
            self._index(position.y + self.depth / 2, 1),
        )

    def _index(self, offset: float, axis: int) -> int:
        index = int(offset / self.grid_cell_size)
        return min(max(index, 0), self.grid_shape[axis] - 1)

    def _cells(self, low: Vector2D, high: Vector2D) -> tuple[slice, slice] | None:
        """Grid slices covered by an area, or None if it covers no cells."""
        half_width = self.width / 2
        half_depth = self.depth / 2
        min_x = max(low.x, -half_width)
        max_x = min(high.x, half_width)
        min_y = max(low.y, -half_depth)
        max_y = min(high.y, half_depth)
        if max_x <= min_x or max_y <= min_y:
            return None

        x0 = self._index(min_x + half_width + _EPSILON, 0)
        x1 = self._index(max_x + half_width - _EPSILON, 0)
        y0 = self._index(min_y + half_depth + _EPSILON, 1)
        y1 = self._index(max_y + half_depth - _EPSILON, 1)
        return slice(x0, x1 + 1), slice(y0, y1 + 1)

    def contains_area(self, low: Vector2D, high: Vector2D) -> bool:
        return (
            low.x >= -self.width / 2 - _EPSILON
            and low.y >= -self.depth / 2 - _EPSILON
            and high.x <= self.width / 2 + _EPSILON
            and high.y <= self.depth / 2 + _EPSILON
        )

    def can_area_be_occupied(self, low: Vector2D, high: Vector2D, height: float) -> bool:
        """Check whether a fitting of some height may stand on an area.

        A cell may be occupied if no fitting occupies it and either nothing
        reserves it, or a single static clearance area reserves it with a
        height allowance above the fitting's height.
        """
        cells = self._cells(low, high)
        if cells is None:
            return True
        reservations = self._reservations[cells]
        allowed = (reservations == 0) | (
            (reservations == 1) & (self._max_height[cells] > _to_centimeters(height))
        )
        return bool(np.all(allowed & ~self._occupied[cells]))

    def occupy_area(self, low: Vector2D, high: Vector2D) -> None:
        cells = self._cells(low, high)
        if cells is not None:
            self._occupied[cells] = True

    def unoccupy_area(self, low: Vector2D, high: Vector2D) -> None:
        cells = self._cells(low, high)
        if cells is not None:
            self._occupied[cells] = False

    def can_area_be_reserved(self, low: Vector2D, high: Vector2D) -> bool:
        cells = self._cells(low, high)
        if cells is None:
            return True
        return not bool(np.any(self._occupied[cells]))

    def reserve_area(self, low: Vector2D, high: Vector2D, max_height: float | None = None) -> None:
        """Reserve an area as clearance.

        Args:
            low: Minimum corner of the area.
            high: Maximum corner of the area.
            max_height: Height allowance for fittings standing in the area.
                Only static clearance areas pass one; the reservation count
                of covered cells is then pinned to one.
        """
        cells = self._cells(low, high)
        if cells is None:
            return
        if max_height is None:
            self._reservations[cells] += 1
            return

        self._reservations[cells] = 1
        self._max_height[cells] = np.maximum(
            self._max_height[cells], max(_to_centimeters(max_height), 1)
        )

    def unreserve_area(self, low: Vector2D, high: Vector2D) -> None:
        """Release one reservation, keeping static height allowances in place."""
        cells = self._cells(low, high)
        if cells is None:
            return
        reservations = self._reservations[cells]
        floor = np.where(self._max_height[cells] > 0, 1, 0)
        self._reservations[cells] = np.where(reservations > floor, reservations - 1, reservations)

    def cell_state(self, ix: int, iy: int) -> CellState:
        if self._occupied[ix, iy]:
            if self._max_height[ix, iy] > 0:
                return CellState.OCCUPIED_UNDER_CLEARANCE
            return CellState.OCCUPIED
        if self._reservations[ix, iy] > 0:
            return CellState.RESERVED
        return CellState.FREE

    def obstruction_grid(self) -> np.ndarray:
        """Grid as integers, indexed ``[ix, iy]``.

        0 is free, a positive value counts reservations, -1 marks a cell
        occupied under a height allowance and -2 an occupied cell.
        """
        return np.where(
            self._occupied,
            np.where(self._max_height > 0, -1, -2),
            self._reservations,
        )
