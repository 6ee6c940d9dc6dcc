"""Rectangular grid of cells with four wall flags each."""

from __future__ import annotations

from enum import IntEnum
from typing import List, Optional, Tuple

import numpy as np

from .errors import InvalidArgument, InvalidDimensions

Position = Tuple[int, int]


class Direction(IntEnum):
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def opposite(self) -> "Direction":
        return Direction((self + 2) % 4)

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTAS[self]


_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.RIGHT: (0, 1),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
}


def _is_index(value: object) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def check_dimensions(rows: object, cols: object) -> None:
    for name, value in (("rows", rows), ("cols", cols)):
        if not _is_index(value):
            raise InvalidDimensions(f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise InvalidDimensions(f"{name} must be positive, got {value}")


class Grid:
    """A ``rows x cols`` maze grid.

    Walls live in a boolean array of shape ``(rows, cols, 4)`` indexed by
    :class:`Direction`; ``True`` means the wall is present. Removing a wall
    always clears the matching wall on the neighbouring cell as well.

    The ``visited`` array is scratch space for the generator and is not part
    of the grid's value: it is ignored by equality and serialization.
    """

    def __init__(self, rows: int, cols: int, walls: Optional[np.ndarray] = None) -> None:
        check_dimensions(rows, cols)
        self.rows = int(rows)
        self.cols = int(cols)
        if walls is None:
            self.walls = np.ones((self.rows, self.cols, 4), dtype=bool)
        else:
            array = np.array(walls, dtype=bool)
            if array.shape != (self.rows, self.cols, 4):
                raise InvalidDimensions(
                    f"wall array shape {array.shape} does not match grid {self.rows}x{self.cols}"
                )
            self.walls = array
        self.visited = np.zeros((self.rows, self.cols), dtype=bool)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def require(self, pos: Position, name: str = "position") -> Position:
        """Return ``pos`` as an int tuple, raising if it is off the grid."""

        try:
            row, col = pos
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(f"{name} must be a (row, col) pair, got {pos!r}") from exc
        if not (_is_index(row) and _is_index(col)):
            raise InvalidArgument(f"{name} must hold integer coordinates, got {pos!r}")
        row, col = int(row), int(col)
        if not self.in_bounds(row, col):
            raise InvalidArgument(
                f"{name} ({row}, {col}) is outside the {self.rows}x{self.cols} grid"
            )
        return row, col

    # ------------------------------------------------------------------
    # walls

    def has_wall(self, pos: Position, direction: Direction) -> bool:
        row, col = pos
        return bool(self.walls[row, col, direction])

    def walls_of(self, pos: Position) -> Tuple[bool, bool, bool, bool]:
        row, col = pos
        up, right, down, left = (bool(flag) for flag in self.walls[row, col])
        return up, right, down, left

    @staticmethod
    def neighbor(pos: Position, direction: Direction) -> Position:
        dr, dc = Direction(direction).delta
        return pos[0] + dr, pos[1] + dc

    def remove_wall(self, pos: Position, direction: Direction) -> Position:
        """Open the passage from ``pos`` towards ``direction``.

        Returns the neighbouring position.
        """

        return self._set_wall(pos, Direction(direction), False)

    def add_wall(self, pos: Position, direction: Direction) -> Position:
        return self._set_wall(pos, Direction(direction), True)

    def _set_wall(self, pos: Position, direction: Direction, present: bool) -> Position:
        row, col = self.require(pos)
        nrow, ncol = self.require(self.neighbor((row, col), direction), "neighbor")
        self.walls[row, col, direction] = present
        self.walls[nrow, ncol, direction.opposite] = present
        return nrow, ncol

    def open_neighbors(self, pos: Position) -> List[Position]:
        """In-bounds neighbours reachable from ``pos``, in direction order."""

        result: List[Position] = []
        row, col = pos
        for direction in Direction:
            if self.walls[row, col, direction]:
                continue
            nrow, ncol = self.neighbor(pos, direction)
            if self.in_bounds(nrow, ncol):
                result.append((nrow, ncol))
        return result

    def passage_count(self) -> int:
        """Number of open passages between adjacent in-bounds cells."""

        # Count each passage once, from its upper or left cell.
        horizontal = np.count_nonzero(~self.walls[:, :-1, Direction.RIGHT])
        vertical = np.count_nonzero(~self.walls[:-1, :, Direction.DOWN])
        return int(horizontal + vertical)

    def is_symmetric(self) -> bool:
        right = self.walls[:, :-1, Direction.RIGHT]
        left = self.walls[:, 1:, Direction.LEFT]
        down = self.walls[:-1, :, Direction.DOWN]
        up = self.walls[1:, :, Direction.UP]
        return bool(np.array_equal(right, left) and np.array_equal(down, up))

    # ------------------------------------------------------------------
    # generation scratch state

    def reset_visited(self) -> None:
        self.visited.fill(False)

    def mark_visited(self, pos: Position) -> None:
        self.visited[pos[0], pos[1]] = True

    def is_visited(self, pos: Position) -> bool:
        return bool(self.visited[pos[0], pos[1]])

    # ------------------------------------------------------------------

    def copy(self) -> "Grid":
        return Grid(self.rows, self.cols, self.walls.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.walls, other.walls))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, cols={self.cols}, passages={self.passage_count()})"


__all__ = ["Direction", "Grid", "Position"]
