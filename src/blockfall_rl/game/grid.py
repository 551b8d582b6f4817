from __future__ import annotations

from typing import List, Tuple

import numpy as np

from .shapes import KIND_COUNT, Point, Shape


Coordinate = Tuple[int, int]


class PlacementError(AssertionError):
    """Raised when a shape is locked into cells that are blocked or off the board."""


class GameGrid:
    """Fixed-size well of locked cells.

    The grid uses 0 for empty cells and 1..KIND_COUNT for locked cells, the
    value being the board value of the piece kind that filled it. Row 0 is the
    top of the well. Coordinates are plain signed ints everywhere; they only
    index the array after `is_inside` has accepted them.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_cell_free(self, point: Coordinate) -> bool:
        x, y = point
        if not self.is_inside(x, y):
            return False
        return bool(self.grid[y, x] == 0)

    def can_place(self, shape: Shape, origin: Coordinate) -> bool:
        ox, oy = origin
        for p in shape:
            if not self.is_cell_free((ox + p.x, oy + p.y)):
                return False
        return True

    def lock(self, shape: Shape, origin: Coordinate, value: int) -> List[Point]:
        """Write `value` into every cell covered by `shape` at `origin`.

        Callers must have checked `can_place` first; locking over a blocked or
        off-board cell raises `PlacementError`.
        """
        if not 1 <= int(value) <= KIND_COUNT:
            raise ValueError(f"cell value must be in 1..{KIND_COUNT}, got {value!r}")
        if not self.can_place(shape, origin):
            raise PlacementError(f"cannot lock shape at {tuple(origin)!r}: cells blocked or out of bounds")
        ox, oy = origin
        placed = [Point(ox + p.x, oy + p.y) for p in shape]
        for x, y in placed:
            self.grid[y, x] = value
        return placed

    def _check_row(self, row: int) -> None:
        if not 0 <= row < self.height:
            raise IndexError(f"row {row} out of range 0..{self.height - 1}")

    def is_row_full(self, row: int) -> bool:
        self._check_row(row)
        return bool(np.all(self.grid[row] != 0))

    def is_row_empty(self, row: int) -> bool:
        self._check_row(row)
        return bool(np.all(self.grid[row] == 0))

    def full_rows(self) -> List[int]:
        # Bottom-up, collected before anything moves.
        return [row for row in range(self.height - 1, -1, -1) if self.is_row_full(row)]

    def clear_completed_rows(self) -> int:
        full_rows = self.full_rows()
        if not full_rows:
            return 0
        num = len(full_rows)
        # Remove full rows together and add empty rows at the top
        kept = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, kept))
        return num

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        top_index = int(non_empty_rows[0])
        return self.height - top_index

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            column = self.grid[:, x]
            seen_block = False
            for cell in column:
                if cell != 0:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
