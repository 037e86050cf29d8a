from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np


Coordinate = Tuple[int, int]


class GameGrid:
    """Fixed-size 2D board for the falling pieces.

    The grid uses 0 for empty cells and the tetromino color id (1..7) for
    filled cells. Row 0 is the top of the board. The underlying array is
    mutated in place and never resized.
    """

    def __init__(self, width: int = 10, height: int = 20) -> None:
        self.width = int(width)
        self.height = int(height)
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {self.width}x{self.height}")
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_row_full(self, row: int) -> bool:
        return bool(np.all(self.grid[row] != 0))

    def full_rows(self) -> List[int]:
        return [int(r) for r in np.where(np.all(self.grid != 0, axis=1))[0]]

    def merge(self, cells: Iterable[Coordinate], value: int) -> int:
        """Write `value` into each cell on the board; returns cells written.

        Cells above the visible board (y < 0) are skipped.
        """
        written = 0
        for x, y in cells:
            if self.is_inside(x, y):
                self.grid[y, x] = value
                written += 1
        return written

    def clear_full_rows(self) -> int:
        full = np.all(self.grid != 0, axis=1)
        num = int(np.count_nonzero(full))
        if num == 0:
            return 0
        # Surviving rows keep their order and sink to the bottom
        kept = self.grid[~full].copy()
        self.grid[:num] = 0
        self.grid[num:] = kept
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
