from __future__ import annotations

from .grid import GameGrid
from .pieces import Piece


def collides(grid: GameGrid, piece: Piece, x: int, y: int) -> bool:
    """True if `piece` placed with its top-left at (x, y) is illegal.

    A cell is illegal when it is outside the side walls, at or below the
    floor, or on a filled board cell. Cells above the board (y < 0) are only
    checked against the side walls so pieces can spawn partly hidden.
    """
    for bx, by in piece.cells_at(x, y):
        if bx < 0 or bx >= grid.width or by >= grid.height:
            return True
        if by >= 0 and grid.grid[by, bx] != 0:
            return True
    return False
