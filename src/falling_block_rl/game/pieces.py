from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


def _frozen(shape: Shape) -> Shape:
    out = np.array(shape, dtype=np.bool_)
    out.flags.writeable = False
    return out


def rotate_clockwise(shape: Shape) -> Shape:
    """Rotate a row-major shape matrix 90 degrees clockwise.

    Transpose, then reverse every row. Pure shape transform: no knowledge of
    board bounds or collisions.
    """
    return _frozen(np.asarray(shape).T[:, ::-1])


BASE_SHAPES = {
    TetrominoType.I: _frozen([[1, 1, 1, 1]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
    TetrominoType.T: _frozen([[0, 1, 0], [1, 1, 1]]),
    TetrominoType.S: _frozen([[0, 1, 1], [1, 1, 0]]),
    TetrominoType.Z: _frozen([[1, 1, 0], [0, 1, 1]]),
    TetrominoType.J: _frozen([[1, 0, 0], [1, 1, 1]]),
    TetrominoType.L: _frozen([[0, 0, 1], [1, 1, 1]]),
}


@dataclass(frozen=True)
class Piece:
    kind: TetrominoType
    shape: Shape = field(compare=False)

    @property
    def color_id(self) -> int:
        return int(self.kind)

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    def rotated(self) -> "Piece":
        return Piece(self.kind, rotate_clockwise(self.shape))

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        cells: List[Tuple[int, int]] = []
        for dy in range(self.height):
            for dx in range(self.width):
                if self.shape[dy, dx]:
                    cells.append((origin_x + dx, origin_y + dy))
        return cells

    def same_shape(self, other: "Piece") -> bool:
        return self.kind == other.kind and np.array_equal(self.shape, other.shape)


def piece_for(kind: TetrominoType | int) -> Piece:
    """Canonical piece of `kind` in spawn orientation."""
    kind = TetrominoType(kind)
    return Piece(kind, BASE_SHAPES[kind])


class RandomPieceGenerator:
    """Uniform, independent choice over the seven tetrominoes."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def seed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)

    def __call__(self) -> Piece:
        return piece_for(self.rng.choice(list(TetrominoType)))


class SequencePieceGenerator:
    """Replays a fixed list of kinds, wrapping around at the end."""

    def __init__(self, kinds: Iterable[TetrominoType | int]) -> None:
        self.kinds: Sequence[TetrominoType] = [TetrominoType(k) for k in kinds]
        if not self.kinds:
            raise ValueError("SequencePieceGenerator needs at least one piece kind")
        self._index = 0

    def seed(self, seed: Optional[int]) -> None:
        self._index = 0

    def __call__(self) -> Piece:
        kind = self.kinds[self._index % len(self.kinds)]
        self._index += 1
        return piece_for(kind)
