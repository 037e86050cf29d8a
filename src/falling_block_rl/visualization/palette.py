from __future__ import annotations

from typing import Tuple

Color = Tuple[int, int, int]

EMPTY = (0, 0, 0)
BACKGROUND = (10, 10, 14)
GRID_LINE = (24, 24, 30)
TEXT = (230, 230, 230)

PALETTE = {
    0: EMPTY,
    1: (0, 255, 255),  # I
    2: (255, 255, 0),  # O
    3: (255, 0, 255),  # T
    4: (0, 255, 0),    # S
    5: (255, 0, 0),    # Z
    6: (0, 0, 255),    # J
    7: (255, 136, 0),  # L
}


def color_for_value(v: int) -> Color:
    # Negative values mark the falling piece in observations
    return PALETTE.get(abs(v), (200, 200, 200))


def blend(color: Color, alpha: float, background: Color = EMPTY) -> Color:
    return tuple(int(round(c * alpha + b * (1.0 - alpha))) for c, b in zip(color, background))  # type: ignore[return-value]
