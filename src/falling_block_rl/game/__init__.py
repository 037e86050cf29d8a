"""Game module for Falling Block RL.

Exports the core game engine and supporting classes:
- GameGrid: Board representation and line clearing
- Piece: Tetromino piece with clockwise rotation
- TetrominoType: Enum of available piece types (value = color id)
- collides: Pure collision check for a piece at a board offset
- ScoringRules: Line-clear scoring and leveling thresholds
- FallingBlockGame: Engine state machine and gravity timing
"""

from .grid import GameGrid
from .pieces import (
    Piece,
    TetrominoType,
    RandomPieceGenerator,
    SequencePieceGenerator,
    piece_for,
    rotate_clockwise,
)
from .collision import collides
from .rules import ScoringRules, drop_interval_for
from .storage import HighScoreStore, InMemoryHighScoreStore, JsonHighScoreStore
from .core import (
    Action,
    FallingBlockGame,
    GameConfig,
    GameListener,
    GameSnapshot,
    GameState,
)

__all__ = [
    "GameGrid",
    "Piece",
    "TetrominoType",
    "RandomPieceGenerator",
    "SequencePieceGenerator",
    "piece_for",
    "rotate_clockwise",
    "collides",
    "ScoringRules",
    "drop_interval_for",
    "HighScoreStore",
    "InMemoryHighScoreStore",
    "JsonHighScoreStore",
    "Action",
    "FallingBlockGame",
    "GameConfig",
    "GameListener",
    "GameSnapshot",
    "GameState",
]
