from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, List, Optional

import numpy as np

from .collision import collides
from .grid import GameGrid
from .pieces import Piece, RandomPieceGenerator
from .rules import ScoringRules, drop_interval_for
from .storage import HighScoreStore, InMemoryHighScoreStore


logger = logging.getLogger(__name__)


class GameState(IntEnum):
    IDLE = 0
    PLAYING = 1
    PAUSED = 2
    GAME_OVER = 3


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5
    PAUSE = 6


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_y: int = -1
    base_drop_interval_ms: int = 1000
    min_drop_interval_ms: int = 100
    drop_interval_step_ms: int = 50


@dataclass(frozen=True)
class GameSnapshot:
    """Everything a renderer needs for one frame, taken at a single instant."""

    board: np.ndarray
    current_piece: Optional[Piece]
    current_x: int
    current_y: int
    next_piece: Optional[Piece]
    score: int
    level: int
    high_score: int
    lines_cleared_total: int
    state: GameState


class GameListener:
    """Hooks for presentation collaborators (sound, effects). All optional."""

    def on_lock(self) -> None: ...

    def on_hard_drop(self, rows: int) -> None: ...

    def on_lines_cleared(self, count: int) -> None: ...

    def on_level_up(self, level: int) -> None: ...

    def on_game_over(self, score: int, high_score: int) -> None: ...


class FallingBlockGame:
    """Game-state engine: board, falling piece, scoring and gravity timing.

    Commands are silently ignored unless the game is PLAYING. The driver
    calls `tick(delta_ms)` (or `update(now_ms)`) once per frame.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        store: Optional[HighScoreStore] = None,
        piece_generator: Optional[Callable[[], Piece]] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.store: HighScoreStore = store if store is not None else InMemoryHighScoreStore()
        self.piece_generator = piece_generator or RandomPieceGenerator(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.listeners: List[GameListener] = []

        self.state = GameState.IDLE
        self.score = 0
        self.level = 1
        self.high_score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.drop_interval = self._interval_for(1)
        self.drop_counter = 0.0
        self._last_time: Optional[float] = None

        self.current_piece: Optional[Piece] = None
        self.next_piece: Optional[Piece] = None
        self.current_x = 0
        self.current_y = 0

    # -- listeners -------------------------------------------------------

    def add_listener(self, listener: GameListener) -> None:
        self.listeners.append(listener)

    def remove_listener(self, listener: GameListener) -> None:
        if listener in self.listeners:
            self.listeners.remove(listener)

    def _emit(self, hook: str, *args) -> None:
        for listener in list(self.listeners):
            getattr(listener, hook)(*args)

    # -- lifecycle -------------------------------------------------------

    @property
    def is_playing(self) -> bool:
        return self.state == GameState.PLAYING

    @property
    def game_over(self) -> bool:
        return self.state == GameState.GAME_OVER

    def start(self, seed: Optional[int] = None) -> None:
        if seed is not None and hasattr(self.piece_generator, "seed"):
            self.piece_generator.seed(seed)
        self.grid.reset()
        self.score = 0
        self.level = 1
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.drop_interval = self._interval_for(1)
        self.drop_counter = 0.0
        self._last_time = None

        stored = self.store.get_high_score()
        if stored is not None:
            self.high_score = stored

        self.state = GameState.PLAYING
        self.current_piece = None
        self.next_piece = None
        logger.info("New game started (high score %d)", self.high_score)
        self._spawn_piece()

    def pause(self) -> bool:
        if self.state != GameState.PLAYING:
            return False
        self.state = GameState.PAUSED
        logger.debug("Paused")
        return True

    def resume(self) -> bool:
        if self.state != GameState.PAUSED:
            return False
        self.state = GameState.PLAYING
        # The next update() measures from its own timestamp, not from before the pause
        self._last_time = None
        logger.debug("Resumed")
        return True

    def toggle_pause(self) -> bool:
        if self.state == GameState.PAUSED:
            return self.resume()
        return self.pause()

    # -- timing ----------------------------------------------------------

    def tick(self, delta_ms: float) -> bool:
        """Advance gravity by `delta_ms`; returns True if a gravity step ran."""
        if delta_ms < 0:
            raise ValueError(f"delta_ms must be non-negative, got {delta_ms}")
        if self.state != GameState.PLAYING:
            return False
        self.drop_counter += delta_ms
        if self.drop_counter > self.drop_interval:
            self.move_down()
            self.drop_counter = 0.0
            return True
        return False

    def update(self, now_ms: float) -> bool:
        if self.state != GameState.PLAYING:
            return False
        delta = 0.0 if self._last_time is None else max(0.0, now_ms - self._last_time)
        self._last_time = now_ms
        return self.tick(delta)

    # -- commands --------------------------------------------------------

    def move_left(self) -> bool:
        return self._shift(-1)

    def move_right(self) -> bool:
        return self._shift(1)

    def move_down(self) -> bool:
        """Move one row down, or lock the piece if it cannot move."""
        if self.state != GameState.PLAYING or self.current_piece is None:
            return False
        if not collides(self.grid, self.current_piece, self.current_x, self.current_y + 1):
            self.current_y += 1
            return True
        self._lock_piece()
        return False

    def soft_drop(self) -> bool:
        if self.state != GameState.PLAYING:
            return False
        moved = self.move_down()
        self.drop_counter = 0.0
        return moved

    def hard_drop(self) -> int:
        if self.state != GameState.PLAYING or self.current_piece is None:
            return 0
        rows = 0
        while not collides(self.grid, self.current_piece, self.current_x, self.current_y + 1):
            self.current_y += 1
            rows += 1
        self._emit("on_hard_drop", rows)
        self._lock_piece()
        return rows

    def rotate(self) -> bool:
        if self.state != GameState.PLAYING or self.current_piece is None:
            return False
        rotated = self.current_piece.rotated()
        if collides(self.grid, rotated, self.current_x, self.current_y):
            return False
        self.current_piece = rotated
        return True

    def apply(self, action: Action) -> None:
        action = Action(action)
        if action == Action.LEFT:
            self.move_left()
        elif action == Action.RIGHT:
            self.move_right()
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.SOFT_DROP:
            self.soft_drop()
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.PAUSE:
            self.toggle_pause()
        elif action == Action.NONE:
            pass

    # -- internals -------------------------------------------------------

    def _interval_for(self, level: int) -> int:
        return drop_interval_for(
            level,
            base_ms=self.config.base_drop_interval_ms,
            step_ms=self.config.drop_interval_step_ms,
            min_ms=self.config.min_drop_interval_ms,
        )

    def _shift(self, dx: int) -> bool:
        if self.state != GameState.PLAYING or self.current_piece is None:
            return False
        new_x = self.current_x + dx
        if collides(self.grid, self.current_piece, new_x, self.current_y):
            return False
        self.current_x = new_x
        return True

    def _spawn_piece(self) -> None:
        if self.next_piece is None:
            self.next_piece = self.piece_generator()
        self.current_piece = self.next_piece
        self.next_piece = self.piece_generator()
        self.current_x = self.grid.width // 2 - self.current_piece.width // 2
        self.current_y = self.config.spawn_y
        # Immediate collision check: if overlaps, the stack has topped out
        if collides(self.grid, self.current_piece, self.current_x, self.current_y):
            logger.debug("Spawn of %s collides", self.current_piece.kind.name)
            self._end_game()

    def _lock_piece(self) -> None:
        assert self.current_piece is not None
        cells = self.current_piece.cells_at(self.current_x, self.current_y)
        self.grid.merge(cells, self.current_piece.color_id)
        self.pieces_locked += 1
        logger.debug(
            "Locked %s at (%d, %d)", self.current_piece.kind.name, self.current_x, self.current_y
        )
        self._emit("on_lock")

        lines = self.grid.clear_full_rows()
        if lines > 0:
            self._score_lines(lines)

        # Cells locked above the board sink with the cleared rows; any still
        # hidden afterwards mean the stack has topped out
        hidden = [(x, y + lines) for x, y in cells if y < 0]
        if any(y < 0 for _, y in hidden):
            self._end_game()
            return
        self.grid.merge(hidden, self.current_piece.color_id)
        self._spawn_piece()

    def _score_lines(self, lines: int) -> None:
        self.lines_cleared_total += lines
        self.score += self.rules.score_for_lines(lines, self.level)
        logger.debug("Cleared %d line(s), score %d", lines, self.score)
        self._emit("on_lines_cleared", lines)

        if self.rules.should_level_up(self.score, self.level):
            self.level += 1
            self.drop_interval = self._interval_for(self.level)
            logger.info("Level %d reached (drop interval %d ms)", self.level, self.drop_interval)
            self._emit("on_level_up", self.level)

    def _end_game(self) -> None:
        self.state = GameState.GAME_OVER
        if self.score > self.high_score:
            self.high_score = self.score
            self.store.set_high_score(self.high_score)
        logger.info("Game over: score %d, high score %d", self.score, self.high_score)
        self._emit("on_game_over", self.score, self.high_score)

    # -- views -----------------------------------------------------------

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            board=self.grid.clone_state(),
            current_piece=self.current_piece,
            current_x=self.current_x,
            current_y=self.current_y,
            next_piece=self.next_piece,
            score=self.score,
            level=self.level,
            high_score=self.high_score,
            lines_cleared_total=self.lines_cleared_total,
            state=self.state,
        )

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.current_piece is not None and self.state != GameState.GAME_OVER:
            for x, y in self.current_piece.cells_at(self.current_x, self.current_y):
                if self.grid.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -self.current_piece.color_id
        return state
