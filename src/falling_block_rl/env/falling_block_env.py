from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_block_rl.game import Action, FallingBlockGame, GameConfig, GameState, InMemoryHighScoreStore
from falling_block_rl.visualization.palette import color_for_value


# Agent-facing actions; PAUSE is a human-only command
AGENT_ACTIONS = (
    Action.LEFT,
    Action.RIGHT,
    Action.ROTATE,
    Action.SOFT_DROP,
    Action.HARD_DROP,
    Action.NONE,
)


class FallingBlockEnv(gym.Env):
    """
    Falling block environment over the real-time engine.

    Each step applies one action and then advances gravity by `step_ms`
    milliseconds, so pieces keep falling even if the agent only waits.

    Actions (6 total):
      0: Move Left
      1: Move Right
      2: Rotate clockwise
      3: Soft drop
      4: Hard drop
      5: No-op
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        step_ms: float = 100.0,
        reward_weights: Optional[Dict[str, float]] = None,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        self.game = FallingBlockGame(config, store=InMemoryHighScoreStore())
        self.render_mode = render_mode
        self.step_ms = float(step_ms)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            # Positive components
            "score": 0.01,           # engine score gained
            "lines": 1.0,            # reward per line cleared
            # Negative components (penalize increases)
            "holes": 0.1,
            "height": 0.02,
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        h, w = self.game.grid.height, self.game.grid.width
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-7, high=7, shape=(h, w), dtype=np.int8),
                "next_piece": spaces.Discrete(8),
            }
        )
        self.action_space = spaces.Discrete(len(AGENT_ACTIONS))

    def _get_obs(self) -> Dict[str, Any]:
        next_piece = self.game.next_piece
        return {
            "board": self.game.get_state().astype(np.int8),
            "next_piece": 0 if next_piece is None else next_piece.color_id,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "level": self.game.level,
            "lines_cleared_total": self.game.lines_cleared_total,
            "pieces_locked": self.game.pieces_locked,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.start(seed=seed)
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        score_before = self.game.score
        lines_before = self.game.lines_cleared_total
        holes_before = self.game.grid.count_holes()
        height_before = self.game.grid.get_max_height()

        self.game.apply(AGENT_ACTIONS[int(action)])
        self.game.tick(self.step_ms)

        reward_components: Dict[str, float] = {
            "score": self.reward_weights["score"] * float(self.game.score - score_before),
            "lines": self.reward_weights["lines"] * float(self.game.lines_cleared_total - lines_before),
            "holes": -self.reward_weights["holes"] * float(
                max(0, self.game.grid.count_holes() - holes_before)),
            "height": -self.reward_weights["height"] * float(
                max(0, self.game.grid.get_max_height() - height_before)),
        }
        terminated = self.game.state == GameState.GAME_OVER
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
        reward = float(sum(reward_components.values()))

        info = self._get_info()
        info["reward_components"] = reward_components
        return self._get_obs(), reward, terminated, False, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        board = self.game.get_state()
        cell = 12
        h, w = board.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(board[y, x]))
        return img

    def close(self) -> None:
        pass
