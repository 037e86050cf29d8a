from __future__ import annotations

import argparse
import logging
import os
from typing import Dict, List, Optional

import pygame

from falling_block_rl.game import Action, FallingBlockGame, GameConfig, GameState, JsonHighScoreStore
from .audio import ToneNotifier
from .renderer import Renderer


logger = logging.getLogger(__name__)

DEFAULT_HIGH_SCORE_FILE = os.path.join(os.path.expanduser("~"), ".falling_blocks", "highscore.json")

KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_UP: Action.ROTATE,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_p: Action.PAUSE,
}

START_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_s)


def handle_key(game: FallingBlockGame, key: int) -> None:
    """Route one key press to the engine according to the session state."""
    if key == pygame.K_n:
        game.start()
    elif game.state == GameState.IDLE:
        if key in START_KEYS:
            game.start()
    elif game.state == GameState.GAME_OVER:
        if key in START_KEYS or key == pygame.K_r:
            game.start()
    else:
        action = KEY_TO_ACTION.get(key)
        if action is not None:
            game.apply(action)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play the falling block puzzle")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--high-score-file", type=str, default=DEFAULT_HIGH_SCORE_FILE)
    p.add_argument("--mute", action="store_true")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def run(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    try:
        clock = pygame.time.Clock()
        config = GameConfig(random_seed=args.seed)
        game = FallingBlockGame(config, store=JsonHighScoreStore(args.high_score_file))
        game.add_listener(ToneNotifier(enabled=not args.mute))
        renderer = Renderer(config.width, config.height, cell_size=args.cell_size)
        logger.info("High score file: %s", args.high_score_file)

        screen = pygame.display.set_mode(renderer.window_size())
        pygame.display.set_caption("Falling Blocks")

        running = True
        while running:
            # Input handling
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        handle_key(game, event.key)

            # Gravity, from the display clock
            game.update(pygame.time.get_ticks())

            # Render
            renderer.draw(screen, game.snapshot())
            clock.tick(args.fps)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
