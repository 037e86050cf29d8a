import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest

from falling_block_rl.game import (
    FallingBlockGame,
    GameState,
    InMemoryHighScoreStore,
    SequencePieceGenerator,
    TetrominoType as T,
    piece_for,
)
from falling_block_rl.visualization.renderer import Renderer


@pytest.fixture(scope="module", autouse=True)
def display():
    pygame.init()
    pygame.display.set_mode((1, 1))
    yield
    pygame.quit()


def make_game(kinds):
    return FallingBlockGame(store=InMemoryHighScoreStore(), piece_generator=SequencePieceGenerator(kinds))


def rgb(surface, pos):
    return tuple(surface.get_at(pos))[:3]


def board_cell_center(renderer, x, y):
    size = renderer.cell_size
    return renderer.margin + x * size + size // 2, renderer.margin + y * size + size // 2


def draw(renderer, snapshot):
    surface = pygame.Surface(renderer.window_size(), depth=32)
    renderer.draw(surface, snapshot)
    return surface


def test_locked_cells_drawn_in_piece_color():
    game = make_game([T.I, T.O])
    game.start()
    game.hard_drop()
    renderer = Renderer()
    surface = draw(renderer, game.snapshot())
    assert rgb(surface, board_cell_center(renderer, 4, 19)) == (0, 204, 204)
    assert rgb(surface, board_cell_center(renderer, 0, 19)) == (0, 0, 0)


def test_preview_offset_centers_in_box():
    assert Renderer.preview_offset(piece_for(T.O)) == (3.0, 3.0)
    assert Renderer.preview_offset(piece_for(T.I)) == (2.0, 3.5)
    assert Renderer.preview_offset(piece_for(T.T)) == (2.5, 3.0)


def test_next_piece_drawn_in_middle_of_preview():
    game = make_game([T.I, T.O])
    game.start()
    renderer = Renderer()
    surface = draw(renderer, game.snapshot())
    box = renderer.preview_rect()
    half = renderer.cell_size // 2
    # O occupies half-cells 3..4 in both directions
    assert rgb(surface, (box.x + 3 * half + half // 2, box.y + 3 * half + half // 2)) == (204, 204, 0)
    assert rgb(surface, (box.x + 4 * half + half // 2, box.y + 4 * half + half // 2)) == (204, 204, 0)
    assert rgb(surface, (box.x + half // 2, box.y + half // 2)) == (0, 0, 0)


def test_pause_and_game_over_overlays_shade_board():
    game = make_game([T.I, T.O])
    game.start()
    game.hard_drop()
    renderer = Renderer()
    cell_at = board_cell_center(renderer, 4, 19)
    playing = rgb(draw(renderer, game.snapshot()), cell_at)

    game.pause()
    paused = rgb(draw(renderer, game.snapshot()), cell_at)
    assert paused[1] < playing[1] and paused[2] < playing[2]

    game.resume()
    game.grid.grid[0, 3:7] = 4
    game.move_down()
    assert game.state == GameState.GAME_OVER
    over = rgb(draw(renderer, game.snapshot()), cell_at)
    assert over[1] < playing[1] and over[2] < playing[2]


def test_idle_screen_draws_full_window():
    game = make_game([T.O])
    renderer = Renderer()
    surface = draw(renderer, game.snapshot())
    assert surface.get_size() == renderer.window_size()
