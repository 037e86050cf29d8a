from __future__ import annotations

from typing import Optional

import pygame

from falling_block_rl.game import GameSnapshot, GameState, Piece
from .palette import BACKGROUND, GRID_LINE, TEXT, blend, color_for_value

PREVIEW_BOX = 4


class Renderer:
    def __init__(self, width: int = 10, height: int = 20, cell_size: int = 30, margin: int = 20) -> None:
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.margin = margin
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

    @property
    def board_size(self) -> tuple[int, int]:
        return self.width * self.cell_size, self.height * self.cell_size

    @property
    def panel_x(self) -> int:
        return self.margin * 2 + self.width * self.cell_size

    def window_size(self) -> tuple[int, int]:
        board_w, board_h = self.board_size
        panel_w = PREVIEW_BOX * self.cell_size + self.margin
        return self.margin * 2 + board_w + panel_w + self.margin, board_h + self.margin * 2

    def preview_rect(self) -> pygame.Rect:
        return pygame.Rect(
            self.panel_x, self.margin + 24, PREVIEW_BOX * self.cell_size, PREVIEW_BOX * self.cell_size
        )

    @staticmethod
    def preview_offset(piece: Piece) -> tuple[float, float]:
        # Half scale, centered inside the 4x4 preview box
        return (PREVIEW_BOX * 2 - piece.width) / 2, (PREVIEW_BOX * 2 - piece.height) / 2

    def _fonts(self) -> tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._big_font is None:
            self._font = pygame.font.SysFont(None, 26)
            self._big_font = pygame.font.SysFont(None, 44)
        return self._font, self._big_font

    def _draw_block(self, surf: pygame.Surface, px: int, py: int, size: int, color_id: int, alpha: float = 1.0) -> None:
        color = color_for_value(color_id)
        inset = max(1, size // 15)
        inner = pygame.Rect(px + inset, py + inset, size - 2 * inset, size - 2 * inset)
        pygame.draw.rect(surf, blend(color, 0.8 * alpha), inner)
        # Pixel highlight along top and left edges
        highlight = blend((255, 255, 255), 0.4 * alpha, blend(color, 0.8 * alpha))
        pygame.draw.rect(surf, highlight, pygame.Rect(px, py, size, inset))
        pygame.draw.rect(surf, highlight, pygame.Rect(px, py, inset, size))
        pygame.draw.rect(surf, color, pygame.Rect(px, py, size, size), 1)

    def _draw_piece(self, surf: pygame.Surface, piece: Piece, ox: float, oy: float, size: int, origin: tuple[int, int]) -> None:
        for x, y in piece.cells_at(0, 0):
            if oy + y < 0:
                continue
            px = int(origin[0] + (ox + x) * size)
            py = int(origin[1] + (oy + y) * size)
            self._draw_block(surf, px, py, size, piece.color_id)

    def _draw_board(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        board = snapshot.board
        h, w = board.shape
        size = self.cell_size
        frame = pygame.Rect(self.margin - 1, self.margin - 1, w * size + 2, h * size + 2)
        pygame.draw.rect(screen, (0, 0, 0), frame)
        pygame.draw.rect(screen, GRID_LINE, frame, 1)
        for y in range(h):
            for x in range(w):
                v = int(board[y, x])
                if v != 0:
                    self._draw_block(screen, self.margin + x * size, self.margin + y * size, size, v)
        if snapshot.current_piece is not None and snapshot.state != GameState.IDLE:
            self._draw_piece(
                screen,
                snapshot.current_piece,
                snapshot.current_x,
                snapshot.current_y,
                size,
                (self.margin, self.margin),
            )

    def _draw_panel(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        font, _ = self._fonts()
        x0 = self.panel_x
        y0 = self.margin
        screen.blit(font.render("NEXT", True, TEXT), (x0, y0))
        box = self.preview_rect()
        pygame.draw.rect(screen, (0, 0, 0), box)
        pygame.draw.rect(screen, GRID_LINE, box, 1)
        piece = snapshot.next_piece
        if piece is not None:
            ox, oy = self.preview_offset(piece)
            self._draw_piece(screen, piece, ox, oy, self.cell_size // 2, (box.x, box.y))

        lines = [
            f"Score: {snapshot.score}",
            f"High: {snapshot.high_score}",
            f"Level: {snapshot.level}",
            f"Lines: {snapshot.lines_cleared_total}",
        ]
        ty = box.bottom + 16
        for i, txt in enumerate(lines):
            screen.blit(font.render(txt, True, TEXT), (x0, ty + i * 24))

    def _draw_overlay(self, screen: pygame.Surface, title: str, subtitle: str) -> None:
        font, big_font = self._fonts()
        board_w, board_h = self.board_size
        shade = pygame.Surface((board_w, board_h), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 170))
        screen.blit(shade, (self.margin, self.margin))
        cx = self.margin + board_w // 2
        cy = self.margin + board_h // 2
        title_img = big_font.render(title, True, (255, 255, 255))
        screen.blit(title_img, title_img.get_rect(center=(cx, cy - 20)))
        for i, line in enumerate(subtitle.split("\n")):
            img = font.render(line, True, TEXT)
            screen.blit(img, img.get_rect(center=(cx, cy + 20 + i * 24)))

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        screen.fill(BACKGROUND)
        self._draw_board(screen, snapshot)
        self._draw_panel(screen, snapshot)
        if snapshot.state == GameState.IDLE:
            self._draw_overlay(screen, "FALLING BLOCKS", "Press Enter to start")
        elif snapshot.state == GameState.PAUSED:
            self._draw_overlay(screen, "PAUSED", "Press P to resume")
        elif snapshot.state == GameState.GAME_OVER:
            self._draw_overlay(
                screen,
                "GAME OVER",
                f"Score: {snapshot.score}\nHigh score: {snapshot.high_score}\nPress R to restart",
            )
        pygame.display.flip()
