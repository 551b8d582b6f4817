from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np
import pygame

from blockfall_rl.game import FallingBlockGame, Point


Color = Tuple[int, int, int]

BACKGROUND: Color = (10, 10, 14)
BOARD_BG: Color = (30, 30, 36)
GHOST: Color = (50, 50, 58)
TEXT: Color = (255, 128, 0)


def color_for_value(v: int) -> Color:
    palette = {
        0: (20, 20, 26),
        1: (128, 0, 255),  # T
        2: (255, 255, 0),  # O
        3: (255, 0, 0),    # Z
        4: (0, 255, 0),    # S
        5: (255, 128, 0),  # L
        6: (0, 0, 255),    # J
        7: (0, 255, 255),  # I
    }
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    """Draws the well, ghost, falling piece and a side panel with next/score/level."""

    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 220) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, rows: int, cols: int) -> Tuple[int, int]:
        width = self.margin * 3 + cols * self.cell_size + self.panel_width
        height = self.margin * 2 + rows * self.cell_size
        return width, height

    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(
            x * self.cell_size,
            y * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _paint(self, surf: pygame.Surface, cells: Iterable[Point], color: Color) -> None:
        for x, y in cells:
            pygame.draw.rect(surf, color, self._cell_rect(x, y))

    def grid_surface(self, state: np.ndarray, ghost: Iterable[Point] = ()) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(BOARD_BG)
        for y in range(h):
            for x in range(w):
                pygame.draw.rect(surf, color_for_value(int(state[y, x])), self._cell_rect(x, y))
        # Ghost only shows through empty cells
        self._paint(surf, [p for p in ghost if state[p.y, p.x] == 0], GHOST)
        return surf

    def _text(self, screen: pygame.Surface, text: str, pos: Tuple[int, int]) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 30)
        screen.blit(self._font.render(text, True, TEXT), pos)

    def draw_panel(self, screen: pygame.Surface, game: FallingBlockGame, left: int) -> None:
        top = self.margin
        line = 40
        self._text(screen, f"Level: {game.level}", (left, top))
        self._text(screen, f"Score: {game.score}", (left, top + line))
        self._text(screen, f"Lines: {game.lines_cleared_total}", (left, top + line * 2))

        kind, shape = game.next_piece_preview()
        # Preview pivot sits two cells in from the panel corner
        origin_x = left + 2 * self.cell_size
        origin_y = top + line * 3 + 2 * self.cell_size
        for p in shape:
            rect = pygame.Rect(
                origin_x + p.x * self.cell_size,
                origin_y + p.y * self.cell_size,
                self.cell_size - 1,
                self.cell_size - 1,
            )
            pygame.draw.rect(screen, color_for_value(kind.board_value), rect)

        if game.is_game_over():
            self._text(screen, "GAME OVER", (left, top + line * 7))
            self._text(screen, "Press 'N' for a new game", (left, top + line * 8))

    def draw(self, screen: pygame.Surface, game: FallingBlockGame) -> None:
        state = game.get_state()
        grid_surf = self.grid_surface(state, game.ghost_piece_cells())
        screen.fill(BACKGROUND)
        screen.blit(grid_surf, (self.margin, self.margin))
        panel_left = self.margin * 2 + grid_surf.get_width()
        self.draw_panel(screen, game, panel_left)
        pygame.display.flip()
