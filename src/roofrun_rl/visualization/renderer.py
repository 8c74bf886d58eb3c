from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np
import pygame

from roofrun_rl.game import COLOR_HEX, GameSession, GameState


def _color_for_value(v: int) -> Tuple[int, int, int]:
    hex_value = COLOR_HEX.get(v)
    if hex_value is None:
        return (40, 40, 48)
    c = pygame.Color(hex_value)
    return (c.r, c.g, c.b)


class Renderer:
    """Draws the board on the left and the HUD panel on the right."""

    def __init__(self, board_px: int = 560, margin: int = 20, panel_w: int = 260) -> None:
        self.board_px = board_px
        self.margin = margin
        self.panel_w = panel_w
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

    @property
    def window_size(self) -> Tuple[int, int]:
        return (self.margin * 3 + self.board_px + self.panel_w, self.margin * 2 + self.board_px)

    def cell_size(self, grid_size: int) -> int:
        return self.board_px // grid_size

    def cell_at(self, pos: Tuple[int, int], grid_size: int) -> Optional[Tuple[int, int]]:
        """Map a pixel position to (row, col), or None outside the board."""
        size = self.cell_size(grid_size)
        x, y = pos[0] - self.margin, pos[1] - self.margin
        if x < 0 or y < 0:
            return None
        row, col = y // size, x // size
        if row >= grid_size or col >= grid_size:
            return None
        return int(row), int(col)

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
            self._big_font = pygame.font.SysFont(None, 56)
        return self._font, self._big_font

    def draw_board(self, screen: pygame.Surface, state: np.ndarray) -> None:
        h, w = state.shape
        size = self.cell_size(h)
        gap = max(2, size // 16)
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                if v == 0:
                    continue
                rect = pygame.Rect(
                    self.margin + x * size + gap // 2,
                    self.margin + y * size + gap // 2,
                    size - gap,
                    size - gap,
                )
                pygame.draw.rect(screen, _color_for_value(v), rect, border_radius=size // 6)

    def draw_panel(self, screen: pygame.Surface, session: GameSession) -> None:
        font, big_font = self._fonts()
        x0 = self.margin * 2 + self.board_px
        y = self.margin
        screen.blit(big_font.render(str(session.score), True, (240, 240, 240)), (x0, y))
        screen.blit(font.render("SCORE", True, (150, 150, 160)), (x0, y + 48))
        screen.blit(big_font.render(str(session.seconds_left), True, (132, 204, 22)), (x0 + 150, y))
        screen.blit(font.render("SECONDS", True, (150, 150, 160)), (x0 + 150, y + 48))

        lines: List[str] = [
            f"Grid Size: {session.grid_size}x{session.grid_size}",
            "Size: UP / DOWN (when not playing)",
            "Start: SPACE",
            "Reset: N",
            "Remove: Left click a group",
        ]
        for i, txt in enumerate(lines):
            screen.blit(font.render(txt, True, (220, 220, 220)), (x0, y + 100 + i * 24))

        message = {
            GameState.WON: ("You won!", (34, 197, 94)),
            GameState.LOST: ("Game over! Try again.", (239, 68, 68)),
            GameState.PLAYING: ("Running", (200, 200, 200)),
        }.get(session.state)
        if message is not None:
            text, color = message
            screen.blit(font.render(text, True, color), (x0, y + 240))

    def draw(self, screen: pygame.Surface, session: GameSession) -> None:
        screen.fill((17, 24, 39))
        outline = pygame.Rect(self.margin - 4, self.margin - 4, self.board_px + 8, self.board_px + 8)
        pygame.draw.rect(screen, (31, 41, 55), outline, border_radius=8)
        self.draw_board(screen, session.game.get_state())
        self.draw_panel(screen, session)
        pygame.display.flip()
