from __future__ import annotations

from typing import List

import numpy as np
import pygame

from falling_blocks.game import GameSession, GameState
from falling_blocks.game.shapes import rgb_for


CONTROLS: List[str] = [
    "Left / Right : Move",
    "Up or Space : Rotate",
    "Down : Drop Fast",
    "P : Pause",
    "Enter : Start",
    "R : New Game",
]


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 220) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font = None

    def window_size(self, width: int, height: int) -> tuple[int, int]:
        return (
            self.margin * 3 + width * self.cell_size + self.panel_width,
            self.margin * 2 + height * self.cell_size,
        )

    def _grid_surface(self, grid: np.ndarray) -> pygame.Surface:
        h, w = grid.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, rgb_for(int(grid[y, x])), rect)
        return surf

    def _panel_lines(self, session: GameSession) -> List[str]:
        lines = ["Score", str(session.score), "", "Controls"] + CONTROLS + [""]
        if session.state is GameState.NOT_STARTED:
            lines.append("Press Enter to start")
        if session.is_paused:
            lines.append("Paused")
        if session.is_over:
            lines += ["Game Over!", f"Final Score: {session.score}"]
        return lines

    def draw(self, screen: pygame.Surface, session: GameSession) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        grid = session.display_grid()
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(grid), (self.margin, self.margin))

        x0 = self.margin * 2 + grid.shape[1] * self.cell_size
        y = self.margin
        for line in self._panel_lines(session):
            if line:
                screen.blit(self._font.render(line, True, (230, 230, 230)), (x0, y))
            y += 24
        pygame.display.flip()
