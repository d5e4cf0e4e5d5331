from __future__ import annotations

from typing import Optional, Tuple

import pygame

from falling_blocks.game import GameState, Piece


BACKGROUND = (0, 0, 0)
GRID_LINE = (128, 128, 128)
TEXT = (255, 255, 255)
LABEL = (190, 190, 190)


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 180) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return (
            self.margin * 3 + width * self.cell_size + self.panel_width,
            self.margin * 2 + height * self.cell_size,
        )

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._big_font is None:
            self._font = pygame.font.SysFont(None, 26)
            self._big_font = pygame.font.SysFont(None, 44)
        return self._font, self._big_font

    def _cell_rect(self, x0: int, y0: int, x: int, y: int, size: int) -> pygame.Rect:
        return pygame.Rect(x0 + x * size, y0 + y * size, size, size)

    def _draw_piece(self, screen: pygame.Surface, piece: Piece, x0: int, y0: int, size: int, clip_top: bool) -> None:
        for x, y in piece.filled_cells():
            if clip_top and y < 0:
                continue
            rect = self._cell_rect(x0, y0, x, y, size)
            pygame.draw.rect(screen, piece.color, rect)
            pygame.draw.rect(screen, (0, 0, 0), rect, 1)

    def _grid_surface(self, state: GameState) -> pygame.Surface:
        board = state.board
        size = self.cell_size
        surf = pygame.Surface((board.width * size, board.height * size))
        surf.fill(BACKGROUND)
        for (x, y), color in board.cells.items():
            pygame.draw.rect(surf, color, self._cell_rect(0, 0, x, y, size))
        for i in range(board.width + 1):
            pygame.draw.line(surf, GRID_LINE, (i * size, 0), (i * size, board.height * size))
        for i in range(board.height + 1):
            pygame.draw.line(surf, GRID_LINE, (0, i * size), (board.width * size, i * size))
        if not state.is_game_over:
            self._draw_piece(surf, state.current_piece, 0, 0, size, clip_top=True)
        return surf

    def _draw_panel(self, screen: pygame.Surface, state: GameState, high_score: int, label: str) -> None:
        font, big_font = self._fonts()
        x0 = self.margin * 2 + state.board.width * self.cell_size
        y = self.margin
        for caption, value in (("High Score", high_score), ("Score", state.score), ("Lines", state.lines_cleared)):
            screen.blit(font.render(caption, True, LABEL), (x0, y))
            screen.blit(big_font.render(str(value), True, TEXT), (x0, y + 22))
            y += 70
        screen.blit(font.render("Next", True, LABEL), (x0, y))
        preview = state.next_piece.translate(-state.next_piece.x, -state.next_piece.y)
        self._draw_piece(screen, preview, x0, y + 28, self.cell_size * 2 // 3, clip_top=False)
        y += 110
        if label:
            screen.blit(font.render(label, True, LABEL), (x0, y))
        hints = ["Arrows: move / rotate / drop", "P: pause  R: restart", "Esc: quit"]
        for i, hint in enumerate(hints):
            screen.blit(font.render(hint, True, LABEL), (x0, y + 30 + i * 22))

    def _draw_overlay(self, screen: pygame.Surface, state: GameState) -> None:
        if not (state.is_game_over or state.is_paused):
            return
        _, big_font = self._fonts()
        w = state.board.width * self.cell_size
        h = state.board.height * self.cell_size
        shade = pygame.Surface((w, h), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 180))
        screen.blit(shade, (self.margin, self.margin))
        lines = ["Game Over", f"Final Score: {state.score}"] if state.is_game_over else ["Paused"]
        for i, line in enumerate(lines):
            text = big_font.render(line, True, TEXT)
            rect = text.get_rect(center=(self.margin + w // 2, self.margin + h // 2 + i * 44))
            screen.blit(text, rect)

    def draw(self, screen: pygame.Surface, state: GameState, high_score: int = 0, label: str = "") -> None:
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(state), (self.margin, self.margin))
        self._draw_panel(screen, state, high_score, label)
        self._draw_overlay(screen, state)
        pygame.display.flip()
