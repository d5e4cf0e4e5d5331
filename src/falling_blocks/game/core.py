from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from .board import Board
from .commands import Command
from .pieces import Piece, random_piece
from .rules import ScoringRules


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None


@dataclass(frozen=True)
class GameState:
    board: Board
    current_piece: Piece
    next_piece: Piece
    score: int = 0
    is_game_over: bool = False
    is_paused: bool = False
    lines_cleared: int = 0

    @property
    def is_running(self) -> bool:
        return not (self.is_paused or self.is_game_over)

    def to_array(self) -> np.ndarray:
        """Board array with the active piece overlaid as negative values."""
        state = self.board.to_array()
        if not self.is_game_over:
            for x, y in self.current_piece.filled_cells():
                if self.board.is_inside(x, y):
                    state[y, x] = -(self.current_piece.color_index + 1)
        return state


class GameEngine:
    """Pure transitions over GameState.

    Every operation takes a state and returns the next one; rejected moves and
    operations attempted while paused or over return the input state itself.
    The engine only owns the piece generator.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)

    def seed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)

    def _random_piece(self) -> Piece:
        return random_piece(self.rng, self.config.width)

    def reset(self) -> GameState:
        board = Board.empty(self.config.width, self.config.height)
        current = self._random_piece()
        return GameState(board=board, current_piece=current, next_piece=self._random_piece())

    def _try_adopt(self, state: GameState, candidate: Piece) -> GameState:
        if not state.is_running:
            return state
        if state.board.is_valid(candidate):
            return replace(state, current_piece=candidate)
        return state

    def move(self, state: GameState, dx: int) -> GameState:
        return self._try_adopt(state, state.current_piece.translate(dx, 0))

    def soft_drop(self, state: GameState) -> GameState:
        return self._try_adopt(state, state.current_piece.translate(0, 1))

    def rotate(self, state: GameState) -> GameState:
        piece = state.current_piece
        return self._try_adopt(state, piece.with_rotation(piece.rotation + 1))

    def set_paused(self, state: GameState, paused: bool) -> GameState:
        if state.is_paused == paused:
            return state
        return replace(state, is_paused=paused)

    def toggle_pause(self, state: GameState) -> GameState:
        return self.set_paused(state, not state.is_paused)

    def tick(self, state: GameState) -> GameState:
        if not state.is_running:
            return state
        candidate = state.current_piece.translate(0, 1)
        if state.board.is_valid(candidate):
            return replace(state, current_piece=candidate)
        return self._lock_and_spawn(state)

    def _lock_and_spawn(self, state: GameState) -> GameState:
        board, lines = state.board.lock(state.current_piece).clear_lines()
        current = state.next_piece
        return replace(
            state,
            board=board,
            current_piece=current,
            next_piece=self._random_piece(),
            score=state.score + self.rules.score_for_lines(lines),
            lines_cleared=state.lines_cleared + lines,
            is_game_over=not board.is_valid(current),
        )

    def apply(self, state: GameState, command: Command) -> GameState:
        if command == Command.MOVE_LEFT:
            return self.move(state, -1)
        if command == Command.MOVE_RIGHT:
            return self.move(state, 1)
        if command == Command.SOFT_DROP:
            return self.soft_drop(state)
        if command == Command.ROTATE_CW:
            return self.rotate(state)
        if command == Command.TOGGLE_PAUSE:
            return self.toggle_pause(state)
        if command == Command.RESET:
            return self.reset()
        raise ValueError(f"invalid command: {command!r}")
