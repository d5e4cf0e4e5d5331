"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- Piece / TetrominoType: shape catalog and immutable falling pieces
- Board: locked cells, validity checks, locking and line clearing
- ScoringRules / Difficulty: line clear rewards and fall intervals
- GameEngine / GameState: the fall state machine
- GameSession: asyncio owner of a running game
- Command / DispatchResult: input commands at the UI boundary
"""

from .pieces import COLORS, SHAPE_COUNT, Piece, TetrominoType, color_for, random_piece, rotate_cw, shape_matrix
from .board import Board
from .rules import Difficulty, ScoringRules
from .commands import Command, DispatchResult, parse_command
from .core import GameConfig, GameEngine, GameState
from .highscore import HighScoreStore, MemoryHighScoreStore
from .session import GameSession

__all__ = [
    "COLORS",
    "SHAPE_COUNT",
    "Piece",
    "TetrominoType",
    "color_for",
    "random_piece",
    "rotate_cw",
    "shape_matrix",
    "Board",
    "Difficulty",
    "ScoringRules",
    "Command",
    "DispatchResult",
    "parse_command",
    "GameConfig",
    "GameEngine",
    "GameState",
    "HighScoreStore",
    "MemoryHighScoreStore",
    "GameSession",
]
